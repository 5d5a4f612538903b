"""Typed view of OCR vendor payloads.

Vendor responses are JSON: a tree of strings, mappings and arrays. The
coordinate extractor walks that tree generically, so the payload is typed as
a recursive union rather than a fixed schema. ``ProviderResult`` describes
the one vendor block whose layout is known (Eden AI, Google provider).
"""

from typing import Any, Iterator, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError


OCRScalar = Union[str, int, float, bool, None]
OCRPayload = Union[OCRScalar, Mapping[str, "OCRPayload"], Sequence["OCRPayload"]]


class TextBlock(BaseModel):
    """One recognised text block with its bounding box."""

    text: str
    left: Optional[float] = None
    top: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    model_config = ConfigDict(extra="allow")


class ProviderResult(BaseModel):
    """Per-provider OCR result block."""

    text: Optional[str] = None
    bounding_boxes: list[TextBlock] = []
    status: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["ProviderResult"]:
        """Validate a provider block, or None if it has another shape."""
        if not isinstance(payload, Mapping):
            return None
        try:
            return cls.model_validate(dict(payload))
        except PydanticValidationError:
            return None

    def block_texts(self) -> list[str]:
        return [block.text for block in self.bounding_boxes if block.text]


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    """Sequences other than strings and bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def iter_children(value: Any) -> Iterator[Any]:
    """Yield the direct children of a mapping or array, in document order."""
    if is_mapping(value):
        yield from value.values()
    elif is_array(value):
        yield from value
