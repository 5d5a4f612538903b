"""Regular expressions for the supported coordinate notations.

Detection and parsing share these patterns so that a string the detector
accepts is always one the parser can read. Inputs are passed through
``TextNormalizer.normalize_symbols`` first, but the mark classes still accept
typographic variants for callers that skip normalisation.
"""

import re


_MIN = r"['’′]"
_SEC = r"[\"”″]"

# Two signed decimal numbers and nothing else: "55.7558, 37.6173" / "55.7 -37.1"
DECIMAL_PATTERN = re.compile(r"^(-?\d+(?:\.\d+)?)[,\s]+(-?\d+(?:\.\d+)?)$")

# 55° 7' 24.4416" N, 37° 7' 24.4416" W
DMS_PATTERN = re.compile(
    rf"(\d+)\s*°\s*(\d+)\s*{_MIN}\s*(\d+(?:\.\d+)?)\s*{_SEC}\s*([NS])"
    rf"[,\s]+"
    rf"(\d+)\s*°\s*(\d+)\s*{_MIN}\s*(\d+(?:\.\d+)?)\s*{_SEC}\s*([EW])",
    re.IGNORECASE,
)

# 55° 7.40736' N, 37° 7.40736' W
DM_PATTERN = re.compile(
    rf"(\d+)\s*°\s*(\d+(?:\.\d+)?)\s*{_MIN}\s*([NS])"
    rf"[,\s]+"
    rf"(\d+)\s*°\s*(\d+(?:\.\d+)?)\s*{_MIN}\s*([EW])",
    re.IGNORECASE,
)

# 55.123456 N, 37.123456 E
FORMATTED_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*([NS])[,\s]+(\d+(?:\.\d+)?)\s*([EW])",
    re.IGNORECASE,
)

# Detect-only notations
PLUS_CODE_PATTERN = re.compile(r"^[23456789CFGHJMPQRVWX]{2,8}\+[23456789CFGHJMPQRVWX]{2}$")
UTM_PATTERN = re.compile(r"^\d{1,2}[CDEFGHJKLMNPQRSTUVWXYZ]\s+\d+(?:\.\d+)?\s+\d+(?:\.\d+)?$")
MGRS_PATTERN = re.compile(r"^\d{1,2}[CDEFGHJKLMNPQRSTUVWXZ][A-Z]{2}\d{2,10}$")
