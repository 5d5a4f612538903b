from setuptools import setup, find_packages

setup(
    name="photo-geo",
    version="1.0.0",
    description="Photo coordinate extraction, parsing, grouping and route building",
    author="Your Name",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "structlog>=23.0.0",
        "Pillow>=10.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "photo-geo=photo_geo.main:main",
        ],
    },
)
