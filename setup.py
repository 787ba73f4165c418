"""
Setup script for AquaPreset
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text() if readme_path.exists() else ""

setup(
    name="aquapreset",
    version="1.0.0",
    description="Preset interchange engine: Lightroom XMP sidecar parsing and preset validation/upgrades",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["aquapreset", "aquapreset.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Multimedia :: Graphics :: Graphics Conversion",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=[
        "click>=8.1.0",
        "PyYAML>=6.0",
        "tqdm>=4.65.0",
        "colorlog>=6.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "aquapreset=aquapreset.cli:main",
        ],
    },
    include_package_data=True,
    package_data={
        "aquapreset": ["config.yaml"],
    },
)
