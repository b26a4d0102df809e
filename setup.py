#!/usr/bin/env python
from setuptools import find_packages, setup

setup(
    name="psd-layer-extractor",
    version="0.1.0",
    description="Export the layers of Photoshop PSD files as PNG images",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "attrs>=23.1.0",
        "Pillow>=10.3.0",
        "psd-tools>=1.11.0",
    ],
    extras_require={
        "test": [
            "numpy",
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "psd-layer-extractor=psd_layer_extractor.cli:main",
        ],
    },
)
