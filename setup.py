#!/usr/bin/env python3

import os
import re

import setuptools

cur_dir = os.path.dirname(os.path.abspath(__file__))


def get_package_version():
    with open(f"{cur_dir}/sadriver/python/sadriver/__init__.py") as f:
        content = f.read()

    latest_version = re.search(r"__version__ = (.*)", content).group(1)
    latest_version = latest_version.strip().strip('"').strip("'")
    return latest_version


setuptools.setup(
    name="sa-driver",
    version=get_package_version(),
    description="Build suffix arrays of DNA, text and integer sequences "
    "and save them in a compact binary format",
    python_requires=">=3.8",
    package_dir={
        "sadriver": "sadriver/python/sadriver",
    },
    packages=["sadriver"],
    install_requires=[
        "numpy",
        "pydivsufsort",
        "biopython",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "sa-driver = sadriver.cli:main",
        ],
    },
)
