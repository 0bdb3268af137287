"""
Setup script for pdfprotectx.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

# Read requirements
requirements = (this_directory / "requirements.txt").read_text(encoding='utf-8').splitlines()

setup(
    name="pdfprotectx",
    version="1.0.0",
    description="Password-protect PDF files with native encryption or an encrypted ZIP fallback",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="pdfprotectx Contributors",
    author_email="",
    packages=find_packages(include=["pdfprotectx", "pdfprotectx.*"]),
    install_requires=[line for line in requirements if line and not line.startswith("#")],
    extras_require={
        "native": [
            "pikepdf>=8.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdfprotectx=pdfprotectx.cli:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Security :: Cryptography",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf encrypt password protect permissions zip aes cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
