"""
Setup script for pdftablex.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="pdftablex",
    version="1.0.0",
    description="Table extraction backend that runs Tabula through a bundled or system Java runtime",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="pdftablex Contributors",
    author_email="",
    packages=find_packages(include=["pdftablex", "pdftablex.*"]),
    install_requires=[
        "pypdf>=3.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "api": [
            "fastapi>=0.100.0",
            "python-multipart>=0.0.6",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "fastapi>=0.100.0",
            "python-multipart>=0.0.6",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdftablex=pdftablex.cli:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: End Users/Desktop",
        "Intended Audience :: Developers",
        "Topic :: Office/Business :: Financial",
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
    keywords="pdf tabula tables csv statement mpesa extract java",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
