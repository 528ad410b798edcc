#!/usr/bin/env python3
"""
Setup configuration for art-size-reader
Audit the embedded cover art of MP3 collections
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "mutagen>=1.47.0",
    "Pillow>=10.0.0",
    "click>=8.1.7",
    "rich-click>=1.7.0",
    "pyyaml>=6.0.1",
    "tqdm>=4.66.1",
]

setup(
    name="art-size-reader",
    version="1.0.0",
    author="art-size-reader Team",
    description="Report MP3 files whose embedded cover art is missing, too small, too large, not square or too heavy",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["art_size_reader", "art_size_reader.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Multimedia :: Graphics",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "artsize=art_size_reader.cli:main",
        ],
    },
    keywords="mp3 id3 cover artwork album-art audit cli",
)
