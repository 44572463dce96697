#!/usr/bin/env python3
"""
Setup configuration for legal-expand
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="legal-expand",
    version="1.0.0",
    author="legal-expand Team",
    author_email="",
    description="Detect and expand Spanish legal acronyms in free text",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourrepo/legal-expand",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples"]),
    package_data={
        "legal_expand": [
            "data/*.csv",
            "data/*.json",
        ],
    },
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.5.0",
        "openpyxl>=3.1.0",
        "reportlab>=3.6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "legal-expand=legal_expand.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Legal Industry",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing :: Linguistic",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: Spanish",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    keywords="legal acronyms siglas spanish expansion nlp preprocessing",
    project_urls={
        "Source": "https://github.com/yourrepo/legal-expand",
        "Tracker": "https://github.com/yourrepo/legal-expand/issues",
    },
)
