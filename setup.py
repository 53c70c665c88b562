from setuptools import setup, find_packages

setup(
    name="bailx",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pyyaml",
        "pydantic>=2",
        "requests",
        "beautifulsoup4>=4.11",
        "pdfplumber",
        "pypdf",
        "pytesseract",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "bailx=bailx.cli:main",
        ],
    },
)
