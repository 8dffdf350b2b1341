"""
Setup script for the PDF Lock Scanner package.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pdf-lock-scanner",
    version="0.1.0",
    author="PDF Lock Scanner Team",
    author_email="example@example.com",
    description="Find password-protected PDFs and recover date-based passwords",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/example/pdf-lock-scanner",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Security",
        "Topic :: Utilities",
    ],
    python_requires=">=3.7",
    install_requires=[
        "tqdm>=4.50.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdf-lock-scanner=pdf_lock_scanner.cli:main",
        ],
    },
)
