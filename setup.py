#!/usr/bin/env python3
from setuptools import setup, find_packages

setup(
    name="panegrid",
    version="0.1.0",
    description="panegrid - A tab, window and grid-track layout engine",
    license="ISC",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=["pypubsub"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["panegrid=panegrid.console:main"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: ISC License (ISCL)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: User Interfaces",
    ],
)
