# setup.py
from setuptools import setup, find_packages

setup(
    name="autoelite-admin",      # Package name
    version="0.1",               # Version
    packages=find_packages(exclude=["test", "test.*"]),
    install_requires=[           # External dependencies
        "pydantic>=2",
        "httpx",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "polyfactory",
            "fastapi",
            "python-multipart",
        ],
    },
    python_requires=">=3.10",
)
