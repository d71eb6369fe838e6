# setup.py
from setuptools import setup, find_packages

setup(
    name="clvm-codec",
    version="0.1.0",
    description="Typed encoding of Python values as CLVM nodes",
    packages=find_packages(include=["clvm_codec", "clvm_codec.*"]),
    python_requires=">=3.10",
    install_requires=[
        "clvm>=0.9.7",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
