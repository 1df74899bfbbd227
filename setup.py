""" blshd build script for setuptools.

"""

import re

from setuptools import find_packages, setup  # type: ignore

# blshd is not imported here: its dependencies are not installed yet
with open("blshd/__init__.py", "r", encoding="ascii") as file_:
    metadata = dict(re.findall(r'^(\w+) = "([^"]*)"$', file_.read(), re.MULTILINE))

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=metadata["name"],
    version=metadata["__version__"],
    license=metadata["__license__"],
    author=metadata["__author__"],
    author_email=metadata["__author_email__"],
    description="BIP32-style hierarchical deterministic BLS12-381 keys",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["py_ecc>=6.0.0", "dataclasses-json>=0.5.7"],
    extras_require={"test": ["pytest"]},
    keywords=(
        "bls bls12-381 bip32 hierarchical-deterministic hd-keys "
        "key-aggregation rogue-key multisignature"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
