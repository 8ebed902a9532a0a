""" stealthlib build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import stealthlib

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=stealthlib.name,
    version=stealthlib.__version__,
    license=stealthlib.__license__,
    author=stealthlib.__author__,
    author_email=stealthlib.__author_email__,
    description="A library for secp256k1 stealth address derivation",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    # install_requires=[],
    extras_require={"test": ["pytest"]},
    keywords=(
        "stealth-address cryptography elliptic-curves secp256k1 ecdh "
        "privacy payments aptos"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
