#!/bin/env python
import os

import setuptools


with open(os.path.join("pybinpack", "__init__.py"), "r") as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split("=")[-1].strip().strip('"')
            break

with open("README.md", "r") as fh:
    long_description = fh.read()


install_reqs = [
    "rich",
    "toml",
    "traitlets",
]


setuptools.setup(
    name="pybinpack",
    version=version,
    provides=["pybinpack"],
    description="First-fit-decreasing bin packing for Python",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["pybinpack.tests"]),
    python_requires=">=3.8",
    include_package_data=True,
    install_requires=install_reqs,
    extras_require={"develop": ["bumpversion"], "test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "binpack = pybinpack.scripts.binpack:main",
        ],
    },
    zip_safe=False,
    tests_require=["pytest", "pytest-runner"],
    test_suite="pybinpack.tests",
    license="GPLv2+",
    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
