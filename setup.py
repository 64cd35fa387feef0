#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

import itertools
import re

from setuptools import find_packages, setup  # type: ignore

with open("requirements.txt") as req_file:
    requirements = req_file.read().splitlines()


with open("README.md", "r") as f:
    long_description = f.read()

with open("relayout/__version__.py", "r") as f:
    version = re.search(r'__version__ = "(?P<version>[^"]+)"', f.read()).group("version")  # type: ignore

extras_require = {
    "tests": ["pytest", "importlib_metadata"],
}
# specify all option that contains all extras
extras_require["all"] = list(itertools.chain.from_iterable(extras_require.values()))

setup(
    name="relayout",
    version=version,
    description="Minimal-delta memory layout of image sections",
    author="NXP",
    license="BSD-3-Clause",
    long_description=long_description,
    long_description_content_type="text/markdown",
    platforms="Windows, Linux, Mac OSX",
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require=extras_require,
    include_package_data=True,
    package_data={"relayout": ["data/*.yaml", "data/jsonschemas/*.yaml"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: POSIX :: Linux",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: MacOS :: MacOS X",
        "License :: OSI Approved :: BSD License",
        "Topic :: Software Development :: Embedded Systems",
        "Topic :: Utilities",
    ],
    packages=find_packages(exclude=["tests.*", "tests"]),
    entry_points={
        "console_scripts": [
            "nxprelayout=relayout.apps.nxprelayout:safe_main",
        ],
    },
)
