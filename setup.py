#!/usr/bin/env python3

import setuptools

VERSION = "0.0.1"
DESCRIPTION = "GRFMerge python package"
LONG_DESCRIPTION = (
    "Integrate GRD sprite patch files generated by GRFDiff into their GRF files"
)

setuptools.setup(
    name="grfmerge",
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[
        "argcomplete",
        "colorama",
        "rich",
        "tabulate",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
    entry_points={"console_scripts": ("grfmerge = grfmerge.app.main:main",)},
    zip_safe=False,
)
