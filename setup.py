#!/usr/bin/env python3

import setuptools

VERSION = "1.0.0"
DESCRIPTION = "PPS binary patch creation and application"
LONG_DESCRIPTION = (
    "Create compact byte-level patches between two versions of a ROM image "
    "and apply them to an unmodified original"
)

setuptools.setup(
    name="pokepatch",
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[
        "argcomplete",
        "colorama",
        "pyyaml",
        "rich",
        "tabulate",
        "typing_extensions",
    ],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
    entry_points={"console_scripts": ("pokepatch = pokepatch.app.main:main",)},
    zip_safe=False,
)
