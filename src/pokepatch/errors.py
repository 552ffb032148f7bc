#!/usr/bin/env python3

"""Patch creation and application exceptions"""


class PatchError(Exception):
    """Generic patch exception"""

    MESSAGE = "Patch operation failed."

    def __init__(self, detail: str | None = None):
        self.detail = detail
        if detail is None:
            super().__init__(self.MESSAGE)
        else:
            super().__init__(f"{self.MESSAGE} ({detail})")


class BadHeaderError(PatchError):
    """Patch magic does not match"""

    MESSAGE = (
        "The header of this file is incorrect. "
        "It is not a PPS patch and can therefore not be applied."
    )


class UnsupportedVersionError(PatchError):
    """Patch version is not the supported version"""

    MESSAGE = (
        "The version number of this PPS patch is not supported in this program version. "
        "Please download a newer version on the site where you downloaded this program."
    )


class CorruptPatchError(PatchError):
    """Record out of bounds or patch truncated"""

    MESSAGE = "This PPS patch contained invalid data. Please contact the provider of this PPS patch."


class IdenticalInputsError(PatchError):
    """No differences between the original and modified file"""

    MESSAGE = (
        "The unmodified and modified file are the same. "
        "Please try another input file or hack the ROM at least once."
    )


class InvalidInputError(PatchError):
    """Modified file is shorter than the original"""

    MESSAGE = "The modified file seems to be broken."
