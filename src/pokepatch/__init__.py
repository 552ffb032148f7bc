"""PPS binary patch creation and application"""

from pokepatch.applier import apply, apply_bytes
from pokepatch.codec import decode, encode, read_patch
from pokepatch.config import DEFAULT_EXPANSION, ExpansionConfig, load_config
from pokepatch.differ import diff, diff_bytes
from pokepatch.errors import (
    BadHeaderError,
    CorruptPatchError,
    IdenticalInputsError,
    InvalidInputError,
    PatchError,
    UnsupportedVersionError,
)
from pokepatch.format import PATCH_MAGIC, PATCH_VERSION, ChangeRecord
from pokepatch.patch import apply_patch, create_patch

__all__ = [
    "DEFAULT_EXPANSION",
    "PATCH_MAGIC",
    "PATCH_VERSION",
    "BadHeaderError",
    "ChangeRecord",
    "CorruptPatchError",
    "ExpansionConfig",
    "IdenticalInputsError",
    "InvalidInputError",
    "PatchError",
    "UnsupportedVersionError",
    "apply",
    "apply_bytes",
    "apply_patch",
    "create_patch",
    "decode",
    "diff",
    "diff_bytes",
    "encode",
    "load_config",
    "read_patch",
]
