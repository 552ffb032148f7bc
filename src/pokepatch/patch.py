#!/usr/bin/env python3

"""File based patch creation and application"""

import os
import pathlib
import shutil
import tempfile
from typing import Callable

from pokepatch.applier import apply
from pokepatch.codec import encode
from pokepatch.config import DEFAULT_EXPANSION, ExpansionConfig
from pokepatch.differ import diff

PathLike = str | os.PathLike


def create_patch(
    original: PathLike,
    modified: PathLike,
    expansion: ExpansionConfig = DEFAULT_EXPANSION,
    progress_cb: Callable[[int], None] | None = None,
) -> bytes:
    """
    Create a patch that transforms `original` into `modified`

    Raises a `PatchError` subclass describing why no patch could be made.
    """
    with open(original, "rb") as f_orig, open(modified, "rb") as f_mod:
        expanded, records = diff(f_orig, f_mod, expansion, progress_cb)
    return encode(expanded, records)


def apply_patch(
    original: PathLike,
    patch: PathLike,
    expansion: ExpansionConfig = DEFAULT_EXPANSION,
    atomic: bool = False,
    progress_cb: Callable[[int], None] | None = None,
) -> None:
    """
    Apply a patch file to `original`, modifying it in place

    Raises a `PatchError` subclass on failure. Without `atomic`, records
    written before a corrupt record is detected remain in `original`.
    """
    if atomic:
        _apply_staged(pathlib.Path(original), patch, expansion, progress_cb)
        return

    with open(original, "r+b") as f_target, open(patch, "rb") as f_patch:
        apply(f_target, f_patch, expansion, progress_cb)


def _apply_staged(
    original: pathlib.Path,
    patch: PathLike,
    expansion: ExpansionConfig,
    progress_cb: Callable[[int], None] | None,
) -> None:
    """Apply to a sibling copy, replacing `original` only on success"""
    fd, staging = tempfile.mkstemp(prefix=f".{original.name}.", suffix=".tmp", dir=original.parent)
    try:
        with os.fdopen(fd, "w+b") as f_target:
            with open(original, "rb") as f_orig:
                shutil.copyfileobj(f_orig, f_target)
            with open(patch, "rb") as f_patch:
                apply(f_target, f_patch, expansion, progress_cb)
            os.fsync(f_target.fileno())
        shutil.copymode(original, staging)
        os.replace(staging, original)
    except BaseException:
        os.unlink(staging)
        raise
