#!/usr/bin/env python3

"""Create a patch from an original and a modified file"""

__author__ = "pokepatch contributors"
__copyright__ = "Copyright 2026, pokepatch contributors"

import os

from rich.progress import DownloadColumn, Progress, TransferSpeedColumn

from pokepatch.applier import apply_bytes
from pokepatch.codec import encode
from pokepatch.commands import PokepatchCommand
from pokepatch.differ import diff
from pokepatch.errors import PatchError
from pokepatch.util.argparse import ValidFile
from pokepatch.util.console import Console


class SubCommand(PokepatchCommand):
    NAME = "create"
    HELP = "Create a patch file"
    DESCRIPTION = "Create a PPS patch that transforms the original file into the modified file"

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("original", type=ValidFile, help="Unmodified file")
        parser.add_argument("modified", type=ValidFile, help="Modified file")
        parser.add_argument("patch", help="Output patch file name")
        parser.add_argument(
            "--no-verify",
            action="store_true",
            help="Skip replaying the patch onto the original before saving",
        )
        cls.add_expansion_parser(parser)

    def __init__(self, args):
        self.args = args
        self._expansion = self.expansion(args)

    def _verify(self, bin_patch: bytes, expanded: bool):
        with open(self.args.original, "rb") as f_orig:
            bin_original = f_orig.read(-1)
        with open(self.args.modified, "rb") as f_mod:
            bin_modified = f_mod.read(-1)
        if expanded and len(bin_modified) != self._expansion.expanded_size:
            Console.log_warning("Skipping verification, modified file is not the expanded size")
            return
        # Validate that file can be reconstructed
        if apply_bytes(bin_original, bin_patch, self._expansion) != bin_modified:
            raise PatchError("replaying the patch did not reproduce the modified file")

    def run(self):
        progress = Progress(
            *Progress.get_default_columns(),
            DownloadColumn(),
            TransferSpeedColumn(),
        )
        with progress:
            task = progress.add_task("Comparing", total=os.path.getsize(self.args.modified))
            with open(self.args.original, "rb") as f_orig, open(self.args.modified, "rb") as f_mod:
                expanded, records = diff(
                    f_orig,
                    f_mod,
                    self._expansion,
                    lambda offset: progress.update(task, completed=offset),
                )
        bin_patch = encode(expanded, records)

        if not self.args.no_verify:
            self._verify(bin_patch, expanded)

        with open(self.args.patch, "wb") as f_output:
            f_output.write(bin_patch)

        modified_len = os.path.getsize(self.args.modified)
        ratio = 100 * len(bin_patch) / modified_len
        Console.log_info(f"Original File: {os.path.getsize(self.args.original):9d} bytes")
        Console.log_info(f"Modified File: {modified_len:9d} bytes{' (expanded)' if expanded else ''}")
        Console.log_info(
            f"   Patch File: {len(bin_patch):9d} bytes ({ratio:.2f}%) ({len(records):5d} records)"
        )
        Console.log_success(f"Patch written to {self.args.patch}")
