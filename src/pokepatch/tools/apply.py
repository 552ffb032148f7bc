#!/usr/bin/env python3

"""Apply a patch to an original file"""

__author__ = "pokepatch contributors"
__copyright__ = "Copyright 2026, pokepatch contributors"

import os

from rich.progress import DownloadColumn, Progress, TransferSpeedColumn

from pokepatch.commands import PokepatchCommand
from pokepatch.patch import apply_patch
from pokepatch.util.argparse import ValidFile
from pokepatch.util.console import Console


class SubCommand(PokepatchCommand):
    NAME = "apply"
    HELP = "Apply a patch file"
    DESCRIPTION = "Apply a PPS patch to an unmodified file, modifying it in place"

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("original", type=ValidFile, help="Unmodified file to patch")
        parser.add_argument("patch", type=ValidFile, help="Patch file to apply")
        parser.add_argument(
            "--atomic",
            action="store_true",
            help="Patch a temporary copy and only replace the original on success",
        )
        cls.add_expansion_parser(parser)

    def __init__(self, args):
        self.args = args
        self._expansion = self.expansion(args)

    def run(self):
        progress = Progress(
            *Progress.get_default_columns(),
            DownloadColumn(),
            TransferSpeedColumn(),
        )
        with progress:
            task = progress.add_task("Patching", total=os.path.getsize(self.args.patch))
            apply_patch(
                self.args.original,
                self.args.patch,
                self._expansion,
                atomic=self.args.atomic,
                progress_cb=lambda offset: progress.update(task, completed=offset),
            )
            progress.update(task, completed=os.path.getsize(self.args.patch))
        Console.log_success(f"Patched {self.args.original}")
