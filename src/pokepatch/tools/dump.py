#!/usr/bin/env python3

"""Display the contents of a patch file"""

__author__ = "pokepatch contributors"
__copyright__ = "Copyright 2026, pokepatch contributors"

import os

import tabulate

from pokepatch.codec import read_patch
from pokepatch.commands import PokepatchCommand
from pokepatch.util.argparse import ValidFile

PREVIEW_BYTES = 16


class SubCommand(PokepatchCommand):
    NAME = "dump"
    HELP = "Dump patch file records to terminal"
    DESCRIPTION = "Dump the header and change records of a PPS patch"

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("patch", type=ValidFile, help="Patch file to dump")

    def __init__(self, args):
        self.args = args

    def run(self):
        with open(self.args.patch, "rb") as f_patch:
            hdr, records = read_patch(f_patch)
        total = sum(r.length for r in records)

        print(f"   Patch File: {os.path.getsize(self.args.patch):9d} bytes")
        print(f"      Version: {hdr.version}")
        print(f"     Expanded: {'yes' if hdr.expanded else 'no'}")
        print(f"      Records: {len(records)} ({total} bytes of data)")
        print("")

        table = []
        for record in records:
            preview = bytes(record.data[:PREVIEW_BYTES]).hex(" ")
            if record.length > PREVIEW_BYTES:
                preview += " ..."
            table.append([f"0x{record.offset:08x}", record.length, preview])
        print(tabulate.tabulate(table, headers=["Offset", "Length", "Data"], tablefmt="simple"))
