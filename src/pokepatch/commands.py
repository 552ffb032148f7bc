#!/usr/bin/env python3

"""pokepatch command parent class"""

__author__ = "pokepatch contributors"
__copyright__ = "Copyright 2026, pokepatch contributors"

import argparse

from pokepatch.config import DEFAULT_EXPANSION, ExpansionConfig, load_config
from pokepatch.util.argparse import ValidFile


class PokepatchCommand:
    """pokepatch command parent class"""

    NAME = "N/A"
    HELP = "N/A"
    DESCRIPTION = "N/A"

    @classmethod
    def add_parser(cls, parser: argparse.ArgumentParser):
        """Add arguments for sub-command"""

    def __init__(self, args: argparse.Namespace):
        pass

    def run(self):
        """Run the subcommand"""
        raise NotImplementedError

    @staticmethod
    def add_expansion_parser(parser: argparse.ArgumentParser):
        """Add the optional expansion configuration file argument"""
        parser.add_argument(
            "--config",
            "-c",
            type=ValidFile,
            help="YAML file overriding the expansion size and fill value",
        )

    @staticmethod
    def expansion(args: argparse.Namespace) -> ExpansionConfig:
        """Expansion configuration requested on the command line"""
        if args.config is None:
            return DEFAULT_EXPANSION
        return load_config(args.config)
