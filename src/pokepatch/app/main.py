#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK

"""PPS patch tool (pokepatch) main module"""

__author__ = "pokepatch contributors"
__copyright__ = "Copyright 2026, pokepatch contributors"

import argparse
import importlib
import pkgutil
import sys

import argcomplete

import pokepatch.tools
from pokepatch.commands import PokepatchCommand
from pokepatch.errors import PatchError
from pokepatch.util.console import Console


class PokepatchApp:
    """The pokepatch 'application' object"""

    def __init__(self):
        self.parser = argparse.ArgumentParser("pokepatch")
        # Load tools
        self._load_tools(self.parser)
        # Handle CLI tab completion
        argcomplete.autocomplete(self.parser)

    def run(self, argv):
        """Run the chosen subtool handler"""
        self.args = self.parser.parse_args(argv)
        if "tool_class" not in self.args:
            self.parser.print_help()
            return 1

        try:
            tool = self.args.tool_class(self.args)
        except ValueError as e:
            # Invalid configuration file
            Console.log_error(str(e))
            return 2
        try:
            tool.run()
        except PatchError as e:
            Console.log_error(str(e))
            return 1
        return 0

    def _load_tools(self, parser: argparse.ArgumentParser):
        tools_parser = parser.add_subparsers(title="commands", metavar="<command>")

        # Iterate over tools
        for _, name, _ in pkgutil.walk_packages(pokepatch.tools.__path__):
            full_name = f"{pokepatch.tools.__name__}.{name}"
            module = importlib.import_module(full_name)

            # Add tool to parser
            tool_cls: PokepatchCommand = getattr(module, "SubCommand")
            parser = tools_parser.add_parser(
                tool_cls.NAME,
                help=tool_cls.HELP,
                description=tool_cls.DESCRIPTION,
                formatter_class=argparse.RawDescriptionHelpFormatter,
            )
            parser.set_defaults(tool_class=tool_cls)
            tool_cls.add_parser(parser)


def main(argv=None):
    """Create the PokepatchApp instance and let it run"""
    Console.init()
    app = PokepatchApp()
    try:
        return app.run(sys.argv[1:] if argv is None else argv)
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
