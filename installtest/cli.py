#
# Copyright 2024 zhlinh and installtest Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

import argparse
import sys

from installtest.commands.run import Run
from installtest.commands.run_all import RunAll
from installtest.targets import LINKAGES, METHODS, PLATFORMS, TEST_ALL
from installtest.utils.context.command import CliCommand
from installtest.utils.context.context import CliContext
from installtest.utils.context.namespace import CliNameSpace
from installtest.utils.errors import InstallTestError, UsageError


def _indent(values) -> str:
    return "\n".join(f"    {x}" for x in values)


class UsageArgumentParser(argparse.ArgumentParser):
    """Prints the full help text and exits 1 on any argument error"""

    def error(self, message):
        print(f"ERROR: {message}\n")
        self.print_help()
        sys.exit(1)


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return f"""installtest - Library installation test matrix

Builds the example apps against the library using each supported
installation method and checks the linkage of the produced archive.

USAGE:
    installtest {TEST_ALL}
    installtest <platform> <method> [linkage]

PLATFORMS:
{_indent(PLATFORMS)}

METHODS:
{_indent(METHODS)}

LINKAGE:
    static
    dynamic (default)

ENVIRONMENT VARIABLES:
    REALM_XCODE_VERSION    Xcode version to use
    REALM_TEST_RELEASE     Version number to test, or "latest" to test the latest release
    REALM_TEST_BRANCH      Name of a branch to test
        """

    def get_parser(self) -> argparse.ArgumentParser:
        parser = UsageArgumentParser(
            prog="installtest",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "target",
            metavar="platform|test-all",
            type=str,
            choices=PLATFORMS + [TEST_ALL],
        )
        parser.add_argument("method", type=str, nargs="?", default=None)
        parser.add_argument("linkage", type=str, nargs="?", default=None)
        parser.add_argument(
            "--dir",
            type=str,
            help="Example directory to build in (default: current directory)",
        )
        parser.add_argument(
            "--config",
            type=str,
            help="Path to installtest.toml (default: <dir>/installtest.toml)",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Print the resolved settings",
        )
        return parser

    def usage(self, message=None):
        if message:
            print(f"ERROR: {message}\n")
        self.get_parser().print_help()
        sys.exit(1)

    def cli(self, argv=None) -> CliNameSpace:
        argv = sys.argv[1:] if argv is None else list(argv)
        if not argv:
            self.usage()

        args = self.get_parser().parse_args(argv, namespace=CliNameSpace())
        if args.target == TEST_ALL:
            if args.method is not None or args.linkage is not None:
                self.usage(f"{TEST_ALL} takes no further arguments")
        elif args.method is None:
            self.usage("Missing method")
        elif args.method not in METHODS:
            self.usage(f"Unknown method: {args.method}")
        elif args.linkage is not None and args.linkage not in LINKAGES:
            self.usage(f"Unknown linkage: {args.linkage}")
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        sub_cmd = RunAll() if args.target == TEST_ALL else Run()
        try:
            result = sub_cmd.exec(context, args)
        except InstallTestError as e:
            result_error = e
        else:
            result_error = result.get_error()

        if isinstance(result_error, UsageError):
            self.usage(str(result_error))
        elif result_error is not None:
            print(f"\nERROR: {result_error}")
            sys.exit(1)


def main(argv=None):
    cmd = Cli()
    cmd.exec(CliContext(), cmd.cli(argv))


if __name__ == "__main__":
    main()
