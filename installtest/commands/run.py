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

from installtest.build_scripts.pipeline import run_combination
from installtest.commands import load_settings
from installtest.targets import LINKAGE_DYNAMIC
from installtest.utils.context.command import CliCommand
from installtest.utils.context.context import CliContext
from installtest.utils.context.namespace import CliNameSpace
from installtest.utils.context.result import CliResult


class Run(CliCommand):
    def description(self) -> str:
        return "Test a single platform / method / linkage combination."

    def exec(self, context: CliContext, args: CliNameSpace) -> CliResult:
        settings = load_settings(context, args)
        return run_combination(
            settings,
            context.runner,
            args.target,
            args.method,
            args.linkage or LINKAGE_DYNAMIC,
        )
