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

from installtest.build_scripts.pipeline import run_matrix
from installtest.commands import load_settings
from installtest.utils.context.command import CliCommand
from installtest.utils.context.context import CliContext
from installtest.utils.context.namespace import CliNameSpace
from installtest.utils.context.result import CliResult


class RunAll(CliCommand):
    def description(self) -> str:
        return "Test every supported combination, stopping at the first failure."

    def exec(self, context: CliContext, args: CliNameSpace) -> CliResult:
        print("=" * 80)
        print("installtest test-all")
        print("=" * 80)
        settings = load_settings(context, args)
        return run_matrix(settings, context.runner)
