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

from installtest.utils.cmd.cmd_util import CommandRunner
from installtest.utils.config.settings import Settings, resolve_settings
from installtest.utils.context.context import CliContext
from installtest.utils.context.namespace import CliNameSpace


def load_settings(context: CliContext, args: CliNameSpace) -> Settings:
    """Resolve settings for a command and attach a runner to the context"""
    if context.runner is None:
        context.runner = CommandRunner()
    settings = resolve_settings(
        args.dir or context.example_dir,
        context.runner,
        environ=context.environ,
        config_file=args.config,
    )
    if isinstance(context.runner, CommandRunner):
        context.runner.timeout_second = settings.timeout_second
    if args.verbose:
        for line in settings.describe():
            print(f"  ℹ️  {line}")
    return settings
