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

"""
Helpers shared by the test suites.

FakeRunner records every invocation instead of spawning a process.
"""

from pathlib import Path

from installtest.utils.config.settings import Settings
from installtest.utils.errors import CommandError


class FakeRunner:
    def __init__(self, outputs=None, failures=None, hooks=None):
        """
        Args:
            outputs: Mapping of command substring to captured output
            failures: Mapping of command substring to exit code
            hooks: Mapping of command substring to callable(command, cwd)
                run when a matching command is executed
        """
        self.outputs = dict(outputs or {})
        self.failures = dict(failures or {})
        self.hooks = dict(hooks or {})
        self.calls = []

    def _match(self, table, command):
        line = " ".join(str(x) for x in command)
        for key, value in table.items():
            if key in line:
                return value
        return None

    def _record(self, command, cwd, env):
        command = [str(x) for x in command]
        self.calls.append((command, cwd, dict(env) if env is not None else None))
        code = self._match(self.failures, command)
        if code:
            raise CommandError(command, code)
        hook = self._match(self.hooks, command)
        if hook is not None:
            hook(command, cwd)
        return command

    def run(self, command, cwd=None, env=None):
        self._record(command, cwd, env)

    def output(self, command, cwd=None, env=None) -> str:
        command = self._record(command, cwd, env)
        return (self._match(self.outputs, command) or "").strip()

    @property
    def commands(self):
        return [command for command, _, _ in self.calls]

    def programs(self):
        return [command[0] for command in self.commands]

    def env_for(self, program):
        for command, _, env in self.calls:
            if command[0] == program:
                return env
        return None


def make_settings(base_dir, **overrides) -> Settings:
    """
    Settings rooted in a temporary directory laid out like the repository:
    base_dir/examples/installation is the example dir, base_dir the root.
    """
    base_dir = Path(base_dir)
    example_dir = base_dir / "examples" / "installation"
    example_dir.mkdir(parents=True, exist_ok=True)
    values = dict(
        example_dir=example_dir,
        root_dir=base_dir,
        developer_dir="/Applications/Xcode.app/Contents/Developer",
        xcode_version="15.2",
        base_environ={"PATH": "/usr/bin:/bin"},
    )
    values.update(overrides)
    return Settings(**values)
