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

import shlex
import subprocess
import time
from threading import Timer

from installtest.utils.errors import CommandError

# timeout is 3 hours
DEFAULT_TIMEOUT_SECOND = 3 * 3600


def format_command(command) -> str:
    return shlex.join([str(x) for x in command])


def exec_command(
    command,
    cwd=None,
    env=None,
    timeout_second=DEFAULT_TIMEOUT_SECOND,
    capture=False,
):
    """
    Run a command without a shell and wait for it.

    Output goes to the terminal unless capture is set, in which case stdout
    is returned as the second element.

    Returns:
        Tuple of (return_code, output)
    """
    start_mills = int(time.time() * 1000)
    try:
        popen = subprocess.Popen(
            [str(x) for x in command],
            cwd=cwd,
            env=env,
            stdout=subprocess.PIPE if capture else None,
        )
    except OSError as e:
        return 127, f"Failed to start {command[0]}: {e}"
    timer = Timer(timeout_second, lambda process: process.kill(), [popen])
    try:
        timer.start()
        stdout, _ = popen.communicate()
    finally:
        timer.cancel()
    err_code = popen.returncode
    output = stdout.decode("UTF-8", errors="replace") if stdout else ""
    if err_code == -9:
        use_time = int(time.time() * 1000) - start_mills
        output = f"Failed for timeout({err_code}), use_time: {use_time}ms"
    return err_code, output


class CommandRunner:
    """Runs external tools and raises CommandError on a non-zero exit"""

    def __init__(self, timeout_second=DEFAULT_TIMEOUT_SECOND):
        self.timeout_second = timeout_second

    def run(self, command, cwd=None, env=None):
        print(f"$ {format_command(command)}", flush=True)
        err_code, err_msg = exec_command(
            command, cwd=cwd, env=env, timeout_second=self.timeout_second
        )
        if err_code != 0:
            raise CommandError(command, err_code, err_msg or None)

    def output(self, command, cwd=None, env=None) -> str:
        err_code, output = exec_command(
            command,
            cwd=cwd,
            env=env,
            timeout_second=self.timeout_second,
            capture=True,
        )
        if err_code != 0:
            raise CommandError(command, err_code)
        return output.strip()
