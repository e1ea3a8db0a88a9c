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

import os


# This context data class to save the context of the command
class CliContext:
    def __init__(self, example_dir=None, runner=None, environ=None):
        self.example_dir = example_dir or os.getcwd()
        # CommandRunner; created lazily by the commands when None
        self.runner = runner
        self.environ = dict(os.environ if environ is None else environ)
