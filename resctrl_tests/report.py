################################################################################
# BSD LICENSE
#
# Copyright(c) 2019-2023 Intel Corporation. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
#   * Redistributions of source code must retain the above copyright
#     notice, this list of conditions and the following disclaimer.
#   * Redistributions in binary form must reproduce the above copyright
#     notice, this list of conditions and the following disclaimer in
#     the documentation and/or other materials provided with the
#     distribution.
#   * Neither the name of Intel Corporation nor the names of its
#     contributors may be used to endorse or promote products derived
#     from this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR
# A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
# OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
# SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
# DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY
# THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
# (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
################################################################################

"""
TAP report module
Collects results of executed checks and prints them in TAP format
"""

import sys

TAP_VERSION = 13


class Result:
    """
    Single executed check
    """

    def __init__(self, passed, description, reason=None):
        self.passed = passed
        self.description = description
        self.reason = reason


    def __str__(self):
        line = f"{'' if self.passed else 'not '}ok {self.description}"
        if self.reason:
            line += f" # {self.reason}"
        return line


class TapReport:
    """
    Results accumulator owned by the test driver.
    Every control-plane operation records its outcome here.
    """

    def __init__(self, stream=None):
        self.results = []
        self.stream = stream if stream is not None else sys.stdout


    def _write(self, line):
        self.stream.write(line + "\n")
        self.stream.flush()


    @property
    def tests_run(self):
        """
        Number of executed checks
        """
        return len(self.results)


    @property
    def failed(self):
        """
        Number of failed checks
        """
        return len([result for result in self.results if not result.passed])


    def version(self):
        """
        Prints TAP version line
        """
        self._write(f"TAP version {TAP_VERSION}")


    def comment(self, message):
        """
        Prints TAP diagnostic line, not counted as a check

        Parameters:
            message: diagnostic message
        """
        self._write(f"# {message}")


    def bail_out(self, reason):
        """
        Prints TAP bail out line
        """
        self._write(f"Bail out! {reason}")


    def result(self, passed, description, reason=None):
        """
        Records and prints result of a single check

        Parameters:
            passed: check outcome
            description: check description
            reason: failure reason, printed after '#'
        Returns:
            recorded result
        """
        result = Result(passed, description, reason if not passed else None)
        self.results.append(result)
        self._write(str(result))
        return result


    def ok(self, description):
        return self.result(True, description)


    def not_ok(self, description, reason=None):
        return self.result(False, description, reason)


    def summary(self):
        """
        Prints TAP plan line with number of executed checks
        """
        self._write(f"1..{self.tests_run}")
