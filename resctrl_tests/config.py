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
Module config
Test run parameters, defaults overridden by optional JSON config file
"""

import json
from collections import UserDict
from copy import deepcopy
from os.path import join, dirname

import jsonschema

from resctrl_tests import common

DEFAULTS = {
    "cpu_no": common.DEFAULT_CPU,
    "span": common.DEFAULT_SPAN,
    "bw_report": "reads",
    "tests": list(common.FEATURES),
    "benchmark": None,
    "resctrl_path": common.RESCTRL_PATH,
    "remount": True,
    "run_time": 1.0,
    "mba_schemata": list(range(100, 0, -10))
}


class Config(UserDict):
    """
    Configuration and helper functions
    """

    def __init__(self, data=None):
        super().__init__(deepcopy(DEFAULTS))
        if data:
            self.data.update(data)


    def get_benchmark_cmd(self):
        """
        Get configured benchmark command

        Returns:
            command as a list or None if built-in benchmark is used
        """
        return self.data.get('benchmark')


    def is_test_enabled(self, name):
        """
        Check if test is selected to run

        Parameters:
            name: test name, e.g. "mbm"
        """
        return name in self.data['tests']


    def set_tests(self, tests):
        """
        Select tests to run

        Parameters:
            tests: list of test names
        Raises:
            ValueError: unknown test name
        """
        for name in tests:
            if name not in common.FEATURES:
                raise ValueError(f"Unknown test \"{name}\"")

        self.data['tests'] = list(tests)


def load_json_schema(filename):
    """
    Loads the given schema file

    Parameters:
        filename: JSON schema file name
    Returns:
        schema
    """
    # find path to schema
    absolute_path = join(dirname(__file__), 'schema', filename)
    with open(absolute_path, opener=common.check_link, encoding='UTF-8') as schema_file:
        return json.loads(schema_file.read())


def load(path):
    """
    Load configuration from file

    Parameters:
        path: Path of the configuration file

    Returns:
        schema validated configuration
    Raises:
        OSError: file can not be read
        ValueError: file is not valid JSON
        jsonschema.ValidationError: file does not match schema
    """
    with open(path, 'r', opener=common.check_link, encoding='UTF-8') as fd:
        data = json.loads(fd.read())

    # validates config schema from config file
    schema = load_json_schema('resctrl_tests.json')
    jsonschema.validate(data, schema)

    return Config(data)
