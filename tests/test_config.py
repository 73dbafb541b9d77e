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
Unit tests for resctrl_tests.config module
"""

import json

import jsonschema
import pytest

from resctrl_tests import common
from resctrl_tests import config


def test_defaults():
    cfg = config.Config()

    assert cfg['cpu_no'] == common.DEFAULT_CPU
    assert cfg['span'] == common.DEFAULT_SPAN
    assert cfg['resctrl_path'] == "/sys/fs/resctrl"
    assert cfg.get_benchmark_cmd() is None
    assert cfg.is_test_enabled("mbm")
    assert cfg.is_test_enabled("mba")

    # defaults are not shared between instances
    cfg['mba_schemata'].append(5)
    assert config.Config()['mba_schemata'][-1] == 10


def test_set_tests():
    cfg = config.Config()
    cfg.set_tests(["mba"])

    assert not cfg.is_test_enabled("mbm")
    assert cfg.is_test_enabled("mba")

    with pytest.raises(ValueError):
        cfg.set_tests(["cqm"])


def test_load(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "cpu_no": 3,
        "benchmark": ["stress", "-c", "1"],
        "bw_report": "nt-writes",
        "tests": ["mbm"]
    }))

    cfg = config.load(str(path))

    assert cfg['cpu_no'] == 3
    assert cfg.get_benchmark_cmd() == ["stress", "-c", "1"]
    assert cfg['bw_report'] == "nt-writes"
    assert not cfg.is_test_enabled("mba")
    assert cfg['span'] == common.DEFAULT_SPAN


@pytest.mark.parametrize("data", [
    {"unknown": 1},
    {"cpu_no": -1},
    {"tests": ["cqm"]},
    {"bw_report": "bogus"},
    {"mba_schemata": []}
])
def test_load_invalid(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))

    with pytest.raises(jsonschema.ValidationError):
        config.load(str(path))


def test_load_not_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("cpu_no = 1")

    with pytest.raises(ValueError):
        config.load(str(path))


def test_load_symlink(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{}")
    link = tmp_path / "link.json"
    link.symlink_to(path)

    with pytest.raises(PermissionError):
        config.load(str(link))
