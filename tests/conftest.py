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

import io
import os

import mock
import pytest

from resctrl_tests.report import TapReport


@pytest.fixture
def report():
    return TapReport(io.StringIO())


@pytest.fixture
def resctrl_root(tmp_path):
    """
    Fake resctrl root group
    """
    root = tmp_path / "resctrl"
    root.mkdir()
    (root / "tasks").write_text("")
    (root / "schemata").write_text("MB:0=100;1=100\n")
    (root / "mon_groups").mkdir()
    return root


@pytest.fixture
def resctrl_mkdir():
    """
    Emulates resctrl FS mkdir: group directory comes with its tasks,
    schemata files and mon_groups directory
    """
    real_mkdir = os.mkdir

    def mkdir(path, mode=0o777):
        # pylint: disable=unused-argument
        real_mkdir(path, 0o755)
        open(os.path.join(path, "tasks"), "w").close()
        if os.path.basename(os.path.dirname(path)) != "mon_groups":
            open(os.path.join(path, "schemata"), "w").close()
            real_mkdir(os.path.join(path, "mon_groups"), 0o755)

    with mock.patch('os.mkdir', side_effect=mkdir) as mkdir_mock:
        yield mkdir_mock


@pytest.fixture
def cpu_topology(tmp_path):
    """
    Fake sysfs CPU topology: CPU 0 and 1 on socket 0, CPU 2 on socket 1
    """
    prefix = str(tmp_path / "cpu")

    for cpu_no, resource_id in [(0, 0), (1, 0), (2, 1)]:
        topology = tmp_path / f"cpu{cpu_no}" / "topology"
        topology.mkdir(parents=True)
        (topology / "physical_package_id").write_text(f"{resource_id}\n")

    with mock.patch('resctrl_tests.common.PHYS_ID_PATH', prefix):
        yield prefix
