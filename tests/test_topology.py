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
Unit tests for resctrl_tests.topology module
"""

import pytest

from resctrl_tests import topology
from resctrl_tests.errors import ResourceLookupError


def test_get_resource_id_path():
    assert topology.get_resource_id_path(3, "/sys/devices/system/cpu/cpu") == \
        "/sys/devices/system/cpu/cpu3/topology/physical_package_id"


@pytest.mark.parametrize("cpu_no, resource_id", [(0, 0), (1, 0), (2, 1)])
def test_get_resource_id(cpu_topology, cpu_no, resource_id):
    assert topology.get_resource_id(cpu_no) == resource_id


def test_get_resource_id_explicit_path(cpu_topology):
    assert topology.get_resource_id(2, cpu_topology) == 1


def test_get_resource_id_not_cached(cpu_topology, tmp_path):
    assert topology.get_resource_id(1) == 0

    (tmp_path / "cpu1" / "topology" / "physical_package_id").write_text("3\n")
    assert topology.get_resource_id(1) == 3


def test_get_resource_id_no_cpu(cpu_topology):
    with pytest.raises(ResourceLookupError) as ex:
        topology.get_resource_id(64)

    assert isinstance(ex.value, LookupError)
    assert ex.value.reason == "Failed to get resource id"


@pytest.mark.parametrize("content", ["", "socket\n", "\n"])
def test_get_resource_id_invalid(cpu_topology, tmp_path, content):
    (tmp_path / "cpu1" / "topology" / "physical_package_id").write_text(content)

    with pytest.raises(ResourceLookupError):
        topology.get_resource_id(1)
