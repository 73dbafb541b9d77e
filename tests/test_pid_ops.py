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
Unit tests for resctrl_tests.pid_ops module
"""

import os

import mock
import psutil

from resctrl_tests import pid_ops


def test_get_pid_status():
    with mock.patch('psutil.Process') as process_mock:
        process_mock.return_value.status.return_value = psutil.STATUS_SLEEPING
        process_mock.return_value.name.return_value = 'fill_buf'
        assert pid_ops.get_pid_status(4321) == (psutil.STATUS_SLEEPING, True, 'fill_buf')

    with mock.patch('psutil.Process') as process_mock:
        process_mock.return_value.status.return_value = psutil.STATUS_STOPPED
        process_mock.return_value.name.return_value = 'fill_buf'
        assert not pid_ops.get_pid_status(4321)[1]


def test_get_pid_status_self():
    status, valid, name = pid_ops.get_pid_status(0)

    assert status == psutil.STATUS_RUNNING
    assert valid
    assert name


def test_get_pid_status_no_process():
    with mock.patch('psutil.Process', side_effect=psutil.NoSuchProcess(4321)):
        assert pid_ops.get_pid_status(4321) == ('Error', False, '')


def test_get_pid_status_zombie():
    with mock.patch('psutil.Process', side_effect=psutil.ZombieProcess(4321)):
        assert pid_ops.get_pid_status(4321) == (psutil.STATUS_ZOMBIE, False, '')


def test_set_affinity():
    with mock.patch('psutil.Process') as process_mock:
        assert pid_ops.set_affinity(4321, [1]) == 0

    process_mock.assert_called_once_with(4321)
    process_mock.return_value.cpu_affinity.assert_called_once_with([1])


def test_set_affinity_failed():
    with mock.patch('psutil.Process') as process_mock:
        process_mock.return_value.cpu_affinity.side_effect = ValueError("invalid CPU #9999")
        assert pid_ops.set_affinity(4321, [9999]) == -1


def test_set_affinity_self():
    cpus = sorted(os.sched_getaffinity(0))
    assert pid_ops.set_affinity(os.getpid(), cpus) == 0
