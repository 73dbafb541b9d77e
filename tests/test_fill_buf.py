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
Unit tests for resctrl_tests.fill_buf module
"""

import pytest

from resctrl_tests import fill_buf


def test_parse_args():
    assert fill_buf.parse_args(["250", "1", "1", "0"]) == (250, 1, 1, 0)


@pytest.mark.parametrize("args", [
    [],
    ["250", "1", "1"],
    ["250", "1", "1", "0", "0"],
    ["big", "1", "1", "0"],
    ["250", "1", "1", "0x1"]
])
def test_parse_args_invalid(args):
    with pytest.raises(fill_buf.FillBufError):
        fill_buf.parse_args(args)


@pytest.mark.parametrize("operation", [fill_buf.OP_READ, fill_buf.OP_WRITE,
                                       fill_buf.OP_READ_WRITE])
@pytest.mark.parametrize("init, flush", [(0, 0), (1, 1)])
def test_run_fill_buf(operation, init, flush):
    assert fill_buf.run_fill_buf(64 * 1024, init, flush, operation, passes=3) == 3


def test_run_fill_buf_write_pattern():
    buf = bytearray(256)
    fill_buf._write_pass(buf, b"\xa5" * 4)

    assert buf[0] == 0xa5
    assert buf[64] == 0xa5
    assert buf[1] == 0
    assert fill_buf._read_pass(buf) == 4 * 0xa5


@pytest.mark.parametrize("span, operation", [(0, 0), (-1, 0), (4096, 3), (4096, -1)])
def test_run_fill_buf_invalid(span, operation):
    with pytest.raises(fill_buf.FillBufError):
        fill_buf.run_fill_buf(span, 1, 1, operation, passes=1)
