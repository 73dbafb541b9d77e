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
fill_buf benchmark
Generates memory traffic by sweeping a buffer cache line by cache line
"""

from resctrl_tests import log

CL_SIZE = 64
PAGE_SIZE = 4096

OP_READ = 0
OP_WRITE = 1
OP_READ_WRITE = 2


class FillBufError(Exception):
    "fill_buf benchmark internal error"


def parse_args(args):
    """
    Parses fill_buf parameters

    Parameters:
        args: [span, malloc_and_init_memory, memflush, op] as strings
    Returns:
        tuple of ints
    Raises:
        FillBufError: wrong number of parameters or not integers
    """
    if len(args) != 4:
        raise FillBufError(f"fill_buf takes 4 parameters, {len(args)} given")

    try:
        span, malloc_and_init_memory, memflush, operation = [int(arg, 10) for arg in args]
    except ValueError as ex:
        raise FillBufError(f"Invalid fill_buf parameter: {ex}") from ex

    return span, malloc_and_init_memory, memflush, operation


def _alloc_buffer(span, malloc_and_init_memory):
    buf = bytearray(span)
    if malloc_and_init_memory:
        # touch every page so it is backed before measurement
        buf[::PAGE_SIZE] = b"\x01" * len(range(0, span, PAGE_SIZE))
    return buf


def _flush(evict):
    # no clflush from python, sweep a second buffer instead
    evict[::CL_SIZE] = bytes(len(range(0, len(evict), CL_SIZE)))


def _read_pass(buf):
    return sum(buf[::CL_SIZE])


def _write_pass(buf, pattern):
    buf[::CL_SIZE] = pattern


def run_fill_buf(span, malloc_and_init_memory, memflush, operation, passes=None):
    """
    Runs fill_buf benchmark

    Parameters:
        span: buffer size in bytes
        malloc_and_init_memory: initialize buffer before first pass
        memflush: evict buffer from cache between passes
        operation: OP_READ, OP_WRITE or OP_READ_WRITE
        passes: number of passes, run until killed if None
    Raises:
        FillBufError: invalid parameters or buffer allocation failed
    """
    if span <= 0:
        raise FillBufError(f"Invalid span {span}")
    if operation not in (OP_READ, OP_WRITE, OP_READ_WRITE):
        raise FillBufError(f"Invalid operation {operation}")

    try:
        buf = _alloc_buffer(span, malloc_and_init_memory)
        evict = bytearray(span) if memflush else None
    except MemoryError as ex:
        raise FillBufError(f"Unable to allocate {span} bytes") from ex

    pattern = b"\xa5" * len(range(0, span, CL_SIZE))
    log.debug(f"fill_buf: span {span}, op {operation}, passes {passes}")

    done = 0
    while passes is None or done < passes:
        if evict is not None:
            _flush(evict)
        if operation in (OP_READ, OP_READ_WRITE):
            _read_pass(buf)
        if operation in (OP_WRITE, OP_READ_WRITE):
            _write_pass(buf, pattern)
        done += 1

    return done
