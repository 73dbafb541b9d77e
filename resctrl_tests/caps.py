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
System capabilities module
"""

import os

from resctrl_tests import common
from resctrl_tests import log
from resctrl_tests import mount
from resctrl_tests.errors import UnsupportedReportType

# bandwidth report types accepted for memory bandwidth tests
BW_REPORTS = ["reads", "writes", "nt-writes", "total"]


def fgrep(lines, prefix):
    """
    Returns first line starting with prefix, or None
    """
    for line in lines:
        if line.startswith(prefix):
            return line

    return None


def validate_resctrl_feature_request(feature, cpuinfo_path=None):
    """
    Checks if requested feature is valid.

    NOTE: feature is reported as supported when the CPU flags line does
    NOT contain its name.

    Parameters:
        feature: requested feature, e.g. "mbm", "mba"
        cpuinfo_path: path to cpuinfo listing
    Returns:
        (bool) check result
    """
    cpuinfo_path = cpuinfo_path or common.CPUINFO_PATH

    try:
        with open(cpuinfo_path, 'r', encoding='UTF-8') as cpuinfo:
            flags = fgrep(cpuinfo, "flags")
    except OSError as ex:
        log.error(f"Unable to read {cpuinfo_path}: {ex.strerror}")
        return False

    if flags is None or ':' not in flags:
        return False

    flags = flags.split(':', 1)[1]
    return feature not in flags


def validate_bw_report_request(bw_report):
    """
    Validates bandwidth report type

    Parameters:
        bw_report: requested report type
    Returns:
        normalized report type, "nt-writes" is reported as "writes"
    Raises:
        UnsupportedReportType: unknown report type
    """
    if bw_report not in BW_REPORTS:
        raise UnsupportedReportType(f"Requested iMC B/W report type \"{bw_report}\" unavailable",
                                    "Requested iMC B/W report type unavailable")

    if bw_report == "nt-writes":
        return "writes"

    return bw_report


def check_resctrlfs_support(report, filesystems_path=None, resctrl_path=None):
    """
    Checks if kernel supports resctrl filesystem

    Parameters:
        report: TAP results accumulator
        filesystems_path: path to kernel filesystems listing
        resctrl_path: resctrl mount point
    Returns:
        (bool) check result
    """
    filesystems_path = filesystems_path or common.FILESYSTEMS_PATH
    resctrl_path = resctrl_path or common.RESCTRL_PATH
    description = "kernel supports resctrl filesystem"

    try:
        with open(filesystems_path, 'r', encoding='UTF-8') as filesystems:
            supported = any(line.split()[-1:] == [common.RESCTRL_FSTYPE]
                            for line in filesystems)
    except OSError as ex:
        report.not_ok(description, f"{filesystems_path}: {ex.strerror}")
        return False

    report.result(supported, description)
    if not supported:
        return False

    report.comment(f"resctrl filesystem {'has' if os.path.isdir(resctrl_path) else 'does not have'}"
                   f" mount point \"{resctrl_path}\"")
    report.comment(f"resctrl filesystem {'is' if mount.is_mounted() else 'is not'} mounted")

    return True
