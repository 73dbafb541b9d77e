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
This module defines errors raised by resctrl control-plane operations.
"""


class ResctrlError(Exception):
    """
    Generic resctrl test error.
    Field 'reason' is a short human readable reason printed in TAP output.
    """

    def __init__(self, message, reason=None):
        super().__init__(message)
        self.reason = reason or message


class MountError(ResctrlError):
    "resctrl filesystem mount or unmount failed"


class ResourceLookupError(ResctrlError, LookupError):
    "CPU topology attribute unreadable or unparsable"


class GroupCreationError(ResctrlError):
    "Parent group unlistable or group directory creation failed"


class TaskWriteError(ResctrlError):
    "Group tasks file unopenable or unwritable"


class SchemaError(ResctrlError):
    "Schemata file unopenable or unwritable, or empty schemata value"


class LaunchError(ResctrlError):
    "Benchmark could not be launched, fatal for the whole run"


class UnsupportedReportType(ResctrlError, ValueError):
    "Requested bandwidth report type is not available"


class NotApplicableError(Exception):
    "Operation does not apply to the requested feature, not a failure"
