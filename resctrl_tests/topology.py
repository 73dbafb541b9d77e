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
CPU topology module
Resolves hardware resource (socket) id of a CPU
"""

import os
import re

from resctrl_tests import common
from resctrl_tests import log
from resctrl_tests.errors import ResourceLookupError


def get_resource_id_path(cpu_no, phys_id_path=None):
    """
    Gets path to CPU's physical package id attribute

    Parameters:
        cpu_no: CPU number
        phys_id_path: sysfs CPU directory prefix
    Returns:
        path to attribute file
    """
    prefix = phys_id_path or common.PHYS_ID_PATH
    return os.path.join(f"{prefix}{cpu_no}", "topology", "physical_package_id")


def get_resource_id(cpu_no, phys_id_path=None):
    """
    Gets socket number for a specified CPU.
    Value is read on every call, never cached.

    Parameters:
        cpu_no: CPU number
        phys_id_path: sysfs CPU directory prefix
    Returns:
        resource id
    Raises:
        ResourceLookupError: attribute file unreadable or not an integer
    """
    path = get_resource_id_path(cpu_no, phys_id_path)

    try:
        with open(path, 'r', encoding='UTF-8') as phys_file:
            data = phys_file.read()
    except OSError as ex:
        raise ResourceLookupError(f"Failed to open physical_package_id for CPU {cpu_no}: "
                                  f"{ex.strerror}", "Failed to get resource id") from ex

    match = re.match(r"^\s*(-?[0-9]+)", data)
    if not match:
        raise ResourceLookupError(f"Could not get socket number for CPU {cpu_no}",
                                  "Failed to get resource id")

    resource_id = int(match.group(1))
    log.debug(f"CPU {cpu_no} resource id {resource_id}")
    return resource_id
