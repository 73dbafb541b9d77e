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
resctrl schemata module
Formats, writes and parses group's allocation policy
"""

import os
import re

from resctrl_tests import common
from resctrl_tests import log
from resctrl_tests import topology
from resctrl_tests.errors import NotApplicableError, ResourceLookupError, SchemaError


class ResctrlSchemata:
    """
    Parsed content of a group's schemata file
    """

    def __init__(self, path):
        self.path = path
        self.data = {}

        self.parse()

    def parse(self):
        # Open file and fill each line into a list
        with open(self.path, 'r', encoding='UTF-8') as schema_file:
            lines = schema_file.readlines()

        for line in lines:
            match = re.search(r"^\s*([A-Z23]*):(.*)$", line)
            if not match:
                continue

            label = match.group(1)
            data = match.group(2).split(";")

            self.data[label] = {}

            for mask in data:
                match = re.search(r"^\s*([0-9]+)=\s*([0-9a-f]+)\s*$", mask)
                if not match:
                    continue

                if label == common.MBA_TAG:
                    value = int(match.group(2), 10)
                else:
                    value = int(match.group(2), 16)

                self.data[label][int(match.group(1))] = value

    def get(self, label, resource_id):
        return self.data[label][resource_id]


def get_schemata_path(ctrlgrp, resctrl_path=None):
    """
    Gets path to schemata file of root group or of named con_mon group
    """
    resctrl_path = resctrl_path or common.RESCTRL_PATH

    if ctrlgrp:
        return os.path.join(resctrl_path, ctrlgrp, common.SCHEMATA)

    return os.path.join(resctrl_path, common.SCHEMATA)


def format_schema(resource_id, schemata, tag=common.MBA_TAG):
    """
    Builds schemata line, e.g. "MB:0=50"
    """
    return f"{tag}:{resource_id}={schemata}"


def write_schemata(report, ctrlgrp, schemata, cpu_no, feature,
                   resctrl_path=None, phys_id_path=None):
    """
    Updates schemata of a con_mon group *only* if requested resctrl
    feature is allocation type.
    Value range is not validated, resctrl FS rejects invalid values on write.

    Parameters:
        report: TAP results accumulator
        ctrlgrp: name of con_mon group, empty for root group
        schemata: policy value to be applied
        cpu_no: CPU number the benchmark PID is bound to
        feature: resctrl feature under test
        resctrl_path: resctrl mount point
        phys_id_path: sysfs CPU directory prefix
    Returns:
        written schemata line
    Raises:
        NotApplicableError: feature is not allocation type, nothing written
        SchemaError: empty value, resource id lookup or write failed
    """
    if feature not in common.ALLOC_FEATURES:
        raise NotApplicableError(f"Schemata update not applicable to {feature}")

    if schemata is None or str(schemata) == "":
        report.not_ok("Skipping empty schemata update", "Empty schemata")
        raise SchemaError("Empty schemata update", "Empty schemata")

    try:
        resource_id = topology.get_resource_id(cpu_no, phys_id_path)
    except ResourceLookupError as ex:
        log.error(str(ex))
        report.not_ok(f"Write schema \"{format_schema('?', schemata)}\" to resctrl FS",
                      ex.reason)
        raise SchemaError(str(ex), ex.reason) from ex

    schema = format_schema(resource_id, schemata)
    description = f"Write schema \"{schema}\" to resctrl FS"
    path = get_schemata_path(ctrlgrp, resctrl_path)

    try:
        schema_file = open(path, 'w', opener=common.check_link, encoding='UTF-8')
    except OSError as ex:
        report.not_ok(description, "Failed to open control group")
        raise SchemaError(f"Failed to open {path}: {ex.strerror}",
                          "Failed to open control group") from ex

    try:
        with schema_file:
            schema_file.write(schema + "\n")
    except OSError as ex:
        report.not_ok(description, "Failed to write schemata in control group")
        raise SchemaError(f"Failed to write \"{schema}\" to {path}: {ex.strerror}",
                          "Failed to write schemata in control group") from ex

    log.debug(f"Schemata \"{schema}\" written to {path}")
    report.ok(description)
    return schema


def read_schemata(ctrlgrp, resctrl_path=None):
    """
    Parses schemata file of a con_mon group

    Returns:
        ResctrlSchemata
    """
    return ResctrlSchemata(get_schemata_path(ctrlgrp, resctrl_path))
