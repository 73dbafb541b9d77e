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
resctrl groups module
Creates con_mon and mon groups and attaches PIDs to them
"""

import os

from resctrl_tests import common
from resctrl_tests import log
from resctrl_tests.errors import GroupCreationError, ResctrlError, TaskWriteError


def get_ctrlgrp_path(ctrlgrp, resctrl_path=None):
    """
    Gets path of a con_mon group, root group if ctrlgrp is empty
    """
    resctrl_path = resctrl_path or common.RESCTRL_PATH

    if ctrlgrp:
        return os.path.join(resctrl_path, ctrlgrp)

    return resctrl_path


def create_group(name, path, parent_path):
    """
    Creates a group only if one doesn't exist

    Parameters:
        name: name of the group, empty for root group
        path: full path of the group
        parent_path: full path of the parent group
    Raises:
        GroupCreationError: parent unlistable or mkdir failed
    """
    if not name:
        return

    try:
        entries = os.listdir(parent_path)
    except OSError as ex:
        raise GroupCreationError(f"Unable to open {parent_path} for group: {ex.strerror}",
                                 f"Unable to open resctrl for group: {ex.strerror}") from ex

    if name in entries:
        log.debug(f"Group {path} already exists")
        return

    try:
        # resctrl does not use regular file permissions
        os.mkdir(path, 0)
    except OSError as ex:
        raise GroupCreationError(f"Unable to create group {path}: {ex.strerror}",
                                 f"Unable to create group: {ex.strerror}") from ex

    log.debug(f"Group {path} created")


def write_pid_to_tasks(tasks, pid):
    """
    Attaches PID to a group

    Parameters:
        tasks: path to group's tasks file
        pid: PID to be written
    Raises:
        TaskWriteError: tasks file unopenable or unwritable
    """
    try:
        with open(tasks, 'w', opener=common.check_link, encoding='UTF-8') as tasks_file:
            tasks_file.write(f"{pid}\n")
    except OSError as ex:
        raise TaskWriteError(f"Failed to write PID {pid} to {tasks}: {ex.strerror}",
                             f"Failed to write pid to tasks file: {ex.strerror}") from ex

    log.debug(f"PID {pid} written to {tasks}")


def write_bm_pid_to_resctrl(report, bm_pid, ctrlgrp, mongrp, feature, resctrl_path=None):
    """
    Writes benchmark PID to resctrl FS.
    If a con_mon group is requested, create it and write PID to it,
    otherwise write PID to root con_mon group.
    If a mon group is requested (monitoring features only), create it and
    write PID to it as well.

    Parameters:
        report: TAP results accumulator
        bm_pid: PID to be written
        ctrlgrp: name of con_mon group or None/empty for root group
        mongrp: name of mon group or None
        feature: resctrl feature under test
        resctrl_path: resctrl mount point
    Raises:
        GroupCreationError, TaskWriteError
    """
    resctrl_path = resctrl_path or common.RESCTRL_PATH
    description = "writing benchmark parameters to resctrl FS"
    controlgroup = get_ctrlgrp_path(ctrlgrp, resctrl_path)

    try:
        create_group(ctrlgrp, controlgroup, resctrl_path)
        write_pid_to_tasks(os.path.join(controlgroup, common.TASKS), bm_pid)

        if feature in common.MON_FEATURES and mongrp:
            monitorgroup_p = os.path.join(controlgroup, common.MON_GROUPS)
            monitorgroup = os.path.join(monitorgroup_p, mongrp)
            create_group(common.MON_GROUPS, monitorgroup_p, controlgroup)
            create_group(mongrp, monitorgroup, monitorgroup_p)
            write_pid_to_tasks(os.path.join(monitorgroup, common.TASKS), bm_pid)
    except ResctrlError as ex:
        log.error(str(ex))
        report.not_ok(description, ex.reason)
        raise

    report.ok(description)
