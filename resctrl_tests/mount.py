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
resctrl filesystem mount module
"""

import ctypes
import ctypes.util
import os

import psutil

from resctrl_tests import common
from resctrl_tests import log
from resctrl_tests.errors import MountError

_LIBC = None


def _libc():
    """
    Loads C library with errno support, once
    """
    global _LIBC # pylint: disable=global-statement

    if _LIBC is None:
        _LIBC = ctypes.CDLL(ctypes.util.find_library('c') or 'libc.so.6', use_errno=True)

    return _LIBC


def sys_mount(source, target, fstype):
    """
    mount(2) wrapper, no flags and no options

    Raises:
        OSError: system call failed
    """
    ret = _libc().mount(source.encode(), target.encode(), fstype.encode(),
                        ctypes.c_ulong(0), None)
    if ret != 0:
        err = ctypes.get_errno()
        raise OSError(err, os.strerror(err), target)


def sys_umount(target):
    """
    umount2(2) wrapper, no flags

    Raises:
        OSError: system call failed
    """
    ret = _libc().umount2(target.encode(), 0)
    if ret != 0:
        err = ctypes.get_errno()
        raise OSError(err, os.strerror(err), target)


def find_resctrl_mount():
    """
    Looks for resctrl filesystem in the mount table

    Returns:
        mount point or None if resctrl is not mounted
    """
    for part in psutil.disk_partitions(all=True):
        if part.fstype == common.RESCTRL_FSTYPE:
            return part.mountpoint

    return None


def is_mounted():
    """
    Returns resctrl mount status
    """
    return find_resctrl_mount() is not None


def remount_resctrlfs(report, force_remount, resctrl_path=None):
    """
    Ensures resctrl is mounted at resctrl_path.
    If not mounted, mount it.
    If mounted and force_remount then unmount and mount again.
    If mounted and not force_remount then noop.

    Parameters:
        report: TAP results accumulator
        force_remount: remount already mounted filesystem
        resctrl_path: canonical mount point
    Raises:
        MountError: mount failed
    """
    resctrl_path = resctrl_path or common.RESCTRL_PATH
    mountpoint = find_resctrl_mount()

    if mountpoint is not None and not force_remount:
        log.debug(f"resctrl already mounted at {mountpoint}")
        report.ok(f"resctrl already mounted at \"{mountpoint}\"")
        return

    if mountpoint is not None:
        try:
            sys_umount(mountpoint)
        except OSError as ex:
            # mount is attempted anyway
            log.error(f"umount {mountpoint}: {ex.strerror}")
            report.not_ok(f"unmounting \"{mountpoint}\"", ex.strerror)

    description = f"mounting resctrl to \"{resctrl_path}\""
    try:
        sys_mount(common.RESCTRL_FSTYPE, resctrl_path, common.RESCTRL_FSTYPE)
    except OSError as ex:
        report.not_ok(description, ex.strerror)
        raise MountError(f"Unable to mount resctrl at {resctrl_path}: {ex.strerror}",
                         ex.strerror) from ex

    report.ok(description)


def umount_resctrlfs(report, resctrl_path=None):
    """
    Unmounts resctrl filesystem unconditionally

    Parameters:
        report: TAP results accumulator
        resctrl_path: mount point
    Raises:
        MountError: unmount failed
    """
    resctrl_path = resctrl_path or common.RESCTRL_PATH

    try:
        sys_umount(resctrl_path)
    except OSError as ex:
        report.not_ok("unmounting resctrl", ex.strerror)
        raise MountError(f"Unable to umount resctrl at {resctrl_path}: {ex.strerror}",
                         ex.strerror) from ex

    report.ok("unmounting resctrl")
