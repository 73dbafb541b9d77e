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
resctrl test cases
MBM bandwidth change and MBA schemata change
"""

import time

from resctrl_tests import benchmark
from resctrl_tests import caps
from resctrl_tests import common
from resctrl_tests import groups
from resctrl_tests import log
from resctrl_tests import mount
from resctrl_tests import schemata
from resctrl_tests import topology
from resctrl_tests.errors import LaunchError, ResctrlError


class ResctrlValParam:
    """
    resctrl test parameters

    Attributes:
        feature: resctrl feature, e.g. "mbm", "mba"
        ctrlgrp: name of the con_mon group
        mongrp: name of the mon group
        cpu_no: CPU number to which the benchmark is bound
        remount: should resctrl FS be remounted
        bw_report: bandwidth report type
        resctrl_path: resctrl mount point
        run_time: benchmark run time per step in seconds
    """
    # pylint: disable=too-few-public-methods,too-many-instance-attributes

    def __init__(self, feature, config, ctrlgrp=common.CTRLGRP, mongrp=common.MONGRP):
        self.feature = feature
        self.ctrlgrp = ctrlgrp
        self.mongrp = mongrp
        self.cpu_no = config['cpu_no']
        self.remount = config['remount']
        self.bw_report = config['bw_report']
        self.resctrl_path = config['resctrl_path']
        self.run_time = config['run_time']


def _run_for(bench, seconds):
    """
    Lets benchmark run, checks it did not fail to launch
    """
    time.sleep(seconds)
    bench.poll_launch_failure()


def resctrl_val(report, benchmark_cmd, param, setup=None, prepare=None):
    """
    Runs a test case: validates feature, mounts resctrl, forks benchmark,
    places it into groups, runs prepare step, triggers benchmark and runs
    setup step. Benchmark starts only after groups and initial schemata
    are in place.

    Parameters:
        report: TAP results accumulator
        benchmark_cmd: benchmark command and arguments
        param: ResctrlValParam
        setup: callable(bench) run while benchmark runs, returns bool
        prepare: callable() run while benchmark waits for trigger
    Returns:
        (bool) test case result
    Raises:
        LaunchError: benchmark failed to launch, remaining tests must not run
    """
    if not caps.validate_resctrl_feature_request(param.feature):
        log.error(f"Feature {param.feature} not supported")
        return False

    try:
        param.bw_report = caps.validate_bw_report_request(param.bw_report)
        mount.remount_resctrlfs(report, param.remount, param.resctrl_path)
    except ResctrlError as ex:
        log.error(str(ex))
        return False

    bench = benchmark.Benchmark(benchmark_cmd, param.cpu_no)
    bench.fork()

    try:
        groups.write_bm_pid_to_resctrl(report, bench.pid, param.ctrlgrp, param.mongrp,
                                       param.feature, param.resctrl_path)
        if prepare is not None:
            prepare()

        bench.trigger()

        if setup is not None:
            passed = setup(bench)
        else:
            _run_for(bench, param.run_time)
            passed = True

        returncode = bench.stop()
    except LaunchError:
        raise
    except ResctrlError as ex:
        log.error(str(ex))
        return False
    finally:
        # benchmark never outlives its test case
        if bench.returncode is None:
            bench.kill()

    if returncode != 0:
        log.error(f"Benchmark exited with status {returncode}")
        return False

    return passed


def mbm_bw_change(report, config, benchmark_cmd):
    """
    MBM test: runs benchmark in con_mon group c1 and mon group m1

    Returns:
        (bool) test case result
    """
    param = ResctrlValParam(common.MBM_FEATURE, config)

    return resctrl_val(report, benchmark_cmd, param)


def _write_mba_schemata(report, param, value):
    schemata.write_schemata(report, param.ctrlgrp, str(value), param.cpu_no,
                            param.feature, param.resctrl_path)


def mba_prepare(report, config, param):
    """
    Builds MBA prepare step: applies first configured schemata before
    benchmark is triggered
    """

    def prepare():
        _write_mba_schemata(report, param, config['mba_schemata'][0])

    return prepare


def mba_setup(report, config, param):
    """
    Builds MBA setup step: checks each configured schemata was accepted by
    resctrl FS, applying the next one after benchmark ran with it.
    First schemata is applied by mba_prepare.
    """

    def setup(bench):
        passed = True
        values = config['mba_schemata']
        step_time = param.run_time / len(values)

        for index, value in enumerate(values):
            if index > 0:
                _write_mba_schemata(report, param, value)
            _run_for(bench, step_time)

            resource_id = topology.get_resource_id(param.cpu_no)
            try:
                applied = schemata.read_schemata(param.ctrlgrp, param.resctrl_path)\
                    .get(common.MBA_TAG, resource_id)
            except (OSError, KeyError, ValueError) as ex:
                log.error(f"Unable to read back MBA schemata: {ex}")
                passed = False
                continue

            log.debug(f"MBA schemata {value} requested, {applied} applied")
            if applied != value:
                log.error(f"MBA schemata {value} requested, {applied} applied")
                passed = False

        return passed

    return setup


def mba_schemata_change(report, config, benchmark_cmd):
    """
    MBA test: runs benchmark in con_mon group c1 and changes its
    memory bandwidth allocation

    Returns:
        (bool) test case result
    """
    param = ResctrlValParam(common.MBA_FEATURE, config)

    return resctrl_val(report, benchmark_cmd, param, mba_setup(report, config, param),
                       mba_prepare(report, config, param))


TESTS = {
    common.MBM_FEATURE: ("MBM: bw change", "Starting MBM BW change ...", mbm_bw_change),
    common.MBA_FEATURE: ("MBA: schemata change", "Starting MBA Schemata change ...",
                         mba_schemata_change),
}
