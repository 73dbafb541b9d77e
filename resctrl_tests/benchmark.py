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
Benchmark launcher module
Forks a benchmark bound to a CPU which waits for a trigger signal,
hands it benchmark command over a pipe and collects its exit status.
"""

import json
import os
import select
import signal
import sys

from resctrl_tests import common
from resctrl_tests import fill_buf
from resctrl_tests import log
from resctrl_tests import pid_ops
from resctrl_tests.errors import LaunchError

SIG_BENCHMARK = signal.SIGRTMIN

LAUNCH_FAILURE_EXIT = 127
WORKLOAD_FAILURE_EXIT = 1

STDOUT_FILENO = 1

# benchmark process states
FORKED_WAITING = "forked-waiting"
SIGNALED_RUNNING = "signaled-running"
EXITED = "exited"


def default_benchmark_cmd(span=None):
    """
    Builds built-in benchmark command:
    fill_buf <span> <malloc_and_init_memory> <memflush> <operation>
    """
    return (common.FILL_BUF, str(span or common.DEFAULT_SPAN), "1", "1", "0")


def _read_all(fd):
    chunks = []
    while True:
        chunk = os.read(fd, 4096)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def _report_launch_failure(status_fd, message):
    """
    Passes launch failure reason to the parent over status pipe
    """
    log.error(message)
    try:
        os.write(status_fd, message.encode())
    except OSError as ex:
        # exit code still tells the parent launch failed
        log.error(f"Unable to report launch failure: {ex.strerror}")


def redirect_stdout():
    """
    Directs stdout of benchmark to /dev/null, so that only parent
    writes to console
    """
    sys.stdout.flush()
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, STDOUT_FILENO)
    finally:
        os.close(devnull)


def run_benchmark(benchmark_cmd, status_fd):
    """
    Runs fill_buf or replaces process image with specified benchmark.
    Runs in the benchmark process after trigger signal.

    Parameters:
        benchmark_cmd: benchmark command and arguments
        status_fd: write end of status pipe
    Returns:
        exit status for the benchmark process
    """
    try:
        redirect_stdout()
    except OSError as ex:
        _report_launch_failure(status_fd, "Unable to direct benchmark status to /dev/null: "
                               f"{ex.strerror}")
        return LAUNCH_FAILURE_EXIT

    if benchmark_cmd[0] == common.FILL_BUF:
        try:
            fill_buf.run_fill_buf(*fill_buf.parse_args(benchmark_cmd[1:]))
        except fill_buf.FillBufError as ex:
            log.error(f"Error in running fill buffer: {ex}")
            return WORKLOAD_FAILURE_EXIT
        return 0

    try:
        os.execvp(benchmark_cmd[0], list(benchmark_cmd))
    except OSError as ex:
        _report_launch_failure(status_fd, f"Unable to run specified benchmark "
                               f"\"{benchmark_cmd[0]}\": {ex.strerror}")

    return LAUNCH_FAILURE_EXIT


def _receive_benchmark_cmd(spec_fd):
    """
    Reads benchmark command written by the parent, until EOF
    """
    benchmark_cmd = json.loads(_read_all(spec_fd).decode('UTF-8'))

    if not isinstance(benchmark_cmd, list) or not benchmark_cmd or \
            not all(isinstance(arg, str) for arg in benchmark_cmd):
        raise ValueError(f"Malformed benchmark command {benchmark_cmd!r}")

    return benchmark_cmd


def _benchmark_process(spec_fd, status_fd, cpu_no, sigmask):
    """
    Benchmark process body: bind to CPU, wait for trigger, run benchmark

    Returns:
        exit status
    """
    if pid_ops.set_affinity(os.getpid(), [cpu_no]) != 0:
        _report_launch_failure(status_fd, f"Unable to taskset benchmark to CPU {cpu_no}")
        return LAUNCH_FAILURE_EXIT

    signal.sigwait({SIG_BENCHMARK})
    signal.pthread_sigmask(signal.SIG_SETMASK, sigmask)

    try:
        benchmark_cmd = _receive_benchmark_cmd(spec_fd)
    except (OSError, ValueError) as ex:
        _report_launch_failure(status_fd, f"Unable to receive benchmark command: {ex}")
        return LAUNCH_FAILURE_EXIT
    finally:
        os.close(spec_fd)

    return run_benchmark(benchmark_cmd, status_fd)


class Benchmark:
    """
    Benchmark process of a single test case.
    forked-waiting -> signaled-running -> exited
    """

    def __init__(self, benchmark_cmd, cpu_no):
        self.benchmark_cmd = tuple(str(arg) for arg in benchmark_cmd)
        if not self.benchmark_cmd:
            raise ValueError("Empty benchmark command")

        self.cpu_no = cpu_no
        self.pid = None
        self.state = None
        self.returncode = None
        self.launch_failure = None
        self._spec_fd = None
        self._status_fd = None


    def fork(self):
        """
        Forks benchmark process. It binds itself to the CPU and blocks
        until trigger() is called.

        Returns:
            benchmark PID
        Raises:
            LaunchError: fork failed
        """
        if self.pid is not None:
            raise LaunchError(f"Benchmark already forked, PID {self.pid}")

        spec_r, spec_w = os.pipe()
        status_r, status_w = os.pipe()

        # blocked before fork, so trigger can not be lost
        sigmask = signal.pthread_sigmask(signal.SIG_BLOCK, {SIG_BENCHMARK})
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            pid = os.fork()
        except OSError as ex:
            signal.pthread_sigmask(signal.SIG_SETMASK, sigmask)
            for fd in (spec_r, spec_w, status_r, status_w):
                os.close(fd)
            raise LaunchError(f"Unable to fork benchmark: {ex.strerror}", ex.strerror) from ex

        if pid == 0:
            status = LAUNCH_FAILURE_EXIT
            try:
                os.close(spec_w)
                os.close(status_r)
                status = _benchmark_process(spec_r, status_w, self.cpu_no, sigmask)
            except Exception as ex: # pylint: disable=broad-except
                _report_launch_failure(status_w, f"Benchmark process failed: {ex}")
            finally:
                os._exit(status) # pylint: disable=protected-access

        signal.pthread_sigmask(signal.SIG_SETMASK, sigmask)
        os.close(spec_r)
        os.close(status_w)

        self.pid = pid
        self._spec_fd = spec_w
        self._status_fd = status_r
        self.state = FORKED_WAITING
        log.debug(f"Benchmark {self.benchmark_cmd[0]} forked, PID {pid}, CPU {self.cpu_no}")

        return pid


    def trigger(self):
        """
        Sends trigger signal and benchmark command to waiting benchmark.
        Must be called after PID is placed into resctrl groups.

        Raises:
            LaunchError: benchmark is not waiting or exited already
        """
        if self.state != FORKED_WAITING:
            raise LaunchError(f"Benchmark not waiting for trigger, state {self.state}")

        status, valid, name = pid_ops.get_pid_status(self.pid)
        if not valid:
            self.join()
            raise LaunchError(f"Benchmark PID {self.pid} ({name}) exited before trigger, "
                              f"status {self.returncode}")
        log.debug(f"Benchmark PID {self.pid} ({name}) {status}, triggering")

        payload = json.dumps(list(self.benchmark_cmd)).encode('UTF-8')

        try:
            os.kill(self.pid, SIG_BENCHMARK)
            # benchmark reads until EOF, payload size is not limited by pipe capacity
            with os.fdopen(self._spec_fd, 'wb') as spec_file:
                self._spec_fd = None
                spec_file.write(payload)
        except OSError as ex:
            self.kill()
            raise LaunchError(f"Unable to trigger benchmark PID {self.pid}: {ex.strerror}",
                              ex.strerror) from ex

        self.state = SIGNALED_RUNNING
        log.debug(f"Benchmark PID {self.pid} triggered")


    def _read_launch_failure(self, block):
        if self._status_fd is None:
            return self.launch_failure

        if not block:
            readable, _, _ = select.select([self._status_fd], [], [], 0)
            if not readable:
                return None

        # benchmark writes failure reason and exits, or exec closes the pipe
        data = _read_all(self._status_fd)
        os.close(self._status_fd)
        self._status_fd = None

        if data:
            self.launch_failure = data.decode('UTF-8', errors='replace')

        return self.launch_failure


    def poll_launch_failure(self):
        """
        Checks without blocking if benchmark reported launch failure

        Raises:
            LaunchError: benchmark failed to launch
        """
        failure = self._read_launch_failure(block=False)
        if failure:
            raise LaunchError(failure)


    def join(self):
        """
        Waits for benchmark exit

        Returns:
            exit code, negative signal number if killed by a signal
        Raises:
            LaunchError: benchmark failed to launch
        """
        if self.pid is None:
            raise LaunchError("Benchmark not forked")

        if self.returncode is None:
            if self._spec_fd is not None:
                os.close(self._spec_fd)
                self._spec_fd = None

            _, status = os.waitpid(self.pid, 0)
            self.returncode = os.waitstatus_to_exitcode(status)
            self.state = EXITED
            log.debug(f"Benchmark PID {self.pid} exited, status {self.returncode}")

        failure = self._read_launch_failure(block=True)
        if failure:
            raise LaunchError(failure)

        return self.returncode


    def _signal(self, signum):
        if self.pid is None or self.returncode is not None:
            return

        try:
            os.kill(self.pid, signum)
        except ProcessLookupError:
            log.debug(f"Benchmark PID {self.pid} already gone")


    def stop(self):
        """
        Stops running benchmark with SIGTERM and waits for it

        Returns:
            exit code, termination with SIGTERM is reported as 0
        Raises:
            LaunchError: benchmark failed to launch
        """
        self._signal(signal.SIGTERM)
        returncode = self.join()

        if returncode == -signal.SIGTERM:
            return 0

        return returncode


    def kill(self):
        """
        Kills benchmark with SIGKILL and waits for it

        Returns:
            exit code
        Raises:
            LaunchError: benchmark failed to launch
        """
        self._signal(signal.SIGKILL)
        return self.join()
