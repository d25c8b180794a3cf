"""Tests for process.py module."""

import asyncio
import os
import sys

import pytest

from fluxcli.exceptions import OperationCancelledError
from fluxcli.models import OperationResult
from fluxcli.process import run_process

SLEEPER = "import time; print('started', flush=True); time.sleep(30)"
PID_SLEEPER = "import os, pathlib, sys, time; pathlib.Path(sys.argv[1]).write_text(str(os.getpid())); time.sleep(30)"


async def wait_for_pid(pid_file):
    """Wait until the child has written its pid and return it."""
    for _ in range(200):
        if pid_file.exists() and pid_file.read_text():
            return int(pid_file.read_text())
        await asyncio.sleep(0.05)
    raise AssertionError(f"child never wrote {pid_file}")


def assert_not_running(pid):
    """Assert that no process with the given pid exists any more."""
    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)


class TestRunProcess:
    """Tests for running child processes."""

    @pytest.mark.asyncio
    async def test_success(self):
        """Test capturing output of a successful process."""
        result = await run_process(sys.executable, ["-c", "print('reconciled')"])

        assert isinstance(result, OperationResult)
        assert result.exit_code == 0
        assert result.output.strip() == "reconciled"

    @pytest.mark.asyncio
    async def test_exit_code_and_merged_output(self):
        """Test that stderr is captured alongside stdout with the exit code."""
        script = "import sys; print('out', flush=True); print('err', file=sys.stderr, flush=True); sys.exit(3)"

        result = await run_process(sys.executable, ["-c", script])

        assert result.exit_code == 3
        assert "out" in result.output
        assert "err" in result.output

    @pytest.mark.asyncio
    async def test_arguments_passed_verbatim(self):
        """Test that empty and spaced arguments reach the process unchanged."""
        script = "import json, sys; print(json.dumps(sys.argv[1:]))"

        result = await run_process(sys.executable, ["-c", script, "--depends-on", "", "a b"])

        assert result.output.strip() == '["--depends-on", "", "a b"]'

    @pytest.mark.asyncio
    @pytest.mark.skipif(sys.platform == "win32", reason="checks the pid with POSIX signal 0")
    async def test_cancel_event_terminates_process(self, tmp_path):
        """Test that setting the cancel event stops the child."""
        pid_file = tmp_path / "child.pid"
        cancel_event = asyncio.Event()
        task = asyncio.create_task(run_process(sys.executable, ["-c", PID_SLEEPER, str(pid_file)], cancel_event))
        pid = await wait_for_pid(pid_file)

        cancel_event.set()

        with pytest.raises(OperationCancelledError) as exc_info:
            await asyncio.wait_for(task, timeout=20)
        assert exc_info.value.binary == sys.executable
        assert_not_running(pid)

    @pytest.mark.asyncio
    @pytest.mark.skipif(sys.platform == "win32", reason="checks the pid with POSIX signal 0")
    async def test_task_cancellation_terminates_process(self, tmp_path):
        """Test that cancelling the awaiting task stops the child."""
        pid_file = tmp_path / "child.pid"
        task = asyncio.create_task(run_process(sys.executable, ["-c", PID_SLEEPER, str(pid_file)]))
        pid = await wait_for_pid(pid_file)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await asyncio.wait_for(task, timeout=20)
        assert_not_running(pid)

    @pytest.mark.asyncio
    async def test_cancel_event_is_not_task_cancellation(self):
        """Test that an event cancel inside gather surfaces as a flux error."""
        cancel_event = asyncio.Event()
        asyncio.get_running_loop().call_later(0.5, cancel_event.set)

        results = await asyncio.gather(
            run_process(sys.executable, ["-c", SLEEPER], cancel_event),
            run_process(sys.executable, ["-c", "print('ok')"]),
            return_exceptions=True,
        )

        assert isinstance(results[0], OperationCancelledError)
        assert results[1].exit_code == 0

    @pytest.mark.asyncio
    async def test_cancel_does_not_affect_other_processes(self):
        """Test that cancelling one call leaves a concurrent call running."""
        cancel_event = asyncio.Event()
        cancelled = asyncio.create_task(run_process(sys.executable, ["-c", SLEEPER], cancel_event))
        survivor = asyncio.create_task(
            run_process(sys.executable, ["-c", "import time; time.sleep(1); print('done')"])
        )
        await asyncio.sleep(0.3)

        cancel_event.set()

        with pytest.raises(OperationCancelledError):
            await cancelled
        result = await asyncio.wait_for(survivor, timeout=20)
        assert result.exit_code == 0
        assert result.output.strip() == "done"

    @pytest.mark.asyncio
    async def test_unset_event_does_not_interfere(self):
        """Test that an event that is never set lets the process finish."""
        result = await run_process(sys.executable, ["-c", "print('ok')"], asyncio.Event())

        assert result.exit_code == 0
