"""Asynchronous process execution for fluxcli.

This module runs a single executable as a child process, captures its
combined output, and terminates only that child when the caller cancels.
"""

import asyncio
import contextlib
from collections.abc import Sequence

from icecream import ic

from fluxcli.exceptions import OperationCancelledError
from fluxcli.models import OperationResult

# Seconds a terminated child gets to exit before it is killed
TERMINATE_GRACE_SECONDS = 5.0


async def _stop_process(process: asyncio.subprocess.Process) -> None:
    """Terminate a running child, escalating to kill if it lingers.

    Args:
        process: The child process to stop.

    """
    if process.returncode is not None:
        return
    with contextlib.suppress(ProcessLookupError):
        process.terminate()
    try:
        await asyncio.wait_for(process.wait(), timeout=TERMINATE_GRACE_SECONDS)
    except asyncio.TimeoutError:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()


async def run_process(
    binary: str,
    args: Sequence[str],
    cancel_event: asyncio.Event | None = None,
) -> OperationResult:
    """Run an executable and capture its exit code and output.

    Standard error is merged into standard output so the captured text
    reads in the order the process wrote it.

    Args:
        binary: Absolute path to the executable.
        args: Ordered argument list passed to the executable.
        cancel_event: Optional event; setting it terminates the child.

    Returns:
        OperationResult with the exit code and decoded output.

    Raises:
        OperationCancelledError: If cancel_event is set before the child exits.
        asyncio.CancelledError: If the awaiting task is cancelled.

    """
    ic(binary, list(args))
    process = await asyncio.create_subprocess_exec(
        binary,
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )

    communicate = asyncio.ensure_future(process.communicate())
    waiters: set[asyncio.Future] = {communicate}
    cancel_waiter: asyncio.Future | None = None
    if cancel_event is not None:
        cancel_waiter = asyncio.ensure_future(cancel_event.wait())
        waiters.add(cancel_waiter)

    try:
        await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        communicate.cancel()
        await _stop_process(process)
        raise
    finally:
        if cancel_waiter is not None and not cancel_waiter.done():
            cancel_waiter.cancel()

    if not communicate.done():
        communicate.cancel()
        await _stop_process(process)
        raise OperationCancelledError(binary)

    stdout, _ = communicate.result()
    result = OperationResult(
        exit_code=process.returncode,
        output=(stdout or b"").decode("utf-8", errors="replace"),
    )
    ic(result)
    return result
