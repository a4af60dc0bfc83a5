from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from textual.pilot import Pilot
    from textual.screen import Screen

# CI runners are significantly slower; scale timeouts accordingly.
_CI_MULTIPLIER: float = 5.0 if os.environ.get("CI") else 1.0


def _ci_timeout(timeout: float) -> float:
    return timeout * _CI_MULTIPLIER


def _deadline(timeout: float) -> float:
    return asyncio.get_running_loop().time() + timeout


async def wait_until(
    predicate: Callable[[], bool],
    *,
    timeout: float = 5.0,
    check_interval: float = 0.05,
    description: str = "condition",
) -> None:
    """Wait for a synchronous predicate to become true."""
    timeout = _ci_timeout(timeout)
    deadline = _deadline(timeout)
    while asyncio.get_running_loop().time() < deadline:
        if predicate():
            return
        await asyncio.sleep(check_interval)
    raise TimeoutError(f"Timed out after {timeout}s waiting for {description}")


async def wait_for_modal(
    pilot: Pilot,
    modal_type: type[Screen],
    timeout: float = 5.0,
) -> Screen:
    """Wait until ``modal_type`` is the active screen and return it."""
    timeout = _ci_timeout(timeout)
    deadline = _deadline(timeout)
    while asyncio.get_running_loop().time() < deadline:
        await pilot.pause()
        if isinstance(pilot.app.screen, modal_type):
            return pilot.app.screen
    raise TimeoutError(f"Timed out after {timeout}s waiting for {modal_type.__name__}")
