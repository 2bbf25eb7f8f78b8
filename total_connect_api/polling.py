"""Observe the completion of arm and disarm commands."""

import asyncio
from dataclasses import dataclass
import logging
from typing import Awaitable, Callable, Optional

from .const import ArmingState
from .dataTypes import PollOutcome

_LOGGER = logging.getLogger(__name__)

PollFunction = Callable[[], Awaitable[PollOutcome]]


@dataclass
class PendingCommand:
    """The command being polled and the future its callers wait on."""

    target: ArmingState
    future: "asyncio.Future[ArmingState]"
    task: Optional["asyncio.Task[None]"] = None


class CommandPoller:
    """Poll a pending command until the panel reports a terminal result.

    Only one command is polled at a time. Starting a command while another
    one is still polled attaches to it instead of starting a second timer
    chain.
    """

    def __init__(
        self,
        first_delay: float,
        interval: float,
        max_attempts: Optional[int] = None,
    ) -> None:
        """Create the object."""
        self.first_delay = first_delay
        self.interval = interval
        self.max_attempts = max_attempts
        self.pending: Optional[PendingCommand] = None

    @property
    def busy(self) -> bool:
        """Return True while a command is being polled."""
        return self.pending is not None

    def start_or_attach(
        self, target: ArmingState, poll_once: PollFunction
    ) -> "asyncio.Future[ArmingState]":
        """Return the future of the pending command, starting one if idle."""
        if self.pending is not None:
            _LOGGER.info(
                "Command to %s attached to pending %s",
                target.name,
                self.pending.target.name,
            )
            return self.pending.future

        loop = asyncio.get_running_loop()
        pending = PendingCommand(target, loop.create_future())
        self.pending = pending
        pending.task = loop.create_task(self._run(pending, poll_once))
        return pending.future

    async def wait(
        self, target: ArmingState, poll_once: PollFunction
    ) -> ArmingState:
        """Start or attach, then wait for the result."""
        return await asyncio.shield(self.start_or_attach(target, poll_once))

    async def _run(self, pending: PendingCommand, poll_once: PollFunction) -> None:
        count = 1
        delay = self.first_delay
        try:
            while True:
                await asyncio.sleep(delay)
                outcome = await poll_once()
                _LOGGER.debug("Poll %s for %s: %s", count, pending.target.name, outcome)
                if outcome.done:
                    _LOGGER.info("Polling done with state %s", outcome.state.name)
                    self._finish(pending, outcome.state)
                    return
                if self.max_attempts is not None and count >= self.max_attempts:
                    _LOGGER.warning(
                        "Command to %s still pending after %s checks, giving up",
                        pending.target.name,
                        count,
                    )
                    self._finish(pending, ArmingState.UNKNOWN)
                    return
                count += 1
                delay = self.interval
        except asyncio.CancelledError:
            self._clear(pending)
            if not pending.future.done():
                pending.future.cancel()
            raise
        except Exception as err:  # noqa: BLE001
            _LOGGER.error("Polling for %s failed: %s", pending.target.name, err)
            self._clear(pending)
            if not pending.future.done():
                pending.future.set_exception(err)

    def _clear(self, pending: PendingCommand) -> None:
        if self.pending is pending:
            self.pending = None

    def _finish(self, pending: PendingCommand, state: ArmingState) -> None:
        self._clear(pending)
        if not pending.future.done():
            pending.future.set_result(state)
