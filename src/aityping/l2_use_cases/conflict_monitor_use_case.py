"""Use case: ask the conflict authority about a committed hotkey, newest request wins."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from aityping.l1_entities.conflict_report import ConflictReport
from aityping.l1_entities.hotkey import Hotkey
from aityping.l2_use_cases.ports.conflict_checker import ConflictChecker

log = logging.getLogger('ait.conflicts')


class ConflictMonitor:
    """Runs conflict checks as asyncio tasks keyed by a request sequence number.

    Only the newest request updates ``report``. A failed check counts as
    "no information": the report is empty and nothing else is affected.
    """

    def __init__(self, checker: ConflictChecker) -> None:
        self._checker = checker
        self._seq = 0
        self._task: asyncio.Task[ConflictReport] | None = None
        self._tasks: set[asyncio.Task[ConflictReport]] = set()
        self._listeners: list[Callable[[ConflictReport | None], None]] = []
        self.report: ConflictReport | None = None

    def request(self, hotkey: Hotkey) -> asyncio.Task[ConflictReport]:
        """Schedule a check for *hotkey* on the running loop. Does not wait for it."""
        self._seq += 1
        task = asyncio.get_running_loop().create_task(self._run(self._seq, hotkey))
        # Every running check stays referenced until it finishes, superseded ones included.
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._task = task
        return task

    async def wait(self) -> ConflictReport | None:
        """Wait for the most recently requested check, if any."""
        if self._task is not None:
            await self._task
        return self.report

    def clear(self) -> None:
        self._seq += 1
        self._set_report(None)

    def subscribe(self, listener: Callable[[ConflictReport | None], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    async def _run(self, seq: int, hotkey: Hotkey) -> ConflictReport:
        try:
            conflicts = await self._checker.check_conflicts(hotkey)
        except Exception as e:
            log.warning('Conflict check failed for %r: %s: %s', hotkey, type(e).__name__, e)
            conflicts = []

        report = ConflictReport(hotkey=hotkey, conflicts=tuple(conflicts))
        if seq != self._seq:
            log.debug('Discarding superseded conflict report #%d (latest #%d)', seq, self._seq)
            return report
        if report.has_conflicts:
            log.info('Hotkey %r conflicts with: %s', hotkey, ', '.join(report.conflicts))
        self._set_report(report)
        return report

    def _set_report(self, report: ConflictReport | None) -> None:
        self.report = report
        for listener in list(self._listeners):
            listener(report)

    @property
    def pending(self) -> int:
        """Number of checks still running, superseded ones included."""
        return len(self._tasks)
