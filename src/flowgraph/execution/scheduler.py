# -*- coding: utf-8 -*-
"""
Graph Scheduler - Periodic driver for control-flow passes.

Every period the scheduler walks each registered start node, resetting
the dataflow cache before each walk. Ticks are time driven: a slow pass
does not delay the ticker. A tick that fires while a pass is still
running queues a single re-run; further ticks are folded into it, so
passes never overlap on the shared dataflow cache.

Errors raised by a pass are logged, handed to on_error and do not stop
later start nodes or later ticks.
"""
from typing import Any, Callable, Iterable, List, Optional
import asyncio
from loguru import logger

from .control_flow import ControlFlowEngine
from .dataflow import DataflowEngine

ErrorHandler = Callable[[Exception], Any]


class GraphScheduler:
    """
    Periodic re-execution of a graph.

    Usage:
        scheduler = GraphScheduler(dataflow, engine, [start.node_id], period=1.0)
        await scheduler.start()
        ...
        await scheduler.stop()

    Attributes:
        period: Seconds between ticks
        pass_count: Number of completed passes
        coalesced_ticks: Ticks folded into an already pending re-run
    """

    def __init__(
        self,
        dataflow: DataflowEngine,
        control_flow: ControlFlowEngine,
        start_ids: Iterable[str] = (),
        period: float = 1.0,
        on_error: Optional[ErrorHandler] = None
    ):
        if period <= 0:
            raise ValueError(f"Scheduler period must be positive, got {period}")
        self.dataflow = dataflow
        self.control_flow = control_flow
        self.period = period
        self.on_error = on_error
        self._start_ids: List[str] = list(dict.fromkeys(start_ids))
        self._running = False
        self._ticker: Optional[asyncio.Task] = None
        self._current: Optional[asyncio.Task] = None
        self._pending = False
        self.pass_count = 0
        self.coalesced_ticks = 0

    # =========================================================================
    # Start nodes
    # =========================================================================

    def add_start_node(self, node_id: str) -> None:
        if node_id not in self._start_ids:
            self._start_ids.append(node_id)

    def remove_start_node(self, node_id: str) -> None:
        if node_id in self._start_ids:
            self._start_ids.remove(node_id)

    @property
    def start_ids(self) -> List[str]:
        return list(self._start_ids)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_busy(self) -> bool:
        """A pass is in flight."""
        return self._current is not None and not self._current.done()

    @property
    def has_pending(self) -> bool:
        """A re-run is queued behind the pass in flight."""
        return self._pending

    async def start(self) -> None:
        """Start ticking. No-op when already running."""
        if self._running:
            return
        self._running = True
        self._ticker = asyncio.create_task(self._run_periodic())
        logger.info(f"GraphScheduler started (period: {self.period}s, start nodes: {len(self._start_ids)})")

    async def stop(self) -> None:
        """
        Stop ticking.

        The queued re-run is dropped. A pass already in flight is not
        cancelled; stop() waits for it to finish.
        """
        was_running = self._running or self._ticker is not None
        self._running = False
        self._pending = False

        if self._ticker is not None:
            logger.info("GraphScheduler stopping...")
            if not self._ticker.done():
                self._ticker.cancel()
            await asyncio.gather(self._ticker, return_exceptions=True)
            self._ticker = None

        await self.wait_idle()
        if was_running:
            logger.info(f"GraphScheduler stopped after {self.pass_count} passes")

    async def wait_idle(self) -> None:
        """Wait until no pass is in flight and nothing is queued."""
        while self._current is not None and not self._current.done():
            await asyncio.gather(self._current, return_exceptions=True)

    async def _run_periodic(self) -> None:
        while self._running:
            try:
                self.tick()
                await asyncio.sleep(self.period)
            except asyncio.CancelledError:
                logger.debug("GraphScheduler ticker cancelled")
                break

    # =========================================================================
    # Passes
    # =========================================================================

    def tick(self) -> None:
        """
        Request a pass now.

        Starts a pass when idle, otherwise queues one re-run behind the
        pass in flight. Must be called from within the event loop.
        """
        if self.is_busy:
            if self._pending:
                self.coalesced_ticks += 1
            self._pending = True
            logger.debug("Pass still running, re-run queued")
            return
        self._current = asyncio.create_task(self._drain())

    async def _drain(self) -> None:
        while True:
            await self.run_once()
            if not self._pending:
                break
            self._pending = False

    async def run_once(self) -> List[Exception]:
        """
        Run one tick immediately: walk every start node in registration
        order, resetting the dataflow cache before each walk.

        Does not coordinate with tick(); use it when the ticker is stopped.

        Returns:
            Errors caught during the pass (one per failed start node)
        """
        errors: List[Exception] = []

        for start_id in list(self._start_ids):
            self.dataflow.reset()
            try:
                await self.control_flow.execute(start_id)
            except Exception as e:
                errors.append(e)
                logger.exception(f"Pass from {start_id} failed: {e}")
                self._report(e)

        self.pass_count += 1
        return errors

    def _report(self, error: Exception) -> None:
        if self.on_error is None:
            return
        try:
            self.on_error(error)
        except Exception as e:
            logger.error(f"GraphScheduler error handler failed: {e}")
