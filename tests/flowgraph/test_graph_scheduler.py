# -*- coding: utf-8 -*-
"""
Unit Tests for GraphScheduler

Tests periodic re-execution, error isolation and pass serialization.
"""
import pytest
import asyncio
from unittest.mock import MagicMock

from flowgraph.core.base_node import BaseNode
from flowgraph.core.ports import ANY_SOCKET, OutputPort
from flowgraph.execution.scheduler import GraphScheduler
from flowgraph.nodes import LogNode, StartNode, TextNode


class GateNode(BaseNode):
    """Trigger node that blocks until released."""
    node_type = "Gate"

    def __init__(self):
        self.release = asyncio.Event()
        self.runs = 0
        super().__init__()

    def _setup_ports(self):
        self.add_output("exec", OutputPort(ANY_SOCKET, "Exec"))

    async def execute(self, input_name, forward):
        self.runs += 1
        await self.release.wait()
        await forward("exec")


class ExplodingStart(BaseNode):
    node_type = "ExplodingStart"

    def _setup_ports(self):
        self.add_output("exec", OutputPort(ANY_SOCKET, "Exec"))

    def execute(self, input_name, forward):
        raise RuntimeError("tick failed")


class CountingText(TextNode):
    """Text node counting how often the dataflow engine evaluates it."""

    def __init__(self, initial=""):
        self.calls = 0
        super().__init__(initial)

    def data(self, inputs):
        self.calls += 1
        return super().data(inputs)


def log_program(graph, dataflow, sink, text="hello", text_cls=TextNode):
    start = graph.add_node(StartNode())
    log = graph.add_node(LogNode(sink, dataflow))
    source = graph.add_node(text_cls(text))
    graph.connect(start.node_id, "exec", log.node_id, "exec")
    graph.connect(source.node_id, "value", log.node_id, "message")
    return start, log, source


class TestRunOnce:

    @pytest.mark.asyncio
    async def test_pass_reaches_sink(self, graph, dataflow, control_flow, sink):
        start, _, _ = log_program(graph, dataflow, sink)
        scheduler = GraphScheduler(dataflow, control_flow, [start.node_id])

        errors = await scheduler.run_once()

        assert errors == []
        assert sink.messages == ["hello"]
        assert scheduler.pass_count == 1

    @pytest.mark.asyncio
    async def test_each_pass_resets_dataflow(self, graph, dataflow, control_flow, sink):
        start, _, text = log_program(graph, dataflow, sink, text_cls=CountingText)
        scheduler = GraphScheduler(dataflow, control_flow, [start.node_id])

        await scheduler.run_once()
        text.get_control("value").set_value("changed")
        await scheduler.run_once()

        assert text.calls == 2
        assert sink.messages == ["hello", "changed"]

    @pytest.mark.asyncio
    async def test_each_start_node_sees_fresh_values(self, graph, dataflow, control_flow):
        messages = []
        text = graph.add_node(TextNode("first"))

        def rewrite_after_log(message):
            messages.append(message)
            text.get_control("value").set_value("second")

        starts = []
        for _ in range(2):
            start = graph.add_node(StartNode())
            log = graph.add_node(LogNode(rewrite_after_log, dataflow))
            graph.connect(start.node_id, "exec", log.node_id, "exec")
            graph.connect(text.node_id, "value", log.node_id, "message")
            starts.append(start.node_id)
        scheduler = GraphScheduler(dataflow, control_flow, starts)

        errors = await scheduler.run_once()

        assert errors == []
        assert messages == ["first", "second"]

    @pytest.mark.asyncio
    async def test_error_is_reported_and_other_start_nodes_run(
        self, graph, dataflow, control_flow, sink
    ):
        bad = graph.add_node(ExplodingStart())
        start, _, _ = log_program(graph, dataflow, sink)
        on_error = MagicMock()
        scheduler = GraphScheduler(
            dataflow, control_flow, [bad.node_id, start.node_id], on_error=on_error
        )

        errors = await scheduler.run_once()

        assert len(errors) == 1
        assert str(errors[0]) == "tick failed"
        on_error.assert_called_once_with(errors[0])
        assert sink.messages == ["hello"]

    @pytest.mark.asyncio
    async def test_failing_error_handler_is_contained(self, graph, dataflow, control_flow):
        bad = graph.add_node(ExplodingStart())
        on_error = MagicMock(side_effect=RuntimeError("handler broke"))
        scheduler = GraphScheduler(dataflow, control_flow, [bad.node_id], on_error=on_error)

        errors = await scheduler.run_once()

        assert len(errors) == 1
        on_error.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_start_node_is_reported(self, dataflow, control_flow):
        scheduler = GraphScheduler(dataflow, control_flow, ["missing"])
        errors = await scheduler.run_once()
        assert len(errors) == 1


class TestStartNodes:

    def test_add_and_remove(self, dataflow, control_flow):
        scheduler = GraphScheduler(dataflow, control_flow, ["a", "a"])
        assert scheduler.start_ids == ["a"]

        scheduler.add_start_node("b")
        scheduler.add_start_node("b")
        scheduler.remove_start_node("a")
        scheduler.remove_start_node("zzz")

        assert scheduler.start_ids == ["b"]

    def test_period_must_be_positive(self, dataflow, control_flow):
        with pytest.raises(ValueError):
            GraphScheduler(dataflow, control_flow, period=0)


class TestTicking:

    @pytest.mark.asyncio
    async def test_start_and_stop(self, graph, dataflow, control_flow, sink):
        start, _, _ = log_program(graph, dataflow, sink)
        scheduler = GraphScheduler(dataflow, control_flow, [start.node_id], period=0.01)

        await scheduler.start()
        assert scheduler.is_running
        await asyncio.sleep(0.1)
        await scheduler.stop()

        assert not scheduler.is_running
        assert scheduler.pass_count >= 2
        assert set(sink.messages) == {"hello"}

        count = scheduler.pass_count
        await asyncio.sleep(0.05)
        assert scheduler.pass_count == count

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self, dataflow, control_flow):
        scheduler = GraphScheduler(dataflow, control_flow, period=10)
        await scheduler.start()
        ticker = scheduler._ticker

        await scheduler.start()

        assert scheduler._ticker is ticker
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_errors_do_not_stop_ticks(self, graph, dataflow, control_flow):
        bad = graph.add_node(ExplodingStart())
        on_error = MagicMock()
        scheduler = GraphScheduler(
            dataflow, control_flow, [bad.node_id], period=0.01, on_error=on_error
        )

        await scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()

        assert on_error.call_count >= 2

    @pytest.mark.asyncio
    async def test_ticks_during_pass_are_coalesced(self, graph, dataflow, control_flow):
        gate = graph.add_node(GateNode())
        scheduler = GraphScheduler(dataflow, control_flow, [gate.node_id], period=10)

        scheduler.tick()
        await asyncio.sleep(0)
        assert scheduler.is_busy
        assert gate.runs == 1

        scheduler.tick()
        scheduler.tick()
        scheduler.tick()
        assert scheduler.has_pending
        assert scheduler.coalesced_ticks == 2

        gate.release.set()
        await scheduler.wait_idle()

        assert gate.runs == 2
        assert scheduler.pass_count == 2
        assert not scheduler.has_pending
        assert not scheduler.is_busy

    @pytest.mark.asyncio
    async def test_stop_waits_for_pass_in_flight(self, graph, dataflow, control_flow):
        gate = graph.add_node(GateNode())
        scheduler = GraphScheduler(dataflow, control_flow, [gate.node_id], period=10)

        await scheduler.start()
        await asyncio.sleep(0.01)
        assert gate.runs == 1

        stopping = asyncio.create_task(scheduler.stop())
        await asyncio.sleep(0.01)
        assert not stopping.done()

        gate.release.set()
        await stopping

        assert scheduler.pass_count == 1
        assert not scheduler.is_busy

    @pytest.mark.asyncio
    async def test_stop_waits_for_manual_tick(self, graph, dataflow, control_flow):
        gate = graph.add_node(GateNode())
        scheduler = GraphScheduler(dataflow, control_flow, [gate.node_id], period=10)

        scheduler.tick()
        await asyncio.sleep(0)
        assert scheduler.is_busy

        stopping = asyncio.create_task(scheduler.stop())
        await asyncio.sleep(0.01)
        assert not stopping.done()

        gate.release.set()
        await stopping

        assert scheduler.pass_count == 1
        assert not scheduler.is_busy
