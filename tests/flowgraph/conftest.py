import pytest

from flowgraph.core.graph import NodeGraph
from flowgraph.execution.control_flow import ControlFlowEngine
from flowgraph.execution.dataflow import DataflowEngine


class Sink:
    """Collects everything a Log node reports."""

    def __init__(self):
        self.messages = []

    def __call__(self, text):
        self.messages.append(text)


@pytest.fixture
def graph():
    return NodeGraph("Test")


@pytest.fixture
def dataflow(graph):
    return DataflowEngine(graph)


@pytest.fixture
def control_flow(graph):
    return ControlFlowEngine(graph)


@pytest.fixture
def sink():
    return Sink()
