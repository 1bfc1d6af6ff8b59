import pytest

from playbooks.plugins.checks._internal.graph import CheckExecutionGraph, CheckNode, CircularDependencyError


def test_graph_detects_circular_dependency():
    g = CheckExecutionGraph()

    g.add_node(CheckNode(name="A", phase="document", priority=10, depends_on=["C"]))
    g.add_node(CheckNode(name="B", phase="document", priority=10, depends_on=["A"]))
    g.add_node(CheckNode(name="C", phase="document", priority=10, depends_on=["B"]))

    with pytest.raises(CircularDependencyError):
        g.topological_sort()


def test_graph_self_dependency_is_circular():
    g = CheckExecutionGraph()
    g.add_node(CheckNode(name="A", phase="parse", priority=10, depends_on=["A"]))

    with pytest.raises(CircularDependencyError):
        g.topological_sort()


def test_graph_orders_by_phase_then_priority():
    g = CheckExecutionGraph()
    g.add_node(CheckNode(name="late", phase="corpus", priority=1))
    g.add_node(CheckNode(name="doc_b", phase="document", priority=20))
    g.add_node(CheckNode(name="doc_a", phase="document", priority=20))
    g.add_node(CheckNode(name="first", phase="parse", priority=99))

    assert g.topological_sort() == ["first", "doc_a", "doc_b", "late"]


def test_dependency_overrides_priority():
    g = CheckExecutionGraph()
    g.add_node(CheckNode(name="early", phase="document", priority=1, depends_on=["slow"]))
    g.add_node(CheckNode(name="slow", phase="document", priority=50))

    assert g.topological_sort() == ["slow", "early"]


def test_unknown_dependencies_are_ignored():
    g = CheckExecutionGraph()
    g.add_node(CheckNode(name="A", phase="document", priority=10, depends_on=["not_selected"]))

    assert g.topological_sort() == ["A"]
