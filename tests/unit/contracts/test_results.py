# tests/unit/contracts/test_results.py
"""Tests for propagation reports and mutation results."""

import pytest

from textubes.contracts import (
    ChannelName,
    GraphValidationError,
    InvalidConnectionError,
    MutationResult,
    NodeID,
    PropagationBoundError,
    PropagationReport,
    SnapshotValidationError,
    UnknownKindError,
)


class TestPropagationReport:
    def test_defaults_are_empty(self) -> None:
        report = PropagationReport()
        assert report.evaluated == []
        assert report.commits == []
        assert report.iterations == 0

    def test_commit_helpers(self) -> None:
        report = PropagationReport(
            commits=[
                (NodeID("a"), ChannelName("value")),
                (NodeID("b"), ChannelName("output-0")),
                (NodeID("b"), ChannelName("output-1")),
            ]
        )
        assert report.committed_nodes() == {"a", "b"}
        assert report.commit_count("b") == 2
        assert report.commit_count("c") == 0

    def test_reports_do_not_share_lists(self) -> None:
        first, second = PropagationReport(), PropagationReport()
        first.evaluated.append(NodeID("x"))
        assert second.evaluated == []


class TestMutationResult:
    def test_frozen(self) -> None:
        result = MutationResult(report=PropagationReport(), state={})
        with pytest.raises(AttributeError):
            result.node_id = NodeID("x")  # type: ignore[misc]


class TestErrors:
    def test_validation_hierarchy(self) -> None:
        assert issubclass(InvalidConnectionError, GraphValidationError)
        assert issubclass(SnapshotValidationError, GraphValidationError)
        assert issubclass(GraphValidationError, ValueError)

    def test_unknown_kind_message(self) -> None:
        error = UnknownKindError("nope", ["capslock", "source"])
        assert isinstance(error, KeyError)
        assert str(error) == "Unknown node kind: 'nope'. Registered: capslock, source"
        assert error.kind == "nope"

    def test_bound_error_carries_context(self) -> None:
        error = PropagationBoundError(50, "concatenate_1", ["concatenate_1", "concatenate_2"])
        assert error.bound == 50
        assert error.node_id == "concatenate_1"
        assert "evaluated 50 times" in str(error)
        assert "concatenate_1 -> concatenate_2 -> concatenate_1" in str(error)

    def test_bound_error_without_cycle(self) -> None:
        error = PropagationBoundError(5, "n1")
        assert error.cycle == []
        assert "cycle:" not in str(error)
