"""
Tests for shared metric helpers and the fault-to-zero contract.
"""

from unittest.mock import MagicMock

from oss_quality_score.metrics.base import (
    ZERO_RESULT,
    MetricContext,
    MetricOutcome,
    MetricResult,
    MetricSpec,
    clamp,
    run_metric,
)
from oss_quality_score.repository import RepositoryIdentity
from oss_quality_score.vcs.base import GraphQLQueryError


def _context() -> MetricContext:
    return MetricContext(RepositoryIdentity("octo", "repo"), MagicMock())


def _spec(calculator) -> MetricSpec:
    return MetricSpec(
        name="sample",
        calculator=calculator,
        output_field="sampleScore",
        latency_field="sample_latency",
        error_log="Sample check incomplete",
    )


class TestClamp:
    def test_within_range(self):
        assert clamp(0.42) == 0.42

    def test_bounds(self):
        assert clamp(-0.5) == 0.0
        assert clamp(1.7) == 1.0


class TestMetricOutcome:
    """Test MetricOutcome unwrapping."""

    def test_ok_outcome_unwraps_to_result(self):
        outcome = MetricOutcome("sample", MetricResult(0.8, 0.123))
        assert outcome.ok
        assert outcome.unwrap() == MetricResult(0.8, 0.123)

    def test_fault_outcome_unwraps_to_zero(self):
        outcome = MetricOutcome("sample", error=RuntimeError("boom"))
        assert not outcome.ok
        assert outcome.unwrap() is ZERO_RESULT


class TestRunMetric:
    """Test run_metric timing and fault handling."""

    def test_successful_calculator(self):
        outcome = run_metric(_spec(lambda ctx: 0.5), _context())
        assert outcome.ok
        assert outcome.result.score == 0.5
        assert outcome.result.latency >= 0
        # Latency has at most three decimals
        assert round(outcome.result.latency, 3) == outcome.result.latency

    def test_score_is_clamped(self):
        assert run_metric(_spec(lambda ctx: 3), _context()).result.score == 1.0

    def test_graphql_error_becomes_fault(self, capsys):
        """Test that a GraphQL error is captured and reported on stderr."""

        def calculator(ctx):
            raise GraphQLQueryError("GitHub API Errors: Something went wrong")

        outcome = run_metric(_spec(calculator), _context())

        assert isinstance(outcome.error, GraphQLQueryError)
        assert outcome.unwrap() == (0.0, 0.0)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Something went wrong" in captured.err

    def test_any_exception_becomes_fault(self):
        """Test that unexpected errors never escape run_metric."""

        def calculator(ctx):
            raise KeyError("missing")

        outcome = run_metric(_spec(calculator), _context())

        assert isinstance(outcome.error, KeyError)
        assert outcome.unwrap() == ZERO_RESULT

    def test_fault_is_not_retried(self):
        """Test that a failing calculator runs exactly once."""
        calculator = MagicMock(side_effect=ConnectionError("down"))

        run_metric(_spec(calculator), _context())

        calculator.assert_called_once()
