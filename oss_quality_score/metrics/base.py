"""
Shared metric types and the uniform fault-to-zero contract.
"""

import time
from typing import Callable, NamedTuple

from rich.console import Console

from oss_quality_score.config import DEFAULT_POLICY, ScoringPolicy
from oss_quality_score.repository import RepositoryIdentity
from oss_quality_score.vcs.base import BaseVCSProvider, GraphQLQueryError

console = Console(stderr=True)


class MetricResult(NamedTuple):
    """Score of one sub-metric and the time it took to compute."""

    score: float  # 0.0 - 1.0
    latency: float  # seconds, 3 decimals


ZERO_RESULT = MetricResult(0.0, 0.0)


class MetricContext(NamedTuple):
    """Context provided to metric calculators."""

    identity: RepositoryIdentity
    provider: BaseVCSProvider
    policy: ScoringPolicy = DEFAULT_POLICY


class MetricSpec(NamedTuple):
    """Specification for a metric calculator."""

    name: str
    calculator: Callable[[MetricContext], float]
    output_field: str
    latency_field: str
    error_log: str | None = None


class MetricOutcome(NamedTuple):
    """Either a computed result or the fault that prevented it."""

    name: str
    result: MetricResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None

    def unwrap(self) -> MetricResult:
        """Return the result, or the zero result on the fault branch."""
        if self.ok:
            return self.result
        return ZERO_RESULT


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Keep a value within [low, high]."""
    return max(low, min(value, high))


def get_latency(start_time: float) -> float:
    """Seconds elapsed since a time.perf_counter() reading, 3 decimals."""
    return round(time.perf_counter() - start_time, 3)


def run_metric(spec: MetricSpec, context: MetricContext) -> MetricOutcome:
    """
    Run one calculator, timing it and converting any fault into an outcome.

    Faults are reported once on the console and never retried.

    Args:
        spec: Metric specification.
        context: Repository identity, transport and policy.

    Returns:
        MetricOutcome with a clamped score, or the captured error.
    """
    start_time = time.perf_counter()
    try:
        score = spec.calculator(context)
    except GraphQLQueryError as e:
        console.print(f"[yellow]⚠️  {spec.error_log or spec.name}: {e}[/yellow]")
        return MetricOutcome(spec.name, error=e)
    except Exception as e:
        console.print(
            f"[yellow]⚠️  {spec.error_log or spec.name}: "
            f"{type(e).__name__}: {e}[/yellow]"
        )
        return MetricOutcome(spec.name, error=e)

    return MetricOutcome(
        spec.name, MetricResult(clamp(float(score)), get_latency(start_time))
    )
