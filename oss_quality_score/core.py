"""
Core analysis logic for OSS Quality Score.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, NamedTuple

from rich.console import Console

from oss_quality_score.config import (
    DEFAULT_METRIC_WEIGHTS,
    ScoringPolicy,
    load_scoring_policy,
)
from oss_quality_score.metrics import get_metric_spec, run_metric
from oss_quality_score.metrics.base import (
    ZERO_RESULT,
    MetricContext,
    MetricOutcome,
    MetricResult,
    clamp,
)
from oss_quality_score.repository import RepositoryIdentity
from oss_quality_score.vcs import get_vcs_provider
from oss_quality_score.vcs.base import BaseVCSProvider

console = Console(stderr=True)

# Order of metrics in the pipeline and in the output record
PIPELINE_METRICS = ("license", "responsiveness", "correctness")
RAMPUP_METRIC = "rampup"

# --- Data Structures ---


class NetScoreResult(NamedTuple):
    """The result of a repository analysis."""

    license: MetricResult
    correctness: MetricResult
    responsiveness: MetricResult
    rampup: MetricResult
    net_score: float
    rampup_enabled: bool = False
    outcomes: Mapping[str, MetricOutcome] = MappingProxyType({})


# --- Aggregation ---


def compute_net_score(
    license_score: float,
    rampup_score: float,
    correctness_score: float,
    responsiveness_score: float,
    weights: Mapping[str, float] | None = None,
) -> float:
    """
    Combine the four sub-scores into the weighted net score.

    Default weights are 0.25 each. A disabled ramp-up metric contributes a
    score of 0 at its full weight; the other weights are not renormalised.

    Returns:
        Net score in [0, 1].
    """
    weights = weights or DEFAULT_METRIC_WEIGHTS
    net = (
        weights["license"] * license_score
        + weights["rampup"] * rampup_score
        + weights["correctness"] * correctness_score
        + weights["responsiveness"] * responsiveness_score
    )
    return clamp(net)


# --- Main Analysis Function ---


def analyze_repository(
    identity: RepositoryIdentity,
    provider: BaseVCSProvider | None = None,
    policy: ScoringPolicy | None = None,
    include_rampup: bool = False,
) -> NetScoreResult:
    """
    Run every enabled metric calculator and aggregate the results.

    Calculators never raise to this function: a failing calculator is
    unwrapped to a zero score and zero latency.

    Args:
        identity: Repository owner and name
        provider: Query transport (default: GitHub provider)
        policy: Scoring policy (default: loaded from config files)
        include_rampup: Whether to run the ramp-up calculator

    Returns:
        NetScoreResult with each sub-metric and the net score
    """
    provider = provider or get_vcs_provider("github")
    policy = policy or load_scoring_policy()
    context = MetricContext(identity=identity, provider=provider, policy=policy)

    console.print(f"Analyzing [bold cyan]{identity.slug}[/bold cyan]...")

    metric_names = list(PIPELINE_METRICS)
    if include_rampup:
        metric_names.append(RAMPUP_METRIC)

    outcomes: dict[str, MetricOutcome] = {}
    for metric_name in metric_names:
        outcomes[metric_name] = run_metric(get_metric_spec(metric_name), context)

    results = {name: outcome.unwrap() for name, outcome in outcomes.items()}
    rampup = results.get(RAMPUP_METRIC, ZERO_RESULT)

    net_score = compute_net_score(
        results["license"].score,
        rampup.score,
        results["correctness"].score,
        results["responsiveness"].score,
        policy.weights,
    )

    return NetScoreResult(
        license=results["license"],
        correctness=results["correctness"],
        responsiveness=results["responsiveness"],
        rampup=rampup,
        net_score=net_score,
        rampup_enabled=include_rampup,
        outcomes=MappingProxyType(outcomes),
    )


def build_ndjson_record(
    result: NetScoreResult, include_net_score: bool = False
) -> dict[str, Any]:
    """
    Build the output record for one analysis.

    Ramp-up fields are present only when the ramp-up metric ran. The net
    score is appended as ``netScore`` only when requested.
    """
    record: dict[str, Any] = {}
    metric_names = list(PIPELINE_METRICS)
    if result.rampup_enabled:
        metric_names.append(RAMPUP_METRIC)

    for metric_name in metric_names:
        spec = get_metric_spec(metric_name)
        metric_result: MetricResult = getattr(result, metric_name)
        record[spec.output_field] = metric_result.score
        record[spec.latency_field] = metric_result.latency

    if include_net_score:
        record["netScore"] = round(result.net_score, 3)
    return record
