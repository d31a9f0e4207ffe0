"""Correctness metric."""

from datetime import datetime, timedelta, timezone

from oss_quality_score.config import DEFAULT_POLICY, ScoringPolicy
from oss_quality_score.metrics.base import MetricContext, MetricSpec, clamp
from oss_quality_score.vcs.base import CorrectnessData


def safe_ratio(numerator: int | float, denominator: int | float) -> float:
    """Divide, defining the ratio as 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def compute_correctness_score(
    data: CorrectnessData, policy: ScoringPolicy = DEFAULT_POLICY
) -> float:
    """
    Evaluates correctness from issue closure, releases and recent commits.

    - issue ratio: closed / (open + closed)
    - PR ratio: releases / (open PRs + releases)
    - recent commit ratio: commits in the window / target, capped at 1

    The score is the mean of the three ratios, rounded to 3 decimals.
    """
    issue_ratio = safe_ratio(
        data.issues.closed_count, data.issues.open_count + data.issues.closed_count
    )
    pr_ratio = safe_ratio(
        data.release_count, data.pull_requests.open_count + data.release_count
    )
    recent_commit_ratio = min(
        safe_ratio(data.recent_commit_count, policy.commit_target), 1.0
    )

    return round(clamp((issue_ratio + pr_ratio + recent_commit_ratio) / 3), 3)


def commit_window_start(
    policy: ScoringPolicy = DEFAULT_POLICY, now: datetime | None = None
) -> datetime:
    """Start of the recent-commit window (now - window days)."""
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=policy.commit_window_days)


def _calculate(context: MetricContext) -> float:
    owner, name = context.identity
    data = context.provider.get_correctness_data(
        owner, name, commit_window_start(context.policy)
    )
    return compute_correctness_score(data, context.policy)


METRIC = MetricSpec(
    name="correctness",
    calculator=_calculate,
    output_field="correctnessScore",
    latency_field="correctness_latency",
    error_log="Correctness check incomplete",
)
