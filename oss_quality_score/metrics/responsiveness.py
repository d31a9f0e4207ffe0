"""Responsive maintenance metric."""

import math
from datetime import timedelta

from oss_quality_score.config import DEFAULT_POLICY, ScoringPolicy
from oss_quality_score.metrics.base import MetricContext, MetricSpec
from oss_quality_score.vcs.base import ItemTimestamps, ResponsivenessData


def average_response_seconds(items: list[ItemTimestamps]) -> float:
    """
    Average resolution time of resolved items, in seconds.

    An item is resolved when it has a close timestamp, or for pull requests a
    merge timestamp. The close timestamp wins when both exist.

    Returns:
        Average in seconds, or math.inf when no item is resolved.
    """
    durations: list[float] = []
    for item in items:
        resolved_at = item.closed_at or item.merged_at
        if resolved_at is None or item.created_at is None:
            continue
        durations.append((resolved_at - item.created_at).total_seconds())

    if not durations:
        return math.inf
    return sum(durations) / len(durations)


def score_response_times(
    avg_pr_seconds: float,
    avg_issue_seconds: float,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> float:
    """
    Map the two averages to a tiered score.

    - Both below the threshold: 1.0
    - Exactly one below: 0.7
    - Neither (including both unknown): 0.3
    """
    threshold = timedelta(days=policy.responsiveness_threshold_days).total_seconds()
    both_score, one_score, neither_score = policy.responsiveness_scores

    pr_fast = avg_pr_seconds < threshold
    issue_fast = avg_issue_seconds < threshold

    if pr_fast and issue_fast:
        return both_score
    if pr_fast or issue_fast:
        return one_score
    return neither_score


def compute_responsiveness_score(
    data: ResponsivenessData, policy: ScoringPolicy = DEFAULT_POLICY
) -> float:
    """Evaluates how quickly pull requests and issues get resolved."""
    avg_pr = average_response_seconds(data.pull_requests.items)
    avg_issue = average_response_seconds(data.issues.items)
    return score_response_times(avg_pr, avg_issue, policy)


def _calculate(context: MetricContext) -> float:
    owner, name = context.identity
    data = context.provider.get_responsiveness_data(
        owner, name, context.policy.responsiveness_sample_size
    )
    return compute_responsiveness_score(data, context.policy)


METRIC = MetricSpec(
    name="responsiveness",
    calculator=_calculate,
    output_field="responsivenessScore",
    latency_field="responsive_latency",
    error_log="Responsiveness check incomplete",
)
