"""License compatibility metric."""

from oss_quality_score.config import DEFAULT_POLICY, ScoringPolicy
from oss_quality_score.metrics.base import MetricContext, MetricSpec
from oss_quality_score.metrics.license_classifier import is_compatible_license_text
from oss_quality_score.vcs.base import LicenseInfo


def score_license(
    license_info: LicenseInfo | None, policy: ScoringPolicy = DEFAULT_POLICY
) -> float:
    """
    Evaluates whether the repository license is compatible with LGPL v2.1.

    Scoring:
    - No license metadata: 0
    - GitHub reports "Other" and a LICENSE text exists: 1 if the text
      classifier accepts it, else 0
    - Otherwise: 1 if the SPDX identifier is on the allow-list, else 0
    """
    if license_info is None:
        return 0.0

    if license_info.name == policy.other_license_name and license_info.raw_text:
        return 1.0 if is_compatible_license_text(license_info.raw_text, policy) else 0.0

    if license_info.spdx_id and license_info.spdx_id in policy.compatible_spdx_ids:
        return 1.0

    return 0.0


def _calculate(context: MetricContext) -> float:
    owner, name = context.identity
    license_info = context.provider.get_license_info(
        owner, name, context.policy.license_expressions
    )
    return score_license(license_info, context.policy)


METRIC = MetricSpec(
    name="license",
    calculator=_calculate,
    output_field="licenseScore",
    latency_field="license_latency",
    error_log="License check incomplete",
)
