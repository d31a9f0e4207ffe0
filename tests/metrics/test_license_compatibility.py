"""
Tests for the license compatibility metric.
"""

from unittest.mock import MagicMock

from oss_quality_score.config import DEFAULT_POLICY
from oss_quality_score.metrics.base import MetricContext, run_metric
from oss_quality_score.metrics.license_compatibility import METRIC, score_license
from oss_quality_score.repository import RepositoryIdentity
from oss_quality_score.vcs.base import LicenseInfo


class TestScoreLicense:
    """Test the score_license policy function."""

    def test_mit_spdx_scores_one(self):
        """Test that MIT is on the allow-list."""
        info = LicenseInfo(spdx_id="MIT", name="MIT License")
        assert score_license(info) == 1.0

    def test_no_license_scores_zero(self):
        """Test that a repository without license info scores 0."""
        assert score_license(None) == 0.0

    def test_spdx_not_in_allow_list(self):
        """Test that an unlisted SPDX id scores 0."""
        info = LicenseInfo(spdx_id="Apache-2.0", name="Apache License 2.0")
        assert score_license(info) == 0.0

    def test_missing_spdx_id(self):
        """Test license info with no SPDX id."""
        info = LicenseInfo(spdx_id=None, name="Some License")
        assert score_license(info) == 0.0

    def test_other_license_with_compatible_text(self):
        """Test that 'Other' falls back to the text classifier."""
        info = LicenseInfo(
            spdx_id="NOASSERTION",
            name="Other",
            raw_text="Permission is hereby granted, free of charge, to any person",
        )
        assert score_license(info) == 1.0

    def test_other_license_with_restrictive_text(self):
        """Test that a proprietary 'Other' license scores 0."""
        info = LicenseInfo(
            spdx_id="NOASSERTION",
            name="Other",
            raw_text="Proprietary. Not for use in commercial products.",
        )
        assert score_license(info) == 0.0

    def test_other_license_without_text_uses_allow_list(self):
        """Test that 'Other' without LICENSE text checks the SPDX id."""
        info = LicenseInfo(spdx_id="NOASSERTION", name="Other", raw_text=None)
        assert score_license(info) == 0.0

    def test_injected_allow_list(self):
        """Test that the allow-list comes from the policy."""
        policy = DEFAULT_POLICY._replace(compatible_spdx_ids=("Apache-2.0",))
        assert score_license(LicenseInfo("Apache-2.0", "Apache"), policy) == 1.0
        assert score_license(LicenseInfo("MIT", "MIT License"), policy) == 0.0


class TestLicenseMetric:
    """Test the license calculator through run_metric."""

    def test_calculator_queries_configured_expressions(self):
        """Test that the calculator passes the policy's blob expressions."""
        provider = MagicMock()
        provider.get_license_info.return_value = LicenseInfo("MIT", "MIT License")
        context = MetricContext(RepositoryIdentity("octo", "repo"), provider)

        outcome = run_metric(METRIC, context)

        assert outcome.ok
        assert outcome.result.score == 1.0
        assert outcome.result.latency >= 0
        provider.get_license_info.assert_called_once_with(
            "octo", "repo", ("main:LICENSE", "master:LICENSE")
        )

    def test_transport_fault_yields_zero(self):
        """Test that a transport fault becomes score 0, latency 0."""
        provider = MagicMock()
        provider.get_license_info.side_effect = ConnectionError("network down")
        context = MetricContext(RepositoryIdentity("octo", "repo"), provider)

        outcome = run_metric(METRIC, context)

        assert not outcome.ok
        assert outcome.unwrap() == (0.0, 0.0)
