"""
Tests for configuration management.
"""

import pytest

from oss_quality_score import config
from oss_quality_score.config import (
    DEFAULT_POLICY,
    build_policy,
    get_github_token,
    get_policy_overrides,
    get_verify_ssl,
    load_config_file,
    load_scoring_policy,
    set_config_root,
    set_verify_ssl,
)
from oss_quality_score.core import compute_net_score


@pytest.fixture
def config_root(tmp_path, monkeypatch):
    """Point config discovery at an empty temporary directory."""
    monkeypatch.setattr(config, "_CONFIG_ROOT", None)
    set_config_root(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def restore_verify_ssl():
    original = get_verify_ssl()
    yield
    set_verify_ssl(original)


class TestPolicyOverrides:
    """Test discovery of [tool.oss-quality-score.policy] tables."""

    def test_no_config_files(self, config_root):
        assert get_policy_overrides() == {}
        assert load_scoring_policy() is DEFAULT_POLICY

    def test_pyproject_overrides(self, config_root):
        (config_root / "pyproject.toml").write_text(
            """
[tool.oss-quality-score.policy]
responsiveness_threshold_days = 14
"""
        )
        assert get_policy_overrides() == {"responsiveness_threshold_days": 14}
        assert load_scoring_policy().responsiveness_threshold_days == 14

    def test_local_config_takes_priority(self, config_root):
        (config_root / "pyproject.toml").write_text(
            """
[tool.oss-quality-score.policy]
commit_target = 10
"""
        )
        (config_root / ".oss-quality-score.toml").write_text(
            """
[tool.oss-quality-score.policy]
commit_target = 50
"""
        )
        assert load_scoring_policy().commit_target == 50

    def test_pyproject_without_tool_section(self, config_root):
        (config_root / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert get_policy_overrides() == {}

    def test_invalid_toml_raises(self, config_root):
        path = config_root / ".oss-quality-score.toml"
        path.write_text("this is = = not toml")
        with pytest.raises(ValueError, match="Failed to load config"):
            load_config_file(path)

    def test_missing_file_is_empty(self, tmp_path):
        assert load_config_file(tmp_path / "absent.toml") == {}


class TestBuildPolicy:
    """Test policy construction and validation."""

    def test_empty_overrides_return_defaults(self):
        assert build_policy(None) is DEFAULT_POLICY
        assert build_policy({}) is DEFAULT_POLICY

    def test_defaults(self):
        assert DEFAULT_POLICY.commit_window_days == 30
        assert DEFAULT_POLICY.commit_target == 30
        assert DEFAULT_POLICY.responsiveness_threshold_days == 7
        assert DEFAULT_POLICY.responsiveness_scores == (1.0, 0.7, 0.3)
        assert "MIT" in DEFAULT_POLICY.compatible_spdx_ids
        assert sum(DEFAULT_POLICY.weights.values()) == 1.0

    def test_lists_become_tuples(self):
        policy = build_policy({"compatible_spdx_ids": ["MIT", "Apache-2.0"]})
        assert policy.compatible_spdx_ids == ("MIT", "Apache-2.0")

    def test_unknown_key_raises(self):
        with pytest.raises(ValueError, match="Unknown policy option"):
            build_policy({"popularity_weight": 1})

    def test_partial_weights_are_merged(self):
        policy = build_policy(
            {"weights": {"license": 0.5, "rampup": 0.0}}
        )
        assert dict(policy.weights) == {
            "license": 0.5,
            "rampup": 0.0,
            "correctness": 0.25,
            "responsiveness": 0.25,
        }

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            build_policy({"weights": {"license": 0.9}})

    def test_negative_weight_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            build_policy(
                {"weights": {"license": -0.25, "rampup": 0.75}}
            )

    def test_responsiveness_scores_length(self):
        with pytest.raises(ValueError, match="three entries"):
            build_policy({"responsiveness_scores": [1.0, 0.5]})

    def test_unknown_weight_key_raises(self):
        """Test that a weight for a metric the aggregator ignores is rejected."""
        with pytest.raises(ValueError, match="Unknown metric weight"):
            build_policy(
                {
                    "weights": {
                        "license": 0.25,
                        "rampup": 0.0,
                        "correctness": 0.25,
                        "responsiveness": 0.25,
                        "bogus": 0.25,
                    }
                }
            )

    def test_valid_weights_let_a_perfect_repository_reach_one(self):
        policy = build_policy({"weights": {"license": 0.5, "rampup": 0.0}})
        assert compute_net_score(1, 1, 1, 1, policy.weights) == 1.0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"weights": 0.5},
            {"weights": ["license"]},
            {"weights": {"license": "half"}},
            {"compatible_spdx_ids": "MIT"},
            {"compatible_spdx_ids": ["MIT", 3]},
            {"responsiveness_scores": ["fast", "slow", "never"]},
            {"commit_target": "30"},
            {"commit_target": 0},
            {"commit_window_days": True},
            {"other_license_name": 1},
            {"rampup_placeholder_score": "zero"},
        ],
    )
    def test_wrong_value_type_raises_value_error(self, overrides):
        """Test that malformed values are reported as ValueError, not TypeError."""
        with pytest.raises(ValueError):
            build_policy(overrides)

    def test_policy_section_must_be_a_table(self, config_root):
        (config_root / ".oss-quality-score.toml").write_text(
            '[tool.oss-quality-score]\npolicy = "strict"\n'
        )
        with pytest.raises(ValueError, match="must be a table"):
            load_scoring_policy()

    def test_weights_from_file_are_read_only(self, config_root):
        (config_root / ".oss-quality-score.toml").write_text(
            """
[tool.oss-quality-score.policy]
weights = { license = 0.4, rampup = 0.0, correctness = 0.3, responsiveness = 0.3 }
"""
        )
        policy = load_scoring_policy()
        with pytest.raises(TypeError):
            policy.weights["license"] = 1.0


class TestEnvironment:
    """Test SSL and token settings."""

    def test_verify_ssl_toggle(self):
        set_verify_ssl(False)
        assert get_verify_ssl() is False
        set_verify_ssl(True)
        assert get_verify_ssl() is True

    def test_github_token(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "  ghp_abc  ")
        assert get_github_token() == "ghp_abc"

    def test_blank_github_token(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "   ")
        assert get_github_token() is None

    def test_missing_github_token(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        assert get_github_token() is None
