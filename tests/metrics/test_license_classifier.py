"""
Tests for the license text classifier.
"""

from oss_quality_score.config import DEFAULT_POLICY
from oss_quality_score.metrics.license_classifier import is_compatible_license_text

MIT_TEXT = """MIT License

Copyright (c) 2024 Example

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
"""


class TestLicenseClassifier:
    """Test the is_compatible_license_text function."""

    def test_mit_text_is_compatible(self):
        """Test that a standard MIT text is accepted."""
        assert is_compatible_license_text(MIT_TEXT) is True

    def test_case_insensitive(self):
        """Test that matching ignores case."""
        assert is_compatible_license_text("MOZILLA PUBLIC LICENSE 2.0") is True
        assert is_compatible_license_text("mozilla public license 2.0") is True

    def test_permissive_phrase_without_license_name(self):
        """Test that a generic grant phrase is enough."""
        text = "You may redistribute this software in source and binary forms."
        assert is_compatible_license_text(text) is True

    def test_restrictive_phrase_overrides_compatible_phrases(self):
        """Test that a single restrictive phrase wins over many compatible ones."""
        text = MIT_TEXT + "\nThis is proprietary software."
        assert is_compatible_license_text(text) is False

    def test_not_licensed_for_phrase(self):
        """Test the 'not licensed for' restrictive phrase."""
        text = "GPL compatible, but not licensed for commercial redistribution."
        assert is_compatible_license_text(text) is False

    def test_no_known_phrase(self):
        """Test that unrelated text is not compatible."""
        assert is_compatible_license_text("All rights reserved.") is False

    def test_empty_and_none(self):
        """Test that missing text is not compatible."""
        assert is_compatible_license_text("") is False
        assert is_compatible_license_text(None) is False

    def test_deterministic(self):
        """Test that identical input yields identical output."""
        results = {is_compatible_license_text(MIT_TEXT) for _ in range(5)}
        assert results == {True}

    def test_injected_phrase_tables(self):
        """Test that the phrase tables come from the policy."""
        policy = DEFAULT_POLICY._replace(
            compatible_license_names=("acme open license",),
            permissive_phrases=(),
            restrictive_phrases=("internal only",),
        )
        assert is_compatible_license_text("ACME Open License v1", policy) is True
        assert is_compatible_license_text(MIT_TEXT, policy) is False
        assert (
            is_compatible_license_text("ACME Open License, internal only", policy)
            is False
        )
