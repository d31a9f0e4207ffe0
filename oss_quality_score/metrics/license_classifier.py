"""
License text classifier.

A best-effort heuristic, not a legal determination: the phrase tables of the
scoring policy decide whether a free-form LICENSE text looks compatible.
"""

from oss_quality_score.config import DEFAULT_POLICY, ScoringPolicy


def _mentions_any(text: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase.lower() in text for phrase in phrases)


def is_compatible_license_text(
    license_text: str | None, policy: ScoringPolicy = DEFAULT_POLICY
) -> bool:
    """
    Classify raw license text as compatible or not.

    Compatible when the lower-cased text names a compatible license or uses a
    permissive grant phrase, and contains no restrictive phrase. A restrictive
    phrase overrides any number of compatible ones.

    Args:
        license_text: Raw LICENSE file contents.
        policy: Scoring policy holding the phrase tables.

    Returns:
        True if the text is classified compatible.
    """
    if not license_text:
        return False

    normalized_text = license_text.lower()

    mentions_compatible_license = _mentions_any(
        normalized_text, policy.compatible_license_names
    )
    contains_permissive_phrases = _mentions_any(
        normalized_text, policy.permissive_phrases
    )
    contains_restrictive_phrases = _mentions_any(
        normalized_text, policy.restrictive_phrases
    )

    return (
        mentions_compatible_license or contains_permissive_phrases
    ) and not contains_restrictive_phrases
