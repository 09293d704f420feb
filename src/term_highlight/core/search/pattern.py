"""Build a safe match pattern from a raw search string."""

import re


def build_pattern(
    term: str,
    *,
    whole_word: bool = False,
    case_sensitive: bool = False,
) -> re.Pattern[str]:
    """Compile ``term`` as a literal pattern.

    Args:
        term: Raw user input; every metacharacter is matched literally.
        whole_word: Anchor the term on word boundaries at both ends.
        case_sensitive: Match case exactly instead of ignoring it.

    Returns:
        Compiled pattern; use ``finditer`` for all matches.
    """
    if not term:
        msg = "Cannot build a search pattern for an empty term"
        raise ValueError(msg)

    escaped = re.escape(term)
    if whole_word:
        escaped = rf"\b{escaped}\b"
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(escaped, flags)
