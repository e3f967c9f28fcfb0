"""Placeholder syntax definitions and patterns."""

import re
from typing import Iterable, Optional, Pattern

# ?0, ?12 - Positional reference; ASCII digits only, the digit run is never cut short
POSITIONAL_PATTERN: Pattern = re.compile(r"\?([0-9]+)(?![0-9])")

_NAME_PATTERN: Pattern = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def build_named_token_pattern(prefix: str = ":") -> Pattern:
    """
    Build a pattern matching any named-looking token for a prefix.

    Used for strict checking of names no parameter declares, so it must use
    the same prefix as the declared tokens.

    Args:
        prefix: Prefix of named placeholder tokens (e.g., ":", "@")

    Returns:
        Compiled pattern whose group 1 is the name
    """
    return re.compile(re.escape(prefix) + r"([A-Za-z_][A-Za-z0-9_]*)")


def build_named_pattern(tokens: Iterable[str]) -> Optional[Pattern]:
    """
    Build a pattern matching any of the given placeholder tokens.

    Tokens are tried longest first so that a token which is a prefix of
    another (``:name`` vs ``:nameLong``) never shadows it.

    Args:
        tokens: Literal placeholder tokens (e.g., ":lastname")

    Returns:
        Compiled alternation pattern, or None if there are no tokens
    """
    unique = sorted(set(t for t in tokens if t), key=lambda t: (-len(t), t))
    if not unique:
        return None
    return re.compile("|".join(re.escape(t) for t in unique))


def is_valid_parameter_name(name: str) -> bool:
    """
    Check if a named parameter name is valid.

    Valid names start with a letter or underscore and contain only
    alphanumerics and underscores.
    """
    if not name:
        return False
    return bool(_NAME_PATTERN.match(name))
