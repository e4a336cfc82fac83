"""
Naming utilities for safe code generation.

Handles case conversions between naming conventions, serde-style rename
rules, reserved word conflicts and identifier validation.
"""

import re
from typing import Dict, List, Optional, Set
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""

    KEEP = "keep"  # as declared
    PASCAL_CASE = "pascal"  # UserName
    CAMEL_CASE = "camel"  # userName
    SNAKE_CASE = "snake"  # user_name
    KEBAB_CASE = "kebab"  # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME
    SCREAMING_KEBAB = "screaming_kebab"  # USER-NAME


# Acronym runs ("API" in "APIResponse"), capitalized or lower words, digits
# attach to the word before them ("field0", "u64").
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+\d*|[A-Z]+\d*|\d+")
_SEPARATOR_RE = re.compile(r"[^0-9A-Za-z]+")


def split_words(name: str) -> List[str]:
    """
    Split an identifier into words.

    Separators (underscores, hyphens, spaces, ``::``) and case humps both
    start a new word; acronym runs stay together.

    Examples:
        >>> split_words("APIResponse")
        ['API', 'Response']
        >>> split_words("job_id")
        ['job', 'id']
    """
    words = []
    for chunk in _SEPARATOR_RE.split(name):
        if chunk:
            words.extend(_WORD_RE.findall(chunk))
    return words


def _has_separators(name: str) -> bool:
    return bool(_SEPARATOR_RE.search(name))


def to_snake_case(name: str) -> str:
    """Convert to snake_case (``HTTPServer`` -> ``http_server``)."""
    return "_".join(word.lower() for word in split_words(name))


def to_screaming_snake_case(name: str) -> str:
    return "_".join(word.upper() for word in split_words(name))


def to_kebab_case(name: str) -> str:
    return "-".join(word.lower() for word in split_words(name))


def to_screaming_kebab_case(name: str) -> str:
    return "-".join(word.upper() for word in split_words(name))


def to_camel_case(name: str) -> str:
    """Convert to camelCase (``job_id`` -> ``jobId``, ``FileCopy`` -> ``fileCopy``)."""
    words = split_words(name)
    if not words:
        return name
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def to_pascal_case(name: str) -> str:
    """
    Convert to PascalCase.

    A name without separators that already starts with an upper-case letter
    is returned unchanged, so declared type names like ``APIResponse`` keep
    their acronyms.
    """
    if name and name[0].isupper() and not _has_separators(name):
        return name
    words = split_words(name)
    if not words:
        return name
    return "".join(word.capitalize() for word in words)


def is_snake_case(name: str) -> bool:
    return bool(re.fullmatch(r"[a-z][a-z0-9]*(_[a-z0-9]+)*", name))


def is_camel_case(name: str) -> bool:
    return bool(re.fullmatch(r"[a-z][a-zA-Z0-9]*", name))


def is_pascal_case(name: str) -> bool:
    return bool(re.fullmatch(r"[A-Z][a-zA-Z0-9]*", name))


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.KEBAB_CASE:
        return to_kebab_case(name)
    elif target_case == NamingCase.SCREAMING_SNAKE:
        return to_screaming_snake_case(name)
    elif target_case == NamingCase.SCREAMING_KEBAB:
        return to_screaming_kebab_case(name)
    else:
        return name


RENAME_RULES = (
    "lowercase",
    "UPPERCASE",
    "camelCase",
    "PascalCase",
    "snake_case",
    "SCREAMING_SNAKE_CASE",
    "kebab-case",
    "SCREAMING-KEBAB-CASE",
)


def _split_at_capitals(name: str, separator: str) -> str:
    # Every upper-case character after the first starts a new word, acronyms included
    return "".join(
        separator + c if c.isupper() and i > 0 else c for i, c in enumerate(name)
    )


def apply_rename_rule(name: str, rule: Optional[str]) -> str:
    """
    Apply a serde ``rename_all`` rule to a declared name.

    Args:
        name: Declared variant or field name
        rule: One of RENAME_RULES, or None to keep the name

    Returns:
        Wire name

    Raises:
        ValueError: If the rule is unknown
    """
    if rule is None:
        return name
    if rule == "lowercase":
        return name.lower()
    if rule == "UPPERCASE":
        return name.upper()
    if rule == "camelCase":
        return name[:1].lower() + name[1:]
    if rule == "PascalCase":
        return name[:1].upper() + name[1:]
    if rule == "snake_case":
        return to_snake_case(name)
    if rule == "SCREAMING_SNAKE_CASE":
        return _split_at_capitals(name, "_").upper()
    if rule == "kebab-case":
        return _split_at_capitals(name, "-").lower()
    if rule == "SCREAMING-KEBAB-CASE":
        return _split_at_capitals(name, "-").upper()
    raise ValueError(f"Unknown rename rule: {rule}")


class NameSanitizer:
    """Handles case conversion, reserved words and identifier validation."""

    def __init__(
        self,
        reserved_words: Set[str] = None,
        identifier_pattern: str = r"[A-Za-z_][A-Za-z0-9_]*",
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            identifier_pattern: Regex a valid identifier must fully match
        """
        self.reserved_words = reserved_words or set()
        self._identifier_re = re.compile(identifier_pattern)
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.KEEP,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Convert a name and avoid reserved words.

        The result is not validated; see is_valid_identifier.

        Args:
            name: Original name
            target_case: Desired case style
            suffix_on_conflict: Suffix appended to reserved words

        Returns:
            Converted name
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        converted = convert_case(name, target_case)
        if converted in self.reserved_words:
            converted = f"{converted}{suffix_on_conflict}"

        self._name_cache[cache_key] = converted
        return converted

    def is_valid_identifier(self, name: str) -> bool:
        """Check that a name can be used verbatim as an identifier."""
        return bool(self._identifier_re.fullmatch(name)) and name not in self.reserved_words
