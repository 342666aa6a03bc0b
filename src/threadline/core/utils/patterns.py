"""
Glob matching for rule patterns.

Supported syntax:
    **  any number of path segments, including zero
    *   any run of characters except "/"
    ?   exactly one character (any character, so a literal "?" cannot be expressed)

Patterns are anchored at both ends; everything else matches literally.
"""

import re
from collections.abc import Iterable
from re import Pattern

_GLOB_CACHE: dict[str, Pattern[str]] = {}
_VARIANT_CACHE: dict[str, frozenset[str]] = {}


def compile_glob(pattern: str) -> Pattern[str]:
    """Convert a glob pattern supporting ** into a compiled regex.

    Args:
        pattern: The glob pattern string.

    Returns:
        A compiled regex pattern object.
    """
    cached = _GLOB_CACHE.get(pattern)
    if cached:
        return cached

    regex_parts: list[str] = []
    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == "*":
            # ** must be consumed before the single-star rule sees it
            if i + 1 < length and pattern[i + 1] == "*":
                regex_parts.append(".*")
                i += 1
            else:
                regex_parts.append("[^/]*")
        elif char == "?":
            regex_parts.append(".")
        else:
            regex_parts.append(re.escape(char))
        i += 1

    compiled = re.compile("^" + "".join(regex_parts) + "$", re.DOTALL)
    _GLOB_CACHE[pattern] = compiled
    return compiled


def expand_pattern_variants(pattern: str) -> frozenset[str]:
    """Generate fallback globs so ** can match zero directories.

    "**/*.ts" alone compiles to a regex that needs at least one "/", so the
    variant "*.ts" is added to cover files at the top level.

    Args:
        pattern: The glob pattern to expand.

    Returns:
        A set of pattern variants, always including the pattern itself.
    """
    cached = _VARIANT_CACHE.get(pattern)
    if cached is not None:
        return cached

    variants = {pattern}
    queue = [pattern]

    while queue:
        current = queue.pop()

        transformations = [
            ("/**/", "/"),
            ("**/", ""),
            ("/**", ""),
        ]

        for old, new in transformations:
            if old in current:
                replaced = current.replace(old, new, 1)
                if replaced and replaced not in variants:
                    variants.add(replaced)
                    queue.append(replaced)

    result = frozenset(variants)
    _VARIANT_CACHE[pattern] = result
    return result


def _normalize(value: str) -> str:
    return value.replace("\\", "/")


def matches(path: str, pattern: str) -> bool:
    """Check whether a single file path matches a glob pattern."""
    if not path or not pattern:
        return False

    normalized_path = _normalize(path)
    return any(
        compile_glob(variant).match(normalized_path) for variant in expand_pattern_variants(_normalize(pattern))
    )


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """Check if a path matches any of the given patterns.

    Args:
        path: The file path to check.
        patterns: Glob patterns.

    Returns:
        True if the path matches any pattern, False otherwise.
    """
    return any(matches(path, pattern) for pattern in patterns)


def filter_matching(files: Iterable[str], patterns: list[str]) -> list[str]:
    """Return the files matched by at least one pattern, preserving input order."""
    if not patterns:
        return []
    return [path for path in files if matches_any(path, patterns)]
