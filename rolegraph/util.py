"""Small string and list helpers used when handling policies and matchers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

_ESCAPE_PATTERN = re.compile(r"(\|| |=|\)|\(|&|<|>|,|\+|-|!|\*|\/)(r|p)\.")


def escape_assertion(s: str) -> str:
    """Replace the dot after ``r``/``p`` tokens with an underscore.

    Expression evaluators do not accept dotted variable names, so
    ``r.sub`` becomes ``r_sub`` while deeper attribute access is kept.
    """
    if s.startswith(("r", "p")):
        s = s.replace(".", "_", 1)
    return _ESCAPE_PATTERN.sub(lambda m: m.group(0).replace(".", "_", 1), s)


def remove_comments(s: str) -> str:
    """Strip a trailing ``#`` comment from a line."""
    pos = s.find("#")
    if pos == -1:
        return s
    return s[:pos].strip()


def array_equals(a: Sequence[str], b: Sequence[str]) -> bool:
    """Return whether two string sequences hold the same items in order."""
    return list(a) == list(b)


def array_2d_equals(a: Sequence[Sequence[str]], b: Sequence[Sequence[str]]) -> bool:
    """Return whether two sequences of string sequences are identical."""
    if len(a) != len(b):
        return False
    return all(array_equals(x, y) for x, y in zip(a, b))


def array_remove_duplicates(s: Iterable[str]) -> list[str]:
    """Return the items of ``s`` with duplicates dropped, first occurrence kept."""
    return list(dict.fromkeys(s))


def array_to_string(s: Iterable[str]) -> str:
    """Join the items with ``", "`` for display."""
    return ", ".join(s)


def params_to_string(*args: str) -> str:
    """Join the arguments with ``", "`` for display."""
    return ", ".join(args)


def set_equals(a: Sequence[str], b: Sequence[str]) -> bool:
    """Return whether two string sequences hold the same items, ignoring order."""
    return len(a) == len(b) and sorted(a) == sorted(b)


def join_slice(a: str, *args: str) -> list[str]:
    """Return a new list starting with ``a`` followed by ``args``."""
    return [a, *args]


def set_subtract(a: Iterable[str], b: Iterable[str]) -> list[str]:
    """Return the items of ``a`` that are not in ``b``, in ``a``'s order."""
    excluded = set(b)
    return [x for x in a if x not in excluded]