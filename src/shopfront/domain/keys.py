"""Sort-key tokenizer.

A sort request is a comma-separated list of keys. Each key is either a
plain field name with an optional ``+``/``-`` direction prefix, or a
function-call-shaped key whose argument list may hold double-quoted
strings::

    code,-position
    -sort:index.text:relevance("de","test(\\"\\")"),code

Commas and parentheses inside the argument list are not delimiters.
The tokenizer never raises: malformed input yields whatever keys match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_KEY_RE = re.compile(
    r"""
    (?P<key>
        [^(,]+                              # field or function name
        (?:
            \(
            (?:"(?:[^"\\]|\\.)*"|[^)"])*    # quoted strings or plain args
            \)
        )?
    )
    ,?
    """,
    re.VERBOSE | re.DOTALL,
)


@dataclass(frozen=True)
class SortKey:
    """One sort key split into direction and name."""

    raw: str
    direction: str
    name: str

    @property
    def descending(self) -> bool:
        return self.direction == "-"


def split_keys(keys: str | None) -> list[str]:
    """Split a comma-separated string of sort keys.

    Examples:
        >>> split_keys("code,-position")
        ['code', '-position']
        >>> split_keys('sort:fn("a,b)",1),-x')
        ['sort:fn("a,b)",1)', '-x']
        >>> split_keys(None)
        []
    """
    if not keys:
        return []

    result: list[str] = []
    for match in _KEY_RE.finditer(keys):
        key = match.group("key").strip()
        if key:
            result.append(key)
    return result


def parse_sort_key(key: str) -> SortKey:
    """Split a single key into its direction and name.

    A missing prefix means ascending order. The name keeps any function
    call syntax untouched.
    """
    raw = key.strip()
    direction = "-" if raw.startswith("-") else "+"
    return SortKey(raw=raw, direction=direction, name=raw.lstrip("+-"))


def parse_sort_keys(keys: str | None) -> list[SortKey]:
    """Tokenize *keys* and split every token into a :class:`SortKey`."""
    return [parse_sort_key(key) for key in split_keys(keys)]
