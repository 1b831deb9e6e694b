"""
authgate.http.reducers

Reducers define how `with_*` calls merge new values into a pipeline.

Why reducers:
- Request and response pipelines share the same replace-by-name discipline.
- Merges must be deterministic: untouched entries keep their position, new names
  are appended, and the previous tuple is never mutated.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import TypeVar

from authgate.http.models import Cookie, Header, QueryParam

T = TypeVar("T")


def merge_headers(current: Iterable[Header], updates: Iterable[Header]) -> tuple[Header, ...]:
    """
    Same-name updates are concatenated in argument order into one header, which
    replaces the existing header of that name.
    """

    combined: dict[str, Header] = {}
    for header in updates:
        prev = combined.get(header.key)
        combined[header.key] = (
            header if prev is None else Header(prev.name, (*prev.values, *header.values))
        )
    return _replace_by_key(current, combined, key=lambda h: h.key)


def merge_cookies(current: Iterable[Cookie], updates: Iterable[Cookie]) -> tuple[Cookie, ...]:
    """
    Replace-by-name; the last supplied cookie wins when several share a name.
    """

    latest: dict[str, Cookie] = {}
    for cookie in updates:
        latest[cookie.name] = cookie
    return _replace_by_key(current, latest, key=lambda c: c.name)


def merge_query_params(
    current: Iterable[QueryParam], pairs: Iterable[tuple[str, str]]
) -> tuple[QueryParam, ...]:
    """
    Header rules applied to `(name, value)` pairs.
    """

    combined: dict[str, list[str]] = {}
    for name, value in pairs:
        combined.setdefault(name, []).append(value)
    replacements = {name: QueryParam(name, tuple(values)) for name, values in combined.items()}
    return _replace_by_key(current, replacements, key=lambda p: p.name)


def _replace_by_key(
    current: Iterable[T],
    replacements: Mapping[Hashable, T],
    *,
    key: Callable[[T], Hashable],
) -> tuple[T, ...]:
    pending = dict(replacements)
    out: list[T] = []
    for item in current:
        k = key(item)
        if k in pending:
            out.append(pending.pop(k))
        elif k not in replacements:
            out.append(item)
    out.extend(pending.values())
    return tuple(out)


# --- Module Notes -----------------------------------------------------------
# `_replace_by_key` drops any later duplicate of a replaced key so the
# one-entry-per-name invariant survives even if `current` violated it.
