"""Look up projects and tasks by what the user typed."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

from worklog_cli.utils.errors import InvalidArgumentError, NotFoundError


class Named(Protocol):
    id: str
    name: str


T = TypeVar("T", bound=Named)


def resolve_reference(items: Sequence[T], reference: str, kind: str = "Item") -> T:
    """Pick the item whose id, id prefix or name (case-insensitive) is *reference*.

    An exact id wins over everything else; a name match wins over prefixes.

    Raises:
        NotFoundError: If nothing matches
        InvalidArgumentError: If several items match equally well
    """
    reference = reference.strip()
    if not reference:
        raise InvalidArgumentError(f"{kind} reference must not be empty")

    for item in items:
        if item.id == reference:
            return item

    lowered = reference.lower()
    by_name = [item for item in items if item.name.lower() == lowered]
    if len(by_name) == 1:
        return by_name[0]

    by_prefix = [item for item in items if item.id.startswith(reference)]
    matches = by_name or by_prefix
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise NotFoundError(f"{kind} not found: {reference}")

    ids = ", ".join(item.id[:8] for item in matches)
    raise InvalidArgumentError(f"{kind} reference '{reference}' is ambiguous ({ids})")
