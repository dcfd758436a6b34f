"""Shared comparator cascade used by every ordering decision in docs_nav.

The tree builder, sidebar flattener, and section aggregator all rank items by
the same rules, differing only in which order sources they have available:

1. group tier (for navigation siblings, leaves before composites);
2. each order source in priority order: an item with a value precedes one
   without, regardless of the number; two values compare ascending; equal
   values defer to the next source;
3. locale-aware, case-insensitive comparison of a display text;
4. a plain slug tie-break, so no two distinct items ever compare equal.

Call sites describe an item as a :class:`SortKey` and hand the list to
:func:`sort_by`.

Example
-------
>>> keys = [SortKey(text="beta"), SortKey(orders=(5,), text="zeta")]
>>> keys.append(SortKey(text="Alpha"))
>>> [key.text for key in sort_by(keys, lambda key: key)]
['zeta', 'Alpha', 'beta']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import functools
import itertools
import typing as typ
import unicodedata

from .metadata import Order, parse_timestamp

if typ.TYPE_CHECKING:
    from .content import ContentUnit

T = typ.TypeVar("T")
N = typ.TypeVar("N", bound="Orderable")


class SortMode(enum.StrEnum):
    """Named orderings for flat lists of content units."""

    ORDER = "order"
    ALPHABETICAL = "alphabetical"
    DATE = "date"
    SECTION = "section"

    @classmethod
    def parse(cls, value: str | SortMode) -> SortMode:
        """Return the mode named by ``value``.

        Raises
        ------
        ValueError
            If ``value`` does not name a known mode.
        """
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError as exc:
            known = ", ".join(mode.value for mode in cls)
            msg = f"Unknown sort mode '{value}'. Known modes: {known}"
            raise ValueError(msg) from exc


class Orderable(typ.Protocol):
    """Anything that can sit in a navigation sibling list."""

    slug: str
    title: str
    order: Order | None

    @property
    def is_composite(self) -> bool: ...


@dc.dataclass(frozen=True, slots=True)
class SortKey:
    """Everything the comparator needs to know about one item.

    Attributes
    ----------
    orders : tuple
        Order values, highest-priority source first; ``None`` marks a source
        that has no opinion about this item.
    text : str
        Display text compared when every order source ties.
    group : tuple
        Coarse tier compared before anything else.
    tiebreak : str
        Final discriminator, usually the slug.
    """

    orders: tuple[Order | None, ...] = ()
    text: str = ""
    group: tuple[typ.Any, ...] = ()
    tiebreak: str = ""


def collation_key(text: str) -> tuple[str, str, str]:
    """Return a key approximating a locale-aware string comparison.

    Accents and case are ignored at the primary level; on a primary tie,
    lower case sorts before upper case.

    >>> sorted(["beta", "Alpha", "alpha", "Ápple"], key=collation_key)
    ['alpha', 'Alpha', 'Ápple', 'beta']
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), text.casefold(), text.swapcase())


def _sign(a: typ.Any, b: typ.Any) -> int:
    return (a > b) - (a < b)


def compare(a: SortKey, b: SortKey) -> int:
    """Return a negative, zero, or positive number ordering ``a`` against ``b``."""
    if a.group != b.group:
        return _sign(a.group, b.group)
    for a_order, b_order in itertools.zip_longest(a.orders, b.orders):
        if a_order is None and b_order is None:
            continue
        if b_order is None:
            return -1
        if a_order is None:
            return 1
        if a_order != b_order:
            return _sign(a_order, b_order)
    text_order = _sign(collation_key(a.text), collation_key(b.text))
    if text_order:
        return text_order
    return _sign(a.tiebreak, b.tiebreak)


_compare_key = functools.cmp_to_key(compare)


def sort_by(items: cabc.Iterable[T], key: cabc.Callable[[T], SortKey]) -> list[T]:
    """Return ``items`` sorted by the cascade applied to ``key(item)``."""
    return sorted(items, key=lambda item: _compare_key(key(item)))


def node_sort_key(node: Orderable) -> SortKey:
    """Rank a navigation sibling: leaves first, then order, then title."""
    return SortKey(
        group=(1 if node.is_composite else 0,),
        orders=(node.order,),
        text=node.title,
        tiebreak=node.slug,
    )


def compare_nodes(a: Orderable, b: Orderable) -> int:
    return compare(node_sort_key(a), node_sort_key(b))


def sort_nodes(nodes: cabc.Iterable[N]) -> list[N]:
    return sort_by(nodes, node_sort_key)


def unit_sort_key(unit: ContentUnit, mode: SortMode) -> SortKey:
    """Rank a content unit under one of the named sort modes."""
    match mode:
        case SortMode.ORDER:
            return SortKey(
                orders=(unit.explicit_order,), text=unit.slug, tiebreak=unit.slug
            )
        case SortMode.ALPHABETICAL:
            return SortKey(text=unit.title, tiebreak=unit.slug)
        case SortMode.DATE:
            updated = parse_timestamp(unit.updated_at)
            newest_first = -updated.timestamp() if updated else None
            return SortKey(orders=(newest_first,), tiebreak=unit.slug)
        case SortMode.SECTION:
            return SortKey(
                group=(collation_key(unit.section),),
                orders=(unit.explicit_order,),
                text=unit.title,
                tiebreak=unit.slug,
            )
    msg = f"Unsupported sort mode: {mode!r}"  # pragma: no cover - exhaustive match
    raise ValueError(msg)


def sort_units(
    units: cabc.Iterable[ContentUnit], mode: SortMode | str = SortMode.ORDER
) -> list[ContentUnit]:
    """Return a new list of ``units`` ordered by ``mode``.

    Parameters
    ----------
    units : Iterable[ContentUnit]
        Units to order; the input is not mutated.
    mode : SortMode or str, optional
        ``order`` (explicit order, then slug), ``alphabetical`` (title only),
        ``date`` (newest ``updatedAt`` first, undated last), or ``section``
        (top-level segment, then explicit order, then title).

    Raises
    ------
    ValueError
        If ``mode`` is a string naming no known mode.
    """
    resolved = SortMode.parse(mode)
    return sort_by(units, lambda unit: unit_sort_key(unit, resolved))


__all__ = [
    "Orderable",
    "SortKey",
    "SortMode",
    "collation_key",
    "compare",
    "compare_nodes",
    "node_sort_key",
    "sort_by",
    "sort_nodes",
    "sort_units",
    "unit_sort_key",
]
