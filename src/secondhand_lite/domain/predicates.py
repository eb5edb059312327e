"""Datastore-neutral predicate values.

Predicates name listing fields by their ``Listing`` attribute names. They are
AND-ed together by every datastore adapter; the only OR grouping lives inside
``TextMatch``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

FULL_TEXT_FIELDS = ("title", "description")
SUBSTRING_FIELDS = ("brand", "title", "description")


@dataclass(frozen=True, slots=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True, slots=True)
class AtLeast:
    field: str
    value: Any


@dataclass(frozen=True, slots=True)
class AtMost:
    field: str
    value: Any


@dataclass(frozen=True, slots=True)
class OneOf:
    """Set membership. Never built with an empty value set."""

    field: str
    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class TextMatch:
    """
    One OR group over two strategies:

    - full-text: any of ``terms`` matches a word of a FULL_TEXT_FIELDS column
    - substring: ``phrase`` is contained, case-insensitively, in a
      SUBSTRING_FIELDS column

    ``terms`` may be empty (search text without word characters); the
    substring clause still applies.
    """

    terms: tuple[str, ...]
    phrase: str
    full_text_fields: tuple[str, ...] = FULL_TEXT_FIELDS
    substring_fields: tuple[str, ...] = SUBSTRING_FIELDS


Predicate = Union[Equals, AtLeast, AtMost, OneOf, TextMatch]


@dataclass(frozen=True, slots=True)
class Ordering:
    field: str
    descending: bool = False


@dataclass(frozen=True, slots=True)
class ListingQuery:
    """
    Filter predicates plus one sort ordering.

    The count path consumes ``predicates`` only, the page path consumes both,
    so the two can never disagree on which rows match.
    """

    predicates: tuple[Predicate, ...]
    ordering: Ordering
