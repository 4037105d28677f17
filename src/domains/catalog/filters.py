# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Listing filter parsing and query building.

Listing endpoints accept a fixed set of query parameters. They are parsed
once into an immutable ListingFilters value and then turned into a
SQLAlchemy select (plus a matching count) for one of the three listing
targets: universities, programs or enquiries.

Example:
    >>> filters = parse_listing_filters(request.query_params, PROGRAM_LISTING)
    >>> query = ListingFilterBuilder(PROGRAM_LISTING).build(filters, public=True)
    >>> page = await execute_listing(db, query)
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from math import ceil
from typing import Any, Generic, NamedTuple, TypeVar
from uuid import UUID

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from src.infrastructure.database.models import Enquiry, Program, University
from src.models.common import (
    EnquiryStatus,
    ProgramCategory,
    ProgramLevel,
    StudyMode,
    UniversityRating,
)
from src.utils.datetime import parse_iso_bound

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
MAX_LIMIT = 100
MAX_OFFSET = 2**63 - 1

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})


class InvalidFilterError(ValueError):
    """Raised when a listing query parameter cannot be parsed."""

    def __init__(self, param: str, message: str) -> None:
        super().__init__(f"Invalid '{param}': {message}")
        self.param = param
        self.message = message


class SortField(NamedTuple):
    name: str
    descending: bool


DEFAULT_SORT = (SortField("created_at", True),)


@dataclass(frozen=True)
class ListingFilters:
    """Parsed, validated listing parameters. Absent filters are None."""

    category: str | None = None
    level: str | None = None
    mode: str | None = None
    university_id: str | None = None
    rating: str | None = None
    status: str | None = None
    featured: bool | None = None
    min_fee: Decimal | None = None
    max_fee: Decimal | None = None
    search: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: tuple[SortField, ...] = DEFAULT_SORT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class FeeBounds(str, Enum):
    """How min_fee/max_fee apply to a listing target."""

    NONE = "none"
    # Single fee column compared to both bounds.
    EXACT = "exact"
    # Stored range must lie within the requested bounds.
    RANGE = "range"


@dataclass(frozen=True)
class ListingTarget:
    """Describes how a model is filtered, searched and sorted."""

    name: str
    model: type
    filters: frozenset[str]
    search_fields: tuple[str, ...]
    sortable: frozenset[str]
    fee_bounds: FeeBounds = FeeBounds.NONE
    options: tuple[Any, ...] = field(default_factory=tuple)


UNIVERSITY_LISTING = ListingTarget(
    name="universities",
    model=University,
    filters=frozenset({"search", "rating", "featured", "min_fee", "max_fee"}),
    search_fields=("name", "location"),
    sortable=frozenset(
        {"name", "created_at", "updated_at", "ranking", "min_fee", "max_fee", "established_year"}
    ),
    fee_bounds=FeeBounds.RANGE,
)

PROGRAM_LISTING = ListingTarget(
    name="programs",
    model=Program,
    filters=frozenset(
        {
            "category",
            "level",
            "mode",
            "university_id",
            "min_fee",
            "max_fee",
            "search",
            "featured",
        }
    ),
    search_fields=("name", "category", "description"),
    sortable=frozenset({"name", "created_at", "updated_at", "fee", "ranking", "category"}),
    fee_bounds=FeeBounds.EXACT,
    options=(selectinload(Program.university),),
)

ENQUIRY_LISTING = ListingTarget(
    name="enquiries",
    model=Enquiry,
    filters=frozenset({"status", "start_date", "end_date", "search"}),
    search_fields=("name", "email", "phone"),
    sortable=frozenset({"name", "email", "status", "created_at", "updated_at"}),
    options=(selectinload(Enquiry.program), selectinload(Enquiry.university)),
)

_ENUM_FILTERS: dict[str, type[Enum]] = {
    "category": ProgramCategory,
    "level": ProgramLevel,
    "mode": StudyMode,
    "rating": UniversityRating,
    "status": EnquiryStatus,
}


# =============================================================================
# Parsing
# =============================================================================


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_enum(param: str, value: str) -> str:
    enum_cls = _ENUM_FILTERS[param]
    for member in enum_cls:
        if member.value == value:
            return member.value
    allowed = ", ".join(member.value for member in enum_cls)
    raise InvalidFilterError(param, f"must be one of: {allowed}")


def _parse_bool(param: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise InvalidFilterError(param, "must be true or false")


def _parse_fee(param: str, value: str) -> Decimal:
    try:
        fee = Decimal(value)
    except InvalidOperation:
        raise InvalidFilterError(param, "must be a number") from None
    if not fee.is_finite():
        raise InvalidFilterError(param, "must be a number")
    if fee < 0:
        raise InvalidFilterError(param, "must not be negative")
    return fee


def _parse_int(param: str, value: str | None, default: int, low: int, high: int | None) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except ValueError:
        raise InvalidFilterError(param, "must be an integer") from None
    if number < low or (high is not None and number > high):
        bounds = f"between {low} and {high}" if high is not None else f"at least {low}"
        raise InvalidFilterError(param, f"must be {bounds}")
    return number


def _parse_sort(value: str | None, sortable: frozenset[str]) -> tuple[SortField, ...]:
    if value is None:
        return DEFAULT_SORT
    fields: list[SortField] = []
    for raw in value.split(","):
        token = raw.strip()
        if not token:
            continue
        descending = token.startswith("-")
        name = token.lstrip("-+")
        if name not in sortable:
            allowed = ", ".join(sorted(sortable))
            raise InvalidFilterError("sort", f"'{name}' is not sortable (allowed: {allowed})")
        fields.append(SortField(name, descending))
    return tuple(fields) or DEFAULT_SORT


def parse_listing_filters(
    params: Mapping[str, Any],
    target: ListingTarget,
) -> ListingFilters:
    """Parse raw query parameters into ListingFilters.

    Only the filters the target supports are read; other keys are ignored.
    Empty values count as absent.

    Args:
        params: Raw query parameters (e.g. ``request.query_params``).
        target: Listing the filters apply to.

    Returns:
        Immutable parsed filters.

    Raises:
        InvalidFilterError: If any supported parameter is malformed.
    """
    values: dict[str, Any] = {}

    for param in target.filters:
        raw = _clean(params.get(param))
        if raw is None:
            continue

        if param == "status" and raw.lower() == "all":
            continue
        if param in _ENUM_FILTERS:
            values[param] = _parse_enum(param, raw)
        elif param == "university_id":
            try:
                values[param] = str(UUID(raw))
            except ValueError:
                raise InvalidFilterError(param, "must be a UUID") from None
        elif param == "featured":
            values[param] = _parse_bool(param, raw)
        elif param in ("min_fee", "max_fee"):
            values[param] = _parse_fee(param, raw)
        elif param in ("start_date", "end_date"):
            try:
                values[param] = parse_iso_bound(raw, end_of_day=param == "end_date")
            except ValueError:
                raise InvalidFilterError(param, "must be an ISO-8601 date") from None
        elif param == "search":
            values[param] = raw

    values["page"] = _parse_int("page", _clean(params.get("page")), DEFAULT_PAGE, 1, None)
    values["limit"] = _parse_int(
        "limit", _clean(params.get("limit")), DEFAULT_LIMIT, 1, MAX_LIMIT
    )
    if (values["page"] - 1) * values["limit"] > MAX_OFFSET:
        raise InvalidFilterError("page", "is too large")
    values["sort"] = _parse_sort(_clean(params.get("sort")), target.sortable)

    return ListingFilters(**values)


# =============================================================================
# Building
# =============================================================================


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class ListingQuery:
    """A built listing: page statement, count statement and paging."""

    statement: Select
    count_statement: Select
    page: int
    limit: int


@dataclass
class Page(Generic[T]):
    """One page of listing results."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0


class ListingFilterBuilder:
    """Builds SQLAlchemy statements for a listing target.

    Example:
        >>> builder = ListingFilterBuilder(UNIVERSITY_LISTING)
        >>> query = builder.build(filters, public=True)
    """

    def __init__(self, target: ListingTarget) -> None:
        self._target = target
        self._model = target.model

    def conditions(
        self,
        filters: ListingFilters,
        public: bool = False,
    ) -> list[ColumnElement[bool]]:
        """Build the WHERE conditions for the filters.

        Args:
            filters: Parsed filters.
            public: Restrict to active records.

        Returns:
            Conditions to be ANDed together.
        """
        model = self._model
        target = self._target
        clauses: list[ColumnElement[bool]] = []

        for name in ("category", "level", "mode", "rating", "status", "university_id"):
            value = getattr(filters, name)
            if value is not None and name in target.filters:
                clauses.append(getattr(model, name) == value)

        if filters.featured is not None and "featured" in target.filters:
            clauses.append(model.featured.is_(filters.featured))

        if target.fee_bounds is FeeBounds.EXACT:
            if filters.min_fee is not None:
                clauses.append(model.fee >= filters.min_fee)
            if filters.max_fee is not None:
                clauses.append(model.fee <= filters.max_fee)
        elif target.fee_bounds is FeeBounds.RANGE:
            if filters.min_fee is not None:
                clauses.append(model.min_fee >= filters.min_fee)
            if filters.max_fee is not None:
                clauses.append(model.max_fee <= filters.max_fee)

        if filters.start_date is not None and "start_date" in target.filters:
            clauses.append(model.created_at >= filters.start_date)
        if filters.end_date is not None and "end_date" in target.filters:
            clauses.append(model.created_at <= filters.end_date)

        if filters.search and target.search_fields:
            pattern = f"%{escape_like(filters.search)}%"
            clauses.append(
                or_(
                    *(
                        getattr(model, column).ilike(pattern, escape="\\")
                        for column in target.search_fields
                    )
                )
            )

        if public:
            clauses.append(model.is_active.is_(True))

        return clauses

    def order_by(self, sort: Sequence[SortField]) -> list[Any]:
        columns = []
        for sort_field in sort:
            column = getattr(self._model, sort_field.name)
            columns.append(column.desc() if sort_field.descending else column.asc())
        # Stable paging when the sort keys tie.
        columns.append(self._model.id.asc())
        return columns

    def build(self, filters: ListingFilters, public: bool = False) -> ListingQuery:
        """Build the page and count statements.

        Args:
            filters: Parsed filters.
            public: Add ``is_active = true`` for public listings.

        Returns:
            ListingQuery ready for execute_listing.
        """
        clauses = self.conditions(filters, public=public)
        where = and_(*clauses) if clauses else None

        statement = select(self._model)
        count_statement = select(func.count()).select_from(self._model)
        if where is not None:
            statement = statement.where(where)
            count_statement = count_statement.where(where)

        if self._target.options:
            statement = statement.options(*self._target.options)

        statement = (
            statement.order_by(*self.order_by(filters.sort))
            .offset(filters.offset)
            .limit(filters.limit)
        )

        return ListingQuery(
            statement=statement,
            count_statement=count_statement,
            page=filters.page,
            limit=filters.limit,
        )


async def execute_listing(db: AsyncSession, query: ListingQuery) -> Page[Any]:
    """Run a built listing.

    Args:
        db: Async database session.
        query: Statements from ListingFilterBuilder.build.

    Returns:
        Page of ORM instances with the unpaginated total.
    """
    count_result = await db.execute(query.count_statement)
    total = count_result.scalar() or 0

    if total == 0:
        return Page(items=[], total=0, page=query.page, limit=query.limit)

    result = await db.execute(query.statement)
    items = list(result.scalars().all())

    logger.debug(
        "Listing executed: total=%s, page=%s, returned=%s",
        total,
        query.page,
        len(items),
    )
    return Page(items=items, total=total, page=query.page, limit=query.limit)
