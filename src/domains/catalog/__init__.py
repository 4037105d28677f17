# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Catalog domain package.

This package provides the logic shared by the university and program
catalogs:
- Fee range aggregation over a university's active programs
- Listing filter parsing and query building
"""

from src.domains.catalog.fee_range import (
    EMPTY_FEE_RANGE,
    FeeRange,
    FeeRangeAggregator,
    compute_fee_range,
)
from src.domains.catalog.filters import (
    ENQUIRY_LISTING,
    PROGRAM_LISTING,
    UNIVERSITY_LISTING,
    InvalidFilterError,
    ListingFilterBuilder,
    ListingFilters,
    ListingQuery,
    ListingTarget,
    Page,
    SortField,
    execute_listing,
    parse_listing_filters,
)

__all__ = [
    "EMPTY_FEE_RANGE",
    "FeeRange",
    "FeeRangeAggregator",
    "compute_fee_range",
    "ENQUIRY_LISTING",
    "PROGRAM_LISTING",
    "UNIVERSITY_LISTING",
    "InvalidFilterError",
    "ListingFilterBuilder",
    "ListingFilters",
    "ListingQuery",
    "ListingTarget",
    "Page",
    "SortField",
    "execute_listing",
    "parse_listing_filters",
]
