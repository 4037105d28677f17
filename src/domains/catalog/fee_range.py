# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Derived fee range maintenance for universities.

A university's ``min_fee``/``max_fee`` are a cache over the fees of its
active programs. The cache is always recomputed from scratch, never
adjusted incrementally, so a recomputation is idempotent and repairs any
earlier drift.

Example:
    >>> aggregator = FeeRangeAggregator(db)
    >>> await aggregator.recompute(university_id)
    FeeRange(min_fee=Decimal('50000'), max_fee=Decimal('80000'))
"""

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import Program, University

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class FeeRange(NamedTuple):
    """Inclusive fee bounds of a university."""

    min_fee: Decimal
    max_fee: Decimal


EMPTY_FEE_RANGE = FeeRange(ZERO, ZERO)


def compute_fee_range(fees: Iterable[Decimal | int | float | None]) -> FeeRange:
    """Compute the fee range of a set of program fees.

    Args:
        fees: Fees of the active programs. ``None`` entries are skipped.

    Returns:
        ``(min, max)`` of the fees, or ``(0, 0)`` when there are none.
    """
    values = [Decimal(str(fee)) for fee in fees if fee is not None]
    if not values:
        return EMPTY_FEE_RANGE
    return FeeRange(min(values), max(values))


class FeeRangeAggregator:
    """Recomputes and persists university fee ranges.

    Called after a program mutation has been committed. Failures never
    propagate to the caller: the error is logged, the session is rolled
    back, and the already committed program change stands.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def recompute(self, university_id: str) -> FeeRange | None:
        """Recompute the fee range of one university.

        Args:
            university_id: University to recompute.

        Returns:
            The stored fee range, or None if the university no longer
            exists or the recomputation failed.
        """
        try:
            university = await self._db.get(University, university_id)
            if university is None:
                logger.warning(
                    "Fee range skipped, university not found: %s", university_id
                )
                return None

            result = await self._db.execute(
                select(Program.fee).where(
                    Program.university_id == university_id,
                    Program.is_active.is_(True),
                )
            )
            fee_range = compute_fee_range(result.scalars().all())

            university.min_fee = fee_range.min_fee
            university.max_fee = fee_range.max_fee
            await self._db.commit()
        except Exception:
            logger.exception("Fee range recomputation failed: university=%s", university_id)
            try:
                await self._db.rollback()
            except Exception:
                logger.exception("Rollback failed: university=%s", university_id)
            return None

        logger.debug(
            "Fee range updated: university=%s, min=%s, max=%s",
            university_id,
            fee_range.min_fee,
            fee_range.max_fee,
        )
        return fee_range

    async def recompute_many(
        self,
        university_ids: Iterable[str | None],
    ) -> dict[str, FeeRange | None]:
        """Recompute several universities, each distinct id once.

        Args:
            university_ids: Ids in the order they should be processed.
                Empty values are ignored.

        Returns:
            Mapping of university id to its recomputed range (or None).
        """
        results: dict[str, FeeRange | None] = {}
        for university_id in university_ids:
            if not university_id or university_id in results:
                continue
            results[university_id] = await self.recompute(university_id)
        return results
