"""Lookups of above-the-fold metadata rows."""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from atf_optimizer.core.metrics import metadata_lookup_duration_seconds
from atf_optimizer.core.urls import untrailingslashit
from atf_optimizer.models.above_the_fold import AboveTheFold

logger = logging.getLogger(__name__)


class MetadataStore(Protocol):
    def get_row(self, url: str, is_mobile: bool) -> AboveTheFold | None: ...


class AboveTheFoldQuery:
    """Reads rows from the above_the_fold table, one session per lookup."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get_row(self, url: str, is_mobile: bool) -> AboveTheFold | None:
        stmt = (
            select(AboveTheFold)
            .where(
                AboveTheFold.url == untrailingslashit(url),
                AboveTheFold.is_mobile == is_mobile,
            )
            .limit(1)
        )
        try:
            with metadata_lookup_duration_seconds.time():
                with self._session_factory() as session:
                    return session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning(f"Above-the-fold lookup failed for {url}: {e}")
            return None


class InMemoryMetadataStore:
    """Dict-backed store, keyed the same way as the table."""

    def __init__(self, rows: list[AboveTheFold] | None = None):
        self._rows: dict[tuple[str, bool], AboveTheFold] = {}
        for row in rows or []:
            self.add(row)

    def add(self, row: AboveTheFold) -> None:
        self._rows[(untrailingslashit(row.url), bool(row.is_mobile))] = row

    def get_row(self, url: str, is_mobile: bool) -> AboveTheFold | None:
        return self._rows.get((untrailingslashit(url), is_mobile))
