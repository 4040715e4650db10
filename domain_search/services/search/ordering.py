# domain_search/services/search/ordering.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ...core.config import Settings, get_settings
from ...models.domain import Domain
from ...models.domain_stats import DomainStats
from ...schemas.search import SearchOptions

logger = logging.getLogger(__name__)

DEFAULT_SORT_KEY = "d.domain"

# OFFSET is bound as a signed 64-bit integer by every supported driver
MAX_OFFSET = 2**63 - 1

# Keys are what the UI sends (table-qualified); bare names are accepted too.
SORTABLE_COLUMNS: dict[str, Any] = {
    "d.domain": Domain.domain,
    "d.company_name": Domain.company_name,
    "d.category": Domain.category,
    "d.country": Domain.country,
    "d.created_at": Domain.created_at,
    "d.updated_at": Domain.updated_at,
    "ds.total_technologies": DomainStats.total_technologies,
    "ds.total_spend": DomainStats.total_spend,
}
SORTABLE_COLUMNS.update(
    {key.split(".", 1)[1]: column for key, column in list(SORTABLE_COLUMNS.items())}
)

STATS_SORT_KEYS = frozenset(
    {"ds.total_technologies", "ds.total_spend", "total_technologies", "total_spend"}
)


@dataclass(frozen=True)
class Ordering:
    sort_key: str
    descending: bool
    limit: int
    page: int

    @property
    def column(self):
        return SORTABLE_COLUMNS[self.sort_key]

    @property
    def requires_stats(self) -> bool:
        return self.sort_key in STATS_SORT_KEYS

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def order_by(self) -> tuple:
        """Sort column, then domain id so pages never overlap on ties."""
        primary = self.column.desc() if self.descending else self.column.asc()
        return (primary, Domain.id.asc())


def compile_ordering(
    options: SearchOptions, settings: Settings | None = None
) -> Ordering:
    """
    Allow-list the sort field and normalise paging.

    Unknown sort fields fall back to domain ascending; they are never an error.
    """
    settings = settings or get_settings()

    sort_key = options.sort_by
    descending = options.sort_order == "DESC"
    if sort_key is None:
        sort_key = DEFAULT_SORT_KEY
    elif sort_key not in SORTABLE_COLUMNS:
        logger.warning(
            "Ignoring unsortable field %r",
            sort_key,
            extra={"step": "ordering"},
        )
        sort_key = DEFAULT_SORT_KEY
        descending = False

    # Hard cap to avoid unbounded scans
    limit = options.limit or settings.DEFAULT_PAGE_SIZE
    limit = max(1, min(limit, settings.MAX_PAGE_SIZE))
    page = max(1, options.page or 1)
    page = min(page, MAX_OFFSET // limit + 1)

    return Ordering(sort_key=sort_key, descending=descending, limit=limit, page=page)
