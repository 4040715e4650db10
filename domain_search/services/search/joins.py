# domain_search/services/search/joins.py
"""
Join planning for domain searches.

Only tables some populated filter (or the chosen sort column) depends on are
joined, always as LEFT OUTER joins so domains without technologies survive
filters that do not look at technology columns.
"""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Select

from ...models.domain import Domain
from ...models.domain_stats import DomainStats
from ...models.domain_technology import DomainTechnology
from ...models.technology import Technology
from ...schemas.search import DomainSearch, LogicalFilter, RangeFilter

DOMAIN_TECHNOLOGIES = "domain_technologies"
TECHNOLOGIES = "technologies"
DOMAIN_STATS = "domain_stats"

# Emission order; technologies hangs off domain_technologies
JOIN_ORDER = (DOMAIN_TECHNOLOGIES, TECHNOLOGIES, DOMAIN_STATS)

_JOIN_TARGETS = {
    DOMAIN_TECHNOLOGIES: (DomainTechnology, Domain.id == DomainTechnology.domain_id),
    TECHNOLOGIES: (Technology, DomainTechnology.technology_id == Technology.id),
    DOMAIN_STATS: (DomainStats, Domain.id == DomainStats.domain_id),
}


@dataclass(frozen=True)
class PlannedJoin:
    table: str
    triggered_by: tuple[str, ...]


def logical_filter_active(flt: LogicalFilter | None) -> bool:
    return flt is not None and bool(flt.include or flt.exclude or flt.require_all)


def range_filter_active(flt: RangeFilter | None) -> bool:
    return flt is not None and (flt.min is not None or flt.max is not None)


def plan_joins(
    search: DomainSearch, sort_requires_stats: bool = False
) -> tuple[PlannedJoin, ...]:
    """Return the distinct joins the search needs, in JOIN_ORDER."""
    triggers: dict[str, list[str]] = {table: [] for table in JOIN_ORDER}

    if logical_filter_active(search.technologies):
        triggers[DOMAIN_TECHNOLOGIES].append("technologies")

    if search.technology_categories:
        triggers[DOMAIN_TECHNOLOGIES].append("technologyCategories")
        triggers[TECHNOLOGIES].append("technologyCategories")

    if range_filter_active(search.total_spend_range):
        triggers[DOMAIN_TECHNOLOGIES].append("totalSpendRange")

    if range_filter_active(search.technology_count_range):
        triggers[DOMAIN_STATS].append("technologyCountRange")

    if sort_requires_stats:
        triggers[DOMAIN_STATS].append("sortBy")

    return tuple(
        PlannedJoin(table=table, triggered_by=tuple(triggers[table]))
        for table in JOIN_ORDER
        if triggers[table]
    )


def apply_joins(stmt: Select, joins: tuple[PlannedJoin, ...]) -> Select:
    stmt = stmt.select_from(Domain)
    for join in joins:
        target, onclause = _JOIN_TARGETS[join.table]
        stmt = stmt.outerjoin(target, onclause)
    return stmt
