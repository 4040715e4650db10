# domain_search/services/search/assembler.py
"""
Compose joins, conditions and ordering into the COUNT / SELECT statement pair.

Both statements are built from the same join plan and the same condition
objects, so they always agree on which domains match.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.sql.elements import ColumnElement

from ...core.config import Settings
from ...models.domain import Domain
from ...schemas.search import DomainSearch, SearchOptions
from .conditions import compile_conditions
from .errors import QueryAssemblyError
from .joins import PlannedJoin, apply_joins, plan_joins
from .ordering import Ordering, compile_ordering


@dataclass(frozen=True)
class QueryPair:
    count: Select
    select: Select
    joins: tuple[PlannedJoin, ...]
    ordering: Ordering


def _filtered(
    stmt: Select, joins: tuple[PlannedJoin, ...], conditions: List[ColumnElement]
) -> Select:
    stmt = apply_joins(stmt, joins)
    if conditions:
        stmt = stmt.where(*conditions)
    return stmt


def _check_shared_params(count_stmt: Select, select_stmt: Select) -> None:
    count_params = count_stmt.compile().params
    select_params = select_stmt.compile().params

    mismatched = [
        name
        for name, value in count_params.items()
        if name not in select_params or select_params[name] != value
    ]
    if mismatched:
        raise QueryAssemblyError(
            f"COUNT and SELECT parameters diverge: {', '.join(sorted(mismatched))}"
        )


def assemble(
    search: DomainSearch,
    options: Optional[SearchOptions] = None,
    settings: Optional[Settings] = None,
) -> QueryPair:
    ordering = compile_ordering(options or SearchOptions(), settings)
    joins = plan_joins(search, sort_requires_stats=ordering.requires_stats)
    conditions = compile_conditions(search)

    count_stmt = _filtered(
        select(func.count(distinct(Domain.id)).label("total")), joins, conditions
    )

    # DISTINCT + ORDER BY needs the sort column in the select list on strict
    # dialects; stats columns are one-per-domain so they never add rows.
    columns = [Domain]
    if ordering.requires_stats:
        columns.append(ordering.column)

    select_stmt = (
        _filtered(select(*columns).distinct(), joins, conditions)
        .order_by(*ordering.order_by())
        .limit(ordering.limit)
        .offset(ordering.offset)
    )

    _check_shared_params(count_stmt, select_stmt)

    return QueryPair(
        count=count_stmt, select=select_stmt, joins=joins, ordering=ordering
    )
