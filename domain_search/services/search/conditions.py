# domain_search/services/search/conditions.py
"""
Compile the populated fields of a DomainSearch into SQLAlchemy boolean
expressions.

Every user value is a bound parameter. Conditions that reason about the set of
technologies a domain owns (exclude, requireAll, per-category counts) are
correlated on ``domains.id`` through sub-queries over an independent alias of
``domain_technologies``, so they see every technology of the domain and not
only the row produced by the outer join.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import String, and_, distinct, func, not_, or_, select
from sqlalchemy.orm import aliased
from sqlalchemy.sql.elements import ColumnElement

from ...models.domain import Domain
from ...models.domain_stats import DomainStats
from ...models.domain_technology import DomainTechnology
from ...models.technology import Technology
from ...schemas.search import (
    DomainSearch,
    LogicalFilter,
    RangeFilter,
    StringFilter,
    TechnologyCategoryFilter,
)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Make LIKE metacharacters in user input match literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def string_condition(column, flt: StringFilter) -> ColumnElement:
    value = flt.value

    if not flt.case_sensitive:
        column = func.lower(column, type_=String)
        value = value.lower()

    if flt.match_type == "exact":
        return column == value

    escaped = escape_like(value)
    if flt.match_type == "startsWith":
        pattern = f"{escaped}%"
    elif flt.match_type == "endsWith":
        pattern = f"%{escaped}"
    else:
        pattern = f"%{escaped}%"
    return column.like(pattern, escape=LIKE_ESCAPE)


def single_value_condition(column, flt: LogicalFilter) -> Optional[ColumnElement]:
    """
    Filter a column holding one value per domain (category, country).

    include wins over exclude. requireAll cannot be satisfied by a single
    value and is ignored.
    """
    if flt.include:
        return or_(*(column == value for value in flt.include))
    if flt.exclude:
        return and_(*(column != value for value in flt.exclude))
    return None


def multi_value_condition(flt: LogicalFilter) -> Optional[ColumnElement]:
    """
    Filter on the set of technology names a domain owns.

    - include: any owned technology is listed (joined row)
    - exclude: no owned technology is listed (whole domain dropped)
    - requireAll: every listed technology is owned
    """
    conditions: List[ColumnElement] = []

    if flt.include:
        conditions.append(DomainTechnology.technology_name.in_(flt.include))

    if flt.exclude:
        excluded = aliased(DomainTechnology)
        conditions.append(
            Domain.id.not_in(
                select(excluded.domain_id)
                .where(excluded.technology_name.in_(flt.exclude))
                .distinct()
            )
        )

    if flt.require_all:
        # Duplicates in the request would make the count unreachable
        required_names = tuple(dict.fromkeys(flt.require_all))
        required = aliased(DomainTechnology)
        conditions.append(
            Domain.id.in_(
                select(required.domain_id)
                .where(required.technology_name.in_(required_names))
                .group_by(required.domain_id)
                .having(
                    func.count(distinct(required.technology_name))
                    == len(required_names)
                )
            )
        )

    if not conditions:
        return None
    return and_(*conditions)


def range_condition(column, flt: RangeFilter) -> Optional[ColumnElement]:
    conditions: List[ColumnElement] = []

    if flt.min is not None:
        conditions.append(column >= flt.min if flt.inclusive else column > flt.min)

    if flt.max is not None:
        conditions.append(column <= flt.max if flt.inclusive else column < flt.max)

    if not conditions:
        return None
    return and_(*conditions)


def _category_count_condition(flt: TechnologyCategoryFilter) -> ColumnElement:
    link = aliased(DomainTechnology)
    tech = aliased(Technology)
    count = func.count()

    if flt.min_count is not None and flt.max_count is not None:
        having = count.between(flt.min_count, flt.max_count)
    elif flt.min_count is not None:
        having = count >= flt.min_count
    else:
        having = count <= flt.max_count

    return Domain.id.in_(
        select(link.domain_id)
        .join(tech, link.technology_id == tech.id)
        .where(tech.category == flt.category)
        .group_by(link.domain_id)
        .having(having)
    )


def technology_categories_condition(
    filters: Iterable[TechnologyCategoryFilter],
) -> Optional[ColumnElement]:
    """
    One condition per entry, combined list-wide: a single OR entry anywhere
    turns the whole group into a disjunction, otherwise entries are ANDed.
    """
    filters = list(filters)
    entries: List[ColumnElement] = []

    for flt in filters:
        parts: List[ColumnElement] = [Technology.category == flt.category]
        if flt.min_count is not None or flt.max_count is not None:
            parts.append(_category_count_condition(flt))

        entry = and_(*parts)
        # NOT negates the joined row, not the domain's whole technology set
        entries.append(not_(entry) if flt.operator == "NOT" else entry)

    if not entries:
        return None
    if any(flt.operator == "OR" for flt in filters):
        return or_(*entries)
    return and_(*entries)


def compile_conditions(search: DomainSearch) -> List[ColumnElement]:
    """Conditions for every populated field, in a fixed field order."""
    candidates = []

    if search.domain is not None:
        candidates.append(string_condition(Domain.domain, search.domain))

    if search.company_name is not None:
        candidates.append(string_condition(Domain.company_name, search.company_name))

    if search.category is not None:
        candidates.append(single_value_condition(Domain.category, search.category))

    if search.country is not None:
        candidates.append(single_value_condition(Domain.country, search.country))

    if search.technologies is not None:
        candidates.append(multi_value_condition(search.technologies))

    if search.technology_categories:
        candidates.append(technology_categories_condition(search.technology_categories))

    if search.total_spend_range is not None:
        candidates.append(range_condition(DomainTechnology.spend, search.total_spend_range))

    if search.technology_count_range is not None:
        candidates.append(
            range_condition(DomainStats.total_technologies, search.technology_count_range)
        )

    return [condition for condition in candidates if condition is not None]
