"""
Lookup lists for the search form dropdowns.

Each call hits the database; nothing is cached here.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models.domain import Domain
from ..models.domain_technology import DomainTechnology
from ..models.technology import Technology
from .search.conditions import LIKE_ESCAPE, escape_like


def _ranked_values(db: Session, column, count, stmt, search, limit, offset) -> List[str]:
    stmt = stmt.where(column.is_not(None), column != "")
    if search and search.strip():
        stmt = stmt.where(
            column.like(f"%{escape_like(search.strip())}%", escape=LIKE_ESCAPE)
        )
    stmt = stmt.group_by(column).order_by(count.desc(), column.asc())
    if limit is not None:
        stmt = stmt.limit(limit).offset(offset)
    return [row[0] for row in db.execute(stmt)]


def list_domain_values(
    db: Session,
    column,
    search: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[str]:
    """Distinct non-empty values of a domains column, most common first."""
    count = func.count(Domain.id)
    return _ranked_values(db, column, count, select(column, count), search, limit, offset)


def list_categories(db: Session) -> List[str]:
    return list_domain_values(db, Domain.category)


def list_countries(db: Session) -> List[str]:
    return list_domain_values(db, Domain.country)


def list_company_names(
    db: Session, search: Optional[str] = None, limit: int = 50, offset: int = 0
) -> List[str]:
    return list_domain_values(db, Domain.company_name, search, limit, offset)


def list_technologies(
    db: Session, search: Optional[str] = None, limit: int = 50, offset: int = 0
) -> List[str]:
    """Technology names ordered by how many domains use them."""
    usage = func.count(DomainTechnology.id)
    stmt = select(Technology.name, usage).outerjoin(
        DomainTechnology, Technology.id == DomainTechnology.technology_id
    )
    return _ranked_values(db, Technology.name, usage, stmt, search, limit, offset)


def list_technology_categories(db: Session) -> List[str]:
    count = func.count(Technology.id)
    stmt = select(Technology.category, count)
    return _ranked_values(db, Technology.category, count, stmt, None, None, 0)
