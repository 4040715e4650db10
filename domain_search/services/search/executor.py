# domain_search/services/search/executor.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.config import Settings
from ...schemas.search import DomainSearch, DomainSearchResult, SearchOptions
from .assembler import assemble
from .enrichment import enrich_domains
from .errors import SearchExecutionError

logger = logging.getLogger(__name__)


@contextmanager
def _phase(phase: str, request_id: Optional[str]) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(
            "Domain search failed",
            extra={"phase": phase, "request_id": request_id},
        )
        raise SearchExecutionError(phase, str(exc)) from exc


def execute_search(
    db: Session,
    search: DomainSearch,
    options: Optional[SearchOptions] = None,
    *,
    settings: Optional[Settings] = None,
    request_id: Optional[str] = None,
) -> DomainSearchResult:
    """
    Run a domain search on a caller-owned session.

    1. COUNT every matching domain
    2. SELECT the requested page
    3. enrich the page with technologies and statistics (one extra query)

    Count and page come from two statements; without snapshot isolation a
    concurrent write can make them disagree.
    """
    queries = assemble(search, options, settings)

    with _phase("count", request_id):
        total_count = db.execute(queries.count).scalar_one() or 0

    with _phase("select", request_id):
        domains = db.execute(queries.select).scalars().all()

    with _phase("enrich", request_id):
        enriched = enrich_domains(db, domains)

    logger.info(
        "Domain search completed",
        extra={
            "request_id": request_id,
            "total_count": total_count,
            "page_size": len(enriched),
        },
    )
    return DomainSearchResult(domains=enriched, total_count=total_count)
