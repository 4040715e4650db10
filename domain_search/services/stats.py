from __future__ import annotations

from collections import defaultdict
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..core.celery_app import REBUILD_STATS_TASK, celery_app
from ..core.db import SessionLocal
from ..models.domain import Domain
from ..models.domain_stats import DomainStats
from ..models.domain_technology import DomainTechnology
from ..models.technology import Technology

logger = logging.getLogger(__name__)


def rebuild_domain_stats(db: Session) -> int:
    """
    Recompute every DomainStats row from the current domain_technologies.

    Existing rows are replaced; domains without technologies get a zero row.
    The caller owns the transaction and commits.
    """
    totals = db.execute(
        select(
            Domain.id,
            func.count(DomainTechnology.id),
            func.coalesce(func.sum(DomainTechnology.spend), 0),
        )
        .outerjoin(DomainTechnology, Domain.id == DomainTechnology.domain_id)
        .group_by(Domain.id)
    ).all()

    by_category: dict[int, dict[str, int]] = defaultdict(dict)
    category_rows = db.execute(
        select(DomainTechnology.domain_id, Technology.category, func.count())
        .join(Technology, DomainTechnology.technology_id == Technology.id)
        .where(Technology.category.is_not(None), Technology.category != "")
        .group_by(DomainTechnology.domain_id, Technology.category)
    )
    for domain_id, category, count in category_rows:
        by_category[domain_id][category] = count

    db.execute(delete(DomainStats))
    db.add_all(
        DomainStats(
            domain_id=domain_id,
            total_technologies=total_technologies,
            total_spend=total_spend,
            technologies_by_category=by_category.get(domain_id, {}),
        )
        for domain_id, total_technologies, total_spend in totals
    )
    db.flush()
    return len(totals)


@celery_app.task(name=REBUILD_STATS_TASK)
def rebuild_domain_stats_task() -> int:
    """
    Rebuild domain_stats after a bulk load.

    Stats are a cache over domain_technologies; searches filtering or sorting
    on them see the state of the last rebuild.
    """
    db: Session = SessionLocal()
    try:
        processed = rebuild_domain_stats(db)
        db.commit()

        logger.info(
            "Rebuilt domain stats",
            extra={"step": "stats", "domains_processed": processed},
        )
        return processed
    except Exception:
        db.rollback()
        logger.exception(
            "Error during rebuild_domain_stats",
            extra={"step": "stats"},
        )
        raise
    finally:
        db.close()
