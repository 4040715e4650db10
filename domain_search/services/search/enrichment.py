# domain_search/services/search/enrichment.py
from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import Dict, List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ...models.domain import Domain
from ...models.domain_technology import DomainTechnology
from ...models.technology import Technology
from ...schemas.search import EnrichedDomain, TechnologyDetails, TechnologyStats

logger = logging.getLogger(__name__)

_DOMAIN_FIELDS = tuple(column.key for column in Domain.__table__.columns)


def load_technologies(
    db: Session, domain_ids: Sequence[int]
) -> Dict[int, List[TechnologyDetails]]:
    """
    Fetch the technologies of every listed domain in a single query,
    grouped by domain id and ordered by technology name.
    """
    stmt = (
        select(
            DomainTechnology.domain_id,
            Technology.name,
            Technology.category,
            Technology.is_premium,
            Technology.description,
            DomainTechnology.spend,
            DomainTechnology.subdomain,
            DomainTechnology.first_identified,
            DomainTechnology.last_identified,
            DomainTechnology.first_detected,
            DomainTechnology.last_detected,
        )
        .join(Technology, DomainTechnology.technology_id == Technology.id)
        .where(DomainTechnology.domain_id.in_(domain_ids))
        .order_by(DomainTechnology.domain_id, Technology.name)
    )

    by_domain: Dict[int, List[TechnologyDetails]] = defaultdict(list)
    for row in db.execute(stmt):
        fields = dict(row._mapping)
        domain_id = fields.pop("domain_id")
        by_domain[domain_id].append(TechnologyDetails(**fields))
    return by_domain


def summarize(technologies: Sequence[TechnologyDetails]) -> TechnologyStats:
    # Uncategorised technologies count towards the total only
    categories = Counter(t.category for t in technologies if t.category)
    return TechnologyStats(
        total_technologies=len(technologies),
        total_spend=sum(t.spend or 0 for t in technologies),
        technology_categories=dict(categories),
    )


def enrich_domains(db: Session, domains: Sequence[Domain]) -> List[EnrichedDomain]:
    """Attach technologies and per-domain statistics to a page of domains."""
    if not domains:
        return []

    technologies = load_technologies(db, [d.id for d in domains])
    logger.debug(
        "Loaded technologies for result page",
        extra={"step": "enrich", "page_size": len(domains)},
    )

    enriched = []
    for domain in domains:
        owned = technologies.get(domain.id, [])
        data = {field: getattr(domain, field) for field in _DOMAIN_FIELDS}
        enriched.append(
            EnrichedDomain(
                **data,
                technologies=owned,
                technology_stats=summarize(owned),
            )
        )
    return enriched
