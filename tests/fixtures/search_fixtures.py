"""
Shared test data for domain search tests.

SCENARIO is the two-domain example used to pin down include / requireAll /
exclude semantics. CATALOG adds a domain without technologies and one with
uncategorised and spend-less technologies.
"""
from datetime import datetime
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from domain_search.models.domain import Domain
from domain_search.models.domain_technology import DomainTechnology
from domain_search.models.technology import Technology


TECHNOLOGIES: List[Dict[str, Any]] = [
    {"name": "React", "category": "JavaScript Frameworks", "is_premium": "No"},
    {"name": "Node", "category": "Frameworks", "is_premium": "No"},
    {"name": "Google Analytics", "category": "Analytics", "is_premium": "Maybe"},
    {"name": "Mixpanel", "category": "Analytics", "is_premium": "Yes"},
    {"name": "Mystery", "category": None, "is_premium": "No"},
]

ALPHA = {
    "domain": "alpha.com",
    "company_name": "Alpha Labs",
    "category": "Software",
    "country": "US",
    "social_links": '["https://twitter.com/alpha"]',
}
BETA = {
    "domain": "beta.com",
    "company_name": "Beta Shop",
    "category": "Retail",
    "country": "US",
}
GAMMA = {
    "domain": "gamma.io",
    "company_name": "Gamma GmbH",
    "category": "Retail",
    "country": "DE",
    "emails": '["info@gamma.io"]',
    "phones": "not json",
}
DELTA = {
    "domain": "delta.co.uk",
    "company_name": "Delta 100% Ltd",
    "category": "Media",
    "country": "UK",
}

# (domain, technology, spend)
SCENARIO_LINKS: List[Tuple[str, str, float | None]] = [
    ("alpha.com", "React", 100),
    ("alpha.com", "Node", 50),
    ("beta.com", "React", 200),
]

CATALOG_LINKS = SCENARIO_LINKS + [
    ("delta.co.uk", "Google Analytics", 10),
    ("delta.co.uk", "Mixpanel", None),
    ("delta.co.uk", "Mystery", 5),
]

SCENARIO_DOMAINS = [ALPHA, BETA]
CATALOG_DOMAINS = [ALPHA, BETA, GAMMA, DELTA]


def seed(
    db: Session,
    domains: List[Dict[str, Any]],
    links: List[Tuple[str, str, float | None]],
) -> Dict[str, Domain]:
    """Insert technologies, domains and their links; returns domains by name."""
    technologies = {}
    for data in TECHNOLOGIES:
        technology = Technology(**data)
        db.add(technology)
        technologies[data["name"]] = technology

    by_name = {}
    for data in domains:
        domain = Domain(**data)
        db.add(domain)
        by_name[data["domain"]] = domain
    db.flush()

    for domain_name, technology_name, spend in links:
        db.add(
            DomainTechnology(
                domain_id=by_name[domain_name].id,
                domain_name=domain_name,
                technology_id=technologies[technology_name].id,
                technology_name=technology_name,
                spend=spend,
                subdomain=False,
                first_detected=datetime(2024, 1, 1),
                last_detected=datetime(2024, 6, 1),
            )
        )
    db.flush()
    return by_name
