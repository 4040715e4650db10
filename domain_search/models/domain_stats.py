"""
DomainStats model: precomputed per-domain summary of its technologies.

Derived data, rebuilt after bulk loads by services.stats.rebuild_domain_stats.
It may lag the live domain_technologies rows between rebuilds.
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, JSON

from ..core.db import Base


class DomainStats(Base):
    __tablename__ = "domain_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    domain_id = Column(Integer, ForeignKey("domains.id", ondelete="CASCADE"), unique=True, nullable=False)
    total_technologies = Column(Integer, default=0, nullable=False)
    technologies_by_category = Column(JSON, nullable=True)  # {"Analytics": 3, ...}
    total_spend = Column(Float, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
