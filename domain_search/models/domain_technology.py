"""
DomainTechnology model: the many-to-many link between a domain and a technology.

Both natural keys (domain_name, technology_name) are denormalised next to the
foreign keys so technology filters never need to join the technologies table.
"""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint

from ..core.db import Base


class DomainTechnology(Base):
    __tablename__ = "domain_technologies"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign keys
    domain_id = Column(Integer, ForeignKey("domains.id", ondelete="CASCADE"), index=True, nullable=False)
    domain_name = Column(String, nullable=False)
    technology_id = Column(Integer, ForeignKey("technologies.id", ondelete="CASCADE"), index=True, nullable=False)
    technology_name = Column(String, index=True, nullable=False)

    # Usage metadata
    spend = Column(Float, nullable=True)
    subdomain = Column(Boolean, nullable=True)
    first_identified = Column(DateTime, nullable=True)
    last_identified = Column(DateTime, nullable=True)
    first_detected = Column(DateTime, nullable=True)
    last_detected = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        # Re-import replaces the link rather than duplicating it
        UniqueConstraint("domain_id", "technology_id", name="uq_domain_technology"),
    )
