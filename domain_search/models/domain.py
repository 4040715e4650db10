from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from ..core.db import Base


class Domain(Base):
    __tablename__ = "domains"

    id = Column(Integer, primary_key=True, autoincrement=True)
    domain = Column(String, unique=True, nullable=False)
    company_name = Column(String, nullable=True)
    category = Column(String, index=True, nullable=True)
    country = Column(String, index=True, nullable=True)
    state = Column(String, nullable=True)
    city = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)

    # JSON-serialised lists, kept as text so SELECT DISTINCT works on every dialect
    social_links = Column(Text, nullable=True)
    emails = Column(Text, nullable=True)
    phones = Column(Text, nullable=True)
    people = Column(Text, nullable=True)  # [{"Name": ..., "Title": ...}]

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
