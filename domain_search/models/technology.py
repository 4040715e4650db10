from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text

from ..core.db import Base


class PremiumFlag:
    """Values for Technology.is_premium."""
    YES = "Yes"
    NO = "No"
    MAYBE = "Maybe"


class Technology(Base):
    __tablename__ = "technologies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, unique=True, nullable=False)
    category = Column(String, index=True, nullable=True)
    is_premium = Column(String(8), default=PremiumFlag.NO, nullable=False)
    description = Column(Text, nullable=True)
    parent = Column(String, nullable=True)
    link = Column(String, nullable=True)
    trends_link = Column(String, nullable=True)
    sub_categories = Column(Text, nullable=True)  # JSON-serialised list
    first_added = Column(DateTime, nullable=True)
    ticker = Column(String, nullable=True)
    exchange = Column(String, nullable=True)
    public_company_type = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "is_premium IN ('Yes', 'No', 'Maybe')", name="ck_technologies_is_premium"
        ),
    )
