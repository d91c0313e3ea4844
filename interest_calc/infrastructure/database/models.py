"""SQLAlchemy ORM models for persisted calculator settings"""

from sqlalchemy import Column, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StoredSetting(Base):
    """One persisted key/value pair (amount, yearly rate)"""

    __tablename__ = "calculator_setting"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
