from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime

from stocksync.database import Base


def _utc_now():
    return datetime.now(timezone.utc)


class MarketplaceCredential(Base):
    """One row per credential field (client_id, access_token, ...)"""
    __tablename__ = "marketplace_credentials"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=_utc_now, onupdate=_utc_now, nullable=False)
