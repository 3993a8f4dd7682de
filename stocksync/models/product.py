"""
Local catalog product.

Only `stock_quantity` and `remote_item_id` are read or written by the sync;
title, price and description stay channel-specific.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime, Text

from stocksync.database import Base


def _utc_now():
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime(timezone=True), default=_utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utc_now, onupdate=_utc_now, nullable=False)

    sku = Column(String, unique=True)
    title = Column(String, nullable=True)
    price = Column(Float, nullable=True)
    description = Column(Text, nullable=True)

    stock_quantity = Column(Integer, nullable=False, default=0)

    # Linked marketplace item (e.g. MLA123456789). Not unique: duplicates are
    # possible and the reverse lookup returns the first match.
    remote_item_id = Column(String, nullable=True, index=True)

    def __repr__(self):
        return f"<Product(id={self.id}, sku='{self.sku}', stock={self.stock_quantity}, remote='{self.remote_item_id}')>"
