from typing import Optional

from pydantic import BaseModel, Field


class AppCredentialsUpdate(BaseModel):
    client_id: str = Field(..., min_length=1)
    client_secret: str = Field(..., min_length=1)


class StockUpdate(BaseModel):
    quantity: int = Field(..., ge=0)


class LinkUpdate(BaseModel):
    remote_item_id: Optional[str] = None
