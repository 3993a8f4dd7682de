from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductRecord(BaseModel):
    """The slice of a local product the sync engine cares about"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    sku: Optional[str] = None
    stock_quantity: Optional[int] = 0
    remote_item_id: Optional[str] = None


class CredentialRecord(BaseModel):
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    remote_account_id: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class TokenGrant(BaseModel):
    """Result of a successful authorization-code exchange"""
    access_token: str
    refresh_token: Optional[str] = None
    remote_account_id: Optional[str] = None


class ConnectionStatus(BaseModel):
    connected: bool
    remote_account_id: Optional[str] = None
    client_configured: bool = False
    authorize_url: Optional[str] = None


class OrderLine(BaseModel):
    remote_item_id: str
    quantity: int = Field(default=0)


class WebhookResult(BaseModel):
    status_code: int = 200
    body: Dict[str, Any]
