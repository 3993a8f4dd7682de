from .sync import (
    ProductRecord,
    CredentialRecord,
    TokenGrant,
    ConnectionStatus,
    OrderLine,
    WebhookResult,
)
from .requests import (
    AppCredentialsUpdate,
    StockUpdate,
    LinkUpdate,
)
