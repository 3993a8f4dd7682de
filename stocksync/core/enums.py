"""
Shared enums and constants used across the application.
"""

from enum import Enum


class CredentialKey(str, Enum):
    """Fields held by the credential store"""
    CLIENT_ID = "client_id"
    CLIENT_SECRET = "client_secret"
    ACCESS_TOKEN = "access_token"
    REFRESH_TOKEN = "refresh_token"
    REMOTE_ACCOUNT_ID = "remote_account_id"


class WebhookStatus(str, Enum):
    SYNCED = "synced"
    IGNORED = "ignored"
    NO_ITEMS = "no_items"
