"""Bounded outbound lookups and local credential storage."""

from dashbridge.proxy.bounded import NETWORK_SENTINEL, NO_CREDENTIAL_SENTINEL, BoundedProxy
from dashbridge.proxy.credential import CredentialStore, CredentialWriteError

__all__ = [
    "NETWORK_SENTINEL",
    "NO_CREDENTIAL_SENTINEL",
    "BoundedProxy",
    "CredentialStore",
    "CredentialWriteError",
]
