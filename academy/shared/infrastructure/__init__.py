"""
Shared Infrastructure Module
=============================

Technical adapters for external systems (HTTP API, credential persistence).
"""

# HTTP
from academy.shared.infrastructure.http.api_client import ApiClient

# Persistence
from academy.shared.infrastructure.persistence.token_storage import (
    CredentialProvider,
    FileTokenStorage,
    MemoryTokenStorage,
)

__all__ = [
    # HTTP
    "ApiClient",
    # Persistence
    "CredentialProvider",
    "FileTokenStorage",
    "MemoryTokenStorage",
]
