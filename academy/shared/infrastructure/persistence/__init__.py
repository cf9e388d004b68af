"""Persistence Infrastructure"""

from .token_storage import CredentialProvider, FileTokenStorage, MemoryTokenStorage

__all__ = ["CredentialProvider", "FileTokenStorage", "MemoryTokenStorage"]
