"""Credential providers holding the bearer token.

The token is the only client-side state that outlives a process. Every
resource client receives one provider instance through its ``ApiClient``;
only the session store writes to it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialProvider(Protocol):
    """Single owned slot for the bearer token."""

    def get_token(self) -> Optional[str]: ...

    def set_token(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStorage:
    """Process-local provider, used by tests and short-lived scripts."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStorage:
    """JSON-file provider; the token survives restarts.

    The file holds a small JSON object and the token lives under a fixed key,
    so other client settings can share the file without clobbering it.
    """

    def __init__(self, path: Path | str, key: str = "token") -> None:
        self.path = Path(path).expanduser()
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable credentials file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        """Replace the file in one step; only the owner may read the token."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.chmod(tmp_path, 0o600)
        tmp_path.replace(self.path)

    def get_token(self) -> Optional[str]:
        token = self._read().get(self.key)
        return token if isinstance(token, str) and token else None

    def set_token(self, token: str) -> None:
        data = self._read()
        data[self.key] = token
        self._write(data)
        logger.debug(f"Stored token in {self.path}")

    def clear(self) -> None:
        data = self._read()
        if self.key not in data:
            return
        del data[self.key]
        self._write(data)
        logger.debug(f"Cleared token from {self.path}")
