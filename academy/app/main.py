"""Academy client - application bootstrap."""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv

from academy.app.state import Store
from academy.shared.core.configuration import SystemConfig, ValidationLevel, get_config_manager
from academy.shared.core.event_bus import EventBus
from academy.shared.infrastructure.persistence.token_storage import CredentialProvider

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(config: SystemConfig, project_root: Optional[Path] = None) -> Path:
    """Install file + console handlers on the root logger.

    File handler: everything at the configured level, rotated.
    Console handler: WARNING and above only.

    Returns:
        Path of the log file
    """
    root = project_root or Path.cwd()
    logs_dir = Path(config.logging.log_dir)
    if not logs_dir.is_absolute():
        logs_dir = root / logs_dir
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / config.logging.file_name

    file_log_level = LOG_LEVELS.get(config.logging.level.upper(), logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=config.logging.max_bytes,
        backupCount=config.logging.backup_count,
        encoding='utf-8',
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    ))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info(f"Logging configured: file={log_file_path}, console=WARNING+")
    return log_file_path


async def bootstrap(
    project_root: Optional[Path] = None,
    credentials: Optional[CredentialProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    setup_logging: bool = True,
) -> Store:
    """Build the Store and restore the persisted session, if any.

    Args:
        project_root: Directory holding ``.env`` and ``academy/config/settings``
        credentials: Token provider override (tests)
        transport: httpx transport override (tests)
        setup_logging: Install the file/console handlers

    Returns:
        The initialized global Store
    """
    root = project_root or Path.cwd()
    load_dotenv(dotenv_path=root / ".env")

    config = get_config_manager(root).get_config(ValidationLevel.LENIENT)
    if setup_logging:
        configure_logging(config, root)

    store = Store.initialize(config, EventBus(), credentials=credentials, transport=transport)
    await store.start()

    session = await store.session.restore()
    if session is not None:
        logger.info(f"Restored session for {session.user.email}")
    else:
        logger.info("No stored session; login required")
    return store


async def _run() -> None:
    store = await bootstrap()
    try:
        user = store.session.user
        status = f"signed in as {user.display_name}" if user else "not signed in"
        logger.warning(f"Academy client ready ({status}), API at {store.config.api.base_url}")
    finally:
        await store.aclose()
        Store.reset()


def main() -> None:
    asyncio.run(_run())


if __name__ == "__main__":  # pragma: no cover
    main()
