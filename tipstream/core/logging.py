"""Logging configuration"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from tipstream.core.config import Settings

# Loggers that are too chatty at INFO for this service
_QUIET_LOGGERS = ("uvicorn.access", "httpx")


def setup_logging(settings: Settings) -> None:
    """Configure application logging with Rich handler"""

    level = getattr(logging, settings.log_level, logging.INFO)

    # messages carry caller-supplied ids; render them literally
    rich_handler = RichHandler(
        console=Console(force_terminal=settings.is_development),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    # force=True: uvicorn 會先行設定 root logger，需強制覆蓋
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%Y-%m-%d %H:%M:%S]",
        handlers=[rich_handler],
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging: {settings.log_level} | Env: {settings.environment} | "
        f"AI tiers: {'on' if settings.ai_enabled else 'off'}"
    )
