"""
FILE DESCRIPTION: Foundational module for service configuration and logging.
KEY FUNCTIONS/CLASSES: ServiceConfig, CompanyFormatter, setup_logger
"""

import logging
import os
import random
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

# === CONFIGURATION SECTION ===

# Small UA rotation to look less bot-like
DEFAULT_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.4 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36",
)

DEFAULT_EXTRA_HEADERS = {
    "accept-language": "en-US,en;q=0.9",
    "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ServiceConfig:
    """
    FLOW: Built once at startup (usually via from_env) -> handed to the Flask app
    and the ScrapeService -> read-only for the lifetime of the process.
    All timing values are milliseconds.
    """
    host: str = "0.0.0.0"
    port: int = 8080
    user_agents: Tuple[str, ...] = DEFAULT_USER_AGENTS
    headless: bool = True
    launch_args: Tuple[str, ...] = ("--no-sandbox", "--disable-setuid-sandbox")
    viewport: Tuple[int, int] = (1366, 768)
    locale: str = "en-US"
    extra_headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_EXTRA_HEADERS))

    nav_timeout_ms: int = 30000
    title_timeout_ms: int = 15000
    default_wait_ms: int = 1200
    min_wait_ms: int = 200
    crawl_settle_ms: int = 800
    default_crawl_limit: int = 20

    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        """
        Reads settings from the process environment (after loading .env) or
        from an explicit mapping. Unset keys fall back to the class defaults.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        defaults = cls()
        user_agents = defaults.user_agents
        raw_agents = environ.get("SCRAPER_USER_AGENTS")
        if raw_agents:
            parsed = tuple(ua.strip() for ua in raw_agents.split("|") if ua.strip())
            if parsed:
                user_agents = parsed

        def _int(key, default):
            raw = environ.get(key)
            if raw is None or raw.strip() == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw!r}")

        headless = defaults.headless
        if environ.get("SCRAPER_HEADLESS"):
            headless = _env_bool(environ["SCRAPER_HEADLESS"])

        return cls(
            host=environ.get("HOST", defaults.host),
            port=_int("PORT", defaults.port),
            user_agents=user_agents,
            headless=headless,
            nav_timeout_ms=_int("NAV_TIMEOUT_MS", defaults.nav_timeout_ms),
            title_timeout_ms=_int("TITLE_TIMEOUT_MS", defaults.title_timeout_ms),
            default_wait_ms=_int("DEFAULT_WAIT_MS", defaults.default_wait_ms),
            min_wait_ms=_int("MIN_WAIT_MS", defaults.min_wait_ms),
            crawl_settle_ms=_int("CRAWL_SETTLE_MS", defaults.crawl_settle_ms),
            default_crawl_limit=_int("DEFAULT_CRAWL_LIMIT", defaults.default_crawl_limit),
            log_level=environ.get("LOG_LEVEL", defaults.log_level).upper(),
            log_file=environ.get("LOG_FILE") or None,
        )

    def pick_user_agent(self, rng=random) -> str:
        return rng.choice(self.user_agents)


# === LOGGING SECTION ===

class CompanyFormatter(logging.Formatter):
    """
    FLOW: Receives a log record -> Extracts timestamp -> Formats according to company standard
    (e.g., [ Tue Jan 06 05:32:41 AM UTC 2026 ]) -> Prepends level and context -> Returns final string.
    """
    def format(self, record):
        dt = datetime.fromtimestamp(record.created)
        timestamp = dt.strftime("%a %b %d %I:%M:%S %p UTC %Y")
        context = getattr(record, 'context', 'root')
        message = f"[ {timestamp} ] : {record.levelname} : {context} : {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def attach_file_handler(logger, log_file):
    """Adds a CompanyFormatter file handler for log_file unless one is already attached."""
    path = os.path.abspath(log_file)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
            return handler
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(CompanyFormatter())
    logger.addHandler(file_handler)
    return file_handler


def setup_logger(name="scraper", log_file=None, level=logging.INFO):
    """
    FLOW: Initializes/Retrieves logger -> Checks for existing handlers to prevent duplicates ->
    Sets propagation for child loggers -> Attaches Console and optional File handlers with CompanyFormatter.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    if name != "scraper":
        logger.propagate = True
        setup_logger("scraper", log_file=log_file, level=level)
        return logger

    formatter = CompanyFormatter()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        attach_file_handler(logger, log_file)

    return logger


def configure_logging(config: ServiceConfig) -> logging.Logger:
    """Applies the configured level and file to the root 'scraper' logger."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logger = setup_logger("scraper", level=level)
    # The module-level logger is created without a file; attach it late if asked.
    if config.log_file:
        attach_file_handler(logger, config.log_file)
    return logger


logger = setup_logger()
