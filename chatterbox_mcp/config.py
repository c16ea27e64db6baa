"""Process configuration, read once at startup from the environment."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SECRETS_DIR = "secrets"
DEFAULT_LOG_FILE = os.path.join(".logs", "apps.log")
DEFAULT_CHECK_INTERVAL_MS = 60000


def parse_server_urls(url_string: Optional[str]) -> List[str]:
    """Split a comma-separated list, trimming blanks and dropping repeats.

    Order is kept: the first listed URL is the most preferred one.
    """
    urls: List[str] = []
    for part in (url_string or "").split(","):
        url = part.strip()
        if url and url not in urls:
            urls.append(url)
    return urls


def load_secrets_dir(path: str, environ: Optional[dict] = None) -> List[str]:
    """Export every file in ``path`` as an environment variable.

    The variable name is the upper-cased file stem and the value is the
    trimmed file content. A missing directory is skipped.

    Returns:
        The names of the variables that were set.
    """
    environ = os.environ if environ is None else environ
    directory = Path(path)
    if not directory.is_dir():
        return []

    names = []
    for file_path in sorted(directory.iterdir()):
        if not file_path.is_file():
            continue
        name = file_path.stem.upper()
        environ[name] = file_path.read_text(encoding="utf-8").strip()
        logger.info(f"Setting {name} from file {file_path}")
        names.append(name)
    return names


@dataclass(frozen=True)
class Settings:
    server_urls: str = ""
    secret: str = ""
    log_level: str = "info"
    log_file: str = DEFAULT_LOG_FILE
    auto_response_numbers: List[str] = field(default_factory=list)
    check_interval_ms: int = DEFAULT_CHECK_INTERVAL_MS
    admin_phone_number: str = ""
    transport: str = "stdio"

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "Settings":
        interval = environ.get("AUTO_RESPONSE_CHECK_INTERVAL_MS", "")
        try:
            check_interval_ms = int(interval) if interval.strip() else DEFAULT_CHECK_INTERVAL_MS
        except ValueError:
            check_interval_ms = 0
        if check_interval_ms <= 0:
            logger.warning(f"Invalid AUTO_RESPONSE_CHECK_INTERVAL_MS {interval!r}, using {DEFAULT_CHECK_INTERVAL_MS}")
            check_interval_ms = DEFAULT_CHECK_INTERVAL_MS

        return cls(
            server_urls=environ.get("WHATSAPP_SERVER_URL") or environ.get("SERVER_URLS", ""),
            secret=environ.get("CHATTERBOX_SECRET") or environ.get("SHARED_SECRET", ""),
            log_level=environ.get("LOG_LEVEL", "info") or "info",
            log_file=environ.get("LOG_FILE", DEFAULT_LOG_FILE),
            auto_response_numbers=parse_server_urls(environ.get("AUTO_RESPONSE_NUMBERS")),
            check_interval_ms=check_interval_ms,
            admin_phone_number=environ.get("ADMIN_PHONE_NUMBER", "").strip(),
            transport=environ.get("MCP_TRANSPORT", "stdio") or "stdio",
        )


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Load ``.env`` and the secrets directory, then read the settings."""
    load_dotenv(env_file)
    load_secrets_dir(os.environ.get("SECRETS_DIR", DEFAULT_SECRETS_DIR))
    return Settings.from_env(os.environ)


class SecretStore:
    """Holds the shared secret and hands it out on demand.

    Callers only see a zero-argument callable, so they never need to know
    where the secret came from.
    """

    def __init__(self, value: str = ""):
        self._value = value

    def __call__(self) -> str:
        return self._value

    def update(self, value: str) -> None:
        self._value = value
