"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "kbchat.log"
DEFAULT_ENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_KEYBASE_BIN = "keybase"
DEFAULT_PAGE_SIZE = 20


@dataclass
class Settings:
    """Runtime settings resolved from the environment."""

    keybase_bin: str = DEFAULT_KEYBASE_BIN
    page_size: int = DEFAULT_PAGE_SIZE
    log_level: str = "INFO"
    log_file: str = str(DEFAULT_LOG_PATH)

    @property
    def api_command(self) -> list[str]:
        """Argv for one-shot request/response invocations."""
        return [self.keybase_bin, "chat", "api"]

    @property
    def listen_command(self) -> list[str]:
        """Argv for the long-lived event stream."""
        return [self.keybase_bin, "chat", "api-listen"]


def _positive_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Recognised variables: KEYBASE_BIN, KBCHAT_PAGE_SIZE, LOG_LEVEL, LOG_FILE.
    """
    env = os.environ if environ is None else environ
    return Settings(
        keybase_bin=env.get("KEYBASE_BIN") or DEFAULT_KEYBASE_BIN,
        page_size=_positive_int(
            "KBCHAT_PAGE_SIZE", env.get("KBCHAT_PAGE_SIZE"), DEFAULT_PAGE_SIZE
        ),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        log_file=env.get("LOG_FILE") or str(DEFAULT_LOG_PATH),
    )
