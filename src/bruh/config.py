"""Configuration management for Bruh."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

BRUH_HOME = Path(os.environ.get("BRUH_HOME", Path.home() / "bruh"))
CONFIG_FILE = BRUH_HOME / "config" / "bruh.conf"
DATA_DIR = BRUH_HOME / "data"


@dataclass
class Config:
    """Bruh configuration."""

    tasks_file: str = ""
    # Supabase REST settings; when both are set they win over tasks_file
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_user_id: str = ""
    urgent_days: int = 3
    focus_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    suggestion_limit: int = 5

    @property
    def use_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def tasks_path(self) -> Path:
        if self.tasks_file:
            return Path(self.tasks_file).expanduser()
        return DATA_DIR / "tasks.json"


_INT_KEYS = (
    "urgent_days",
    "focus_minutes",
    "short_break_minutes",
    "long_break_minutes",
    "suggestion_limit",
)


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from bruh.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "tasks_file":
                config.tasks_file = value
            case "supabase_url":
                config.supabase_url = value.rstrip("/")
            case "supabase_key":
                config.supabase_key = value
            case "supabase_user_id":
                config.supabase_user_id = value
            case _ if key in _INT_KEYS:
                try:
                    number = int(value)
                except ValueError:
                    logger.warning(f"Ignoring non-integer {key.upper()}: {value!r}")
                    continue
                minimum = 0 if key == "urgent_days" else 1
                if number < minimum:
                    logger.warning(f"Ignoring out-of-range {key.upper()}: {number}")
                    continue
                setattr(config, key, number)
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
