"""Configuration loading for TradeJournal.

The configuration lives in a TOML file, by default
~/.config/tradejournal/config.toml. Set TRADEJOURNAL_CONFIG to point
at another file.
"""

import os
from pathlib import Path
from typing import Optional

import toml

from tradejournal.analytics.metrics import VARIANTS

CONFIG_DIR = Path.home() / ".config" / "tradejournal"

# Supported backend kinds
BACKENDS = ["local", "supabase"]

DEFAULT_RECENT_LIMIT = 5


def get_config_path() -> Path:
    """Get the configuration file path, honouring TRADEJOURNAL_CONFIG."""
    override = os.environ.get("TRADEJOURNAL_CONFIG")
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR / "config.toml"


def load_config(config_path: Optional[Path] = None) -> Optional[dict]:
    """Load configuration.

    Args:
        config_path: Explicit path; defaults to get_config_path().

    Returns:
        Config dict or None if the file does not exist or cannot be parsed.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return None

    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, OSError):
        return None


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Create a template configuration file.

    Returns:
        Path of the written file.
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "backend": {
            "kind": "local",  # local or supabase
            "db_path": "",  # Leave empty for ~/.config/tradejournal/tradejournal.db
        },
        "supabase": {
            "url": "",  # Leave empty to use SUPABASE_URL env var
            "key": "",  # Leave empty to use SUPABASE_KEY env var
        },
        "dashboard": {
            "variant": "score",  # score or emotion
            "recent_limit": DEFAULT_RECENT_LIMIT,
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path


def backend_kind(config: dict) -> str:
    return config.get("backend", {}).get("kind", "local")


def dashboard_variant(config: dict) -> str:
    return config.get("dashboard", {}).get("variant", "score")


def recent_limit(config: dict) -> int:
    return int(config.get("dashboard", {}).get("recent_limit", DEFAULT_RECENT_LIMIT))


def db_path(config: dict) -> Path:
    """Get the local SQLite database path."""
    configured = config.get("backend", {}).get("db_path")
    if configured:
        return Path(configured).expanduser()
    return CONFIG_DIR / "tradejournal.db"


def session_path() -> Path:
    """Get the file where Supabase session tokens are stored."""
    return CONFIG_DIR / "session.json"


def supabase_credentials(config: dict) -> tuple[str, str]:
    """Get Supabase URL and key, falling back to environment variables."""
    supabase = config.get("supabase", {})
    url = supabase.get("url") or os.environ.get("SUPABASE_URL", "")
    key = supabase.get("key") or os.environ.get("SUPABASE_KEY", "")
    return url, key


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of problems.

    Args:
        config: Configuration dictionary.

    Returns:
        List of missing or invalid keys, empty when the config is usable.
    """
    missing = []
    kind = backend_kind(config)

    if kind not in BACKENDS:
        missing.append(f"backend.kind (got '{kind}', expected one of {', '.join(BACKENDS)})")

    # Supabase credentials only required for the hosted backend
    if kind == "supabase":
        url, key = supabase_credentials(config)
        if not url:
            missing.append("supabase.url (or set SUPABASE_URL env var)")
        if not key:
            missing.append("supabase.key (or set SUPABASE_KEY env var)")

    variant = dashboard_variant(config)
    if variant not in VARIANTS:
        missing.append(f"dashboard.variant (got '{variant}', expected one of {', '.join(VARIANTS)})")

    try:
        recent_limit(config)
    except (TypeError, ValueError):
        limit = config.get("dashboard", {}).get("recent_limit")
        missing.append(f"dashboard.recent_limit (got '{limit}', expected an integer)")

    return missing
