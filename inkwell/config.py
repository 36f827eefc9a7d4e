"""Runtime settings and logging setup.

Settings are read from ``INKWELL_*`` environment variables. The moderation
rule table is configured separately through a YAML file (see
``inkwell.moderation.rules``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_PAGE_SIZE = 12
DEFAULT_LOAD_MORE_SIZE = 6
DEFAULT_ANONYMOUS_LABEL = "Anonymous"


@dataclass
class Settings:
    """Typed view over the ``INKWELL_*`` environment variables."""

    data_dir: Path
    rules_file: str = ""
    page_size: int = DEFAULT_PAGE_SIZE
    load_more_size: int = DEFAULT_LOAD_MORE_SIZE
    anonymous_label: str = DEFAULT_ANONYMOUS_LABEL
    log_level: str = "WARNING"
    admin_token: str = ""

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(
                os.environ.get("INKWELL_DATA_DIR", str(Path.home() / ".inkwell"))
            ),
            rules_file=os.environ.get("INKWELL_RULES_FILE", ""),
            page_size=_int_env("INKWELL_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            load_more_size=_int_env("INKWELL_LOAD_MORE_SIZE", DEFAULT_LOAD_MORE_SIZE),
            anonymous_label=os.environ.get(
                "INKWELL_ANONYMOUS_LABEL", DEFAULT_ANONYMOUS_LABEL
            ),
            log_level=os.environ.get("INKWELL_LOG_LEVEL", "WARNING").upper(),
            admin_token=os.environ.get("INKWELL_ADMIN_TOKEN", ""),
        )


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def configure_logging(level: str = "WARNING") -> None:
    """Route ``inkwell`` log records through a rich console handler.

    Unknown level names fall back to WARNING.
    """
    from rich.logging import RichHandler

    if not isinstance(logging.getLevelName(level.upper()), int):
        level = "WARNING"
    root = logging.getLogger("inkwell")
    root.setLevel(level.upper())
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(show_path=False, markup=False))
