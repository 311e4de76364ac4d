"""
Configuration for kiwi-connect.

Settings come from an optional YAML file; secrets for the Google Sheets
backend come from the environment (a `.env` file is honoured).
"""

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


DEFAULT_TIMEZONE = "Pacific/Auckland"
DEFAULT_TAB = "Puzzles"


class ProviderConfig(BaseModel):
    """Where puzzles are read from."""
    kind: Literal["sheets", "file"] = "sheets"
    path: Optional[str] = None  # CSV or YAML file for kind="file"
    sheet_id: Optional[str] = None  # falls back to GOOGLE_SHEETS_ID
    tab: Optional[str] = None  # falls back to GOOGLE_SHEETS_TAB, then "Puzzles"


class GameConfig(BaseModel):
    """Configuration for a game session."""
    max_mistakes: int = Field(default=4, ge=1)
    reveal_delay: float = Field(default=1.0, ge=0)
    win_delay: float = Field(default=1.0, ge=0)
    seed: Optional[int] = None
    timezone: str = DEFAULT_TIMEZONE
    provider: ProviderConfig = Field(default_factory=ProviderConfig)


def load_env(dotenv_path: Optional[str] = None) -> None:
    """Load a .env file into the process environment without overriding it."""
    load_dotenv(dotenv_path or os.getenv("DOTENV_PATH", ".env"), override=False)


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """Load game configuration from a YAML file (defaults if no path given)."""
    if config_path is None:
        return GameConfig()

    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)
