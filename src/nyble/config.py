"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    site_name:           str = Field(default="nyble.dev", description="Suffix for standalone post page titles")
    output_dir:          str = Field(default="dist",       description="Directory the site is written to")
    static_files:  list[str] = Field(default=["about.html", "index.html"], description="Top-level files copied as-is")
    static_dirs:   list[str] = Field(default=["styles", "media"],          description="Directories copied recursively")
    notebook_dir:        str = Field(default="notebook",      description="Freeform pages, rendered in listing order")
    notebook_template:   str = Field(default="notebook.html", description="Template holding the 'page' pattern")
    notebook_output:     str = Field(default="notebook.html", description="Notebook output filename")
    words_dir:           str = Field(default="words",         description="Dated posts directory (also the output subdirectory)")
    words_manifest:      str = Field(default="words.yaml",    description="Posts manifest inside words_dir")
    words_template:      str = Field(default="words.html",    description="Standalone post template inside words_dir")
    words_list_template: str = Field(default="words.html",    description="Index template holding the 'words' pattern")
    log_level:           str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def _env_value(name: str, val: str) -> Any:
    """List fields are read from comma-separated env values."""
    if isinstance(Settings.model_fields[name].default, list):
        return [v.strip() for v in val.split(",") if v.strip()]
    return val


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then NYBLE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"NYBLE_{name.upper()}"):
            data[name] = _env_value(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
