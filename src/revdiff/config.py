"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:        str   = "revdiff"
    db_url:          str   = "sqlite:///revdiff.db"
    context_lines:   int   = Field(default=3, ge=0, description="Unchanged lines kept around each change")
    max_file_bytes:  int   = Field(default=1_000_000, ge=0, description="Skip files larger than this; 0 disables")
    max_table_cells: int   = Field(default=25_000_000, ge=0, description="Max LCS table size per file; 0 disables")
    concurrency:     int   = Field(default=4, ge=1, description="Files diffed in parallel per review")
    fetch_timeout:   float = Field(default=30.0, gt=0, description="Seconds to wait for one content/patch fetch")
    output_dir:      str   = Field(default="dist", description="Directory for exported .diff + JSON files")
    log_level:       str   = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then REVDIFF_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"REVDIFF_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
