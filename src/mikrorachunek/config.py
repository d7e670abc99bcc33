from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional
import yaml
from pydantic import BaseModel, Field

OutputFormat = Literal["text", "json"]

# ---- Diagnostic trace ----
class TraceConfig(BaseModel):
    enabled: bool = False    # emit validator steps through structlog


# ---- Result rendering ----
class OutputConfig(BaseModel):
    format: OutputFormat = "text"
    report_dir: Optional[Path] = None  # default directory for --report file names


# ---- structlog ----
class LoggingConfig(BaseModel):
    json_logs: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}


# ---- Root config ----
class MikroConfig(BaseModel):
    trace: TraceConfig = Field(default_factory=TraceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

# ---- Loader ----
def load_config(path: Optional[Path]) -> MikroConfig:
    if not path:
        return MikroConfig()
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    return MikroConfig(**data)
