from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


# statistics API
@dataclass(frozen=True)
class StatisticsAPIConfig:
    base_url: str
    timeout_seconds: float = 10.0
    max_retries: int = 1

# export
@dataclass(frozen=True)
class ExportConfig:
    output_dir: Path
    user_email: str = ""
    user_name: str = "Sistema"
    locale: str = "pt-BR"
    chart_catalog_path: Path | None = None
