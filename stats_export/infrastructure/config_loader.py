from __future__ import annotations
import os
from pathlib import Path
from dotenv import load_dotenv
from stats_export.config import ExportConfig, StatisticsAPIConfig


load_dotenv()

def _get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Environment variable {name} is required but not set")
    return value

def _get_number_env(name: str, default: str, cast: type) -> float | int:
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc

def load_statistics_api_config() -> StatisticsAPIConfig:
    base_url = _get_required_env("STATS_API_BASE_URL")
    timeout_seconds = _get_number_env("STATS_API_TIMEOUT_SECONDS", "10", float)
    max_retries = _get_number_env("STATS_API_MAX_RETRIES", "1", int)

    if max_retries < 1:
        raise RuntimeError("STATS_API_MAX_RETRIES must be at least 1")

    return StatisticsAPIConfig(
        base_url=base_url,
        timeout_seconds=float(timeout_seconds),
        max_retries=int(max_retries),
    )

def load_export_config(project_root: Path) -> ExportConfig:
    output_dir = Path(os.getenv("EXPORT_OUTPUT_DIR", "output"))
    if not output_dir.is_absolute():
        output_dir = project_root / output_dir

    catalog_path_str = os.getenv("CHART_CATALOG_PATH")
    chart_catalog_path = Path(catalog_path_str) if catalog_path_str else None

    return ExportConfig(
        output_dir=output_dir,
        user_email=os.getenv("EXPORT_USER_EMAIL", ""),
        user_name=os.getenv("EXPORT_USER_NAME") or "Sistema",
        locale=os.getenv("EXPORT_LOCALE", "pt-BR"),
        chart_catalog_path=chart_catalog_path,
    )
