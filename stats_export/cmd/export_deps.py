from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from stats_export.application.export_orchestrator import ExportOrchestrator
from stats_export.application.ports.record_source_port import RecordSourcePort
from stats_export.config import ExportConfig
from stats_export.infrastructure.artifact_sink import FileSystemArtifactSink
from stats_export.infrastructure.chart_catalog import ChartCatalog, load_chart_catalog
from stats_export.infrastructure.config_loader import (
    load_export_config,
    load_statistics_api_config,
)
from stats_export.infrastructure.csv_writer import build_csv
from stats_export.infrastructure.excel import build_excel
from stats_export.infrastructure.notifier import ConsoleNotifier
from stats_export.infrastructure.pdf_renderer import PdfDocumentRenderer
from stats_export.infrastructure.statistics_client import StatisticsClient


logger = logging.getLogger(__name__)

@dataclass
class ExportDeps:
    settings: ExportConfig
    record_source: RecordSourcePort
    chart_catalog: ChartCatalog
    orchestrator: ExportOrchestrator

def build_export_deps(project_root: Path | None = None) -> ExportDeps:
    project_root = project_root or Path.cwd()

    # config
    api_config = load_statistics_api_config()
    settings = load_export_config(project_root)

    # statistics API
    statistics_client = StatisticsClient(api_config)

    # chart catalog
    chart_catalog = load_chart_catalog(settings.chart_catalog_path)

    orchestrator = ExportOrchestrator(
        record_source=statistics_client,
        sink=FileSystemArtifactSink(settings.output_dir),
        notifier=ConsoleNotifier(),
        document_renderer=PdfDocumentRenderer(),
        tabular_encoders={"csv": build_csv, "xlsx": build_excel},
        settings=settings,
    )

    logger.debug("Export dependencies built; output dir %s", settings.output_dir)
    return ExportDeps(
        settings=settings,
        record_source=statistics_client,
        chart_catalog=chart_catalog,
        orchestrator=orchestrator,
    )
