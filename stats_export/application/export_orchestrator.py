from __future__ import annotations
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, Mapping, Sequence
from stats_export.application.document_builder import PaginatedDocumentBuilder
from stats_export.application.ports.artifact_sink_port import ArtifactSinkPort
from stats_export.application.ports.chart_surface_port import ChartSurface
from stats_export.application.ports.document_renderer_port import (
    DocumentRendererPort,
    TabularEncoderPort,
)
from stats_export.application.ports.notifier_port import NotifierPort
from stats_export.application.ports.record_source_port import RecordSourcePort
from stats_export.application.rasterizer import DEFAULT_BACKGROUND, rasterize
from stats_export.application.tabular_formatter import format_records
from stats_export.config import ExportConfig
from stats_export.domain.artifacts import RasterArtifact
from stats_export.domain.export import (
    TRANSITIONS,
    ExportKind,
    ExportOutcome,
    ExportRequest,
    ExportState,
)
from stats_export.application.errors import ExportError, ExportInProgressError


logger = logging.getLogger(__name__)

DOCUMENT_FILENAME = "statistics-report-tickets.pdf"
SINGLE_RASTER_SCALE = 2.0
DOCUMENT_RASTER_SCALE = 1.5

_FAILURE_MESSAGES = {
    ExportKind.TABULAR: "Erro ao exportar planilha",
    ExportKind.SINGLE_RASTER: "Erro ao baixar gráfico",
    ExportKind.DOCUMENT: "Erro ao gerar relatório PDF",
}


def tabular_filename(fmt: str, today: datetime) -> str:
    return f"statistics-tickets-{today.date().isoformat()}.{fmt}"


class ExportOrchestrator:
    """Runs the three user-facing exports, one at a time.

        States move IDLE -> BUSY -> IDLE on success and BUSY -> ERROR -> IDLE
        on failure. A request made while BUSY is rejected with
        ExportInProgressError; it is neither queued nor retried. Failures are
        shown through the notifier's blocking alert before the orchestrator
        becomes IDLE again, and no artifact is delivered for a failed export.
        """

    def __init__(
        self,
        record_source: RecordSourcePort,
        sink: ArtifactSinkPort,
        notifier: NotifierPort,
        document_renderer: DocumentRendererPort,
        tabular_encoders: Mapping[str, TabularEncoderPort],
        settings: ExportConfig,
        document_builder: PaginatedDocumentBuilder | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._record_source = record_source
        self._sink = sink
        self._notifier = notifier
        self._document_renderer = document_renderer
        self._tabular_encoders = dict(tabular_encoders)
        self._settings = settings
        self._document_builder = document_builder or PaginatedDocumentBuilder()
        self._clock = clock

        self._state = ExportState.IDLE
        self._state_lock = threading.Lock()

    @property
    def state(self) -> ExportState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is ExportState.BUSY

    def export_tabular(self, fmt: str = "csv") -> ExportOutcome:
        if fmt not in self._tabular_encoders:
            raise ValueError(
                f"Unsupported tabular format {fmt!r}; "
                f"expected one of {sorted(self._tabular_encoders)}"
            )

        request = ExportRequest(
            kind=ExportKind.TABULAR,
            filename=tabular_filename(fmt, self._clock()),
        )
        degraded = False

        def job() -> Path:
            nonlocal degraded
            result = self._record_source.fetch_records(self._settings.user_email)
            if not result.ok:
                # keep exporting: an unreachable API yields a header-only file
                degraded = True
                logger.warning(
                    "Statistics fetch failed (%s); exporting a header-only table",
                    result.error,
                )

            document = format_records(result.records, locale=self._settings.locale)
            encoder = self._tabular_encoders[fmt]
            payload = encoder(document, result.records, self._settings.user_name)
            return self._sink.deliver(request.filename, payload)

        outcome = self._run(request, job)
        if outcome.ok:
            self._notifier.info(f"Planilha {request.filename} baixada com sucesso!")
        return ExportOutcome(
            kind=outcome.kind,
            path=outcome.path,
            error=outcome.error,
            degraded=degraded,
        )

    def export_single_raster(self, surface: ChartSurface, filename: str) -> ExportOutcome:
        request = ExportRequest(
            kind=ExportKind.SINGLE_RASTER,
            filename=f"{filename}.png",
            surfaces=(surface,),
        )

        def job() -> Path:
            raster = rasterize(
                surface,
                scale=SINGLE_RASTER_SCALE,
                background=DEFAULT_BACKGROUND,
                allow_cross_origin=True,
            )
            return self._sink.deliver(request.filename, raster.payload)

        outcome = self._run(request, job)
        if outcome.ok:
            self._notifier.info(f"Gráfico {filename} baixado com sucesso!")
        return outcome

    def export_document(self, surfaces: Sequence[ChartSurface]) -> ExportOutcome:
        request = ExportRequest(
            kind=ExportKind.DOCUMENT,
            filename=DOCUMENT_FILENAME,
            surfaces=tuple(surfaces),
        )

        def job() -> Path:
            # one surface at a time, in presentation order; any failure aborts
            rasters: list[RasterArtifact] = []
            for surface in request.surfaces:
                rasters.append(
                    rasterize(
                        surface,
                        scale=DOCUMENT_RASTER_SCALE,
                        background=DEFAULT_BACKGROUND,
                    )
                )

            document = self._document_builder.build(
                [(raster, raster.caption) for raster in rasters],
                requester=self._settings.user_name,
            )
            payload = self._document_renderer.render(document)
            return self._sink.deliver(request.filename, payload)

        outcome = self._run(request, job)
        if outcome.ok:
            self._notifier.info("Relatório PDF baixado com sucesso!")
        return outcome

    def _run(self, request: ExportRequest, job: Callable[[], Path]) -> ExportOutcome:
        self._begin(request)
        try:
            path = job()
        except ExportError as exc:
            self._transition(ExportState.ERROR)
            message = f"{_FAILURE_MESSAGES[request.kind]}: {exc}"
            logger.error("Export %s failed: %s", request.filename, exc)
            try:
                self._notifier.alert(message)
            finally:
                self._transition(ExportState.IDLE)
            return ExportOutcome(kind=request.kind, error=message)
        except BaseException:
            logger.exception("Unexpected failure while exporting %s", request.filename)
            self._state = ExportState.IDLE
            raise

        self._transition(ExportState.IDLE)
        logger.info("Export %s delivered to %s", request.filename, path)
        return ExportOutcome(kind=request.kind, path=path)

    def _begin(self, request: ExportRequest) -> None:
        with self._state_lock:
            if self._state is not ExportState.IDLE:
                logger.warning(
                    "Rejected %s export of %s: orchestrator is %s",
                    request.kind.value,
                    request.filename,
                    self._state.value,
                )
                raise ExportInProgressError(
                    f"Another export is in progress; {request.filename} was not started"
                )
            self._transition(ExportState.BUSY)
        logger.info("Starting %s export of %s", request.kind.value, request.filename)

    def _transition(self, target: ExportState) -> None:
        if target not in TRANSITIONS[self._state]:
            raise RuntimeError(f"Illegal export state change {self._state.value} -> {target.value}")
        logger.debug("Export state %s -> %s", self._state.value, target.value)
        self._state = target
