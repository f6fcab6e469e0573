from __future__ import annotations
import logging
import time
from typing import Any, Dict, List
import requests
from requests import HTTPError, RequestException
from stats_export.config import StatisticsAPIConfig
from stats_export.domain.records import FetchResult, RecordRow
from stats_export.shared.errors import NetworkError
from stats_export.shared.normalization import normalize_str_or_none, parse_timestamp


logger = logging.getLogger(__name__)

FULL_EXPORT_PATH = "/api/statistics/full-export"
USER_EMAIL_HEADER = "x-user-email"


class StatisticsClient:
    """HTTP client for the full ticket export of the statistics API.
        Sends the caller identity in the x-user-email header and maps the
        ``data`` list of the response into RecordRow objects. Failures never
        escape fetch_records; they come back as a FetchResult with an error.
        """

    def __init__(
        self,
        config: StatisticsAPIConfig,
        backoff_factor: float = 0.5,
    ) -> None:
        self._config = config
        self._session = requests.Session()
        self._max_retries = max(1, config.max_retries)
        self._backoff_factor = backoff_factor

    @property
    def url(self) -> str:
        return self._config.base_url.rstrip("/") + FULL_EXPORT_PATH

    def fetch_records(self, user_email: str) -> FetchResult:
        try:
            data = self._get_json(user_email)
            items = self._extract_items(data)
        except NetworkError as exc:
            logger.error("Statistics export unavailable, continuing with no records: %s", exc)
            return FetchResult(records=[], error=str(exc))

        records: List[RecordRow] = []
        for item in items:
            record = _to_record(item)
            if record is None:
                logger.warning("Skipping export item without id_chamado: %r", item)
                continue
            records.append(record)

        logger.info("Fetched %d ticket records for %s", len(records), user_email or "<anonymous>")
        return FetchResult(records=records)

    def _get_json(self, user_email: str) -> Any:
        """Call the full-export endpoint and return the parsed JSON body.
            Raises NetworkError if the request fails on every attempt or the
            body is not valid JSON.
            """

        headers = {
            "Content-Type": "application/json",
            USER_EMAIL_HEADER: user_email,
        }

        # retry GET with exponential backoff on HTTP/network errors
        response: requests.Response | None = None
        last_exc: Exception | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._session.get(
                    self.url,
                    headers=headers,
                    timeout=self._config.timeout_seconds,
                )
                response.raise_for_status()
                break
            except (HTTPError, RequestException) as exc:
                last_exc = exc
                if attempt == self._max_retries:
                    msg = (
                        f"Error calling statistics API after {self._max_retries} "
                        f"attempt(s): {exc}"
                    )
                    logger.error(msg)
                    raise NetworkError(msg) from exc

                sleep_seconds = self._backoff_factor * (2 ** (attempt - 1))
                logger.warning(
                    "Statistics API call failed on attempt %d/%d: %s; "
                    "retrying in %.1f seconds",
                    attempt,
                    self._max_retries,
                    exc,
                    sleep_seconds,
                )
                time.sleep(sleep_seconds)

        if response is None:
            msg = "Statistics API call failed without a response object"
            logger.error(msg)
            if last_exc is not None:
                raise NetworkError(msg) from last_exc
            raise NetworkError(msg)

        try:
            return response.json()
        except ValueError as exc:
            msg = "Failed to parse statistics API response as JSON"
            logger.error(msg)
            raise NetworkError(msg) from exc

    def _extract_items(self, data: Any) -> List[Dict[str, Any]]:
        """Return the object items of the response's ``data`` list.
            A null ``data`` means no tickets. Anything other than an object
            with a list under ``data`` raises NetworkError.
            """

        if not isinstance(data, dict):
            msg = f"Unexpected response format from statistics API: {type(data).__name__}"
            logger.error(msg)
            raise NetworkError(msg)

        payload = data.get("data")
        if payload is None:
            return []

        if not isinstance(payload, list):
            logger.error(
                "Statistics API 'data' has unexpected type: %s",
                type(payload).__name__,
            )
            raise NetworkError("Unexpected response shape from statistics API: 'data' is not a list")

        items: List[Dict[str, Any]] = []
        for item in payload:
            if not isinstance(item, dict):
                logger.warning("Skipping non-object item in response: %r", item)
                continue
            items.append(item)
        return items

def _to_record(item: Dict[str, Any]) -> RecordRow | None:
    record_id = normalize_str_or_none(item.get("id_chamado"))
    if record_id is None:
        return None

    return RecordRow(
        record_id=record_id,
        title=normalize_str_or_none(item.get("titulo_chamado")),
        category=normalize_str_or_none(item.get("descricao_categoria_chamado")),
        problem=normalize_str_or_none(item.get("descricao_problema_chamado")),
        status=normalize_str_or_none(item.get("descricao_status_chamado")),
        priority=normalize_str_or_none(item.get("prioridade_texto")),
        requester=normalize_str_or_none(item.get("usuario_abertura")),
        opened_at=parse_timestamp(item.get("data_abertura")),
        assignee=normalize_str_or_none(item.get("analista_responsavel")),
        resolved_at=parse_timestamp(item.get("data_resolucao")),
        resolution_days=_number_or_none(item.get("tempo_resolucao_dias")),
        opening_reason=normalize_str_or_none(item.get("motivo_abertura")),
        raw_payload=item,
    )

def _number_or_none(value: Any) -> float | int | None:
    """Return int/float values as-is and parse numeric strings (Postgres numerics arrive as text)."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).replace(",", "."))
    except ValueError:
        logger.warning("Ignoring non-numeric resolution time %r", value)
        return None
