import asyncio
import logging
from typing import Optional

from googleapiclient.discovery import build

from config.settings import CruxSettings
from drift.application.port.field_metrics_port import FieldMetricsPort
from drift.domain.snapshot import CollectionPeriod, FieldMetrics
from drift.infrastructure.client.schema.crux_schema import CruxResponse

logger = logging.getLogger(__name__)


def format_seconds(value_ms: Optional[float]) -> Optional[str]:
    if value_ms is None:
        return None
    return f"{value_ms / 1000:.2f} s"


def format_milliseconds(value_ms: Optional[float]) -> Optional[str]:
    if value_ms is None:
        return None
    return f"{round(value_ms)} ms"


def format_shift(value: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    return f"{value:.2f}"


def normalize_field_metrics(payload: dict) -> Optional[FieldMetrics]:
    """CrUX queryRecord 응답의 p75 값을 표시 문자열로 바꾼다. record가 없으면 None."""
    record = CruxResponse.model_validate(payload).record
    if record is None:
        return None

    period = record.collection_period
    return FieldMetrics(
        largest_contentful_paint=format_seconds(record.p75("largest_contentful_paint")),
        interaction_to_next_paint=format_milliseconds(record.p75("interaction_to_next_paint")),
        cumulative_layout_shift=format_shift(record.p75("cumulative_layout_shift")),
        data_source="CrUX" if period else None,
        collection_period=(
            CollectionPeriod(first_date=period.first_date.year_month(), last_date=period.last_date.year_month())
            if period
            else None
        ),
    )


class CruxClient(FieldMetricsPort):
    def __init__(self, settings: CruxSettings, service=None):
        self.settings = settings
        self.service = service

    async def fetch_field(self, url: str) -> Optional[FieldMetrics]:
        if not self.settings.api_key:
            return None
        try:
            payload = await asyncio.to_thread(self._query_record, url)
            return normalize_field_metrics(payload)
        except Exception as exc:  # 필드 데이터는 부가 정보이므로 어떤 실패도 스냅샷을 막지 않는다.
            logger.warning("[DRIFT-CRUX] failed to fetch field data for %s: %s", url, exc)
            return None

    def _query_record(self, url: str) -> dict:
        service = self.service or build(
            "chromeuxreport",
            "v1",
            developerKey=self.settings.api_key,
            cache_discovery=False,
        )
        return service.records().queryRecord(body={"url": url, "formFactor": self.settings.form_factor}).execute()
