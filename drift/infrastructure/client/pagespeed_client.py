import asyncio
import logging
from typing import Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pydantic import ValidationError

from config.settings import PageSpeedSettings
from drift.application.port.lab_metrics_port import LabAuditError, LabMetricsPort
from drift.domain.snapshot import BoundingRect, DomIssueHint, PerformanceMetrics
from drift.infrastructure.client.schema.pagespeed_schema import (
    AuditItemSchema,
    AuditNodeSchema,
    AuditSchema,
    CategorySchema,
    LighthouseResultSchema,
    PageSpeedResponse,
)

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
AUDIT_CATEGORIES = ["PERFORMANCE", "SEO", "ACCESSIBILITY", "BEST_PRACTICES"]


def _category_score(category: Optional[CategorySchema]) -> int:
    score = category.score if category else None
    return round((score or 0) * 100)


def _audit(audits: dict[str, dict], key: str) -> Optional[AuditSchema]:
    raw = audits.get(key)
    if not raw:
        return None
    try:
        return AuditSchema.model_validate(raw)
    except ValidationError as exc:
        logger.warning("[DRIFT-PSI] audit %s has unexpected shape: %s", key, exc)
        return None


def _display_value(audits: dict[str, dict], key: str) -> str:
    audit = _audit(audits, key)
    return (audit.display_value if audit else None) or NOT_AVAILABLE


def _item_node(item: AuditItemSchema) -> Optional[AuditNodeSchema]:
    if item.node is not None:
        return item.node
    for nested in item.items:
        if isinstance(nested, dict) and nested.get("node"):
            return AuditNodeSchema.model_validate(nested["node"])
    return None


def _to_hint(node: Optional[AuditNodeSchema]) -> Optional[DomIssueHint]:
    # boundingRect가 없으면 힌트가 없는 것이지 오류가 아니다.
    if node is None or node.bounding_rect is None:
        return None
    rect = node.bounding_rect
    return DomIssueHint(
        rect=BoundingRect(top=rect.top, left=rect.left, width=rect.width, height=rect.height),
        snippet=node.snippet,
    )


def _hints(audits: dict[str, dict], key: str) -> list[DomIssueHint]:
    audit = _audit(audits, key)
    if audit is None or audit.details is None:
        return []
    hints: list[DomIssueHint] = []
    for item in audit.details.items:
        try:
            hint = _to_hint(_item_node(item))
        except ValidationError as exc:
            logger.warning("[DRIFT-PSI] failed to parse %s element: %s", key, exc)
            continue
        if hint is not None:
            hints.append(hint)
    return hints


def normalize_lab_metrics(payload: dict) -> PerformanceMetrics:
    """
    PageSpeed Insights 응답을 PerformanceMetrics로 정규화한다.
    점수는 score * 100 반올림(없으면 0), 지표는 표시 문자열 그대로(없으면 "N/A").
    """
    response = PageSpeedResponse.model_validate(payload)
    lhr = response.lighthouse_result or LighthouseResultSchema()
    audits = lhr.audits
    categories = lhr.categories
    lcp_hints = _hints(audits, "largest-contentful-paint-element")

    return PerformanceMetrics(
        score=_category_score(categories.performance),
        seo_score=_category_score(categories.seo),
        accessibility_score=_category_score(categories.accessibility),
        best_practices_score=_category_score(categories.best_practices),
        largest_contentful_paint=_display_value(audits, "largest-contentful-paint"),
        interaction_to_next_paint=_display_value(audits, "interaction-to-next-paint"),
        cumulative_layout_shift=_display_value(audits, "cumulative-layout-shift"),
        speed_index=_display_value(audits, "speed-index"),
        first_contentful_paint=_display_value(audits, "first-contentful-paint"),
        time_to_interactive=_display_value(audits, "interactive"),
        max_potential_fid=_display_value(audits, "max-potential-fid"),
        lcp_element=lcp_hints[0] if lcp_hints else None,
        layout_shift_elements=_hints(audits, "layout-shift-elements"),
        final_url=lhr.final_url,
        fetch_time=lhr.fetch_time,
        lighthouse_version=lhr.lighthouse_version,
    )


class PageSpeedClient(LabMetricsPort):
    def __init__(self, settings: PageSpeedSettings, service=None):
        # 주입된 service가 없으면 호출마다 새로 만든다(httplib2 연결은 스레드 간 공유 불가).
        self.settings = settings
        self.service = service

    async def run_audit(self, url: str) -> PerformanceMetrics:
        if not self.settings.api_key:
            raise LabAuditError("GOOGLE_PSI_API_KEY is not configured.")
        payload = await asyncio.to_thread(self._run_pagespeed, url)
        metrics = normalize_lab_metrics(payload)
        logger.info("[DRIFT-PSI] %s performance=%s", url, metrics.score)
        return metrics

    def _run_pagespeed(self, url: str) -> dict:
        service = self.service or build(
            "pagespeedonline",
            "v5",
            developerKey=self.settings.api_key,
            cache_discovery=False,
        )
        try:
            return (
                service.pagespeedapi()
                .runpagespeed(url=url, strategy=self.settings.strategy.upper(), category=AUDIT_CATEGORIES)
                .execute()
            )
        except HttpError as exc:
            raise LabAuditError(f"PageSpeed Insights error: {exc}") from exc
