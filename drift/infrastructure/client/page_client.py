import asyncio
import logging

import httpx
from bs4 import BeautifulSoup

from config.settings import DriftSettings
from drift.application.port.page_analyzer_port import PageAnalyzerPort, PageFetchError
from drift.domain.snapshot import OnPageObservation
from drift.infrastructure.parser.content_extractor import (
    detect_ctas,
    extract_primary_content,
    extract_top_keywords,
)

logger = logging.getLogger(__name__)


def _meta_content(doc: BeautifulSoup, name: str) -> str:
    tag = doc.select_one(f'meta[name="{name}"]')
    return (tag.get("content") or "").strip() if tag else ""


def parse_on_page(html: str, x_robots_tag: str | None = None) -> OnPageObservation:
    """파싱된 HTML에서 온페이지 관측치(타이틀, 메타, 헤딩, 본문 지표, CTA)를 만든다."""
    doc = BeautifulSoup(html, "lxml")

    canonical = doc.select_one('link[rel~="canonical"]')
    primary_content = extract_primary_content(doc)
    return OnPageObservation(
        title=doc.title.get_text(" ", strip=True) if doc.title else "",
        meta_description=_meta_content(doc, "description"),
        canonical_url=canonical.get("href") if canonical else None,
        meta_robots=_meta_content(doc, "robots") or _meta_content(doc, "googlebot"),
        x_robots_tag=x_robots_tag,
        headings=[h1.get_text(" ", strip=True) for h1 in doc.find_all("h1")],
        h2_count=len(doc.find_all("h2")),
        # 2500자로 잘린 본문 기준 근사치
        word_count=len(primary_content.split()),
        top_keywords=extract_top_keywords(primary_content),
        calls_to_action=detect_ctas(doc),
    )


class PageClient(PageAnalyzerPort):
    def __init__(self, settings: DriftSettings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    async def analyze_page(self, url: str) -> OnPageObservation:
        timeout = self.settings.page_timeout_seconds
        async with httpx.AsyncClient(
            follow_redirects=True,
            headers={"User-Agent": self.settings.user_agent},
            timeout=timeout,
            transport=self.transport,
        ) as client:
            try:
                response = await asyncio.wait_for(client.get(url), timeout=timeout)
            except asyncio.TimeoutError as exc:
                raise PageFetchError(f"Timed out after {timeout}s") from exc

        if not response.is_success:
            raise PageFetchError(f"HTTP {response.status_code}")

        robots_header = response.headers.get_list("x-robots-tag")
        logger.info("[DRIFT-PAGE] fetched %s (%s bytes)", url, len(response.content))
        return parse_on_page(response.text, ", ".join(robots_header) if robots_header else None)
