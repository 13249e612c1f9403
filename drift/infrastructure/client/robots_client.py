import asyncio
import logging
import re

import httpx

from config.settings import DriftSettings
from drift.application.port.site_diagnostics_port import SiteDiagnosticsPort
from drift.domain.snapshot import SiteDiagnostics
from drift.domain.target_url import origin_of

logger = logging.getLogger(__name__)

_SITEMAP_PREFIX = re.compile(r"^sitemap:\s*", re.IGNORECASE)


def extract_sitemap_urls(robots_txt: str) -> list[str]:
    """robots.txt에서 'Sitemap:' 줄을 파일 순서대로 모은다."""
    urls: list[str] = []
    for line in robots_txt.splitlines():
        line = line.strip()
        if not _SITEMAP_PREFIX.match(line):
            continue
        value = _SITEMAP_PREFIX.sub("", line).strip()
        if value:
            urls.append(value)
    return urls


class RobotsClient(SiteDiagnosticsPort):
    def __init__(self, settings: DriftSettings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    async def fetch_site_diagnostics(self, base_url: str) -> SiteDiagnostics:
        robots_url = f"{origin_of(base_url)}/robots.txt"
        timeout = self.settings.robots_timeout_seconds
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                headers={"User-Agent": self.settings.user_agent},
                timeout=timeout,
                transport=self.transport,
            ) as client:
                # httpx timeout은 단계별 한도라서 전체 요청은 wait_for로 한 번 더 묶는다.
                response = await asyncio.wait_for(client.get(robots_url), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("[DRIFT-ROBOTS] %s timed out after %ss", robots_url, timeout)
            return SiteDiagnostics(robots_txt_status=0, fetch_error=f"Timed out after {timeout}s")
        except httpx.HTTPError as exc:
            # 네트워크 실패는 예외 대신 status 0 + 오류 메시지로 기록한다.
            logger.warning("[DRIFT-ROBOTS] %s fetch failed: %s", robots_url, exc)
            return SiteDiagnostics(robots_txt_status=0, fetch_error=str(exc) or exc.__class__.__name__)

        content = response.text
        return SiteDiagnostics(
            robots_txt_status=response.status_code,
            sitemap_urls=extract_sitemap_urls(content) if content else [],
        )
