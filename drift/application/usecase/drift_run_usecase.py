import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, Optional, TypeVar

from config.settings import DriftSettings
from drift.application.port.field_metrics_port import FieldMetricsPort
from drift.application.port.lab_metrics_port import LabMetricsPort
from drift.application.port.page_analyzer_port import PageAnalyzerPort
from drift.application.port.site_diagnostics_port import SiteDiagnosticsPort
from drift.application.port.snapshot_store_port import SnapshotStorePort
from drift.domain.action import Action
from drift.domain.action_ranker import build_actions
from drift.domain.delta import Delta
from drift.domain.delta_engine import compute_deltas
from drift.domain.snapshot import Snapshot
from drift.domain.target_url import extract_domain, normalize_url

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DriftRunResult:
    domain: str
    latest: Optional[Snapshot]
    previous: Optional[Snapshot]
    deltas: list[Delta] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "ok" if self.previous else "baseline"

    def to_dict(self) -> dict:
        return {
            "domain": self.domain,
            "latest": self.latest.to_dict() if self.latest else None,
            "previous": self.previous.to_dict() if self.previous else None,
            "deltas": self.deltas,
            "actions": self.actions,
            "status": self.status,
        }


class DriftRunUseCase:
    def __init__(
        self,
        store: SnapshotStorePort,
        lab_metrics: LabMetricsPort,
        field_metrics: FieldMetricsPort,
        page_analyzer: PageAnalyzerPort,
        site_diagnostics: SiteDiagnosticsPort,
        settings: DriftSettings | None = None,
    ):
        # 한국어 주석: 저장소와 네 개의 수집기를 주입받아 스냅샷 -> 비교 -> 조치 목록까지 한 번에 수행합니다.
        self.store = store
        self.lab_metrics = lab_metrics
        self.field_metrics = field_metrics
        self.page_analyzer = page_analyzer
        self.site_diagnostics = site_diagnostics
        self.settings = settings or DriftSettings()
        # 같은 도메인의 실행은 한 번에 하나만(단일 writer) 진행한다.
        # 락은 대기자가 모두 빠지면 지워지므로 진행 중인 도메인 수만큼만 남는다.
        self._domain_locks: dict[str, asyncio.Lock] = {}
        self._lock_users: Counter[str] = Counter()

    async def run(self, raw_url: str | None) -> DriftRunResult:
        url = normalize_url(raw_url)
        domain = extract_domain(url)

        lock = self._domain_locks.setdefault(domain, asyncio.Lock())
        self._lock_users[domain] += 1
        try:
            async with lock:
                snapshot = await self.collect_snapshot(url, domain)
                record = await asyncio.to_thread(self.store.update, domain, snapshot)
        finally:
            self._lock_users[domain] -= 1
            if not self._lock_users[domain]:
                del self._lock_users[domain]
                del self._domain_locks[domain]

        deltas = compute_deltas(record.previous, record.latest)
        actions = build_actions(deltas)
        logger.info(
            "[DRIFT-RUN] %s | status=%s | deltas=%s | actions=%s",
            domain,
            "ok" if record.previous else "baseline",
            len(deltas),
            len(actions),
        )
        return DriftRunResult(
            domain=domain,
            latest=record.latest,
            previous=record.previous,
            deltas=deltas,
            actions=actions,
        )

    async def collect_snapshot(self, url: str, domain: str) -> Snapshot:
        """
        네 가지 수집(랩 지표, 필드 지표, 온페이지, 사이트 진단)을 동시에 실행한다.
        하나가 실패해도 나머지는 계속되며, 실패한 섹션은 None으로 남는다.
        """
        performance, field_data, on_page, diagnostics = await asyncio.gather(
            self._collect("lab metrics", self.lab_metrics.run_audit(url)),
            self._collect("field metrics", self.field_metrics.fetch_field(url)),
            self._collect("on-page", self.page_analyzer.analyze_page(url)),
            self._collect("site diagnostics", self.site_diagnostics.fetch_site_diagnostics(url)),
        )
        return Snapshot(
            url=url,
            domain=domain,
            timestamp=datetime.now(timezone.utc),
            performance_metrics=performance,
            field_metrics=field_data,
            on_page=on_page,
            diagnostics=diagnostics,
        )

    async def _collect(self, name: str, work: Awaitable[T]) -> Optional[T]:
        try:
            return await asyncio.wait_for(work, timeout=self.settings.run_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("[DRIFT-RUN] %s exceeded %ss budget", name, self.settings.run_timeout_seconds)
            return None
        except Exception as exc:  # 수집기별 실패는 해당 섹션 누락으로만 처리한다.
            logger.warning("[DRIFT-RUN] %s collection failed: %s", name, exc)
            return None
