from drift.application.port.snapshot_store_port import SnapshotStorePort
from drift.domain.target_url import normalize_domain


class DriftStatusUseCase:
    def __init__(self, store: SnapshotStorePort):
        # 새 수집 없이 저장된 최신/직전 스냅샷 시각만 조회한다.
        self.store = store

    def get_status(self, raw_domain: str | None) -> dict:
        domain = normalize_domain(raw_domain)
        record = self.store.get(domain)
        latest = record.latest if record else None
        previous = record.previous if record else None
        return {
            "domain": domain,
            "latest": latest.timestamp if latest else None,
            "previous": previous.timestamp if previous else None,
        }
