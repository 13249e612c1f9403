import threading
from typing import Optional

from drift.application.port.snapshot_store_port import SnapshotStorePort
from drift.domain.drift_record import DriftRecord
from drift.domain.snapshot import Snapshot


class InMemorySnapshotStore(SnapshotStorePort):
    """
    프로세스 메모리 저장소. 도메인별 레코드 교체는 락 안에서 한 번에 수행한다.
    보존 정책(TTL/eviction)은 없으므로 도메인 수만큼 메모리가 늘어난다.
    """

    def __init__(self):
        self._records: dict[str, DriftRecord] = {}
        self._lock = threading.Lock()

    def get(self, domain: str) -> Optional[DriftRecord]:
        with self._lock:
            return self._records.get(domain)

    def update(self, domain: str, snapshot: Snapshot) -> DriftRecord:
        with self._lock:
            existing = self._records.get(domain) or DriftRecord()
            updated = existing.rotate(snapshot)
            self._records[domain] = updated
            return updated
