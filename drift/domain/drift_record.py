from dataclasses import dataclass
from typing import Optional

from drift.domain.snapshot import Snapshot


@dataclass(frozen=True)
class DriftRecord:
    # 도메인별로 최신/직전 스냅샷 두 개만 유지한다.
    latest: Optional[Snapshot] = None
    previous: Optional[Snapshot] = None

    def rotate(self, snapshot: Snapshot) -> "DriftRecord":
        """기존 latest를 previous로 밀어내고 새 스냅샷을 latest로 둔 레코드를 만든다."""
        return DriftRecord(latest=snapshot, previous=self.latest)
