from abc import ABC, abstractmethod
from typing import Optional

from drift.domain.drift_record import DriftRecord
from drift.domain.snapshot import Snapshot


class SnapshotStorePort(ABC):
    """
    도메인 -> DriftRecord 매핑을 관리하는 유일한 저장소.
    도메인 키는 호출 측에서 소문자화/www. 제거를 마친 값이어야 한다.
    """

    @abstractmethod
    def get(self, domain: str) -> Optional[DriftRecord]:
        raise NotImplementedError

    @abstractmethod
    def update(self, domain: str, snapshot: Snapshot) -> DriftRecord:
        """latest를 previous로 옮기고 snapshot을 latest로 두는 작업을 원자적으로 수행한다."""
        raise NotImplementedError
