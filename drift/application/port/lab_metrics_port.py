from abc import ABC, abstractmethod

from drift.domain.snapshot import PerformanceMetrics


class LabAuditError(RuntimeError):
    """성능 감사 API 호출 실패 또는 자격 증명 미설정."""


class LabMetricsPort(ABC):
    @abstractmethod
    async def run_audit(self, url: str) -> PerformanceMetrics:
        raise NotImplementedError
