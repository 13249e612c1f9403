from abc import ABC, abstractmethod
from typing import Optional

from drift.domain.snapshot import FieldMetrics


class FieldMetricsPort(ABC):
    @abstractmethod
    async def fetch_field(self, url: str) -> Optional[FieldMetrics]:
        """실패하거나 설정이 없으면 예외 없이 None을 돌려준다."""
        raise NotImplementedError
