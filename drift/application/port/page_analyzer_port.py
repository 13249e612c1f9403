from abc import ABC, abstractmethod

from drift.domain.snapshot import OnPageObservation


class PageFetchError(RuntimeError):
    """대상 페이지가 2xx 이외의 응답을 준 경우."""


class PageAnalyzerPort(ABC):
    @abstractmethod
    async def analyze_page(self, url: str) -> OnPageObservation:
        raise NotImplementedError
