from abc import ABC, abstractmethod

from drift.domain.snapshot import SiteDiagnostics


class SiteDiagnosticsPort(ABC):
    @abstractmethod
    async def fetch_site_diagnostics(self, base_url: str) -> SiteDiagnostics:
        raise NotImplementedError
