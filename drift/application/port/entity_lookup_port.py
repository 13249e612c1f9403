from abc import ABC, abstractmethod
from typing import Optional

from drift.domain.entity_match import EntityMatch


class EntityLookupPort(ABC):
    @abstractmethod
    def lookup(self, query: str) -> Optional[EntityMatch]:
        raise NotImplementedError
