from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def weight(self) -> int:
        return {"High": 3, "Medium": 2, "Low": 1}[self.value]


@dataclass(frozen=True)
class Delta:
    id: str
    label: str
    severity: Severity
    before: str
    after: str
    note: Optional[str] = None
