from dataclasses import dataclass, field

from drift.domain.delta import Severity


@dataclass(frozen=True)
class Action:
    id: str
    title: str
    severity: Severity
    evidence: list[str] = field(default_factory=list)
