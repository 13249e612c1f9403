from typing import Iterable

from drift.domain.action import Action
from drift.domain.delta import Delta

MAX_ACTIONS = 6


def build_actions(deltas: Iterable[Delta], limit: int = MAX_ACTIONS) -> list[Action]:
    """
    심각도(High > Medium > Low) 순으로 정렬해 상위 limit개를 조치 항목으로 만든다.
    같은 심각도끼리는 비교표 순서를 유지한다(sorted는 안정 정렬).
    """
    ranked = sorted(deltas, key=lambda delta: -delta.severity.weight)
    return [
        Action(
            id=f"action-{index:02d}",
            title=f"Review {delta.label} change",
            severity=delta.severity,
            evidence=[
                f"Before: {delta.before}",
                f"After: {delta.after}",
                delta.note or "Observed change",
            ],
        )
        for index, delta in enumerate(ranked[:limit], start=1)
    ]
