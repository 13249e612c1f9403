"""
두 스냅샷(직전/최신)을 필드 단위로 비교해 의미 있는 변화만 Delta로 만든다.

비교 항목은 고정된 순서로 평가되며, 양쪽 모두 값이 있는 경우에만 비교한다.
한쪽이라도 지표가 없으면 해당 항목은 건너뛴다(가짜 변화를 만들지 않음).
"""
from typing import Callable, NamedTuple, Optional

from drift.domain.delta import Delta, Severity
from drift.domain.metric_parsing import parse_milliseconds, parse_numeric, parse_seconds
from drift.domain.snapshot import Snapshot

NOT_OBSERVED = "NOT OBSERVED"

SCORE_THRESHOLD = 10
LCP_THRESHOLD_S = 0.5
LCP_HIGH_S = 1.0
INP_THRESHOLD_MS = 100
INP_HIGH_MS = 200
CLS_THRESHOLD = 0.05
CLS_HIGH = 0.1
WORD_COUNT_RATIO = 0.3


class _Change(NamedTuple):
    label: str
    severity: Severity
    before: str
    after: str
    note: Optional[str] = None


Comparison = Callable[[Snapshot, Snapshot], Optional[_Change]]


def _or_marker(value: Optional[str]) -> str:
    return value or NOT_OBSERVED


def _diff(before: float, after: float) -> float:
    # 부동소수 오차로 임계값 경계(0.15 - 0.10 등)가 어긋나지 않게 반올림한다.
    return round(after - before, 6)


def _compare_seconds(label: str, before: Optional[str], after: Optional[str]) -> Optional[_Change]:
    prev_s, next_s = parse_seconds(before), parse_seconds(after)
    if prev_s is None or next_s is None:
        return None
    diff = _diff(prev_s, next_s)
    if abs(diff) < LCP_THRESHOLD_S:
        return None
    note = f"Slower by {diff:.2f}s" if diff > 0 else f"Faster by {abs(diff):.2f}s"
    severity = Severity.HIGH if diff >= LCP_HIGH_S else Severity.MEDIUM
    return _Change(label, severity, before, after, note)


def _performance_score(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.performance_metrics and latest.performance_metrics):
        return None
    before = prev.performance_metrics.score
    after = latest.performance_metrics.score
    diff = after - before
    if abs(diff) < SCORE_THRESHOLD:
        return None
    if diff < 0:
        return _Change(
            "Performance Score", Severity.HIGH, f"{before}/100", f"{after}/100", f"Dropped by {abs(diff)} points"
        )
    return _Change("Performance Score", Severity.MEDIUM, f"{before}/100", f"{after}/100", f"Improved by {diff} points")


def _lab_lcp(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.performance_metrics and latest.performance_metrics):
        return None
    return _compare_seconds(
        "LCP (Lab)",
        prev.performance_metrics.largest_contentful_paint,
        latest.performance_metrics.largest_contentful_paint,
    )


def _lab_inp(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.performance_metrics and latest.performance_metrics):
        return None
    before = prev.performance_metrics.interaction_to_next_paint
    after = latest.performance_metrics.interaction_to_next_paint
    prev_ms, next_ms = parse_milliseconds(before), parse_milliseconds(after)
    if prev_ms is None or next_ms is None:
        return None
    diff = _diff(prev_ms, next_ms)
    if abs(diff) < INP_THRESHOLD_MS:
        return None
    note = f"Slower by {round(diff)}ms" if diff > 0 else f"Faster by {round(abs(diff))}ms"
    severity = Severity.HIGH if diff >= INP_HIGH_MS else Severity.MEDIUM
    return _Change("INP (Lab)", severity, before, after, note)


def _lab_cls(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.performance_metrics and latest.performance_metrics):
        return None
    before = prev.performance_metrics.cumulative_layout_shift
    after = latest.performance_metrics.cumulative_layout_shift
    prev_cls, next_cls = parse_numeric(before), parse_numeric(after)
    if prev_cls is None or next_cls is None:
        return None
    diff = _diff(prev_cls, next_cls)
    if abs(diff) < CLS_THRESHOLD:
        return None
    note = f"Worse by {diff:.2f}" if diff > 0 else f"Improved by {abs(diff):.2f}"
    severity = Severity.HIGH if diff >= CLS_HIGH else Severity.MEDIUM
    return _Change("CLS (Lab)", severity, before, after, note)


def _field_lcp(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.field_metrics and latest.field_metrics):
        return None
    return _compare_seconds(
        "LCP (Field p75)",
        prev.field_metrics.largest_contentful_paint,
        latest.field_metrics.largest_contentful_paint,
    )


def _text_change(label: str, severity: Severity, before: Optional[str], after: Optional[str]) -> Optional[_Change]:
    before, after = before or "", after or ""
    if before == after:
        return None
    return _Change(label, severity, _or_marker(before), _or_marker(after))


def _title(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.on_page and latest.on_page):
        return None
    return _text_change("Title Tag", Severity.MEDIUM, prev.on_page.title, latest.on_page.title)


def _meta_description(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.on_page and latest.on_page):
        return None
    return _text_change(
        "Meta Description", Severity.MEDIUM, prev.on_page.meta_description, latest.on_page.meta_description
    )


def _canonical(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.on_page and latest.on_page):
        return None
    return _text_change("Canonical URL", Severity.MEDIUM, prev.on_page.canonical_url, latest.on_page.canonical_url)


def _robots_directive(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.on_page and latest.on_page):
        return None
    return _text_change(
        "Robots Directive", Severity.HIGH, prev.on_page.robots_directive, latest.on_page.robots_directive
    )


def _headings(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.on_page and latest.on_page):
        return None
    return _text_change(
        "H1", Severity.MEDIUM, " | ".join(prev.on_page.headings), " | ".join(latest.on_page.headings)
    )


def _word_count(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.on_page and latest.on_page):
        return None
    before, after = prev.on_page.word_count, latest.on_page.word_count
    if not before or not after:
        return None
    ratio = _diff(before, after) / before
    if abs(ratio) < WORD_COUNT_RATIO:
        return None
    note = f"Increased by {round(ratio * 100)}%" if ratio > 0 else f"Decreased by {round(abs(ratio) * 100)}%"
    return _Change("Word Count", Severity.MEDIUM, str(before), str(after), note)


def _top_keywords(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.on_page and latest.on_page):
        return None
    before = ", ".join(k.term for k in prev.on_page.top_keywords[:3])
    after = ", ".join(k.term for k in latest.on_page.top_keywords[:3])
    if not before or not after or before == after:
        return None
    return _Change("Top Keywords", Severity.MEDIUM, before, after)


def _cta_text(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.on_page and latest.on_page):
        return None
    before = " | ".join(c.text for c in prev.on_page.calls_to_action)
    after = " | ".join(c.text for c in latest.on_page.calls_to_action)
    if before == after:
        return None
    severity = Severity.HIGH if before and not after else Severity.MEDIUM
    return _Change("CTA Text", severity, _or_marker(before), _or_marker(after))


def _sitemaps(prev: Snapshot, latest: Snapshot) -> Optional[_Change]:
    if not (prev.diagnostics and latest.diagnostics):
        return None
    return _text_change(
        "Sitemap URLs",
        Severity.MEDIUM,
        " | ".join(prev.diagnostics.sitemap_urls),
        " | ".join(latest.diagnostics.sitemap_urls),
    )


COMPARISONS: tuple[Comparison, ...] = (
    _performance_score,
    _lab_lcp,
    _lab_inp,
    _lab_cls,
    _field_lcp,
    _title,
    _meta_description,
    _canonical,
    _robots_directive,
    _headings,
    _word_count,
    _top_keywords,
    _cta_text,
    _sitemaps,
)


def compute_deltas(previous: Optional[Snapshot], latest: Optional[Snapshot]) -> list[Delta]:
    if previous is None or latest is None:
        return []
    changes: list[_Change] = []
    for compare in COMPARISONS:
        change = compare(previous, latest)
        if change is not None:
            changes.append(change)
    return [
        Delta(
            id=f"delta-{index:02d}",
            label=change.label,
            severity=change.severity,
            before=change.before,
            after=change.after,
            note=change.note,
        )
        for index, change in enumerate(changes, start=1)
    ]
