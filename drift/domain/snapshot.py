from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class BoundingRect:
    top: float
    left: float
    width: float
    height: float


@dataclass(frozen=True)
class DomIssueHint:
    # 렌더링 문제를 일으킨 요소의 위치와 HTML 조각
    rect: BoundingRect
    snippet: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict) -> "DomIssueHint":
        return cls(rect=BoundingRect(**payload["rect"]), snippet=payload.get("snippet"))


@dataclass(frozen=True)
class PerformanceMetrics:
    score: int
    largest_contentful_paint: str
    interaction_to_next_paint: str
    cumulative_layout_shift: str
    speed_index: str
    first_contentful_paint: str
    time_to_interactive: str
    max_potential_fid: str = "N/A"
    seo_score: Optional[int] = None
    accessibility_score: Optional[int] = None
    best_practices_score: Optional[int] = None
    lcp_element: Optional[DomIssueHint] = None
    layout_shift_elements: list[DomIssueHint] = field(default_factory=list)
    final_url: Optional[str] = None
    fetch_time: Optional[str] = None
    lighthouse_version: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict) -> "PerformanceMetrics":
        values = dict(payload)
        lcp_element = values.pop("lcp_element", None)
        shifts = values.pop("layout_shift_elements", None) or []
        return cls(
            **values,
            lcp_element=DomIssueHint.from_dict(lcp_element) if lcp_element else None,
            layout_shift_elements=[DomIssueHint.from_dict(s) for s in shifts],
        )


@dataclass(frozen=True)
class CollectionPeriod:
    first_date: str
    last_date: str


@dataclass(frozen=True)
class FieldMetrics:
    largest_contentful_paint: Optional[str] = None
    interaction_to_next_paint: Optional[str] = None
    cumulative_layout_shift: Optional[str] = None
    data_source: Optional[str] = None
    collection_period: Optional[CollectionPeriod] = None

    @classmethod
    def from_dict(cls, payload: dict) -> "FieldMetrics":
        values = dict(payload)
        period = values.pop("collection_period", None)
        return cls(**values, collection_period=CollectionPeriod(**period) if period else None)


@dataclass(frozen=True)
class Keyword:
    term: str
    count: int


@dataclass(frozen=True)
class CallToAction:
    text: str
    link: str


@dataclass(frozen=True)
class OnPageObservation:
    title: Optional[str] = None
    meta_description: Optional[str] = None
    canonical_url: Optional[str] = None
    meta_robots: Optional[str] = None
    x_robots_tag: Optional[str] = None
    headings: list[str] = field(default_factory=list)
    h2_count: int = 0
    word_count: int = 0
    top_keywords: list[Keyword] = field(default_factory=list)
    calls_to_action: list[CallToAction] = field(default_factory=list)

    @property
    def robots_directive(self) -> str:
        """meta robots 우선, 없으면 x-robots-tag 헤더 값을 쓴다."""
        return self.meta_robots or self.x_robots_tag or ""

    @classmethod
    def from_dict(cls, payload: dict) -> "OnPageObservation":
        values = dict(payload)
        keywords = values.pop("top_keywords", None) or []
        ctas = values.pop("calls_to_action", None) or []
        return cls(
            **values,
            top_keywords=[Keyword(**k) for k in keywords],
            calls_to_action=[CallToAction(**c) for c in ctas],
        )


@dataclass(frozen=True)
class SiteDiagnostics:
    robots_txt_status: int
    sitemap_urls: list[str] = field(default_factory=list)
    fetch_error: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict) -> "SiteDiagnostics":
        return cls(
            robots_txt_status=payload.get("robots_txt_status", 0),
            sitemap_urls=list(payload.get("sitemap_urls") or []),
            fetch_error=payload.get("fetch_error"),
        )


@dataclass(frozen=True)
class Snapshot:
    """
    한 시점에 관측한 사이트 상태(성능/필드 지표, 온페이지, 진단)의 불변 기록입니다.
    수집에 실패한 섹션은 None으로 남습니다.
    """
    url: str
    domain: str
    timestamp: datetime
    performance_metrics: Optional[PerformanceMetrics] = None
    field_metrics: Optional[FieldMetrics] = None
    on_page: Optional[OnPageObservation] = None
    diagnostics: Optional[SiteDiagnostics] = None

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["timestamp"] = self.timestamp.isoformat()
        return payload

    @classmethod
    def from_dict(cls, payload: dict) -> "Snapshot":
        timestamp = payload["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        perf = payload.get("performance_metrics")
        field_data = payload.get("field_metrics")
        on_page = payload.get("on_page")
        diagnostics = payload.get("diagnostics")
        return cls(
            url=payload["url"],
            domain=payload["domain"],
            timestamp=timestamp,
            performance_metrics=PerformanceMetrics.from_dict(perf) if perf else None,
            field_metrics=FieldMetrics.from_dict(field_data) if field_data else None,
            on_page=OnPageObservation.from_dict(on_page) if on_page else None,
            diagnostics=SiteDiagnostics.from_dict(diagnostics) if diagnostics else None,
        )
