from urllib.parse import urlparse


class InvalidTargetError(ValueError):
    """클라이언트 입력(URL/도메인)이 비었거나 형식이 잘못된 경우."""


def normalize_url(raw: str | None) -> str:
    """
    스킴이 없으면 https://를 붙이고 절대 URL인지 검증한다.
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        raise InvalidTargetError("URL is required")
    if not trimmed.lower().startswith(("http://", "https://")):
        trimmed = f"https://{trimmed}"
    try:
        hostname = urlparse(trimmed).hostname
    except ValueError as exc:
        # 닫히지 않은 IPv6 대괄호 등은 urlparse 단계에서 ValueError가 난다.
        raise InvalidTargetError("Invalid URL format.") from exc
    if not hostname or any(ch.isspace() for ch in trimmed):
        raise InvalidTargetError("Invalid URL format.")
    return trimmed


def normalize_domain(raw: str | None) -> str:
    domain = (raw or "").strip().lower()
    if not domain:
        raise InvalidTargetError("Domain is required")
    if domain.startswith("www."):
        domain = domain[len("www."):]
    return domain


def extract_domain(url: str) -> str:
    """스냅샷 저장 키: 소문자 호스트명에서 앞쪽 www.만 제거한다."""
    return normalize_domain(urlparse(url).hostname)


def origin_of(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"
