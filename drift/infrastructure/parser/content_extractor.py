import copy
import re
from collections import Counter

from bs4 import BeautifulSoup, Tag

from drift.domain.snapshot import CallToAction, Keyword

PRIMARY_SELECTORS = ("main", "article", '[role="main"]', "#content", ".content")
CANDIDATE_NOISE = "nav, footer, script, style, .cookie-banner, .popup"
BODY_NOISE = "nav, footer, script, style"
MIN_PRIMARY_CHARS = 500
MAX_PRIMARY_CHARS = 2500

MAX_CTAS = 5
MAX_CTA_TEXT = 50
INTENT_VERBS = ("buy", "book", "join", "sign", "contact", "subscribe", "get", "start")
BUTTON_CLASS_HINTS = ("btn", "button")

STOP_WORDS = frozenset(
    {
        "the", "and", "for", "with", "that", "this", "you", "your", "are", "was", "were", "from", "have", "has",
        "had", "but", "not", "our", "their", "they", "them", "his", "her", "she", "him", "its", "can", "will",
        "just", "about", "into", "over", "under", "more", "less", "than", "then", "when", "what", "why", "how",
        "who", "where", "which", "a", "an", "to", "of", "in", "on", "at", "by", "or", "as", "is", "it", "be",
        "if", "we", "us", "do", "does", "did",
    }
)

_WHITESPACE = re.compile(r"\s+")
_NON_KEYWORD_CHARS = re.compile(r"[^a-z0-9\s-]")


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _text_without(nodes: list[Tag], noise: str) -> str:
    parts: list[str] = []
    for node in nodes:
        clone = copy.copy(node)
        for junk in clone.select(noise):
            junk.decompose()
        parts.append(clone.get_text(" "))
    return _collapse(" ".join(parts))


def extract_primary_content(doc: BeautifulSoup) -> str:
    """
    본문 후보(main, article, role=main, #content, .content)를 우선순위대로 시도해
    잡음 요소를 제거한 텍스트가 500자를 넘는 첫 후보를 쓴다.
    없으면 body 전체(nav/footer/script/style 제외)로 대체하고, 결과는 2500자로 자른다.
    """
    for selector in PRIMARY_SELECTORS:
        nodes = doc.select(selector)
        if not nodes:
            continue
        content = _text_without(nodes, CANDIDATE_NOISE)
        if len(content) > MIN_PRIMARY_CHARS:
            return content[:MAX_PRIMARY_CHARS]

    body = doc.body or doc
    return _text_without([body], BODY_NOISE)[:MAX_PRIMARY_CHARS]


def extract_top_keywords(text: str, limit: int = 12) -> list[Keyword]:
    cleaned = _NON_KEYWORD_CHARS.sub(" ", text.lower())
    words = [word for word in cleaned.split() if len(word) > 2 and word not in STOP_WORDS]
    # most_common은 동률일 때 처음 등장한 순서를 유지한다.
    return [Keyword(term=term, count=count) for term, count in Counter(words).most_common(limit)]


def detect_ctas(doc: BeautifulSoup) -> list[CallToAction]:
    ctas: list[CallToAction] = []
    for element in doc.select("a, button"):
        text = element.get_text(" ", strip=True)
        link = element.get("href") or ""
        lowered = text.lower()
        classes = element.get("class") or []
        class_attr = " ".join(classes).lower() if isinstance(classes, list) else str(classes).lower()

        is_intent = any(verb in lowered for verb in INTENT_VERBS)
        is_button = any(hint in class_attr for hint in BUTTON_CLASS_HINTS)
        if (is_intent or is_button) and len(text) < MAX_CTA_TEXT and link:
            ctas.append(CallToAction(text=text, link=link))
            if len(ctas) == MAX_CTAS:
                break
    return ctas
