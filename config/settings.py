import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class PageSpeedSettings:
    api_key: str = os.getenv("GOOGLE_PSI_API_KEY", "")
    strategy: str = os.getenv("PSI_STRATEGY", "mobile")


@dataclass
class CruxSettings:
    api_key: str = os.getenv("GOOGLE_CRUX_API_KEY", "")
    form_factor: str = os.getenv("CRUX_FORM_FACTOR", "PHONE")


@dataclass
class KnowledgeGraphSettings:
    # Knowledge Graph 키가 따로 없으면 PSI 키를 함께 사용한다.
    api_key: str = os.getenv("GOOGLE_KG_API_KEY") or os.getenv("GOOGLE_PSI_API_KEY", "")


@dataclass
class DriftSettings:
    user_agent: str = os.getenv("DRIFT_USER_AGENT", "Mozilla/5.0 (compatible; SiteDrift/1.0)")
    page_timeout_seconds: float = float(os.getenv("DRIFT_PAGE_TIMEOUT_SECONDS", "10"))
    robots_timeout_seconds: float = float(os.getenv("DRIFT_ROBOTS_TIMEOUT_SECONDS", "6"))
    run_timeout_seconds: float = float(os.getenv("DRIFT_RUN_TIMEOUT_SECONDS", "120"))
    store_backend: str = os.getenv("DRIFT_STORE_BACKEND", "memory").lower()
