import logging

from fastapi import APIRouter, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from config.settings import CruxSettings, DriftSettings, PageSpeedSettings
from drift.adapter.input.web.request.drift_requests import DriftRunRequest, DriftStatusRequest
from drift.application.port.snapshot_store_port import SnapshotStorePort
from drift.application.usecase.drift_run_usecase import DriftRunUseCase
from drift.application.usecase.drift_status_usecase import DriftStatusUseCase
from drift.domain.target_url import InvalidTargetError
from drift.infrastructure.client.crux_client import CruxClient
from drift.infrastructure.client.page_client import PageClient
from drift.infrastructure.client.pagespeed_client import PageSpeedClient
from drift.infrastructure.client.robots_client import RobotsClient
from drift.infrastructure.repository.in_memory_snapshot_store import InMemorySnapshotStore

logger = logging.getLogger(__name__)

drift_router = APIRouter(tags=["drift"])

# 배포당 하나의 저장소(DRIFT_STORE_BACKEND)를 정해 run/status가 같은 인스턴스를 공유한다.
_store: SnapshotStorePort | None = None
_run_usecase: DriftRunUseCase | None = None


def resolve_snapshot_store(settings: DriftSettings) -> SnapshotStorePort:
    backend = settings.store_backend
    if backend == "memory":
        return InMemorySnapshotStore()
    if backend == "database":
        from drift.infrastructure.repository.snapshot_store_impl import SnapshotStoreImpl

        return SnapshotStoreImpl()
    raise ValueError(f"지원하지 않는 저장소 백엔드입니다: {backend} (memory | database)")


def get_snapshot_store() -> SnapshotStorePort:
    global _store
    if _store is None:
        _store = resolve_snapshot_store(DriftSettings())
    return _store


def get_run_usecase() -> DriftRunUseCase:
    """최초 접근 시 수집기/저장소를 조립한다."""
    global _run_usecase
    if _run_usecase is not None:
        return _run_usecase
    settings = DriftSettings()
    _run_usecase = DriftRunUseCase(
        store=get_snapshot_store(),
        lab_metrics=PageSpeedClient(PageSpeedSettings()),
        field_metrics=CruxClient(CruxSettings()),
        page_analyzer=PageClient(settings),
        site_diagnostics=RobotsClient(settings),
        settings=settings,
    )
    return _run_usecase


def get_status_usecase() -> DriftStatusUseCase:
    return DriftStatusUseCase(get_snapshot_store())


@drift_router.post("/run")
async def run_drift(request: DriftRunRequest):
    """
    URL을 수집해 스냅샷을 갱신하고 직전 스냅샷과의 변화(deltas)와 조치 목록(actions)을 반환한다.
    """
    try:
        result = await get_run_usecase().run(request.url)
    except InvalidTargetError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        logger.exception("[DRIFT-RUN] unexpected failure")
        raise HTTPException(status_code=500, detail=str(exc))
    return JSONResponse(jsonable_encoder(result.to_dict()))


@drift_router.post("/status")
async def get_drift_status(request: DriftStatusRequest):
    """
    새 수집 없이 도메인의 최신/직전 스냅샷 시각을 조회한다.
    """
    try:
        result = get_status_usecase().get_status(request.domain)
    except InvalidTargetError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        logger.exception("[DRIFT-STATUS] unexpected failure")
        raise HTTPException(status_code=500, detail=str(exc))
    return JSONResponse(jsonable_encoder(result))

# Postman 참고:
# 1) 드리프트 실행: POST http://localhost:8000/drift/run     {"url": "example.com"}
# 2) 상태 조회:     POST http://localhost:8000/drift/status  {"domain": "example.com"}
