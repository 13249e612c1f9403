import logging

from fastapi import APIRouter, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from config.settings import KnowledgeGraphSettings
from drift.adapter.input.web.request.drift_requests import AuthorityRequest
from drift.application.usecase.authority_usecase import AuthorityUseCase
from drift.infrastructure.client.knowledge_graph_client import KnowledgeGraphClient

logger = logging.getLogger(__name__)

authority_router = APIRouter(tags=["authority"])


def get_authority_usecase() -> AuthorityUseCase:
    return AuthorityUseCase(KnowledgeGraphClient(KnowledgeGraphSettings()))


@authority_router.post("")
async def check_authority(request: AuthorityRequest):
    """
    엔티티 검색(Knowledge Graph)으로 브랜드 권위도를 확인한다. 핵심 드리프트 흐름과는 별개 기능.
    """
    query = (request.query or "").strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query is required")
    try:
        result = get_authority_usecase().check(query)
    except Exception:
        logger.exception("[AUTHORITY] lookup failed")
        raise HTTPException(status_code=500, detail="Failed to fetch authority data")
    return JSONResponse(jsonable_encoder(result))
