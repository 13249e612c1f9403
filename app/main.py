import os
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.logging_config import configure_logging
from config.settings import DriftSettings
from drift.adapter.input.web.authority_router import authority_router
from drift.adapter.input.web.drift_router import drift_router

load_dotenv()
configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan 훅. database 저장소를 쓸 때만 스키마를 준비한다.
    """
    if DriftSettings().store_backend == "database":
        # DB 스키마 미존재 시 자동 생성하여 UndefinedTable 오류를 예방합니다.
        from config.database.session import init_db_schema

        init_db_schema()
    yield


app = FastAPI(title="Site Drift Server", version="0.1.0", lifespan=lifespan)

origins_env = os.getenv("CORS_ORIGINS")
origins = [origin for origin in origins_env.split(",") if origin] if origins_env else ["http://localhost:3000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(drift_router, prefix="/drift")
app.include_router(authority_router, prefix="/authority")


@app.get("/health")
def health_check() -> dict[str, str]:
    """
    헬스체크 엔드포인트입니다.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("APP_HOST", "0.0.0.0")
    port = int(os.getenv("APP_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)
