import os
import urllib.parse

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()

# Uses SQL_* env vars provided (e.g., Supabase): SQL_USER, SQL_PASSWORD, SQL_HOST, SQL_PORT, SQL_DATABASE
# 한국어 주석: DRIFT_STORE_BACKEND=database 일 때 스냅샷 저장소가 사용하는 PostgreSQL 접속 정보입니다.
password = urllib.parse.quote_plus(os.getenv("SQL_PASSWORD", ""))

DATABASE_URL = (
    f"postgresql+psycopg2://{os.getenv('SQL_USER','postgres')}:{password}"
    f"@{os.getenv('SQL_HOST','localhost')}:{os.getenv('SQL_PORT','5432')}/{os.getenv('SQL_DATABASE','site_drift')}"
)

engine = create_engine(
    DATABASE_URL,
    echo=os.getenv("SQL_ECHO", "false").lower() == "true",
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db_schema():
    """
    애플리케이션 기동 시 테이블이 없을 경우를 대비해 스키마를 생성합니다.
    """
    # ORM 모델이 Base.metadata에 등록되도록 먼저 임포트한다.
    import drift.infrastructure.orm.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
