from datetime import datetime

from sqlalchemy import JSON, BigInteger, Column, DateTime, Integer, String

from config.database.session import Base

# SQLite(테스트)에서는 BIGINT autoincrement가 동작하지 않으므로 INTEGER로 매핑한다.
SnapshotId = BigInteger().with_variant(Integer, "sqlite")


class DriftSnapshotORM(Base):
    __tablename__ = "drift_snapshots"

    id = Column(SnapshotId, primary_key=True, autoincrement=True)
    domain = Column(String(255), index=True)
    url = Column(String(2048))
    timestamp = Column(DateTime(timezone=True))
    payload = Column(JSON)


class DriftStateORM(Base):
    __tablename__ = "drift_state"

    domain = Column(String(255), primary_key=True)
    latest_snapshot_id = Column(SnapshotId)
    previous_snapshot_id = Column(SnapshotId)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
