import logging
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from config.database.session import SessionLocal
from drift.application.port.snapshot_store_port import SnapshotStorePort
from drift.domain.drift_record import DriftRecord
from drift.domain.snapshot import Snapshot
from drift.infrastructure.orm.models import DriftSnapshotORM, DriftStateORM

logger = logging.getLogger(__name__)


class SnapshotStoreImpl(SnapshotStorePort):
    """
    drift_state(latest/previous 포인터) + drift_snapshots(본문) 두 테이블로 구성된 영속 저장소.
    인메모리 저장소와 외부 계약이 동일하다.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    def get(self, domain: str) -> Optional[DriftRecord]:
        with self.session_factory() as db:
            state = db.get(DriftStateORM, domain)
            if state is None:
                return None
            return DriftRecord(
                latest=self._load(db, state.latest_snapshot_id),
                previous=self._load(db, state.previous_snapshot_id),
            )

    def update(self, domain: str, snapshot: Snapshot) -> DriftRecord:
        with self.session_factory() as db:
            try:
                # 같은 도메인의 동시 갱신이 포인터 체인을 깨뜨리지 않도록 상태 행을 잠근다.
                state = db.get(DriftStateORM, domain, with_for_update=True)
                if state is None:
                    state = DriftStateORM(domain=domain)
                    db.add(state)

                row = DriftSnapshotORM(
                    domain=domain,
                    url=snapshot.url,
                    timestamp=snapshot.timestamp,
                    payload=snapshot.to_dict(),
                )
                db.add(row)
                db.flush()

                stale_id = state.previous_snapshot_id
                state.previous_snapshot_id = state.latest_snapshot_id
                state.latest_snapshot_id = row.id
                if stale_id is not None:
                    # 도메인당 최신/직전 두 건만 보존한다.
                    db.query(DriftSnapshotORM).filter(DriftSnapshotORM.id == stale_id).delete()

                previous = self._load(db, state.previous_snapshot_id)
                db.commit()
            except Exception:
                db.rollback()
                raise

        logger.info("[DRIFT-STORE] rotated %s (previous=%s)", domain, previous is not None)
        return DriftRecord(latest=snapshot, previous=previous)

    @staticmethod
    def _load(db: Session, snapshot_id: Optional[int]) -> Optional[Snapshot]:
        if snapshot_id is None:
            return None
        row = db.get(DriftSnapshotORM, snapshot_id)
        if row is None:
            return None
        return Snapshot.from_dict(row.payload)
