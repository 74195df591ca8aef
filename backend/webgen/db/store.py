"""
Insert-only record store for generated bundles.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from webgen.db.models import Base, GeneratedBundle
from webgen.db.session import make_engine, make_session_factory
from webgen.ir.bundle import CodeBundle
from webgen.ir.errors import PersistenceError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredBundle:
    id: str
    prompt: str
    bundle: CodeBundle
    created_at: datetime


def _to_record(row: GeneratedBundle) -> StoredBundle:
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset; rows are always written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    return StoredBundle(
        id=row.id,
        prompt=row.prompt,
        bundle=CodeBundle(
            frontend=row.frontend,
            backend=row.backend,
            database=row.database,
        ),
        created_at=created_at,
    )


class BundleStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "BundleStore":
        engine = make_engine(database_url)
        Base.metadata.create_all(bind=engine)
        return cls(make_session_factory(engine))

    def insert(self, prompt: str, bundle: CodeBundle) -> StoredBundle:
        with self._session_factory() as session:
            row = GeneratedBundle(
                prompt=prompt,
                frontend=bundle.frontend,
                backend=bundle.backend,
                database=bundle.database,
            )
            session.add(row)
            try:
                session.commit()
            except (SQLAlchemyError, UnicodeError) as e:
                session.rollback()
                logger.error("[Store] could not save bundle: %s", e)
                raise PersistenceError(str(e)) from e
            record = _to_record(row)

        logger.info("[Store] saved bundle %s", record.id)
        return record

    def get(self, bundle_id: str) -> Optional[StoredBundle]:
        with self._session_factory() as session:
            row = session.get(GeneratedBundle, bundle_id)
            return _to_record(row) if row is not None else None

    def list(self, limit: int = 20) -> List[StoredBundle]:
        with self._session_factory() as session:
            rows = (
                session.query(GeneratedBundle)
                .order_by(GeneratedBundle.created_at.desc())
                .limit(limit)
                .all()
            )
            return [_to_record(r) for r in rows]
