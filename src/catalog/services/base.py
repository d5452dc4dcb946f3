import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Service:
    """Base for the record services; holds the session the service runs queries on."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Commit failed: %s", exc)
            raise DatabaseError(context={"error": str(exc)}) from exc
