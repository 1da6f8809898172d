import logging
from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from sitecms.extensions import db
from sitecms.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def transactional(operation: str):
    """
    Commit on success, roll back on any error.

    Database failures are logged and re-raised as StoreError so callers
    can surface them without knowing about SQLAlchemy.
    """
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Store operation %s failed", operation)
        raise StoreError(f"Could not complete {operation}: {exc.__class__.__name__}") from exc
    except Exception:
        db.session.rollback()
        raise
