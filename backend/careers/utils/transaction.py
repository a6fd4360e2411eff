from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from careers.extensions import db
from careers.domain.invariants.exceptions import PersistenceError


@contextmanager
def transactional(description: str = "database write"):
    """
    Context manager for database transactions.

    Store failures are rolled back and re-raised as PersistenceError;
    domain exceptions are rolled back and propagate unchanged.
    """
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise PersistenceError(f"Failed to {description}") from exc
    except Exception:
        db.session.rollback()
        raise
