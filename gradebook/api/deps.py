from typing import Generator
from sqlalchemy.orm import Session
from gradebook.core.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped database session.
    Closed automatically once the response has been produced.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
