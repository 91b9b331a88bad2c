from typing import Generator

from sqlalchemy.orm import Session

from godam.core.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Dependency to get database session.

    The session is closed (and its connection returned to the pool) on
    every exit path, including business-rule rejections and errors.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
