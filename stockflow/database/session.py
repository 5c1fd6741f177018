from contextlib import contextmanager

from sqlalchemy.orm import Session, sessionmaker

from stockflow.database.engine import engine

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction_scope(db: Session):
    """Commit on clean exit; roll everything back if the block raises."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
