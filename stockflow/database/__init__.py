from stockflow.database.base import Base
from stockflow.database.engine import build_engine, create_schema, engine
from stockflow.database.session import SessionLocal, get_db, transaction_scope

__all__ = [
    "Base",
    "SessionLocal",
    "build_engine",
    "create_schema",
    "engine",
    "get_db",
    "transaction_scope",
]
