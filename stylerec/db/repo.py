# =============================================
# File: stylerec/db/repo.py
# Purpose: Engine bootstrap for the SQL store backend and table creation.
# =============================================

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from stylerec.db import models  # noqa: F401  (registers tables on the metadata)

def make_engine(db_url: str = "sqlite:///./app.db"):
    # In-memory SQLite must share one connection or every session sees an empty DB
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False, connect_args={"check_same_thread": False})
    return create_engine(db_url, echo=False)

def init_db(engine) -> None:
    SQLModel.metadata.create_all(engine)
