import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from taskmanager.core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Session DB par requête"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    # Les modèles doivent être importés pour être enregistrés sur Base.metadata
    from taskmanager.models import task, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def close_db():
    engine.dispose()
    logger.info("Database engine disposed")
