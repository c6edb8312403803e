"""Fixtures partagées: base SQLite en mémoire et configuration de test."""

import os

# Avant tout import de l'application: pas de PostgreSQL requis pour les tests
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_COLORED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from infrastructure.database.models import Base


@pytest.fixture
def db_engine():
    """Moteur SQLite en mémoire partagé par toutes les connexions du test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()
