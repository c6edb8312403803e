"""
Configuration de la session de base de données SQLAlchemy
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from config import Config

config = Config()


def build_engine(database_url: str, pool_size: int = 10, max_overflow: int = 20) -> Engine:
    """Crée le moteur; le dimensionnement du pool ne vaut que pour un serveur SQL"""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False}
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Vérifie la connexion avant utilisation
        pool_size=pool_size,
        max_overflow=max_overflow
    )


# Créer le moteur de base de données
engine = build_engine(config.database_url, config.db_pool_size, config.db_max_overflow)

# Créer la session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
