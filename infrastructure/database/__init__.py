"""
Infrastructure Database - Configuration et repositories SQLAlchemy
"""

from infrastructure.database.session import SessionLocal, engine, build_engine
from infrastructure.database.models import Base, UserModel
from infrastructure.database.repositories import SQLAlchemyUserRepository

__all__ = [
    "Base",
    "engine",
    "build_engine",
    "SessionLocal",
    "UserModel",
    "SQLAlchemyUserRepository"
]
