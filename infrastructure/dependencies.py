"""
Dépendances FastAPI pour l'injection des repositories
"""

from typing import Generator
from sqlalchemy.orm import Session
from fastapi import Depends

from infrastructure.database.session import SessionLocal
from infrastructure.database.repositories import SQLAlchemyUserRepository
from infrastructure.security.password_hasher import PasswordHasher
from domain.repositories import UserRepository
from config import Config

config = Config()


def get_db() -> Generator[Session, None, None]:
    """Dépendance pour obtenir une session de base de données"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_password_hasher() -> PasswordHasher:
    """Dépendance pour obtenir le PasswordHasher"""
    return PasswordHasher(rounds=config.bcrypt_rounds)


def get_user_repository(
    db: Session = Depends(get_db),
    password_hasher: PasswordHasher = Depends(get_password_hasher)
) -> UserRepository:
    """Dépendance pour obtenir le UserRepository (surchargée dans les tests)"""
    return SQLAlchemyUserRepository(db, password_hasher)
