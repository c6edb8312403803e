"""
Modèles SQLAlchemy - Table des utilisateurs
"""

import uuid
from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_user_id() -> str:
    """Identifiant opaque généré côté serveur"""
    return str(uuid.uuid4())


class UserModel(Base):
    """Modèle SQLAlchemy pour les utilisateurs"""
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True, default=generate_user_id)
    username = Column(String(20), unique=True, index=True, nullable=False)
    email = Column(String(254), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    
    # Timestamps
    creation_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    last_modification_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
