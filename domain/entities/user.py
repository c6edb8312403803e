"""
Entité User - Modèle métier pour les utilisateurs
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """Entité User du domaine (vue publique, sans mot de passe)"""
    id: Optional[str]
    username: str
    email: str


@dataclass
class UserWithPassword:
    """Données de création d'un utilisateur, mot de passe en clair inclus"""
    username: str
    email: str
    password: str

    def __post_init__(self):
        """Validation de l'entité"""
        if not self.password:
            raise ValueError("Password cannot be empty")
