"""
Entités du domaine
"""

from domain.entities.user import User, UserWithPassword

__all__ = [
    "User",
    "UserWithPassword"
]
