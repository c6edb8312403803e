"""
Interface UserRepository - Définit les opérations d'accès aux données pour User
"""

from abc import ABC, abstractmethod
from typing import List
from domain.entities.user import User, UserWithPassword


class UserRepository(ABC):
    """Interface pour le repository des utilisateurs

    Les implémentations lèvent UserNotFoundError ou UniqueConstraintError
    (domain.errors) pour les cas attendus; toute autre exception est
    considérée comme une erreur interne par l'appelant.
    """
    
    @abstractmethod
    def create_user(self, user: UserWithPassword) -> User:
        """Crée un utilisateur et retourne sa vue publique (id généré)"""
        pass
    
    @abstractmethod
    def update_user(self, user: User) -> User:
        """Met à jour le nom d'utilisateur et l'email de user.id"""
        pass
    
    @abstractmethod
    def delete_user(self, user_id: str) -> None:
        """Supprime définitivement un utilisateur"""
        pass
    
    @abstractmethod
    def get_user(self, user_id: str) -> User:
        """Trouve un utilisateur par son ID"""
        pass
    
    @abstractmethod
    def list_users(self) -> List[User]:
        """Retourne tous les utilisateurs"""
        pass
