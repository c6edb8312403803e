"""
Mappers - Conversion entre modèles SQLAlchemy et entités de domaine
"""

from infrastructure.database.models import UserModel
from domain.entities import User, UserWithPassword


class UserMapper:
    """Mapper entre UserModel et User"""
    
    @staticmethod
    def to_domain(model: UserModel) -> User:
        """Convertit un UserModel en entité User (sans le hachage)"""
        return User(
            id=model.id,
            username=model.username,
            email=model.email
        )
    
    @staticmethod
    def to_model(user: UserWithPassword, password_hash: str) -> UserModel:
        """Convertit une entité UserWithPassword en UserModel"""
        return UserModel(
            username=user.username,
            email=user.email,
            password_hash=password_hash
        )
