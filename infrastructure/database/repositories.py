"""
Implémentations des repositories SQLAlchemy
"""

import logging
from typing import List, NoReturn

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from domain.entities import User, UserWithPassword
from domain.errors import UserNotFoundError, UserRepositoryError
from domain.repositories import UserRepository
from infrastructure.database.errors import translate_integrity_error
from infrastructure.database.mappers import UserMapper
from infrastructure.database.models import UserModel
from infrastructure.security.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(UserRepository):
    """Implémentation SQLAlchemy du UserRepository

    Chaque écriture est une seule instruction suivie d'un commit; l'unicité
    est garantie par les contraintes de la table, pas par l'application.
    """

    def __init__(self, session: Session, password_hasher: PasswordHasher):
        self.session = session
        self.password_hasher = password_hasher

    def _raise_write_error(self, exc: SQLAlchemyError, action: str) -> NoReturn:
        """Rollback puis relève l'erreur, traduite si c'est une violation d'unicité"""
        self.session.rollback()
        if isinstance(exc, IntegrityError):
            error = translate_integrity_error(exc)
            if error is not exc:
                logger.warning(f"Unique constraint rejected {action}: {error.detail}")
                raise error from exc
        raise exc

    def create_user(self, user: UserWithPassword) -> User:
        """Insère l'utilisateur; l'id est généré côté serveur"""
        password_hash = self.password_hasher.hash(user.password)
        model = UserMapper.to_model(user, password_hash)
        self.session.add(model)
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self._raise_write_error(e, "user creation")

        self.session.refresh(model)
        logger.info(f"✅ User '{model.username}' created ({model.id})")
        return UserMapper.to_domain(model)

    def update_user(self, user: User) -> User:
        """Met à jour username/email; zéro ligne affectée signifie utilisateur absent"""
        try:
            rows = (
                self.session.query(UserModel)
                .filter(UserModel.id == user.id)
                .update(
                    {
                        UserModel.username: user.username,
                        UserModel.email: user.email,
                        UserModel.last_modification_date: func.now(),
                    },
                    synchronize_session=False
                )
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self._raise_write_error(e, "user update")

        if rows == 0:
            raise UserNotFoundError(user.id)

        logger.info(f"User {user.id} updated")
        return user

    def delete_user(self, user_id: str) -> None:
        """Supprime un utilisateur"""
        try:
            rows = (
                self.session.query(UserModel)
                .filter(UserModel.id == user_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self._raise_write_error(e, "user deletion")

        if rows == 0:
            raise UserNotFoundError(user_id)

        logger.info(f"User {user_id} deleted")

    def get_user(self, user_id: str) -> User:
        """Trouve un utilisateur par son ID"""
        try:
            model = self.session.query(UserModel).filter(UserModel.id == user_id).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise UserRepositoryError(f"could not fetch user: {e}") from e

        if model is None:
            raise UserNotFoundError(user_id)
        return UserMapper.to_domain(model)

    def list_users(self) -> List[User]:
        """Retourne tous les utilisateurs"""
        try:
            models = (
                self.session.query(UserModel)
                .order_by(UserModel.creation_date, UserModel.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise UserRepositoryError(f"couldn't list users: {e}") from e

        return [UserMapper.to_domain(model) for model in models]
