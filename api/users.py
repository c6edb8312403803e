"""
users-api/api/users.py
Endpoints de la ressource utilisateurs (montés sous /users)

La validation est faite ici, avant tout appel au repository. Les erreurs
UserNotFoundError et UniqueConstraintError sont traduites explicitement;
toute autre erreur du repository devient un 500 générique journalisé.
"""

import logging
from http import HTTPStatus
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.errors import (
    internal_error_response, not_found_response, unique_constraint_response
)
from api.schemas import ErrorResponse, UserCreate, UserResponse, UserUpdate
from domain.entities import User, UserWithPassword
from domain.errors import UniqueConstraintError, UserNotFoundError
from domain.repositories import UserRepository
from infrastructure.dependencies import get_user_repository

logger = logging.getLogger(__name__)


def _canonical_id(raw_id: str) -> str:
    """Forme canonique d'un UUID; un id mal formé est gardé tel quel (aucune ligne ne correspondra)"""
    try:
        return str(UUID(raw_id))
    except ValueError:
        return raw_id


router = APIRouter(
    tags=["Users"],
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    }
)


@router.get("/", response_model=List[UserResponse])
def list_users(repository: UserRepository = Depends(get_user_repository)):
    """Liste tous les utilisateurs"""
    try:
        users = repository.list_users()
    except Exception as e:
        return internal_error_response("listing users", e)
    return [UserResponse.from_user(user) for user in users]


@router.post(
    "/",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        HTTPStatus.UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
    }
)
def create_user(
    user_in: UserCreate,
    repository: UserRepository = Depends(get_user_repository)
):
    """
    Crée un utilisateur. L'id est toujours généré côté serveur et le mot de
    passe n'est jamais renvoyé.
    """
    credentials = UserWithPassword(
        username=user_in.username,
        email=user_in.email,
        password=user_in.password
    )
    try:
        user = repository.create_user(credentials)
    except UniqueConstraintError as e:
        logger.info(f"Rejected duplicate user '{user_in.username}'")
        return unique_constraint_response(e)
    except Exception as e:
        return internal_error_response("creating user", e)
    return UserResponse.from_user(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        HTTPStatus.UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
    }
)
def get_user(
    user_id: UUID,
    repository: UserRepository = Depends(get_user_repository)
):
    """Récupère un utilisateur par son id (UUID)"""
    try:
        user = repository.get_user(str(user_id))
    except UserNotFoundError:
        return not_found_response()
    except Exception as e:
        return internal_error_response("fetching user", e)
    return UserResponse.from_user(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        HTTPStatus.UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
    }
)
def update_user(
    user_id: UUID,
    user_in: UserUpdate,
    repository: UserRepository = Depends(get_user_repository)
):
    """
    Met à jour username et email. L'id du chemin l'emporte sur tout id
    présent dans le corps.
    """
    user = User(id=str(user_id), username=user_in.username, email=user_in.email)
    try:
        user = repository.update_user(user)
    except UserNotFoundError:
        return not_found_response()
    except UniqueConstraintError as e:
        return unique_constraint_response(e)
    except Exception as e:
        return internal_error_response("updating user", e)
    return UserResponse.from_user(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    }
)
def delete_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository)
):
    """Supprime un utilisateur; un id inconnu (ou non UUID) donne un 404"""
    try:
        repository.delete_user(_canonical_id(user_id))
    except UserNotFoundError:
        return not_found_response()
    except Exception as e:
        return internal_error_response("deleting user", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
