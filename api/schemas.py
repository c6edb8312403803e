"""
users-api/api/schemas.py
Schémas Pydantic pour la validation et la sérialisation
"""

from typing import Any, Optional
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities import User

EMAIL_MAX_LENGTH = 254

# ============================================================================
# UTILISATEURS
# ============================================================================

class UserBase(BaseModel):
    """Champs modifiables d'un utilisateur"""
    username: str = Field(..., min_length=3, max_length=20)
    email: str

    @field_validator("email", mode="before")
    @classmethod
    def check_email_length(cls, value: Any):
        if isinstance(value, str) and len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"value should have at most {EMAIL_MAX_LENGTH} characters")
        return value

    @field_validator("email")
    @classmethod
    def check_email_syntax(cls, value: str) -> str:
        """
        Vérifie la syntaxe de l'adresse sans la réécrire: la valeur stockée
        et renvoyée est exactement celle reçue. La forme "Nom <adresse>" est
        refusée.
        """
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}")
        return value


class UserCreate(UserBase):
    """Schéma pour créer un utilisateur (un éventuel id client est ignoré)"""
    password: str = Field(..., min_length=8)


class UserUpdate(UserBase):
    """Schéma pour mettre à jour un utilisateur

    Seuls username et email sont pris en compte; l'id vient du chemin.
    """


class UserResponse(BaseModel):
    """Schéma pour retourner un utilisateur (jamais de mot de passe)"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls.model_validate(user)

# ============================================================================
# ERREURS
# ============================================================================

class ErrorResponse(BaseModel):
    """Enveloppe commune à toutes les réponses non-2xx"""
    errorType: str
    data: Optional[Any] = None
