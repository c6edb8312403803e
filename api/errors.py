"""
users-api/api/errors.py
Encodage des erreurs en réponses HTTP.

Toute réponse non-2xx a la forme {"errorType": str, "data"?: any}.
Aucun détail interne (trace, message du driver) n'est envoyé au client
pour les erreurs 500.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.schemas import ErrorResponse
from domain.errors import UniqueConstraintError

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "ValidationError"
UNIQUE_CONSTRAINT = "UniqueConstraint"

# Emplacements FastAPI qui ne font pas partie du nom du champ
_LOCATION_PREFIXES = {"body", "path", "query", "header", "cookie"}

# Erreurs qui signifient que le corps n'a pas pu être décodé en objet JSON
_DECODE_ERROR_TYPES = {"json_invalid", "missing", "model_type", "model_attributes_type", "dict_type"}


def error_response(status_code: int, error_type: Optional[str] = None, data: Any = None,
                   headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Construit l'enveloppe d'erreur; errorType par défaut = libellé du statut"""
    body = ErrorResponse(
        errorType=error_type or HTTPStatus(status_code).phrase,
        data=data
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers
    )


def format_validation_errors(errors: Iterable[dict]) -> List[str]:
    """Transforme les erreurs pydantic en messages lisibles "champ: message" """
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        field = ".".join(loc) or "body"
        messages.append(f"{field}: {error.get('msg')}")
    return messages


def is_decode_error(errors: Iterable[dict]) -> bool:
    """Vrai si le corps lui-même (et non un champ) est invalide"""
    for error in errors:
        if error.get("type") == "json_invalid":
            return True
        if tuple(error.get("loc", ())) == ("body",) and error.get("type") in _DECODE_ERROR_TYPES:
            return True
    return False


def validation_error_response(messages: List[str]) -> JSONResponse:
    return error_response(HTTPStatus.UNPROCESSABLE_ENTITY, VALIDATION_ERROR, messages)


def unique_constraint_response(exc: UniqueConstraintError) -> JSONResponse:
    return error_response(HTTPStatus.UNPROCESSABLE_ENTITY, UNIQUE_CONSTRAINT, str(exc))


def not_found_response() -> JSONResponse:
    return error_response(HTTPStatus.NOT_FOUND)


def internal_error_response(action: str, exc: Exception) -> JSONResponse:
    """Journalise l'erreur complète côté serveur et renvoie un 500 générique"""
    logger.error(f"❌ Error while {action}: {exc}", exc_info=exc)
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers qui ramènent les erreurs du framework à l'enveloppe commune."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if is_decode_error(errors):
            logger.info("Request body could not be decoded")
            return error_response(HTTPStatus.BAD_REQUEST)
        return validation_error_response(format_validation_errors(errors))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, headers=getattr(exc, "headers", None))
