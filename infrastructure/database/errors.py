"""
Traduction des erreurs du driver SQL en erreurs du domaine.

Seul endroit qui connaît les signatures propres à chaque moteur: le reste
de l'application ne voit que domain.errors.
"""

from typing import Union

from sqlalchemy.exc import IntegrityError

from domain.errors import UniqueConstraintError

# SQLSTATE PostgreSQL unique_violation
PG_UNIQUE_VIOLATION = "23505"
SQLITE_UNIQUE_MESSAGE = "UNIQUE constraint failed"


def _sqlstate(orig) -> str:
    # psycopg2 expose pgcode, psycopg 3 expose sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None) or ""


def _pg_detail(orig) -> str:
    diag = getattr(orig, "diag", None)
    detail = getattr(diag, "message_detail", None) if diag is not None else None
    return detail or str(orig).strip()


def translate_integrity_error(exc: IntegrityError) -> Union[UniqueConstraintError, IntegrityError]:
    """Retourne UniqueConstraintError pour une violation d'unicité, sinon exc inchangée"""
    orig = exc.orig

    if _sqlstate(orig) == PG_UNIQUE_VIOLATION:
        return UniqueConstraintError(_pg_detail(orig))

    message = str(orig)
    if SQLITE_UNIQUE_MESSAGE in message:
        return UniqueConstraintError(message)

    return exc
