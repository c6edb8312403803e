"""
Erreurs du domaine utilisateurs.

Toutes les erreurs levées par les repositories sont définies ici.
Elles sont traduites en réponses HTTP par la couche api.
Aucun import de framework.
"""


class UserRepositoryError(Exception):
    """Erreur de base du repository des utilisateurs."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UserNotFoundError(UserRepositoryError):
    """Levée quand l'opération vise un utilisateur inexistant."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"user not found: {user_id}")
        self.user_id = user_id


class UniqueConstraintError(UserRepositoryError):
    """Levée quand le stockage rejette une écriture pour cause d'unicité."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"invalid database constraint: {detail}")
        self.detail = detail
