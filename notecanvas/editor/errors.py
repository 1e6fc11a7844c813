"""Erreurs levées par le client de l'API et remontées à la session."""

from typing import Optional


class ApiError(Exception):
    """Base de toutes les erreurs d'appel à l'API"""

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkOrServerError(ApiError):
    """Requête échouée: transport ou statut inattendu"""


class NotFound(ApiError):
    pass


class AccessDenied(ApiError):
    pass


class AuthenticationError(ApiError):
    """Identifiants ou token invalides, affiché à l'utilisateur"""


class ValidationError(ApiError):
    """Entrée rejetée avant l'envoi (titre vide, nom de dossier vide) ou par le serveur"""
