"""
Core Errors.

Rôle :
- Définit la taxonomie des erreurs applicatives (kind inconnu, validation, introuvable, stockage).
- Standardise le payload d'erreur renvoyé par l'API : {"error": "...", "details": "..."}.
  `details` n'est jamais exposé en production (pas de fuite de messages internes).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from waman.core.config import settings


class WamanError(Exception):
    """Base de toutes les erreurs applicatives."""


class UnknownResourceKind(WamanError):
    """Le kind demandé ne fait pas partie de l'ensemble fermé des ressources."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Invalid resource: {kind}")


class ValidationError(WamanError):
    """Requête mal formée (ex : identifiant manquant), détectée avant tout accès au stockage."""


class NotFoundError(WamanError):
    """Aucune ligne pour l'identifiant donné (signalé par le repository)."""

    def __init__(self, model: str, record_id: Any):
        self.model = model
        self.record_id = record_id
        super().__init__(f"{model} {record_id} not found")


class TransientStorageError(WamanError):
    """Erreur de connexion / prepared statement, récupérable par retry."""


class FatalStorageError(WamanError):
    """Toute autre erreur de stockage : jamais retentée."""


def error_payload(message: str, exc: Optional[BaseException] = None) -> Dict[str, Any]:
    """Construit le payload d'erreur homogène de l'API."""
    payload: Dict[str, Any] = {"error": message}
    if exc is not None and not settings.is_production:
        payload["details"] = str(exc)
    return payload
