"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_resource_gateway() : compose session DB + RetryExecutor (pool injecté).

get_current_admin() : vérifie le bearer token avant toute écriture.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à surcharger en test (app.dependency_overrides).
"""

from typing import Optional

from fastapi import Depends, HTTPException, status, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from waman.core.config import settings, jwt_settings
from waman.db.session import ConnectionPool, get_pool, get_session
from waman.db.retry import RetryExecutor
from waman.db.models.admin_users import AdminUser

from waman.db.repositories.admin_users import AdminUserRepository
from waman.features.authentication.services import AuthService

from waman.db.repositories.activities import ActivityRepository, ActivityCategoryRepository
from waman.features.activities.services import ActivityService

from waman.features.resources.services import ResourceGateway
from waman.features.media.services import MediaService


# -----------------------------
# Stockage
# -----------------------------
def get_retry_executor(pool: ConnectionPool = Depends(get_pool)) -> RetryExecutor:
    return RetryExecutor(
        pool.reset_connection,
        max_attempts=settings.RETRY_MAX_ATTEMPTS,
        base_delay=settings.RETRY_BASE_DELAY_SECONDS,
    )


# -----------------------------
# Ressources génériques
# -----------------------------
def get_resource_gateway(
    session: Session = Depends(get_session),
    executor: RetryExecutor = Depends(get_retry_executor),
) -> ResourceGateway:
    return ResourceGateway(session, executor)


# -----------------------------
# Activités
# -----------------------------
def get_activity_service(
    session: Session = Depends(get_session),
    executor: RetryExecutor = Depends(get_retry_executor),
) -> ActivityService:
    return ActivityService(
        repo=ActivityRepository(session),
        category_repo=ActivityCategoryRepository(session),
        executor=executor,
    )


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(user_repo=AdminUserRepository(session), jwt_settings=jwt_settings)


# -----------------------------
# Média
# -----------------------------
def get_media_service() -> MediaService:
    return MediaService()


# -----------------------------
# Authentication data
# -----------------------------
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token_from_bearer(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return credentials.credentials


def get_current_admin(
    access_token: str = Depends(get_access_token_from_bearer),
    auth_svc: AuthService = Depends(get_auth_service),
) -> AdminUser:
    """Garde de toutes les routes d'écriture : exécutée avant le service."""
    return auth_svc.get_current_admin(access_token=access_token)
