from fastapi import APIRouter, Depends

from waman.api.v1.dependencies import get_auth_service, get_current_admin
from waman.db.models.admin_users import AdminUser
from waman.features.authentication.services import AuthService
from waman.features.authentication.schemas import SignInIn, TokenOut, AdminOut

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)

# -----------------------------
# Sign-in
# -----------------------------
@router.post(
    "/sign-in",
    summary="Se connecter au back-office",
    description="Email + mot de passe. Retourne un token de session (bearer).",
    response_model=TokenOut,
    responses={401: {"description": "Identifiants invalides"}},
)
def sign_in(payload: SignInIn, svc: AuthService = Depends(get_auth_service)):
    return svc.sign_in(payload)

# -----------------------------
# Me (admin courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'admin courant",
    response_model=AdminOut,
    responses={401: {"description": "Token invalide ou expiré"}},
)
def me(admin: AdminUser = Depends(get_current_admin)):
    return admin
