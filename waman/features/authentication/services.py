import logging
from typing import Optional

from fastapi import HTTPException, status

from waman.db.models.admin_users import AdminUser
from waman.db.repositories.admin_users import AdminUserRepository
from waman.security.password import verify_password, hash_password
from waman.security.tokens import JWTSettings, JWTError, create_access_token, decode_token
from waman.features.authentication.schemas import SignInIn, TokenOut

logger = logging.getLogger("waman.auth")


class AuthService:
    """
    Service d'authentification du back-office : email + mot de passe (bcrypt) -> token de session.
    Ne contient pas d'accès SQL direct et lève des HTTPException propres.
    """

    def __init__(self, *, user_repo: AdminUserRepository, jwt_settings: JWTSettings):
        self.user_repo = user_repo
        self.jwt = jwt_settings

    # ---------- Sign in ----------
    def sign_in(self, payload: SignInIn) -> TokenOut:
        user = self.user_repo.get_by_email(payload.email)
        if not user or not user.is_active or not verify_password(payload.password, user.hashed_password):
            # Ne pas révéler si le compte existe
            logger.info("Rejected sign-in", extra={"email": payload.email})
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        logger.info("Admin signed in", extra={"email": user.email})
        return TokenOut(
            access_token=create_access_token(user_id=user.id, email=user.email, settings=self.jwt),
            token_type="bearer",
            expires_in=int(self.jwt.access_ttl.total_seconds()),
        )

    # ---------- Current admin depuis le token ----------
    def get_current_admin(self, *, access_token: str) -> AdminUser:
        try:
            decoded = decode_token(access_token, self.jwt)
        except JWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

        if decoded.get("typ") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")

        user = self.user_repo.get(int(decoded["sub"]))
        if not user or not user.is_active:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown or inactive admin")
        return user

    # ---------- Création / reset d'un compte (scripts, seed) ----------
    def ensure_admin(self, *, email: str, password: str, name: Optional[str] = None) -> AdminUser:
        """Crée le compte, ou remplace son mot de passe s'il existe déjà."""
        email = email.strip().lower()
        user = self.user_repo.get_by_email(email)
        if user:
            return self.user_repo.update(user, hashed_password=hash_password(password), is_active=True)
        return self.user_repo.create(email=email, hashed_password=hash_password(password), name=name)
