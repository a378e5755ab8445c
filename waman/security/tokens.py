import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict

from jose import jwt, JWTError

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration des tokens de session admin.

    - `secret` : clé secrète pour signer/valider les tokens
    - `issuer` : émetteur (vérifié au décodage)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `access_ttl` : durée de vie de la session (30 jours par défaut)
    """
    secret: str
    issuer: str = "waman-cms"
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(days=30)


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # identifiant admin
    email: str
    typ: str            # "access"
    jti: str
    iat: int
    exp: int


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique pour un token."""
    return str(uuid.uuid4())


# ==========================================================
# 🎟️ Génération
# ==========================================================

def create_access_token(*, user_id: int, email: str, settings: JWTSettings) -> str:
    """Crée le token de session d'un admin."""
    now = _now()
    payload: DecodedToken = {
        "iss": settings.issuer,
        "sub": str(user_id),
        "email": email,
        "typ": "access",
        "jti": new_jti(),
        "iat": int(now.timestamp()),
        "exp": int((now + settings.access_ttl).timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, settings: JWTSettings) -> DecodedToken:
    """
    Décode et valide un token JWT (signature, expiration, émetteur).
    Lève JWTError si invalide.
    """
    decoded = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        options={"verify_aud": False},
    )
    return decoded  # type: ignore[return-value]


__all__ = ["JWTSettings", "DecodedToken", "JWTError", "create_access_token", "decode_token", "new_jti"]
