"""
➡️ But : Centraliser tous les paramètres configurables (nom d'app, chemin DB, secrets, média, retry...)

Utilise pydantic-settings pour charger automatiquement les variables d'environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from waman.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from datetime import timedelta
from typing import Optional

from pydantic_settings import BaseSettings
from waman.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Waman CMS API"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = ""  # "https://a.ma,https://b.ma" ; vide = tout autoriser en dev

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "waman.db"  # fichier SQLite
    # Pour Postgres (Supabase, Neon...), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False

    # Retry autour des appels DB (erreurs transitoires de connexion)
    RETRY_MAX_ATTEMPTS: int = 3
    RETRY_BASE_DELAY_SECONDS: float = 0.1

    # -----------------------------
    # JWT / Session admin
    # -----------------------------
    JWT_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    JWT_ISSUER: str = "waman-cms"
    JWT_ALGORITHM: str = "HS256"
    SESSION_TTL_DAYS: int = 30

    # -----------------------------
    # Média (bucket S3 compatible)
    # -----------------------------
    S3_ENDPOINT: str = "http://localhost:9000"
    S3_REGION: str = "us-east-1"
    S3_KEY: str = "minioadmin"
    S3_SECRET: str = "minioadmin"
    S3_BUCKET: str = "waman-media"
    MEDIA_PUBLIC_BASE_URL: Optional[str] = None  # auto depuis S3_ENDPOINT/S3_BUCKET si None
    MAX_UPLOAD_MB: int = 10

    # -----------------------------
    # Seed
    # -----------------------------
    SEED_PATH: str = "waman/db/seed_data.yaml"
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # URL publique des médias : endpoint/bucket en "path style"
        if not self.MEDIA_PUBLIC_BASE_URL:
            base = self.S3_ENDPOINT.rstrip("/")
            object.__setattr__(self, "MEDIA_PUBLIC_BASE_URL", f"{base}/{self.S3_BUCKET}")

    @property
    def is_production(self) -> bool:
        return self.ENV == "prod"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Instance globale importable partout
settings = Settings()

# Objet JWT prêt à l'emploi pour les services
jwt_settings = JWTSettings(
    secret=settings.JWT_SECRET_KEY,
    issuer=settings.JWT_ISSUER,
    algorithm=settings.JWT_ALGORITHM,
    access_ttl=timedelta(days=settings.SESSION_TTL_DAYS),
)
