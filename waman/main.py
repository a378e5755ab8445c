"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l'instance FastAPI (app).

Configure :

logging JSON + log de chaque requête (méthode, chemin, statut, durée)

CORS (le front Next.js appelle ces API)

titre, version, tags, schéma OpenAPI personnalisé

Inclut les routers (ex : /api/v1/resources/partner).

Initialise la base au démarrage (@app.on_event("startup")).

Point unique d'exécution : uvicorn waman.main:app --reload.
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from waman.core.config import settings
from waman.core.logging import setup_logging
from waman.core.openapi import custom_openapi
from waman.db.session import init_db

from waman.api.v1.routers import resources, activities, authentication, uploads

import uvicorn

setup_logging(settings.LOG_LEVEL)
http_log = logging.getLogger("waman.http")

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    openapi_tags=[
        {"name": "resources", "description": "Partenaires, articles, projets, contacts"},
        {"name": "activities", "description": "Taxonomie des activités (admin + public)"},
        {"name": "auth", "description": "Connexion au back-office"},
        {"name": "media", "description": "Upload des images"},
    ],
)

# CORS : origines explicites en prod, tout autoriser en dev
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=bool(settings.cors_origins),
    allow_methods=["*"], allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = None
    try:
        response = await call_next(request)
        return response
    finally:
        http_log.info(
            "request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": getattr(response, "status_code", 500),
                "duration_ms": int((time.perf_counter() - start) * 1000),
                "client_ip": request.client.host if request.client else None,
            },
        )


# Routers
app.include_router(resources.router, prefix="/api/v1")
app.include_router(activities.router, prefix="/api/v1")
app.include_router(authentication.router, prefix="/api/v1")
app.include_router(uploads.router, prefix="/api/v1")

app.openapi = lambda: custom_openapi(app)

# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()

if __name__ == "__main__":
    uvicorn.run("waman.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
