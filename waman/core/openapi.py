"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec
les conventions de l'API (noms de champs, ressources, erreurs).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API du back-office Waman (site vitrine FR/EN).\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Les champs exposés sont en camelCase (`titleFr`, `partnerOrder`...).\n"
            "- Ressources génériques : `partner`, `blog_post`, `project`, `contact`.\n"
            "- Erreurs : `{\"error\": \"...\", \"details\": \"...\"}` (`details` absent en prod).\n"
            "- Les opérations d'écriture exigent un bearer token admin.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
