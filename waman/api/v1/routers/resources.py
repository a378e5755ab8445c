import logging
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from waman.api.v1.dependencies import get_current_admin, get_resource_gateway
from waman.core.errors import UnknownResourceKind, ValidationError, error_payload
from waman.features.resources.services import ResourceGateway

logger = logging.getLogger("waman.api.resources")

router = APIRouter(
    prefix="/resources",
    tags=["resources"],
    responses={
        400: {"description": "Kind inconnu ou identifiant manquant"},
        500: {"description": "Erreur de stockage"},
    },
)

# -------- Helpers --------

def _run(operation: Callable[[], Any], *, failure: str, kind: str):
    """Traduit les erreurs du gateway en réponses {error, details?}."""
    try:
        return operation()
    except (UnknownResourceKind, ValidationError) as exc:
        return JSONResponse(status_code=400, content=error_payload(str(exc)))
    except Exception as exc:
        logger.exception("%s", failure, extra={"kind": kind})
        return JSONResponse(status_code=500, content=error_payload(failure, exc))

# -----------------------------
# List
# -----------------------------
@router.get(
    "/{kind}",
    summary="Lister les ressources d'un type (partner, blog_post, project, contact)",
)
def list_resources(
    kind: str,
    gateway: ResourceGateway = Depends(get_resource_gateway),
):
    return _run(lambda: gateway.list(kind), failure="Failed to fetch data", kind=kind)

# -----------------------------
# Create (admin)
# -----------------------------
@router.post(
    "/{kind}",
    summary="Créer une ressource",
    dependencies=[Depends(get_current_admin)],
)
def create_resource(
    kind: str,
    payload: Dict[str, Any] = Body(...),
    gateway: ResourceGateway = Depends(get_resource_gateway),
):
    return _run(lambda: gateway.create(kind, payload), failure="Failed to create item", kind=kind)

# -----------------------------
# Update (admin) : id dans le corps
# -----------------------------
@router.put(
    "/{kind}",
    summary="Mettre à jour une ressource (id dans le corps)",
    dependencies=[Depends(get_current_admin)],
)
def update_resource(
    kind: str,
    payload: Dict[str, Any] = Body(...),
    gateway: ResourceGateway = Depends(get_resource_gateway),
):
    return _run(
        lambda: gateway.update(kind, payload.get("id"), payload),
        failure="Failed to update item",
        kind=kind,
    )

# -----------------------------
# Delete (admin) : ?id=
# -----------------------------
@router.delete(
    "/{kind}",
    summary="Supprimer une ressource (?id=)",
    dependencies=[Depends(get_current_admin)],
)
def delete_resource(
    kind: str,
    id: Optional[str] = Query(None, description="Identifiant numérique"),
    gateway: ResourceGateway = Depends(get_resource_gateway),
):
    def _delete():
        gateway.delete(kind, id)
        return {"success": True}

    return _run(_delete, failure="Failed to delete item", kind=kind)
