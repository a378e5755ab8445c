import logging
from typing import Any, Callable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from waman.api.v1.dependencies import get_activity_service, get_current_admin
from waman.core.errors import ValidationError, error_payload
from waman.features.activities.schemas import (
    ActivityIn,
    ActivityUpdateIn,
    ActivityOut,
    ActivityWithParentsOut,
    CategoryTreeOut,
    PublicCategoryOut,
)
from waman.features.activities.services import ActivityService

logger = logging.getLogger("waman.api.activities")

router = APIRouter(tags=["activities"])

# -------- Helpers --------

def _run(operation: Callable[[], Any], *, failure: str):
    try:
        return operation()
    except HTTPException:
        raise
    except ValidationError as exc:
        return JSONResponse(status_code=400, content=error_payload(str(exc)))
    except Exception as exc:
        logger.exception("%s", failure)
        return JSONResponse(status_code=500, content=error_payload(failure, exc))

# -----------------------------
# Admin : activités
# -----------------------------
@router.get(
    "/admin/activities",
    summary="Lister toutes les activités (avec catégorie / sous-catégorie)",
    response_model=List[ActivityWithParentsOut],
)
def list_activities(svc: ActivityService = Depends(get_activity_service)):
    return _run(svc.list_admin, failure="Failed to fetch activities")


@router.post(
    "/admin/activities",
    summary="Créer une activité",
    response_model=ActivityOut,
    dependencies=[Depends(get_current_admin)],
)
def create_activity(payload: ActivityIn, svc: ActivityService = Depends(get_activity_service)):
    return _run(lambda: svc.create(payload), failure="Failed to create activity")


@router.put(
    "/admin/activities",
    summary="Mettre à jour une activité (id dans le corps)",
    response_model=ActivityOut,
    dependencies=[Depends(get_current_admin)],
)
def update_activity(payload: ActivityUpdateIn, svc: ActivityService = Depends(get_activity_service)):
    return _run(lambda: svc.update(payload), failure="Failed to update activity")


@router.delete(
    "/admin/activities",
    summary="Supprimer une activité (?id=)",
    dependencies=[Depends(get_current_admin)],
)
def delete_activity(
    id: Optional[str] = Query(None),
    svc: ActivityService = Depends(get_activity_service),
):
    def _delete():
        svc.delete(id)
        return {"success": True}

    return _run(_delete, failure="Failed to delete activity")

# -----------------------------
# Admin : arbre des catégories
# -----------------------------
@router.get(
    "/admin/activity-categories",
    summary="Catégories avec sous-catégories et activités actives",
    response_model=List[CategoryTreeOut],
)
def list_activity_categories(svc: ActivityService = Depends(get_activity_service)):
    return _run(svc.list_categories_admin, failure="Failed to fetch categories")

# -----------------------------
# Public
# -----------------------------
@router.get(
    "/public/activities",
    summary="Arbre public des activités (éléments actifs uniquement)",
    response_model=List[PublicCategoryOut],
)
def list_public_activities(svc: ActivityService = Depends(get_activity_service)):
    return _run(svc.list_public, failure="Failed to fetch activities")
