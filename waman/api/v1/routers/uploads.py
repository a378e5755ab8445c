from fastapi import APIRouter, Depends, File, UploadFile, status

from waman.api.v1.dependencies import get_current_admin, get_media_service
from waman.features.media.schemas import UploadOut
from waman.features.media.services import MediaService

router = APIRouter(
    prefix="/upload",
    tags=["media"],
)

@router.post(
    "",
    summary="Uploader une image (Back → bucket média)",
    description="Valide le fichier (taille, type réel) et renvoie son URL publique.",
    status_code=status.HTTP_201_CREATED,
    response_model=UploadOut,
    responses={
        400: {"description": "Fichier invalide"},
        401: {"description": "Non authentifié"},
        502: {"description": "Erreur du bucket"},
    },
    dependencies=[Depends(get_current_admin)],
)
async def upload_image(
    file: UploadFile = File(...),
    svc: MediaService = Depends(get_media_service),
):
    return await svc.upload(file)
