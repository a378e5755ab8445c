"""
➡️ But : Proxy d'upload d'images vers le bucket média (S3 compatible).

Le fichier est validé (taille, vrai type MIME), poussé dans le bucket,
et l'URL publique est renvoyée au back-office. Rien n'est stocké en base :
l'URL est ensuite enregistrée dans le champ `image` / `logo` de la ressource.
"""

import logging
from typing import Callable

from fastapi import UploadFile, HTTPException, status

from waman.core.config import settings
from waman.features.media.schemas import UploadOut
from waman.utils.s3 import make_s3_media, public_url, put_image
from waman.utils.images import read_and_validate, build_object_key

logger = logging.getLogger("waman.media")


class MediaService:
    def __init__(self, *, s3_client_factory: Callable[[], object] = make_s3_media):
        self._s3_factory = s3_client_factory
        self.settings = settings

    async def upload(self, file: UploadFile) -> UploadOut:
        raw = await file.read()
        try:
            image = read_and_validate(raw, max_mb=self.settings.MAX_UPLOAD_MB)
        except ValueError as e:
            logger.info("Rejected upload %s: %s", file.filename, e)
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        key = build_object_key(image.ext)
        try:
            put_image(self._s3_factory(), key=key, body=raw, image=image)
        except Exception as e:
            logger.exception("Media upload failed")
            detail = "Upload failed" if self.settings.is_production else f"Upload failed: {e}"
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)

        logger.info("Uploaded %s (%s bytes)", key, image.size)
        return UploadOut(url=public_url(key), key=key, bytes=image.size, mime=image.mime)
