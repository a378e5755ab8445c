import hashlib
import datetime
from typing import NamedTuple
from uuid import uuid4

import filetype

ALLOWED_MIME = {"image/jpeg", "image/png", "image/webp", "image/avif", "image/gif"}


class ValidatedImage(NamedTuple):
    mime: str      # type réel, détecté sur les octets
    ext: str       # avec le point (".png")
    size: int      # octets
    sha256: str


def read_and_validate(file_bytes: bytes, *, max_mb: int) -> ValidatedImage:
    """
    Vérifie la taille puis le vrai type du fichier (le content-type déclaré par le client est ignoré).
    Lève ValueError si invalide.
    """
    size = len(file_bytes)
    if size == 0 or size > max_mb * 1024 * 1024:
        raise ValueError(f"Taille invalide (max {max_mb} MB)")

    kind = filetype.guess(file_bytes)
    if kind is None or kind.mime not in ALLOWED_MIME:
        detected = kind.mime if kind else "application/octet-stream"
        raise ValueError(f"Type non autorisé: {detected}")

    return ValidatedImage(
        mime=kind.mime,
        ext=f".{kind.extension}",
        size=size,
        sha256=hashlib.sha256(file_bytes).hexdigest(),
    )


def build_object_key(ext: str) -> str:
    """uploads/<date du jour>/<uuid><ext> : jamais le nom de fichier du client."""
    return f"uploads/{datetime.date.today().isoformat()}/{uuid4().hex}{ext}"
