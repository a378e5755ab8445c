import io

import boto3
from botocore.client import Config as BotoConfig

from waman.core.config import settings
from waman.utils.images import ValidatedImage

# images immuables (clé unique par upload)
_CACHE_CONTROL = "public, max-age=31536000, immutable"


def make_s3_client(endpoint_url: str):
    cfg = BotoConfig(
        signature_version="s3v4",
        s3={"addressing_style": "path"},
    )
    return boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        region_name=settings.S3_REGION,
        aws_access_key_id=settings.S3_KEY,
        aws_secret_access_key=settings.S3_SECRET,
        config=cfg,
        use_ssl=endpoint_url.startswith("https"),
    )


def make_s3_media():
    return make_s3_client(settings.S3_ENDPOINT)


def put_image(s3, *, key: str, body: bytes, image: ValidatedImage) -> None:
    """Pousse l'image dans le bucket média (type réel + empreinte en métadonnées)."""
    s3.upload_fileobj(
        Fileobj=io.BytesIO(body),
        Bucket=settings.S3_BUCKET,
        Key=key,
        ExtraArgs={
            "ContentType": image.mime,
            "CacheControl": _CACHE_CONTROL,
            "Metadata": {"sha256": image.sha256},
        },
    )


def public_url(key: str) -> str:
    return f"{settings.MEDIA_PUBLIC_BASE_URL.rstrip('/')}/{key}"
