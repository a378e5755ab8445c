"""
➡️ But : Le "gateway" CRUD des ressources génériques (partner, blog_post, project, contact).

Pour un kind donné, compose :
  mapper (to_internal / to_external) + RetryExecutor + repository (driver de stockage).

Seuls les appels au repository passent par le RetryExecutor ; le mapping est pur
et n'est jamais retenté.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from sqlmodel import Session, SQLModel

from waman.core.errors import ValidationError
from waman.db.models.base import utcnow
from waman.db.repositories.base import BaseRepository
from waman.db.retry import RetryExecutor
from waman.features.resources.descriptors import ResourceDescriptor, get_descriptor
from waman.features.resources.mappers import to_external, to_internal

logger = logging.getLogger("waman.resources")


def parse_record_id(value: Any, operation: str) -> int:
    """Identifiant numérique obligatoire pour update / delete."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"ID is required for {operation}")
    if isinstance(value, bool):
        raise ValidationError("ID must be numeric")
    if isinstance(value, int):
        id_ = value
    else:
        try:
            id_ = int(str(value).strip())
        except ValueError:
            raise ValidationError("ID must be numeric") from None
    # 0 n'est jamais attribué par la base : traité comme absent
    if id_ == 0:
        raise ValidationError(f"ID is required for {operation}")
    return id_


def _strip_empty(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None and v != ""}


def _row_to_internal(row: SQLModel) -> Dict[str, Any]:
    # colonnes NULL -> champ absent
    return row.model_dump(exclude_none=True)


class ResourceGateway:
    """
    - list(kind)                 : liste ordonnée et plafonnée, jamais None
    - create(kind, record)       : défauts de création, id attribué par la base
    - update(kind, id, patch)    : seuls les champs fournis ; id / created_at jamais écrits
    - delete(kind, id)           : suppression définitive
    """

    def __init__(self, session: Session, executor: RetryExecutor):
        self.session = session
        self.executor = executor

    def _repository(self, descriptor: ResourceDescriptor) -> BaseRepository:
        return descriptor.repository(self.session)

    # -------- Reads --------

    def list(self, kind: Any) -> List[Dict[str, Any]]:
        descriptor = get_descriptor(kind)
        repo = self._repository(descriptor)

        rows = self.executor.execute(
            lambda: repo.find_many(
                order_by=descriptor.order_by,
                descending=descriptor.descending,
                limit=descriptor.list_limit,
            )
        )
        logger.info(
            "Fetched %s records", len(rows), extra={"kind": descriptor.kind.value}
        )
        return [to_external(descriptor.kind, _row_to_internal(row)) for row in rows]

    # -------- Writes --------

    def create(self, kind: Any, record: Mapping[str, Any]) -> Dict[str, Any]:
        descriptor = get_descriptor(kind)
        data = to_internal(descriptor.kind, record, apply_defaults=True)
        # identité et horodatages attribués par la base
        for key in ("id", "created_at", "updated_at"):
            data.pop(key, None)
        data = _strip_empty(data)

        repo = self._repository(descriptor)
        created = self.executor.execute(lambda: repo.create(**data))
        logger.info("Created record", extra={"kind": descriptor.kind.value, "record_id": created.id})
        return to_external(descriptor.kind, _row_to_internal(created))

    def update(self, kind: Any, record_id: Any, patch: Mapping[str, Any]) -> Dict[str, Any]:
        descriptor = get_descriptor(kind)
        id_ = parse_record_id(record_id, "update")

        data = to_internal(descriptor.kind, patch, apply_defaults=False)
        data.pop("id", None)
        data.pop("created_at", None)
        data.pop("updated_at", None)
        data = _strip_empty(data)
        data["updated_at"] = utcnow()

        repo = self._repository(descriptor)
        updated = self.executor.execute(lambda: repo.update_by_id(id_, **data))
        logger.info("Updated record", extra={"kind": descriptor.kind.value, "record_id": id_})
        return to_external(descriptor.kind, _row_to_internal(updated))

    def delete(self, kind: Any, record_id: Any) -> None:
        descriptor = get_descriptor(kind)
        id_ = parse_record_id(record_id, "delete")

        repo = self._repository(descriptor)
        self.executor.execute(lambda: repo.delete_by_id(id_))
        logger.info("Deleted record", extra={"kind": descriptor.kind.value, "record_id": id_})
