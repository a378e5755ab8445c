"""
➡️ But : Traduire une ressource entre sa forme API (camelCase) et sa forme stockage (snake_case).

to_internal : chemin create/update
  1) champs requis copiés tels quels (l'absence remonte comme violation de contrainte en base)
  2) champs optionnels copiés seulement s'ils sont renseignés (chaîne non vide après strip,
     liste pour les champs liste)
  3) défauts de création (active, featured, published, partnerOrder, status) appliqués
     uniquement si apply_defaults=True ; un False / 0 explicite est conservé

to_external : projection inverse, renommages inclus (order -> partnerOrder).

Fonctions pures, sans effet de bord.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from waman.features.resources.descriptors import FieldType, SYSTEM_FIELDS, get_descriptor


def _is_filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def to_internal(kind: Any, external: Mapping[str, Any], *, apply_defaults: bool = True) -> Dict[str, Any]:
    descriptor = get_descriptor(kind)
    internal: Dict[str, Any] = {}

    # identité / horodatages : transmis pour que l'appelant puisse les retirer explicitement
    for ext_name, int_name in SYSTEM_FIELDS:
        if ext_name in external:
            internal[int_name] = external[ext_name]

    for field in descriptor.fields:
        value = external.get(field.external)

        if field.required:
            if field.external in external:
                internal[field.internal] = value
            continue

        if field.default is not None:
            if value is not None:
                internal[field.internal] = value
            elif apply_defaults:
                internal[field.internal] = field.default
            continue

        if field.type is FieldType.LIST:
            if isinstance(value, list):
                internal[field.internal] = list(value)
            continue

        if _is_filled(value):
            internal[field.internal] = value

    return internal


def to_external(kind: Any, internal: Mapping[str, Any]) -> Dict[str, Any]:
    descriptor = get_descriptor(kind)
    external: Dict[str, Any] = {}

    if "id" in internal:
        external["id"] = internal["id"]

    for field in descriptor.fields:
        if field.internal in internal:
            external[field.external] = internal[field.internal]

    for ext_name, int_name in SYSTEM_FIELDS:
        if int_name != "id" and int_name in internal:
            external[ext_name] = internal[int_name]

    return external
