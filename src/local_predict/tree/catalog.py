"""
Field catalog and input-record name translation.

The catalog maps field ids to their metadata and keeps a reverse name
index so records keyed by field name can be rewritten to the id-keyed
form the tree walk consumes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator

from pydantic import ValidationError

from ..core.errors import ParseError
from ..core.models import FieldModel

logger = logging.getLogger(__name__)

InputRecord = dict[str, Any]


class FieldCatalog(Mapping):
    """Immutable mapping of field id -> FieldModel with a name index."""

    def __init__(self, fields: Mapping[str, FieldModel]):
        self._fields = MappingProxyType(dict(fields))

        ids_by_name: dict[str, str] = {}
        for field_id, field in self._fields.items():
            if field.name in ids_by_name:
                logger.warning(
                    "Field name %r is used by %s and %s; keeping %s for name lookups",
                    field.name, ids_by_name[field.name], field_id, ids_by_name[field.name],
                )
                continue
            ids_by_name[field.name] = field_id
        self._ids_by_name = MappingProxyType(ids_by_name)

    def __getitem__(self, field_id: str) -> FieldModel:
        return self._fields[field_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FieldCatalog({len(self)} fields)"

    def id_for_name(self, name: str) -> str | None:
        """Field id carrying `name`, or None."""
        return self._ids_by_name.get(name)

    def name_for_id(self, field_id: str) -> str | None:
        field = self._fields.get(field_id)
        return field.name if field else None


def build_catalog(fields_document: Any) -> FieldCatalog:
    """
    Build a FieldCatalog from the `fields` section of a model document.

    Args:
        fields_document: Mapping of field id -> {"name": ..., "optype": ...}.
            Extra keys (summaries, column numbers) are ignored.

    Returns:
        FieldCatalog

    Raises:
        ParseError: If the section is not a mapping or an entry is malformed
    """
    if not isinstance(fields_document, Mapping):
        raise ParseError("Model fields must be a mapping of field id to field description")

    fields: dict[str, FieldModel] = {}
    for field_id, description in fields_document.items():
        if not isinstance(description, Mapping):
            raise ParseError(f"Field {field_id} must be a mapping, got {type(description).__name__}")
        try:
            fields[str(field_id)] = FieldModel(
                id=str(field_id),
                name=description.get("name"),
                optype=description.get("optype"),
            )
        except ValidationError as e:
            raise ParseError(f"Invalid description for field {field_id}: {e}") from e

    return FieldCatalog(fields)


def translate_by_field_id(input_by_name: Mapping[str, Any], catalog: FieldCatalog) -> InputRecord:
    """
    Rewrite a record keyed by field name into one keyed by field id.

    Keys that already are field ids pass through unchanged. Keys the
    catalog does not know are dropped.

    A key that is a field id is always read as that id, even when another
    field is named with the same string. Translating such a record back
    with `translate_by_name` therefore returns the id's own field name.
    """
    record: InputRecord = {}
    for key, value in input_by_name.items():
        if key in catalog:
            record[key] = value
            continue
        field_id = catalog.id_for_name(key)
        if field_id is None:
            logger.debug("Dropping unknown input field %r", key)
            continue
        record[field_id] = value
    return record


def translate_by_name(input_by_id: Mapping[str, Any], catalog: FieldCatalog) -> dict[str, Any]:
    """Rewrite an id-keyed record to be keyed by field name, dropping unknown ids."""
    by_name: dict[str, Any] = {}
    for field_id, value in input_by_id.items():
        name = catalog.name_for_id(field_id)
        if name is None:
            logger.debug("Dropping unknown field id %r", field_id)
            continue
        by_name[name] = value
    return by_name
