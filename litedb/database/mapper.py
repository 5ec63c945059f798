"""Conversion between records and table rows."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from litedb.models.descriptor import EntityDescriptor

T = TypeVar("T", bound=BaseModel)


class EntityMapper(Generic[T]):
    """Binds record fields to columns in both directions."""

    def __init__(self, entity: EntityDescriptor[T]) -> None:
        self.entity = entity

    def to_row(self, record: T) -> dict[str, Any]:
        """Column values for every field of the record."""
        return {fd.name: getattr(record, fd.name) for fd in self.entity.fields}

    def to_insert_row(self, record: T) -> dict[str, Any]:
        """Column values to insert; an unset auto-assigned key is left out."""
        row = self.to_row(record)
        key = self.entity.primary_key
        if key.auto_increment and not self.entity.has_key(record):
            del row[key.name]
        return row

    def to_update_row(self, record: T) -> dict[str, Any]:
        """Column values for every non-key field."""
        return {fd.name: getattr(record, fd.name) for fd in self.entity.value_fields}

    def key_of(self, record: T) -> dict[str, Any]:
        """Equality condition selecting the record's row."""
        key = self.entity.primary_key.name
        return {key: getattr(record, key)}

    def from_row(self, row: dict[str, Any]) -> T:
        """Build a record from a row, ignoring columns the record lacks."""
        values = {name: row[name] for name in self.entity.column_names if name in row}
        return self.entity.record_type.model_validate(values)

    def assign_key(self, record: T, value: int) -> None:
        """Write a storage-generated key back into the caller's record."""
        setattr(record, self.entity.primary_key.name, value)
