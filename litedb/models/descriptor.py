"""Entity descriptors: the storage shape of a record type."""

import functools
import types
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel

from litedb.exceptions import SchemaError
from litedb.types import StorageType

T = TypeVar("T", bound=BaseModel)

PYTHON_STORAGE_TYPES: dict[type, StorageType] = {
    int: StorageType.INTEGER,
    bool: StorageType.INTEGER,
    float: StorageType.REAL,
    str: StorageType.TEXT,
    bytes: StorageType.BLOB,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """One column of an entity table."""

    name: str
    type: StorageType
    nullable: bool = True
    primary_key: bool = False
    auto_increment: bool = False
    unique: bool = False
    default: Any = None


@dataclass(frozen=True)
class EntityDescriptor(Generic[T]):
    """Static metadata describing how a record type is stored.

    Exactly one field must be the primary key. Auto-increment is only allowed
    on an INTEGER primary key, whose value is assigned by SQLite on insert
    when the record leaves it unset.
    """

    record_type: type[T]
    fields: Sequence[FieldDescriptor]
    table: str = ""
    _by_name: dict[str, FieldDescriptor] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        if not self.table:
            object.__setattr__(self, "table", self.record_type.__name__)
        if not self.table.isidentifier():
            raise SchemaError(f"Invalid table name: {self.table!r}")
        if not self.fields:
            raise SchemaError(f"Entity {self.table} has no fields")

        by_name: dict[str, FieldDescriptor] = {}
        for fd in self.fields:
            if not fd.name.isidentifier():
                raise SchemaError(f"Invalid field name in {self.table}: {fd.name!r}")
            if fd.name in by_name:
                raise SchemaError(f"Duplicate field {fd.name!r} in {self.table}")
            if fd.name not in self.record_type.model_fields:
                raise SchemaError(
                    f"{self.record_type.__name__} has no attribute {fd.name!r}"
                )
            by_name[fd.name] = fd
        object.__setattr__(self, "_by_name", by_name)

        keys = [fd for fd in self.fields if fd.primary_key]
        if len(keys) != 1:
            raise SchemaError(
                f"Entity {self.table} must have exactly one primary key, "
                f"found {len(keys)}"
            )
        for fd in self.fields:
            if fd.auto_increment and not fd.primary_key:
                raise SchemaError(
                    f"Auto-increment field {fd.name!r} in {self.table} "
                    "is not the primary key"
                )
            if fd.auto_increment and fd.type != StorageType.INTEGER:
                raise SchemaError(
                    f"Auto-increment key {fd.name!r} in {self.table} must be INTEGER"
                )

    @property
    def primary_key(self) -> FieldDescriptor:
        """The primary key field."""
        return next(fd for fd in self.fields if fd.primary_key)

    @property
    def column_names(self) -> list[str]:
        return [fd.name for fd in self.fields]

    @property
    def value_fields(self) -> list[FieldDescriptor]:
        """All fields except the primary key."""
        return [fd for fd in self.fields if not fd.primary_key]

    def get_field(self, name: str) -> FieldDescriptor:
        """Look up a field by name.

        Raises:
            SchemaError: If the entity has no such field
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise SchemaError(f"Entity {self.table} has no field {name!r}") from None

    def has_key(self, record: T) -> bool:
        """Whether the record's primary key holds an assigned value."""
        value = getattr(record, self.primary_key.name)
        if self.primary_key.auto_increment:
            return value not in (None, 0)
        return value is not None


def _storage_type(annotation: Any) -> tuple[StorageType, bool]:
    """Map a field annotation to (storage type, nullable)."""
    nullable = False
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) != 1:
            raise SchemaError(f"Unsupported union annotation: {annotation}")
        nullable = len(args) != len(get_args(annotation))
        annotation = args[0]

    storage_type = PYTHON_STORAGE_TYPES.get(annotation)
    if storage_type is None:
        raise SchemaError(f"No storage type for annotation: {annotation}")
    return storage_type, nullable


def describe(
    record_type: type[T],
    primary_key: str = "id",
    auto_increment: bool = True,
    table: str | None = None,
    unique: Iterable[str] = (),
) -> EntityDescriptor[T]:
    """Build a descriptor from a pydantic model's declared fields.

    Args:
        record_type: Pydantic model class
        primary_key: Name of the primary key field
        auto_increment: Whether SQLite assigns the key on insert
        table: Table name (defaults to the class name)
        unique: Names of fields carrying a UNIQUE constraint

    Returns:
        Entity descriptor for the model
    """
    unique_fields = set(unique)
    fields: list[FieldDescriptor] = []
    for name, info in record_type.model_fields.items():
        storage_type, nullable = _storage_type(info.annotation)
        is_key = name == primary_key
        fields.append(
            FieldDescriptor(
                name=name,
                type=storage_type,
                nullable=nullable and not is_key,
                primary_key=is_key,
                auto_increment=is_key and auto_increment,
                unique=name in unique_fields,
            )
        )
    return EntityDescriptor(record_type=record_type, fields=fields, table=table or "")


@functools.cache
def descriptor_for(record_type: type[T]) -> EntityDescriptor[T]:
    """Default descriptor for a model: ``id`` is an auto-assigned key.

    Built once per type and cached.
    """
    return describe(record_type)
