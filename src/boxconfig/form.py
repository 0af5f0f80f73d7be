"""Editable form state."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from boxconfig.schema import ConfigSchema


class FormState(Mapping[str, Any]):
    """Display-oriented values of one editing session, keyed by field name.

    List fields hold their comma-separated display string, booleans hold
    ``bool``. Integer fields hold the loaded ``int`` until edited, after
    which they hold whatever text the operator typed; conversion back to a
    number happens in :meth:`ConfigSchema.to_record`.

    Only fields declared in the schema can be set.
    """

    def __init__(self, schema: ConfigSchema, values: Mapping[str, Any]) -> None:
        self._schema = schema
        self._values: dict[str, Any] = {name: values[name] for name in schema.names if name in values}
        self._dirty: set[str] = set()

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if name not in self._schema:
            raise KeyError(f"Unknown configuration field: {name}")
        self._values[name] = value
        self._dirty.add(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FormState(fields={len(self)}, dirty={sorted(self._dirty)})"

    @property
    def schema(self) -> ConfigSchema:
        return self._schema

    @property
    def dirty(self) -> frozenset[str]:
        """Names of fields set since the form was created."""
        return frozenset(self._dirty)

    @property
    def is_dirty(self) -> bool:
        return bool(self._dirty)

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self[name] = value

    def copy(self) -> FormState:
        clone = FormState(self._schema, self._values)
        clone._dirty = set(self._dirty)
        return clone

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)
