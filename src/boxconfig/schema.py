"""Configuration schema: field declarations and the record <-> form coercions.

A :class:`ConfigSchema` is an ordered table of :class:`FieldSpec` entries.
Each entry names a field and its :class:`FieldKind`; the kind selects the
pair of coercion functions used to move a value between a
:class:`ConfigRecord`-style pydantic model and the editable form state.
Adding a configuration field means adding one entry to the table.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, create_model, model_validator

from boxconfig.exceptions import InvalidField
from boxconfig.form import FormState

LIST_SEPARATOR = ","
LIST_DISPLAY_SEPARATOR = ", "

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class FieldKind(StrEnum):
    """Semantic type of a configuration field."""

    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING_LIST = "string_list"


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one configuration field.

    Only ``name`` and ``kind`` take part in coercion; the rest is display
    metadata for front ends (label, help text, grouping, masking).
    """

    name: str
    kind: FieldKind
    label: str = ""
    help: str = ""
    section: str = "General"
    placeholder: str | None = None
    choices: tuple[str, ...] = ()
    secret: bool = False

    @property
    def empty(self) -> Any:
        """Value used when the server omits the field or reports null."""
        return _EMPTY_FACTORIES[self.kind]()

    @property
    def display_label(self) -> str:
        return self.label or self.name.replace("_", " ").capitalize()


# --- Coercions (record value -> form value, form value -> record value) ---


def _passthrough(value: Any) -> Any:
    return value


def _list_to_form(value: list[str]) -> str:
    return LIST_DISPLAY_SEPARATOR.join(value)


def _list_to_record(name: str, value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        value = LIST_SEPARATOR.join(str(v) for v in value)
    if not isinstance(value, str):
        raise InvalidField(name, value, "expected comma-separated text")
    return [part.strip() for part in value.split(LIST_SEPARATOR) if part.strip()]


def _integer_to_record(name: str, value: Any) -> int:
    # bool is an int subclass; a checkbox value in a number slot is a bug upstream
    if isinstance(value, bool):
        raise InvalidField(name, value, "expected a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_RE.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # digit-count limit of int() on text
                raise InvalidField(name, value, "expected a whole number") from None
    raise InvalidField(name, value, "expected a whole number")


def _boolean_to_record(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidField(name, value, "expected true or false")
    return value


def _text_to_record(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidField(name, value, "expected text")
    return value


_EMPTY_FACTORIES: dict[FieldKind, Callable[[], Any]] = {
    FieldKind.TEXT: str,
    FieldKind.INTEGER: int,
    FieldKind.BOOLEAN: bool,
    FieldKind.STRING_LIST: list,
}

_PYTHON_TYPES: dict[FieldKind, Any] = {
    FieldKind.TEXT: str,
    FieldKind.INTEGER: int,
    FieldKind.BOOLEAN: bool,
    FieldKind.STRING_LIST: list[str],
}

CODECS: dict[FieldKind, tuple[Callable[[Any], Any], Callable[[str, Any], Any]]] = {
    FieldKind.TEXT: (_passthrough, _text_to_record),
    FieldKind.INTEGER: (_passthrough, _integer_to_record),
    FieldKind.BOOLEAN: (_passthrough, _boolean_to_record),
    FieldKind.STRING_LIST: (_list_to_form, _list_to_record),
}


class RecordBase(BaseModel):
    """Base for generated record models: immutable, tolerant of server extras."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def fill_nulls(cls, values: Any) -> Any:
        """Map null values reported by the server to the field's empty value."""
        if not isinstance(values, dict):
            return values
        return {
            key: (
                cls.model_fields[key].get_default(call_default_factory=True)
                if value is None and key in cls.model_fields
                else value
            )
            for key, value in values.items()
        }


def build_record_model(name: str, fields: Iterable[FieldSpec]) -> type[RecordBase]:
    """Generate the pydantic record model for a set of field declarations."""
    definitions: dict[str, Any] = {}
    for spec in fields:
        default = _EMPTY_FACTORIES[spec.kind]
        definitions[spec.name] = (
            _PYTHON_TYPES[spec.kind],
            Field(default_factory=default, description=spec.help or None),
        )
    return create_model(name, __base__=RecordBase, **definitions)


class ConfigSchema:
    """Ordered table of configuration fields plus the two coercion directions."""

    def __init__(self, fields: Iterable[FieldSpec], *, record_name: str = "ConfigRecord") -> None:
        self._fields: dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.name in self._fields:
                raise ValueError(f"Duplicate configuration field: {spec.name}")
            self._fields[spec.name] = spec
        self.record_model = build_record_model(record_name, self._fields.values())

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    @property
    def names(self) -> list[str]:
        return list(self._fields)

    def field(self, name: str) -> FieldSpec:
        try:
            return self._fields[name]
        except KeyError:
            raise KeyError(f"Unknown configuration field: {name}") from None

    def sections(self) -> dict[str, list[FieldSpec]]:
        """Group fields by section, keeping declaration order."""
        grouped: dict[str, list[FieldSpec]] = {}
        for spec in self:
            grouped.setdefault(spec.section, []).append(spec)
        return grouped

    def to_form_state(self, record: BaseModel) -> FormState:
        """Materialize a record into editable form state. Never fails."""
        values: dict[str, Any] = {}
        for spec in self:
            value = getattr(record, spec.name, None)
            if value is None:
                value = spec.empty
            to_form, _ = CODECS[spec.kind]
            values[spec.name] = to_form(value)
        return FormState(self, values)

    def to_record(self, form: Mapping[str, Any]) -> BaseModel:
        """Convert form state back into a complete record.

        Raises:
            InvalidField: the first field (in declaration order) whose value
                cannot be converted, or which is missing from ``form``.
        """
        values: dict[str, Any] = {}
        for spec in self:
            if spec.name not in form:
                raise InvalidField(spec.name, None, "missing from form")
            _, to_record = CODECS[spec.kind]
            values[spec.name] = to_record(spec.name, form[spec.name])
        return self.record_model(**values)

    def from_payload(self, data: Mapping[str, Any]) -> BaseModel:
        """Build a record from a server payload (nulls and extras tolerated)."""
        return self.record_model.model_validate(dict(data))

    def to_payload(self, record: BaseModel) -> dict[str, Any]:
        """Serialize a record with every declared field, in declaration order."""
        data = record.model_dump(mode="json")
        return {name: data[name] for name in self._fields}
