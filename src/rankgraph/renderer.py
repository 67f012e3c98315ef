"""Turns one schema instance into a pruned JSON-LD node."""
from __future__ import annotations

import logging
import re

from slugify import slugify

from rankgraph.models import FieldKind, FieldSpec, SchemaDefinition
from rankgraph.resolver import VariableResolver

logger = logging.getLogger("rankgraph")

INTERNAL_KEYS = ("schema_name", "_label")
DEFAULT_ID_TEMPLATE = "%current.url%#%id%"

_NON_ID_CHARS_RE = re.compile(r"[^a-z0-9_]")
_REPEATED_UNDERSCORE_RE = re.compile(r"[ _]{2,}")
_LEADING_DIGITS_RE = re.compile(r"^\d+")


def slug_id(text) -> str:
    """Reduce a schema label to an identifier usable after ``#`` in ``@id``."""
    if not text or not isinstance(text, str):
        return ""
    slug = slugify(text)
    slug = _NON_ID_CHARS_RE.sub("_", slug)
    slug = _REPEATED_UNDERSCORE_RE.sub("_", slug)
    slug = slug.strip("_")
    slug = _LEADING_DIGITS_RE.sub("", slug)
    return slug.strip("_")


def schema_slug(definition: SchemaDefinition) -> str:
    values = definition.values or {}
    label = values.get("_label") or definition.title or definition.type
    return slug_id(label)


def schema_id_template(definition: SchemaDefinition) -> str:
    """The ``@id`` of a schema with ``%id%`` replaced; other placeholders remain."""
    values = definition.values if definition.values is not None else parse_fields(definition.fields)
    template = values.get("@id") or DEFAULT_ID_TEMPLATE
    if not isinstance(template, str):
        template = DEFAULT_ID_TEMPLATE
    return template.replace("%id%", schema_slug(definition))


# ---------------------------------------------------------------------------
# Default values from field specs
# ---------------------------------------------------------------------------

def parse_fields(fields: list[FieldSpec]) -> dict:
    """Collect default values for every emitted field of a field tree."""
    parsed: dict = {}
    for spec in fields:
        if not spec.is_emitted:
            continue
        if spec.kind == FieldKind.GROUP:
            parsed[spec.id] = _parse_group(spec)
        else:
            parsed[spec.id] = spec.default_value if spec.default_value is not None else ""
    return parsed


def _parse_group(spec: FieldSpec):
    sub_fields = spec.sub_fields
    default_type = next(
        (f.default_value for f in sub_fields if f.id == "@type" and f.default_value),
        None,
    )
    if default_type:
        sub_fields = [f for f in sub_fields if f.variant_tag is None or f.variant_tag == default_type]

    group = parse_fields(sub_fields)
    if list(group) == ["@type"]:
        return {}
    if spec.cloneable:
        return [group]
    return group


# ---------------------------------------------------------------------------
# Pruning
# ---------------------------------------------------------------------------

def is_empty(value) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, dict, list)):
        return len(value) == 0
    return False


def is_type_stub(value) -> bool:
    """A mapping left with nothing but its ``@type``."""
    return isinstance(value, dict) and list(value) == ["@type"]


def _is_dropped(value) -> bool:
    return is_empty(value) or is_type_stub(value)


def remove_empty(data):
    """Recursively drop empty strings, None, False and empty containers. Numeric 0 stays.

    Nested mappings that keep only ``@type`` are dropped too; the top-level
    mapping is returned as is.
    """
    if isinstance(data, dict):
        pruned = {}
        for key, value in data.items():
            value = remove_empty(value)
            if not _is_dropped(value):
                pruned[key] = value
        return pruned
    if isinstance(data, list):
        items = [remove_empty(item) for item in data]
        return [item for item in items if not _is_dropped(item)]
    return data


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class SchemaRenderer:
    """Renders a schema definition's values through a variable resolver."""

    def __init__(self, definition: SchemaDefinition, resolver: VariableResolver):
        self.definition = definition
        self.resolver = resolver

    def field_values(self) -> dict:
        definition = self.definition
        values = dict(definition.values) if definition.values is not None else parse_fields(definition.fields)
        if isinstance(values.get("@id"), str):
            values["@id"] = values["@id"].replace("%id%", schema_slug(definition))
        return values

    def render(self) -> dict:
        fields = {key: self.resolver.render(value) for key, value in self.field_values().items()}

        if isinstance(fields.get("sameAs"), dict):
            fields["sameAs"] = list(fields["sameAs"].values())
        self._flatten_cloneable_fields(fields)

        base_type = fields.get("@type") or self.definition.type or "Thing"
        final_type = base_type
        sub_types = fields.pop("@sub_type", None)
        if isinstance(sub_types, list):
            sub_types = [t for t in sub_types if t]
            if sub_types:
                final_type = [base_type, *sub_types]

        fields.pop("@type", None)
        schema = {"@type": final_type, **fields}
        for key in INTERNAL_KEYS:
            schema.pop(key, None)

        self._log_required_but_empty(schema)
        return remove_empty(schema)

    def _flatten_cloneable_fields(self, fields: dict) -> None:
        for spec in self.definition.fields:
            if spec.cloneable and spec.flatten and isinstance(fields.get(spec.id), dict):
                fields[spec.id] = list(fields[spec.id].values())

    def _log_required_but_empty(self, schema: dict) -> None:
        empty = [
            spec.id for spec in self.definition.fields
            if spec.required and spec.id in schema and _is_dropped(remove_empty(schema[spec.id]))
        ]
        if empty:
            logger.debug("Schema %s: required fields rendered empty: %s", self.definition.type, ", ".join(empty))
