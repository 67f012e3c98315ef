"""rankgraph - JSON-LD structured data graphs for content sites."""

__version__ = "0.1.0"

from rankgraph.catalog import RegistryFrozenError, SchemaCatalog
from rankgraph.engine import Engine, list_schema_types, render_active_schemas
from rankgraph.models import (
    FieldKind,
    FieldSpec,
    Page,
    PageContext,
    PageKind,
    RuleSet,
    SchemaDefinition,
    SchemaType,
)
from rankgraph.provider import ContentProvider, InMemoryProvider, ProductSource
from rankgraph.registry import Registry, build_registry
from rankgraph.rule_options import list_rule_grammar_options
from rankgraph.variables import list_variables

__all__ = [
    "ContentProvider",
    "Engine",
    "FieldKind",
    "FieldSpec",
    "InMemoryProvider",
    "Page",
    "PageContext",
    "PageKind",
    "ProductSource",
    "Registry",
    "RegistryFrozenError",
    "RuleSet",
    "SchemaCatalog",
    "SchemaDefinition",
    "SchemaType",
    "build_registry",
    "list_rule_grammar_options",
    "list_schema_types",
    "list_variables",
    "render_active_schemas",
]
