"""rankgraph render engine."""
from __future__ import annotations

import logging

from rankgraph.config import RankGraphConfig
from rankgraph.context import ContextCollector, build_page_context
from rankgraph.models import Page, PageContext, SchemaDefinition
from rankgraph.provider import ContentProvider
from rankgraph.registry import Registry, build_registry
from rankgraph.renderer import SchemaRenderer
from rankgraph.resolver import VariableResolver
from rankgraph.rules import is_visible

logger = logging.getLogger("rankgraph")

SCHEMA_CONTEXT = "https://schema.org"


class Engine:
    """Selects, filters and renders the schemas of one page."""

    def __init__(self, config: RankGraphConfig, registry: Registry, provider: ContentProvider):
        self.config = config
        self.registry = registry
        self.provider = provider

    def active_schemas(self, page: Page) -> list[SchemaDefinition]:
        """Entity override set, else the configured site-wide set, else the catalog defaults."""
        overrides = self.provider.get_schema_overrides(page)
        if overrides:
            return self._from_stored(overrides)
        if self.config.schemas:
            return self._from_stored(self.config.schemas)
        return self.registry.catalog.all()

    def _from_stored(self, stored: list[dict]) -> list[SchemaDefinition]:
        catalog = self.registry.catalog
        return [
            SchemaDefinition.from_dict(raw, fields=catalog.fields(raw.get("type") or ""))
            for raw in stored
            if isinstance(raw, dict)
        ]

    def visible_schemas(self, page: Page, page_ctx: PageContext | None = None) -> list[SchemaDefinition]:
        ctx = page_ctx or build_page_context(page, self.provider)
        return [
            definition for definition in self.active_schemas(page)
            if is_visible(definition, ctx) and self.registry.allows(definition, ctx)
        ]

    def render(self, page: Page) -> dict | None:
        """Return the ``@graph`` document for ``page``, or None when nothing renders."""
        if not self.config.enable_schemas:
            return None

        self.registry.freeze()
        visible = self.visible_schemas(page)
        if not visible:
            return None

        context = ContextCollector(self.provider, self.registry).collect(page, visible)
        resolver = VariableResolver(context, max_depth=self.config.max_depth, max_steps=self.config.max_steps)

        graph = []
        for definition in visible:
            if definition.type not in self.registry.catalog:
                logger.debug("Skipping schema '%s': type %s is not registered", definition.title, definition.type)
                continue
            node = SchemaRenderer(definition, resolver).render()
            if node:
                graph.append(node)

        if not graph:
            return None
        return {"@context": SCHEMA_CONTEXT, "@graph": graph}


def render_active_schemas(
    page: Page,
    provider: ContentProvider,
    config: RankGraphConfig | None = None,
    registry: Registry | None = None,
) -> dict | None:
    """Render the JSON-LD document for ``page``."""
    config = config or RankGraphConfig()
    if registry is None:
        registry = build_registry(provider, custom_types_dir=config.custom_types_dir)
    return Engine(config, registry, provider).render(page)


def list_schema_types(registry: Registry) -> list[dict]:
    """Every registered type with its field tree, for a settings UI."""
    catalog = registry.catalog
    types = []
    for name in catalog.names():
        generator = catalog.generator(name)
        types.append({
            "type": name,
            "title": generator.title,
            "docs_url": generator.docs_url,
            "type_options": generator.type_options(),
            "fields": [spec.to_dict() for spec in catalog.fields(name)],
        })
    return types
