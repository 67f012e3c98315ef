"""Initialization-time registry of schema types and extension points."""
from __future__ import annotations

import logging
from typing import Callable

from rankgraph.catalog import RegistryFrozenError, SchemaCatalog
from rankgraph.models import Page, PageContext, SchemaDefinition
from rankgraph.provider import ContentProvider, supports_products

logger = logging.getLogger("rankgraph")

ContextExtender = Callable[[dict, Page], dict]
VisibilityVeto = Callable[[SchemaDefinition, PageContext], bool]


class Registry:
    """Holds the catalog plus context extenders and visibility vetoes.

    Populate it during startup, then ``freeze()`` it before the first render.
    """

    def __init__(self, catalog: SchemaCatalog | None = None):
        self.catalog = catalog or SchemaCatalog()
        self.context_extenders: list[ContextExtender] = []
        self.visibility_vetoes: list[VisibilityVeto] = []

    @property
    def frozen(self) -> bool:
        return self.catalog.frozen

    def freeze(self) -> Registry:
        self.catalog.freeze()
        return self

    def add_context_extender(self, extender: ContextExtender) -> None:
        if self.frozen:
            raise RegistryFrozenError("Cannot add context extender: registry is frozen")
        self.context_extenders.append(extender)

    def add_visibility_veto(self, veto: VisibilityVeto) -> None:
        if self.frozen:
            raise RegistryFrozenError("Cannot add visibility veto: registry is frozen")
        self.visibility_vetoes.append(veto)

    def allows(self, definition: SchemaDefinition, ctx: PageContext) -> bool:
        """Run every veto; a veto returning False hides the schema."""
        for veto in self.visibility_vetoes:
            try:
                if not veto(definition, ctx):
                    return False
            except Exception:
                logger.exception("Visibility veto %r raised an exception", veto)
        return True

    def extend_context(self, context: dict, page: Page) -> dict:
        for extender in self.context_extenders:
            try:
                context = extender(context, page)
            except Exception:
                logger.exception("Context extender %r raised an exception", extender)
        return context


def hide_breadcrumbs_on_front_page(definition: SchemaDefinition, ctx: PageContext) -> bool:
    return not (definition.type == "BreadcrumbList" and ctx.page.is_front_page)


def build_registry(
    provider: ContentProvider | None = None,
    custom_types_dir: str | None = None,
    project_dir: str = ".",
) -> Registry:
    """Registry with the built-in types, Product when commerce is available, and custom types."""
    from rankgraph.schemas import load_custom_types, load_schema_types

    registry = Registry()
    commerce = provider is not None and supports_products(provider)
    for generator in load_schema_types(include_commerce=commerce):
        registry.catalog.register(generator.name, generator)

    if custom_types_dir:
        for generator in load_custom_types(custom_types_dir, project_dir):
            registry.catalog.register(generator.name, generator)

    registry.add_visibility_veto(hide_breadcrumbs_on_front_page)
    return registry
