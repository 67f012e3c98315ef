"""Built-in schema types and the custom type loader."""
from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from pathlib import Path

from rankgraph.models import SchemaType

logger = logging.getLogger("rankgraph")

SCHEMA_MODULES = {
    "WebSite": "rankgraph.schemas.web_site",
    "WebPage": "rankgraph.schemas.web_page",
    "Organization": "rankgraph.schemas.organization",
    "BreadcrumbList": "rankgraph.schemas.breadcrumb_list",
    "Article": "rankgraph.schemas.article",
    "SearchAction": "rankgraph.schemas.search_action",
    "Person": "rankgraph.schemas.person",
    "Product": "rankgraph.schemas.product",
}

COMMERCE_TYPES = {"Product"}


def load_schema_types(include_commerce: bool = False) -> list[SchemaType]:
    """Instantiate the built-in schema types, in catalog order."""
    generators: list[SchemaType] = []
    for type_name, module_path in SCHEMA_MODULES.items():
        if type_name in COMMERCE_TYPES and not include_commerce:
            continue
        module = importlib.import_module(module_path)
        generators.append(module.SCHEMA_TYPE)
    return generators


def load_custom_types(custom_types_dir: str, project_dir: str) -> list[SchemaType]:
    """Load SchemaType subclasses from .py files in a custom types directory."""
    root = Path(project_dir) / custom_types_dir
    if not root.is_dir():
        return []

    generators: list[SchemaType] = []
    for py_file in sorted(root.glob("*.py")):
        if py_file.name.startswith("_"):
            continue
        try:
            mod_name = f"rankgraph_custom.{py_file.stem}"
            spec = importlib.util.spec_from_file_location(mod_name, py_file)
            if spec is None or spec.loader is None:
                continue
            module = importlib.util.module_from_spec(spec)
            sys.modules[mod_name] = module
            spec.loader.exec_module(module)

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, SchemaType)
                    and attr is not SchemaType
                    and attr.__module__ == mod_name
                    and hasattr(attr, "name")
                ):
                    generators.append(attr())
        except Exception:
            logger.exception("Failed to load custom schema type from %s", py_file)

    return generators
