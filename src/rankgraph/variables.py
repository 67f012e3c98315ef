"""Catalog of the ``%namespace.path%`` placeholders a field value may use."""
from __future__ import annotations

from rankgraph.context import taxonomy_names
from rankgraph.provider import ContentProvider, supports_products
from rankgraph.registry import Registry
from rankgraph.renderer import schema_slug

_USER_FIELDS = (
    "ID", "first_name", "last_name", "display_name", "username", "nickname",
    "email", "website_url", "nicename", "description", "posts_url", "avatar",
)

NAMESPACE_FIELDS = {
    "post": ("Post", (
        "title", "ID", "excerpt", "content", "url", "slug", "date", "modified_date",
        "thumbnail", "comment_count", "word_count", "tags", "categories",
    )),
    "term": ("Term", ("ID", "name", "slug", "taxonomy", "description", "url")),
    "author": ("Author", _USER_FIELDS),
    "user": ("User", _USER_FIELDS),
    "site": ("Site", ("title", "description", "url", "language", "icon")),
    "current": ("Current Page", ("title", "url")),
}

PRODUCT_FIELDS = (
    "price", "price_with_tax", "low_price", "high_price", "offer_count", "sku", "stock",
    "currency", "rating", "review_count", "image", "image_width", "image_height",
    "description", "sale_from", "sale_to",
)

_UPPER_WORDS = {"id": "ID", "url": "URL", "sku": "SKU"}


def _humanize(name: str) -> str:
    return " ".join(_UPPER_WORDS.get(w.lower(), w.capitalize()) for w in name.split("_"))


def list_variables(provider: ContentProvider, registry: Registry) -> dict[str, str]:
    """Map each available placeholder to a human label, sorted by label."""
    variables: dict[str, str] = {}

    for taxonomy in taxonomy_names(provider):
        info = next((tx for tx in provider.taxonomies() if tx.name == taxonomy), None)
        variables[f"%post.tax.{taxonomy}%"] = info.label if info is not None else _humanize(taxonomy)

    for namespace, (label, fields) in NAMESPACE_FIELDS.items():
        for name in fields:
            variables[f"%{namespace}.{name}%"] = f"{label} {_humanize(name)}"

    if supports_products(provider):
        for name in PRODUCT_FIELDS:
            variables[f"%product.{name}%"] = f"Product {_humanize(name)}"

    for definition in registry.catalog.all():
        variables[f"%schemas.{schema_slug(definition)}%"] = f"{definition.type} Schema"

    return dict(sorted(variables.items(), key=lambda item: item[1]))
