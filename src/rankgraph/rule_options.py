"""Grouped rule-token options for settings UIs that build display rules."""
from __future__ import annotations

from rankgraph.models import PostTypeInfo, TaxonomyInfo
from rankgraph.provider import ContentProvider, supports_products

UNSUPPORTED_TAXONOMIES = {
    "wp_theme",
    "wp_template_part_area",
    "link_category",
    "nav_menu",
    "post_format",
}

_EXCLUDED_POST_TYPES = {"attachment"}

VALID_CONSIDER_TYPES = {None, "single", "archive"}


def list_rule_grammar_options(provider: ContentProvider, consider_type: str | None = None) -> dict:
    """Return rule options grouped for a picker.

    ``consider_type`` narrows the options to ``"single"`` or ``"archive"``
    targets; None offers everything.
    """
    if consider_type not in VALID_CONSIDER_TYPES:
        raise ValueError(f"Unknown consider type: {consider_type}")

    commerce = supports_products(provider)
    options = {
        "basic": {"label": "Basic", "value": _basic_values(consider_type)},
    }
    if consider_type != "single":
        options["special-pages"] = {"label": "Special Pages", "value": _special_pages(commerce)}

    if commerce:
        product_types = {f"product-type|{key}": label for key, label in provider.product_types().items()}
        if product_types:
            options["product-types"] = {"label": "Product Types", "value": product_types}

    post_types = [pt for pt in provider.post_types() if pt.name not in _EXCLUDED_POST_TYPES]
    taxonomies = [tx for tx in provider.taxonomies() if tx.name not in UNSUPPORTED_TAXONOMIES]
    for post_type in post_types:
        group_key, group = _post_type_group(post_type, taxonomies, consider_type)
        if not group["value"]:
            continue
        existing = options.get(group_key)
        if existing is None:
            options[group_key] = group
        else:
            for token, label in group["value"].items():
                existing["value"].setdefault(token, label)

    options["specific-target"] = {
        "label": "Specific Target",
        "value": {"specifics": "Specific Pages / Posts / Taxonomies, etc."},
    }
    return options


def _basic_values(consider_type: str | None) -> dict[str, str]:
    values = {"basic-global": "Entire Website"}
    if consider_type != "archive":
        values["basic-singulars"] = "All Singulars"
    if consider_type != "single":
        values["basic-archives"] = "All Archives"
    return values


def _special_pages(commerce: bool) -> dict[str, str]:
    pages = {
        "special-404": "404 Page",
        "special-search": "Search Page",
        "special-blog": "Blog / Posts Page",
        "special-front": "Front Page",
        "special-date": "Date Archive",
        "special-author": "Author Archive",
    }
    if commerce:
        pages["special-woo-shop"] = "Shop Page"
    return pages


def _post_type_group(
    post_type: PostTypeInfo, taxonomies: list[TaxonomyInfo], consider_type: str | None
) -> tuple[str, dict]:
    label = post_type.label.title()
    group_key = post_type.label.lower().replace(" ", "-")
    values: dict[str, str] = {}

    if consider_type != "archive":
        values[f"{post_type.name}|all"] = f"All {label}"

    if consider_type != "single":
        if group_key != "pages":
            values[f"{post_type.name}|all|archive"] = f"All {label} Archive"
        for taxonomy in taxonomies:
            attached = post_type.name in taxonomy.object_types or taxonomy.name in post_type.taxonomies
            if attached:
                values[f"{post_type.name}|all|taxarchive|{taxonomy.name}"] = f"All {taxonomy.label.title()} Archive"

    return group_key, {"label": label, "value": values}
