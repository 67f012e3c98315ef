"""Field definitions shared between schema types."""
from __future__ import annotations

from rankgraph.models import FieldKind, FieldSpec

CURRENT_PAGE_ID = "%current.url%#%id%"
SITE_ID = "%site.url%#%id%"


def type_tag(value: str, visible: bool = False) -> FieldSpec:
    """Hidden ``@type`` sub-field carrying a group's schema.org type."""
    if visible:
        return FieldSpec("@type", FieldKind.HIDDEN, default_value=value, visible_by_default=True)
    return FieldSpec("@type", FieldKind.HIDDEN, default_value=value, required=True)


def id_field(template: str = CURRENT_PAGE_ID) -> FieldSpec:
    return FieldSpec("@id", FieldKind.HIDDEN, default_value=template, required=True)


def title_field(title: str) -> FieldSpec:
    return FieldSpec(
        "schema_name",
        FieldKind.TITLE,
        default_value=title,
        visible_by_default=True,
        label="Schema Title",
        tooltip="Internal name for this schema; never part of the structured data.",
    )


def _person_group() -> FieldSpec:
    return FieldSpec(
        "author",
        FieldKind.GROUP,
        sub_fields=[
            type_tag("Person"),
            FieldSpec("name", required=True, default_value="%author.display_name%", label="Name"),
        ],
    )


def _address_group() -> FieldSpec:
    return FieldSpec(
        "address",
        FieldKind.GROUP,
        label="Address",
        sub_fields=[
            type_tag("PostalAddress", visible=True),
            FieldSpec("streetAddress", visible_by_default=True, label="Street address"),
            FieldSpec("addressLocality", visible_by_default=True, label="Locality"),
            FieldSpec("addressRegion", visible_by_default=True, label="Region"),
            FieldSpec("addressCountry", default_value="US", visible_by_default=True, label="Country"),
            FieldSpec("postalCode", visible_by_default=True, label="Postal code"),
        ],
    )


def _aggregate_rating_group() -> FieldSpec:
    return FieldSpec(
        "aggregateRating",
        FieldKind.GROUP,
        label="Aggregate rating",
        tooltip="Overall rating based on customer reviews.",
        sub_fields=[
            type_tag("AggregateRating"),
            FieldSpec("ratingValue", required=True, default_value="%product.rating%", label="Value"),
            FieldSpec("reviewCount", required=True, default_value="%product.review_count%", label="Review count"),
        ],
    )


def _review_group() -> FieldSpec:
    ratings = {str(n): str(n) for n in range(1, 6)}
    return FieldSpec(
        "review",
        FieldKind.GROUP,
        cloneable=True,
        label="Reviews",
        sub_fields=[
            type_tag("Review"),
            FieldSpec(
                "author",
                FieldKind.GROUP,
                visible_by_default=True,
                sub_fields=[
                    type_tag("Person"),
                    FieldSpec("name", required=True, default_value="%author.display_name%", label="Author"),
                ],
            ),
            FieldSpec(
                "reviewRating",
                FieldKind.GROUP,
                visible_by_default=True,
                label="Rating",
                sub_fields=[
                    type_tag("Rating"),
                    FieldSpec("ratingValue", required=True, default_value="5", options=ratings, label="Rating value"),
                    FieldSpec("bestRating", default_value="5", options=ratings, label="Best rating"),
                    FieldSpec("worstRating", default_value="1", options=ratings, label="Worst rating"),
                ],
            ),
            FieldSpec("datePublished", label="Date published"),
        ],
    )


_PROPERTIES = {
    "name": lambda: FieldSpec("name", default_value="%post.title%", label="Name"),
    "url": lambda: FieldSpec("url", label="URL"),
    "description": lambda: FieldSpec(
        "description", default_value="%post.excerpt%", visible_by_default=True, label="Description"
    ),
    "image": lambda: FieldSpec("image", default_value=["%post.thumbnail%"], cloneable=True, label="Image"),
    "datePublished": lambda: FieldSpec("datePublished", label="Published date"),
    "dateModified": lambda: FieldSpec("dateModified", label="Modified date"),
    "mainEntity": lambda: FieldSpec(
        "mainEntity",
        label="Main entity",
        tooltip="Link another schema here with a %schemas.<name>% variable.",
    ),
    "mainEntityOfPage": lambda: FieldSpec(
        "mainEntityOfPage",
        default_value="%schemas.webpage%",
        visible_by_default=True,
        label="Main entity of page",
    ),
    "Person": _person_group,
    "address": _address_group,
    "aggregateRating": _aggregate_rating_group,
    "review": _review_group,
}


def helper_property(name: str, **overrides) -> FieldSpec:
    """Return a shared property definition with ``overrides`` applied."""
    factory = _PROPERTIES.get(name)
    if factory is None:
        raise KeyError(f"Unknown helper property: {name}")
    return factory().with_overrides(**overrides)
