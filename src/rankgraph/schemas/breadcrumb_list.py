"""Schema type: BreadcrumbList."""
from __future__ import annotations

from rankgraph.models import FieldKind, FieldSpec, RuleSet, SchemaType
from rankgraph.schemas._helpers import id_field, title_field


class BreadcrumbList(SchemaType):
    """Breadcrumb trail of the current page. Never shown on the front page."""

    name = "BreadcrumbList"
    title = "BreadcrumbList"
    docs_url = "https://developers.google.com/search/docs/appearance/structured-data/breadcrumb"
    show_on = RuleSet(rules=["basic-global"])
    not_show_on = RuleSet(rules=["special-front"])

    def fields(self) -> list[FieldSpec]:
        return [
            title_field("BreadcrumbList"),
            FieldSpec("name", FieldKind.HIDDEN, required=True),
            id_field(),
            FieldSpec("@type", FieldKind.HIDDEN, required=True, default_value="BreadcrumbList"),
            FieldSpec(
                "itemListElement",
                FieldKind.HIDDEN,
                required=True,
                default_value="%current.breadcrumbs%",
            ),
        ]


SCHEMA_TYPE = BreadcrumbList()
