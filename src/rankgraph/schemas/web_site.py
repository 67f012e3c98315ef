"""Schema type: WebSite."""
from __future__ import annotations

from rankgraph.models import FieldSpec, RuleSet, SchemaType
from rankgraph.schemas._helpers import SITE_ID, helper_property, id_field, title_field


class WebSite(SchemaType):
    name = "WebSite"
    title = "WebSite"
    docs_url = "https://schema.org/WebSite"
    show_on = RuleSet(rules=["basic-global"])

    def fields(self) -> list[FieldSpec]:
        return [
            id_field(SITE_ID),
            title_field("WebSite"),
            helper_property("name", required=True, default_value="%site.title%"),
            FieldSpec("author", default_value="%schemas.person%", label="Author"),
            FieldSpec("copyrightHolder", default_value="%schemas.person%", label="Copyright holder"),
            FieldSpec(
                "description",
                default_value="%site.description%",
                visible_by_default=True,
                label="Description",
            ),
            helper_property("url", required=True, default_value="%site.url%"),
            FieldSpec(
                "potentialAction",
                default_value="%schemas.searchaction%",
                visible_by_default=True,
                label="Potential action",
            ),
            FieldSpec("publisher", default_value="%schemas.organization%", visible_by_default=True, label="Publisher"),
            FieldSpec("thumbnailUrl", label="Thumbnail URL"),
        ]


SCHEMA_TYPE = WebSite()
