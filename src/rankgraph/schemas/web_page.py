"""Schema type: WebPage and its page variants."""
from __future__ import annotations

from rankgraph.models import FieldSpec, RuleSet, SchemaType
from rankgraph.schemas._helpers import helper_property, id_field, title_field


class WebPage(SchemaType):
    """The page currently being rendered."""

    name = "WebPage"
    title = "WebPage"
    docs_url = "https://schema.org/WebPage"
    show_on = RuleSet(rules=["basic-global"])

    def type_options(self) -> dict:
        return {
            "WebPage": "WebPage",
            "CollectionPage": "CollectionPage",
            "AboutPage": "AboutPage",
            "ContactPage": "ContactPage",
        }

    def fields(self) -> list[FieldSpec]:
        return [
            id_field(),
            title_field("WebPage"),
            FieldSpec("@type", required=True, default_value="WebPage", options=self.type_options(), label="Type"),
            helper_property("name", required=True, default_value="%current.title%"),
            FieldSpec("author", default_value="%schemas.person%", label="Author"),
            FieldSpec("inLanguage", default_value="%site.language%", visible_by_default=True, label="Language"),
            helper_property("url", required=True, default_value="%current.url%"),
            FieldSpec(
                "breadcrumb",
                default_value="%schemas.breadcrumblist%",
                visible_by_default=True,
                label="Breadcrumb",
            ),
            FieldSpec("contributor", default_value="%schemas.person%", label="Contributor"),
            FieldSpec("copyrightHolder", default_value="%schemas.person%", label="Copyright holder"),
            helper_property("datePublished", default_value="%post.created_date%"),
            helper_property("dateModified", default_value="%post.modified_date%"),
            FieldSpec("description", visible_by_default=True, label="Description"),
            FieldSpec("isPartOf", default_value="%schemas.website%", visible_by_default=True, label="Part of"),
            FieldSpec("publisher", default_value="%schemas.organization%", visible_by_default=True, label="Publisher"),
            FieldSpec("thumbnailUrl", default_value="%post.thumbnail%", label="Thumbnail URL"),
            helper_property("mainEntity"),
        ]


SCHEMA_TYPE = WebPage()
