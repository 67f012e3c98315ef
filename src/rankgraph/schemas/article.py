"""Schema type: Article and its news and blog variants."""
from __future__ import annotations

from rankgraph.models import FieldKind, FieldSpec, RuleSet, SchemaType
from rankgraph.schemas._helpers import helper_property, id_field, title_field, type_tag


class Article(SchemaType):
    """Article for single posts."""

    name = "Article"
    title = "Article"
    docs_url = "https://developers.google.com/search/docs/advanced/structured-data/article"
    show_on = RuleSet(rules=["post|all"])

    def type_options(self) -> dict:
        return {
            "Article": "Article",
            "NewsArticle": "NewsArticle",
            "BlogPosting": "BlogPosting",
        }

    def fields(self) -> list[FieldSpec]:
        return [
            title_field("Article"),
            id_field(),
            FieldSpec("@type", required=True, default_value="Article", options=self.type_options(), label="Type"),
            helper_property("name", visible_by_default=True),
            helper_property("url", required=True, default_value="%post.url%"),
            FieldSpec("headline", required=True, default_value="%post.title%", label="Headline"),
            helper_property("description"),
            helper_property("datePublished", required=True, default_value="%post.date%"),
            helper_property("dateModified", default_value="%post.modified_date%"),
            FieldSpec("commentCount", required=True, default_value="%post.comment_count%", label="Comment count"),
            FieldSpec("wordCount", required=True, default_value="%post.word_count%", label="Word count"),
            FieldSpec("keywords", required=True, default_value="%post.tags%", label="Keywords"),
            FieldSpec("articleSection", required=True, default_value="%post.categories%", label="Article section"),
            FieldSpec("author", required=True, default_value="%schemas.person%", label="Author"),
            helper_property("image", visible_by_default=True),
            FieldSpec(
                "hasPart",
                FieldKind.GROUP,
                cloneable=True,
                label="Paywalled content",
                sub_fields=[
                    type_tag("WebPageElement"),
                    FieldSpec(
                        "isAccessibleForFree",
                        required=True,
                        default_value="true",
                        options={"true": "Yes", "false": "No"},
                        label="Accessible for free",
                    ),
                    FieldSpec("cssSelector", required=True, label="CSS selector"),
                ],
            ),
            FieldSpec("isPartOf", default_value="%schemas.webpage%", visible_by_default=True, label="Part of"),
            helper_property("mainEntityOfPage"),
            FieldSpec("publisher", required=True, default_value="%schemas.organization%", label="Publisher"),
            helper_property("mainEntity"),
        ]


SCHEMA_TYPE = Article()
