"""Tests for default-value parsing, slugs, pruning and schema rendering."""
from __future__ import annotations

import logging

from rankgraph.models import FieldKind, FieldSpec, SchemaDefinition
from rankgraph.renderer import (
    SchemaRenderer,
    parse_fields,
    remove_empty,
    schema_id_template,
    schema_slug,
    slug_id,
)
from rankgraph.resolver import VariableResolver


def _type_tag(value: str) -> FieldSpec:
    return FieldSpec("@type", FieldKind.HIDDEN, default_value=value, required=True)


class TestSlugId:
    def test_simple(self):
        assert slug_id("Article") == "article"
        assert slug_id("BreadcrumbList") == "breadcrumblist"

    def test_separators_become_underscores(self):
        assert slug_id("My Blog Post") == "my_blog_post"
        assert slug_id("Café -- Menu!") == "cafe_menu"

    def test_leading_digits_are_removed(self):
        assert slug_id("2024 Recap") == "recap"

    def test_empty_or_non_string(self):
        assert slug_id("") == ""
        assert slug_id(None) == ""
        assert slug_id(12) == ""


class TestSchemaSlug:
    def test_label_wins(self):
        definition = SchemaDefinition(title="Article", type="Article", values={"_label": "Main Story"})
        assert schema_slug(definition) == "main_story"

    def test_falls_back_to_title_then_type(self):
        assert schema_slug(SchemaDefinition(title="News Piece", type="Article")) == "news_piece"
        assert schema_slug(SchemaDefinition(title="", type="Article")) == "article"

    def test_id_template(self):
        definition = SchemaDefinition(
            title="Organization",
            type="Organization",
            fields=[FieldSpec("@id", FieldKind.HIDDEN, default_value="%site.url%#%id%", required=True)],
        )
        assert schema_id_template(definition) == "%site.url%#organization"

    def test_id_template_default(self):
        assert schema_id_template(SchemaDefinition(title="Person", type="Person")) == "%current.url%#person"


class TestParseFields:
    def test_skips_fields_that_are_neither_required_nor_visible(self):
        fields = [
            FieldSpec("name", required=True, default_value="%post.title%"),
            FieldSpec("email", visible_by_default=True),
            FieldSpec("fax"),
        ]
        assert parse_fields(fields) == {"name": "%post.title%", "email": ""}

    def test_group_with_only_type_collapses(self):
        group = FieldSpec(
            "hasPart", FieldKind.GROUP, visible_by_default=True,
            sub_fields=[_type_tag("WebPageElement"), FieldSpec("cssSelector")],
        )
        assert parse_fields([group]) == {"hasPart": {}}

    def test_cloneable_group_is_a_list(self):
        group = FieldSpec(
            "review", FieldKind.GROUP, visible_by_default=True, cloneable=True,
            sub_fields=[_type_tag("Review"), FieldSpec("reviewBody", required=True, default_value="Great")],
        )
        assert parse_fields([group]) == {"review": [{"@type": "Review", "reviewBody": "Great"}]}

    def test_variant_tag_filters_by_default_type(self):
        offers = FieldSpec(
            "offers", FieldKind.GROUP, visible_by_default=True,
            sub_fields=[
                FieldSpec("@type", required=True, default_value="Offer"),
                FieldSpec("price", required=True, default_value="%product.price%", variant_tag="Offer"),
                FieldSpec("lowPrice", required=True, default_value="%product.low_price%", variant_tag="AggregateOffer"),
                FieldSpec("priceCurrency", required=True, default_value="USD"),
            ],
        )
        assert parse_fields([offers]) == {
            "offers": {"@type": "Offer", "price": "%product.price%", "priceCurrency": "USD"},
        }


class TestRemoveEmpty:
    def test_prunes_recursively_and_keeps_zero(self):
        data = {
            "a": "",
            "b": None,
            "c": False,
            "d": [],
            "e": {"f": ""},
            "g": 0,
            "h": [{"i": ""}, "x"],
            "j": "0",
        }
        assert remove_empty(data) == {"g": 0, "h": ["x"], "j": "0"}

    def test_drops_mappings_left_with_only_type(self):
        data = {
            "image": {"@type": "ImageObject", "url": ""},
            "review": [{"@type": "Review", "reviewBody": None}, {"@type": "Review", "reviewBody": "Good"}],
            "brand": {"@type": "Brand", "name": "Acme"},
        }
        assert remove_empty(data) == {
            "review": [{"@type": "Review", "reviewBody": "Good"}],
            "brand": {"@type": "Brand", "name": "Acme"},
        }

    def test_top_level_type_is_kept(self):
        assert remove_empty({"@type": "Thing", "name": ""}) == {"@type": "Thing"}


class TestSchemaRenderer:
    CONTEXT = {
        "current": {"url": "https://example.com/p/"},
        "post": {"title": "Hello", "empty": ""},
        "site": {"url": "https://example.com/"},
        "schemas": {"organization": {"@id": "%site.url%#organization"}},
    }

    def _render(self, definition: SchemaDefinition) -> dict:
        return SchemaRenderer(definition, VariableResolver(self.CONTEXT)).render()

    def test_type_first_and_internal_keys_removed(self):
        definition = SchemaDefinition(
            title="Article",
            type="Article",
            values={
                "schema_name": "My article",
                "_label": "Article",
                "@id": "%current.url%#%id%",
                "headline": "%post.title%",
                "@type": "BlogPosting",
                "publisher": "%schemas.organization%",
            },
        )
        node = self._render(definition)
        assert list(node)[0] == "@type"
        assert node == {
            "@type": "BlogPosting",
            "@id": "https://example.com/p/#article",
            "headline": "Hello",
            "publisher": {"@id": "https://example.com/#organization"},
        }

    def test_type_defaults_to_schema_type(self):
        node = self._render(SchemaDefinition(title="Thing", type="Thing", values={"name": "%post.title%"}))
        assert node == {"@type": "Thing", "name": "Hello"}

    def test_sub_type_merge(self):
        definition = SchemaDefinition(
            title="Org", type="Organization",
            values={"@type": "Organization", "@sub_type": ["LocalBusiness", ""], "name": "X"},
        )
        node = self._render(definition)
        assert node["@type"] == ["Organization", "LocalBusiness"]
        assert "@sub_type" not in node

    def test_empty_sub_type_keeps_string_type(self):
        definition = SchemaDefinition(title="Org", type="Organization", values={"@sub_type": [], "name": "X"})
        assert self._render(definition)["@type"] == "Organization"

    def test_same_as_mapping_becomes_list(self):
        definition = SchemaDefinition(
            title="Person", type="Person",
            values={"sameAs": {"a1": "https://social.example/ada", "a2": ""}},
        )
        assert self._render(definition)["sameAs"] == ["https://social.example/ada"]

    def test_flatten_clone_map(self):
        definition = SchemaDefinition(
            title="Org", type="Organization",
            fields=[FieldSpec("areaServed", cloneable=True, flatten=True, visible_by_default=True)],
            values={"areaServed": {"x1": "Berlin", "x2": "Paris"}},
        )
        assert self._render(definition)["areaServed"] == ["Berlin", "Paris"]

    def test_defaults_come_from_fields(self):
        definition = SchemaDefinition(
            title="Thing", type="Thing",
            fields=[
                FieldSpec("@id", FieldKind.HIDDEN, default_value="%current.url%#%id%", required=True),
                FieldSpec("name", required=True, default_value="%post.title%"),
                FieldSpec("alternateName", default_value="never emitted"),
            ],
        )
        assert self._render(definition) == {
            "@type": "Thing",
            "@id": "https://example.com/p/#thing",
            "name": "Hello",
        }

    def test_required_but_empty_is_pruned_and_logged(self, caplog):
        definition = SchemaDefinition(
            title="Thing", type="Thing",
            fields=[FieldSpec("name", required=True, default_value="%post.empty%")],
        )
        with caplog.at_level(logging.DEBUG, logger="rankgraph"):
            node = self._render(definition)
        assert node == {"@type": "Thing"}
        assert "required fields rendered empty: name" in caplog.text

    def test_group_resolving_to_only_type_is_omitted(self):
        definition = SchemaDefinition(
            title="Article", type="Article",
            values={"headline": "%post.title%", "author": {"@type": "Person", "name": "%user.missing%"}},
        )
        assert self._render(definition) == {"@type": "Article", "headline": "Hello"}
