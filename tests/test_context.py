"""Tests for render-context collection."""
from __future__ import annotations

from rankgraph.context import ContextCollector, build_page_context, excerpt_from, sanitize_text, schema_links
from rankgraph.models import Page, PageKind, SchemaDefinition
from rankgraph.provider import InMemoryProvider
from rankgraph.registry import Registry


class TestSanitize:
    def test_strips_tags_and_collapses_whitespace(self):
        assert sanitize_text("<p>Hello\n\n <b>World</b></p>") == "Hello World"

    def test_none(self):
        assert sanitize_text(None) == ""

    def test_excerpt_truncates_to_word_limit(self):
        text = " ".join(f"w{i}" for i in range(60))
        excerpt = excerpt_from(text)
        assert excerpt.split()[0] == "w0"
        assert len(excerpt.rstrip("…").split()) == 55
        assert excerpt.endswith("…")

    def test_short_excerpt_is_untouched(self):
        assert excerpt_from("Just a few words") == "Just a few words"


class TestPageContext:
    def test_singular_collects_terms(self, provider, post_page):
        ctx = build_page_context(post_page, provider)
        assert ctx.post_terms == {"category": [7], "post_tag": [9]}
        assert ctx.post_types == {"post", "page", "book", "attachment"}
        assert ctx.product_type is None

    def test_archive_has_no_terms(self, provider):
        ctx = build_page_context(Page(kind=PageKind.TERM_ARCHIVE, object_id=7), provider)
        assert ctx.post_terms == {}

    def test_product_type(self, blog_data):
        blog_data["posts"].append({"id": 60, "title": "Runner", "post_type": "product"})
        blog_data["products"] = {60: {"type": "variable"}}
        page = Page(kind=PageKind.SINGULAR, object_id=60, post_type="product")
        assert build_page_context(page, InMemoryProvider(blog_data)).product_type == "variable"


class TestCollect:
    def test_post_namespace(self, provider, post_page):
        post = ContextCollector(provider).collect(post_page, [])["post"]
        assert post["ID"] == 42
        assert post["title"] == "Hello World"
        assert post["excerpt"] == "First paragraph of the post. Second one."
        assert post["date"] == "2024-05-01T10:00:00"
        assert post["created_date"] == post["date"]
        assert post["modified_date"] == "2024-05-02T12:00:00"
        assert post["tags"] == "python"
        assert post["categories"] == "Guides"
        assert post["tax"]["category"] == "Guides"
        assert post["taxonomies"] == {"category": ["Guides"], "post_tag": ["python"]}
        assert post["word_count"] == 7

    def test_content_is_escaped(self, blog_data, post_page):
        blog_data["posts"][0]["content"] = "Fish & chips <script>x</script>"
        post = ContextCollector(InMemoryProvider(blog_data)).collect(post_page, [])["post"]
        assert post["content"] == "Fish &amp; chips x"
        assert post["word_count"] == 4

    def test_author_and_user(self, provider, post_page):
        context = ContextCollector(provider).collect(post_page, [])
        assert context["author"]["display_name"] == "Ada Lovelace"
        assert context["author"]["posts_url"] == "https://example.com/author/ada/"
        assert context["user"]["ID"] == 2

    def test_site_and_current(self, provider, post_page):
        context = ContextCollector(provider).collect(post_page, [])
        assert context["site"]["title"] == "Example Blog"
        assert context["current"]["url"] == "https://example.com/hello-world/"
        assert context["current"]["title"] == "Hello World"
        names = [item["item"]["name"] for item in context["current"]["breadcrumbs"]]
        assert names == ["Home", "News", "Guides", "Hello World"]

    def test_term_archive(self, provider):
        page = Page(kind=PageKind.TERM_ARCHIVE, object_id=7, taxonomy="category",
                    url="https://example.com/category/news/guides/")
        context = ContextCollector(provider).collect(page, [])
        assert context["post"] == {}
        assert context["author"] == {}
        assert context["term"]["name"] == "Guides"
        assert context["term"]["description"] == "How-to guides"
        assert context["current"]["title"] == "Guides"

    def test_author_archive_uses_queried_user(self, provider):
        page = Page(kind=PageKind.AUTHOR_ARCHIVE, object_id=2)
        context = ContextCollector(provider).collect(page, [])
        assert context["author"]["username"] == "ada"
        assert context["current"]["title"] == "Ada Lovelace"

    def test_missing_entities_give_empty_namespaces(self, post_page):
        context = ContextCollector(InMemoryProvider({})).collect(post_page, [])
        assert context["post"] == {}
        assert context["author"] == {}
        assert context["user"] == {}
        assert "product" not in context

    def test_schema_links(self, provider, post_page):
        schemas = [
            SchemaDefinition(title="Article", type="Article"),
            SchemaDefinition(title="Organization", type="Organization", values={"@id": "%site.url%#%id%"}),
        ]
        context = ContextCollector(provider).collect(post_page, schemas)
        assert context["schemas"] == {
            "article": {"@id": "%current.url%#article"},
            "organization": {"@id": "%site.url%#organization"},
        }

    def test_schema_links_use_label(self):
        definition = SchemaDefinition(title="Article", type="Article", values={"_label": "Main Story"})
        assert schema_links([definition]) == {"main_story": {"@id": "%current.url%#main_story"}}

    def test_product_namespace(self, blog_data):
        blog_data["posts"].append({"id": 60, "title": "Runner", "post_type": "product"})
        blog_data["products"] = {60: {"price": "49.00", "currency": "EUR", "sku": "RUN-1", "review_count": 0}}
        page = Page(kind=PageKind.SINGULAR, object_id=60, post_type="product")
        product = ContextCollector(InMemoryProvider(blog_data)).collect(page, [])["product"]
        assert product["price"] == "49.00"
        assert product["currency"] == "EUR"
        assert product["review_count"] == 0

    def test_extenders_run_before_content_normalization(self, provider, post_page):
        registry = Registry()

        def add_reading_time(context, page):
            context["post"]["content"] = context["post"]["content"] + " <extra>"
            context["reading"] = {"minutes": 1}
            return context

        registry.add_context_extender(add_reading_time)
        context = ContextCollector(provider, registry).collect(post_page, [])
        assert context["reading"] == {"minutes": 1}
        assert context["post"]["content"].endswith("&lt;extra&gt;")
        assert context["post"]["word_count"] == 8
