"""Collects the render context for one page."""
from __future__ import annotations

import html
import re
from datetime import datetime

from rankgraph.breadcrumbs import build_breadcrumbs, to_list_items
from rankgraph.models import Page, PageContext, PageKind, Post, Product, SchemaDefinition, User
from rankgraph.provider import ContentProvider, ProductSource, supports_products
from rankgraph.registry import Registry
from rankgraph.renderer import schema_id_template, schema_slug

EXCERPT_WORDS = 55
DEFAULT_TAXONOMIES = ("category", "post_tag")

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text(value) -> str:
    """Strip markup and collapse whitespace."""
    if value is None:
        return ""
    text = _TAG_RE.sub(" ", str(value))
    return _WHITESPACE_RE.sub(" ", text).strip()


def excerpt_from(content: str, words: int = EXCERPT_WORDS) -> str:
    parts = sanitize_text(content).split()
    if len(parts) <= words:
        return " ".join(parts)
    return " ".join(parts[:words]) + "…"


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value is not None else ""


def taxonomy_names(provider: ContentProvider, post_type: str | None = None) -> list[str]:
    """Taxonomies attached to ``post_type``, falling back to category and post_tag."""
    names = [
        tx.name for tx in provider.taxonomies()
        if post_type is None or not tx.object_types or post_type in tx.object_types
    ]
    return names or list(DEFAULT_TAXONOMIES)


def build_page_context(page: Page, provider: ContentProvider) -> PageContext:
    """What the rule evaluator needs to know about ``page``."""
    post_terms: dict[str, list[int]] = {}
    product_type = None

    if page.is_singular and page.object_id is not None:
        for taxonomy in taxonomy_names(provider, page.post_type):
            terms = provider.get_post_terms(page.object_id, taxonomy)
            if terms:
                post_terms[taxonomy] = [t.id for t in terms]
        if page.post_type == "product" and supports_products(provider):
            product = provider.get_product(page.object_id)
            if product is not None:
                product_type = product.type

    return PageContext(
        page=page,
        post_terms=post_terms,
        product_type=product_type,
        post_types={pt.name for pt in provider.post_types()},
    )


def schema_links(definitions: list[SchemaDefinition]) -> dict:
    """Map each schema slug to its ``{"@id": ...}`` reference."""
    return {schema_slug(d): {"@id": schema_id_template(d)} for d in definitions}


class ContextCollector:
    """Gathers post, term, author, user, site, current and schemas facts.

    A collector serves a single render pass; nothing is cached between
    pages.
    """

    def __init__(self, provider: ContentProvider, registry: Registry | None = None):
        self.provider = provider
        self.registry = registry

    def collect(self, page: Page, schemas: list[SchemaDefinition]) -> dict:
        post = self._current_post(page)
        context = {
            "post": self.post_data(post),
            "term": self.term_data(page),
            "author": self.user_data(self._author_id(page, post)),
            "user": self.user_data(self.provider.get_current_user_id()),
            "site": self.site_data(),
            "current": self.current_data(page, post),
            "schemas": schema_links(schemas),
        }
        if supports_products(self.provider):
            context["product"] = self.product_data(page, post)

        if self.registry is not None:
            context = self.registry.extend_context(context, page)

        post_data = context.get("post")
        if isinstance(post_data, dict) and "content" in post_data:
            content = html.escape(str(post_data["content"] or ""), quote=False)
            post_data["content"] = content
            post_data["word_count"] = len(content.split())
        return context

    # -- entities -----------------------------------------------------------

    def _current_post(self, page: Page) -> Post | None:
        if not page.is_singular or page.object_id is None:
            return None
        return self.provider.get_post(page.object_id)

    def _author_id(self, page: Page, post: Post | None) -> int | None:
        if post is not None:
            return post.author_id
        if page.kind == PageKind.AUTHOR_ARCHIVE:
            return page.object_id
        return None

    def post_data(self, post: Post | None) -> dict:
        if post is None:
            return {}

        names = taxonomy_names(self.provider, post.post_type)
        for default in DEFAULT_TAXONOMIES:
            if default not in names:
                names.append(default)

        term_names = {
            taxonomy: [sanitize_text(t.name) for t in self.provider.get_post_terms(post.id, taxonomy)]
            for taxonomy in names
        }
        content = sanitize_text(post.content)

        return {
            "ID": post.id,
            "title": sanitize_text(post.title),
            "excerpt": sanitize_text(post.excerpt) or excerpt_from(content),
            "content": content,
            "url": post.url,
            "slug": post.slug,
            "date": _iso(post.date),
            "modified_date": _iso(post.modified_date),
            "created_date": _iso(post.date),
            "thumbnail": post.thumbnail,
            "comment_count": post.comment_count,
            "tags": ", ".join(term_names.get("post_tag", [])),
            "categories": ", ".join(term_names.get("category", [])),
            "custom_field": {key: sanitize_text(value) for key, value in post.custom_fields.items()},
            "taxonomies": {taxonomy: terms for taxonomy, terms in term_names.items() if terms},
            "tax": {taxonomy: ", ".join(terms) for taxonomy, terms in term_names.items()},
        }

    def term_data(self, page: Page) -> dict:
        if page.kind != PageKind.TERM_ARCHIVE or page.object_id is None:
            return {}
        term = self.provider.get_term(page.object_id)
        if term is None:
            return {}
        return {
            "ID": term.id,
            "name": sanitize_text(term.name),
            "slug": term.slug,
            "taxonomy": term.taxonomy,
            "description": sanitize_text(term.description),
            "url": term.url,
        }

    def user_data(self, user_id: int | None) -> dict:
        if not user_id:
            return {}
        user: User | None = self.provider.get_user(user_id)
        if user is None:
            return {}
        return {
            "ID": user.id,
            "first_name": sanitize_text(user.first_name),
            "last_name": sanitize_text(user.last_name),
            "username": sanitize_text(user.username),
            "display_name": sanitize_text(user.display_name),
            "nickname": sanitize_text(user.nickname),
            "email": user.email.strip(),
            "website_url": user.website_url,
            "nicename": user.nicename,
            "description": html.escape(sanitize_text(user.description), quote=False),
            "posts_url": user.posts_url,
            "avatar": user.avatar,
        }

    def site_data(self) -> dict:
        site = self.provider.get_site()
        return {
            "title": sanitize_text(site.title),
            "description": sanitize_text(site.description),
            "url": site.url,
            "language": site.language,
            "icon": site.icon,
        }

    def current_data(self, page: Page, post: Post | None) -> dict:
        crumbs = [
            {"name": sanitize_text(crumb["name"]), "link": crumb["link"]}
            for crumb in build_breadcrumbs(page, self.provider)
        ]
        return {
            "url": page.url,
            "title": sanitize_text(self._current_title(page, post)),
            "breadcrumbs": to_list_items(crumbs),
        }

    def _current_title(self, page: Page, post: Post | None) -> str:
        if page.title:
            return page.title
        if post is not None:
            return post.title
        if page.object_id is None:
            return ""
        if page.kind == PageKind.TERM_ARCHIVE:
            term = self.provider.get_term(page.object_id)
            return term.name if term is not None else ""
        if page.kind == PageKind.AUTHOR_ARCHIVE:
            user = self.provider.get_user(page.object_id)
            return user.display_name if user is not None else ""
        return ""

    def product_data(self, page: Page, post: Post | None) -> dict:
        if post is None or post.post_type != "product" or not isinstance(self.provider, ProductSource):
            return {}
        product: Product | None = self.provider.get_product(post.id)
        if product is None:
            return {}
        return {
            "price": product.price,
            "price_with_tax": product.price_with_tax,
            "low_price": product.low_price,
            "high_price": product.high_price,
            "offer_count": product.offer_count,
            "sku": product.sku,
            "stock": product.stock,
            "currency": product.currency,
            "rating": product.rating,
            "review_count": product.review_count,
            "image": product.image,
            "image_width": product.image_width,
            "image_height": product.image_height,
            "description": sanitize_text(product.description),
            "sale_from": product.sale_from,
            "sale_to": product.sale_to,
        }
