"""Content provider interface and an in-memory implementation.

The provider is the only way rankgraph reads content entities and site
facts. Hosts implement ``ContentProvider`` on top of their own storage;
``InMemoryProvider`` serves fixtures loaded from YAML or JSON.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime

from rankgraph.models import Page, PageKind, Post, PostTypeInfo, Product, Site, TaxonomyInfo, Term, User

logger = logging.getLogger("rankgraph")


class ContentProvider(ABC):
    """Read-only access to the current request's content entities."""

    @abstractmethod
    def get_post(self, post_id: int) -> Post | None:
        """Return the post with the given id, or None."""

    @abstractmethod
    def get_term(self, term_id: int) -> Term | None:
        """Return the taxonomy term with the given id, or None."""

    @abstractmethod
    def get_user(self, user_id: int) -> User | None:
        """Return the user with the given id, or None."""

    @abstractmethod
    def get_site(self) -> Site:
        """Return site-level facts."""

    @abstractmethod
    def get_post_terms(self, post_id: int, taxonomy: str) -> list[Term]:
        """Return the terms of ``taxonomy`` attached to a post, in order."""

    def get_current_user_id(self) -> int | None:
        return None

    def post_types(self) -> list[PostTypeInfo]:
        return []

    def taxonomies(self) -> list[TaxonomyInfo]:
        return []

    def get_schema_overrides(self, page: Page) -> list[dict]:
        """Stored schema set for the page's own entity, if it has one."""
        return []


class ProductSource(ABC):
    """Capability implemented by providers that know about commerce products."""

    @abstractmethod
    def get_product(self, post_id: int) -> Product | None:
        """Return commerce facts for a product post, or None."""

    @abstractmethod
    def product_types(self) -> dict[str, str]:
        """Map of product type key to label (e.g. ``simple``: ``Simple product``)."""

    def products_enabled(self) -> bool:
        return True


def _parse_date(value) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.warning("Ignoring unparseable date '%s'", value)
    return None


class InMemoryProvider(ContentProvider, ProductSource):
    """Provider backed by a nested mapping.

    Expected layout::

        site: {title, description, url, language, icon}
        current_user: 3
        post_types: [{name, label, hierarchical, taxonomies, ...}]
        taxonomies: [{name, label, hierarchical, object_types}]
        posts: [{id, title, post_type, ..., terms: {category: [7]}, schemas: [...]}]
        terms: [{id, name, taxonomy, ..., schemas: [...]}]
        users: [{id, display_name, ..., schemas: [...]}]
        products: {42: {type, price, ...}}
        product_types: {simple: Simple product}

    Commerce is enabled only when ``products`` or ``product_types`` is
    present.
    """

    def __init__(self, data: dict | None = None):
        data = data or {}
        self._site = Site(**(data.get("site") or {}))
        self._current_user = data.get("current_user")
        self._post_types = [PostTypeInfo(**pt) for pt in data.get("post_types") or []]
        self._taxonomies = [TaxonomyInfo(**tx) for tx in data.get("taxonomies") or []]
        self._posts: dict[int, Post] = {}
        self._post_terms: dict[int, dict[str, list[int]]] = {}
        self._overrides: dict[tuple[str, int], list[dict]] = {}
        self._terms: dict[int, Term] = {}
        self._users: dict[int, User] = {}

        for raw in data.get("posts") or []:
            raw = dict(raw)
            post_id = int(raw.pop("id"))
            self._post_terms[post_id] = {
                tax: [int(t) for t in ids] for tax, ids in (raw.pop("terms", None) or {}).items()
            }
            self._store_overrides("post", post_id, raw.pop("schemas", None))
            raw["date"] = _parse_date(raw.get("date"))
            raw["modified_date"] = _parse_date(raw.get("modified_date"))
            self._posts[post_id] = Post(id=post_id, **raw)

        for raw in data.get("terms") or []:
            raw = dict(raw)
            term_id = int(raw.pop("id"))
            self._store_overrides("term", term_id, raw.pop("schemas", None))
            self._terms[term_id] = Term(id=term_id, **raw)

        for raw in data.get("users") or []:
            raw = dict(raw)
            user_id = int(raw.pop("id"))
            self._store_overrides("user", user_id, raw.pop("schemas", None))
            self._users[user_id] = User(id=user_id, **raw)

        self._products = {int(k): Product(**v) for k, v in (data.get("products") or {}).items()}
        self._product_types = dict(data.get("product_types") or {})
        self._commerce = "products" in data or "product_types" in data

    def _store_overrides(self, kind: str, object_id: int, schemas) -> None:
        if schemas:
            self._overrides[(kind, object_id)] = list(schemas)

    def get_post(self, post_id: int) -> Post | None:
        return self._posts.get(post_id)

    def get_term(self, term_id: int) -> Term | None:
        return self._terms.get(term_id)

    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_site(self) -> Site:
        return self._site

    def get_current_user_id(self) -> int | None:
        return self._current_user

    def get_post_terms(self, post_id: int, taxonomy: str) -> list[Term]:
        ids = self._post_terms.get(post_id, {}).get(taxonomy, [])
        return [self._terms[i] for i in ids if i in self._terms]

    def post_types(self) -> list[PostTypeInfo]:
        return list(self._post_types)

    def taxonomies(self) -> list[TaxonomyInfo]:
        return list(self._taxonomies)

    def get_schema_overrides(self, page: Page) -> list[dict]:
        if page.object_id is None:
            return []
        kind = {
            PageKind.SINGULAR: "post",
            PageKind.TERM_ARCHIVE: "term",
            PageKind.AUTHOR_ARCHIVE: "user",
        }.get(page.kind)
        if kind is None:
            return []
        return list(self._overrides.get((kind, page.object_id), []))

    def get_product(self, post_id: int) -> Product | None:
        return self._products.get(post_id)

    def product_types(self) -> dict[str, str]:
        return dict(self._product_types)

    def products_enabled(self) -> bool:
        return self._commerce


def supports_products(provider: ContentProvider) -> bool:
    """True when the provider exposes the commerce capability and it is enabled."""
    return isinstance(provider, ProductSource) and provider.products_enabled()
