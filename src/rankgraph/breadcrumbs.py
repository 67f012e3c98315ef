"""Breadcrumb trail for the current page."""
from __future__ import annotations

from rankgraph.models import Page, PageKind, Post, Term
from rankgraph.provider import ContentProvider

HOME_NAME = "Home"
PRODUCT_CATEGORY_TAXONOMY = "product_cat"
_NO_ARCHIVE_CRUMB = {"post", "page", "product"}


class BreadcrumbTrail:
    """Builds ``[{name, link}]`` crumbs, Home first, for one page."""

    def __init__(self, provider: ContentProvider):
        self.provider = provider
        self.crumbs: list[dict] = []
        self._post_types = {pt.name: pt for pt in provider.post_types()}
        self._taxonomies = {tx.name: tx for tx in provider.taxonomies()}

    def build(self, page: Page) -> list[dict]:
        self.crumbs = []
        self.add(HOME_NAME, self.provider.get_site().url)

        handler = {
            PageKind.TERM_ARCHIVE: self._term_archive,
            PageKind.SINGULAR: self._singular,
            PageKind.AUTHOR_ARCHIVE: self._author,
            PageKind.DATE_ARCHIVE: self._date,
            PageKind.SEARCH: self._search,
            PageKind.NOT_FOUND: self._not_found,
        }.get(page.kind)
        if handler is not None:
            handler(page)
        return self.crumbs

    def add(self, name: str | None, link: str | None = "") -> None:
        if not name:
            return
        self.crumbs.append({"name": name, "link": link or ""})

    # -- page kinds ---------------------------------------------------------

    def _term_archive(self, page: Page) -> None:
        if page.object_id is None:
            return
        term = self.provider.get_term(page.object_id)
        if term is not None:
            self._term_hierarchy(term)

    def _singular(self, page: Page) -> None:
        if page.object_id is None:
            return
        post = self.provider.get_post(page.object_id)
        if post is None or not post.post_type:
            return

        if post.post_type == "product":
            self._shop()
            self._first_term(post, PRODUCT_CATEGORY_TAXONOMY)
        else:
            self._post_type_archive(post)
            info = self._post_types.get(post.post_type)
            if info is not None and info.hierarchical:
                self._post_ancestors(post)
            else:
                taxonomy = self._primary_taxonomy(post.post_type)
                if taxonomy:
                    self._first_term(post, taxonomy)

        self.add(post.title, post.url)

    def _author(self, page: Page) -> None:
        if page.object_id is None:
            return
        user = self.provider.get_user(page.object_id)
        if user is not None:
            self.add(f"Author: {user.display_name}", user.posts_url)

    def _date(self, page: Page) -> None:
        if page.title:
            self.add(page.title, page.url)
        elif page.date is not None:
            self.add(f"{page.date.day} {page.date:%B %Y}", page.url)

    def _search(self, page: Page) -> None:
        self.add(f"Search results for: {page.search_query}", "")

    def _not_found(self, page: Page) -> None:
        self.add("404 Not Found", "")

    # -- helpers ------------------------------------------------------------

    def _shop(self) -> None:
        info = self._post_types.get("product")
        if info is not None and info.archive_url:
            self.add("Shop", info.archive_url)

    def _post_type_archive(self, post: Post) -> None:
        if post.post_type in _NO_ARCHIVE_CRUMB:
            return
        info = self._post_types.get(post.post_type)
        if info is not None and info.archive_url:
            self.add(info.singular_label or info.label, info.archive_url)

    def _post_ancestors(self, post: Post) -> None:
        ancestors: list[Post] = []
        seen = {post.id}
        parent_id = post.parent_id
        while parent_id and parent_id not in seen:
            parent = self.provider.get_post(parent_id)
            if parent is None:
                break
            seen.add(parent_id)
            ancestors.insert(0, parent)
            parent_id = parent.parent_id
        for ancestor in ancestors:
            if ancestor.url:
                self.add(ancestor.title, ancestor.url)

    def _primary_taxonomy(self, post_type: str) -> str | None:
        """First hierarchical taxonomy attached to the post type, else the first one."""
        info = self._post_types.get(post_type)
        names = list(info.taxonomies) if info is not None else []
        if not names:
            names = [tx.name for tx in self._taxonomies.values() if post_type in tx.object_types]
        for name in names:
            taxonomy = self._taxonomies.get(name)
            if taxonomy is not None and taxonomy.hierarchical:
                return name
        return names[0] if names else None

    def _first_term(self, post: Post, taxonomy: str) -> None:
        terms = self.provider.get_post_terms(post.id, taxonomy)
        if terms:
            self._term_hierarchy(terms[0])

    def _term_hierarchy(self, term: Term) -> None:
        ancestors: list[Term] = []
        seen = {term.id}
        parent_id = term.parent_id
        while parent_id and parent_id not in seen:
            parent = self.provider.get_term(parent_id)
            if parent is None:
                break
            seen.add(parent_id)
            ancestors.insert(0, parent)
            parent_id = parent.parent_id

        for ancestor in ancestors:
            if ancestor.url:
                self.add(ancestor.name, ancestor.url)
        if term.url:
            self.add(term.name, term.url)


def build_breadcrumbs(page: Page, provider: ContentProvider) -> list[dict]:
    """Return the breadcrumb trail as ``[{"name": ..., "link": ...}]``."""
    return BreadcrumbTrail(provider).build(page)


def to_list_items(crumbs: list[dict]) -> list[dict]:
    """Convert crumbs to schema.org ListItem nodes with 1-based positions."""
    return [
        {
            "@type": "ListItem",
            "position": index,
            "item": {"@id": crumb["link"], "name": crumb["name"]},
        }
        for index, crumb in enumerate(crumbs, start=1)
    ]
