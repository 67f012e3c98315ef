"""Shared fixtures: a small blog with posts, pages, a custom post type and terms."""
from __future__ import annotations

import copy

import pytest

from rankgraph.models import Page, PageKind
from rankgraph.provider import InMemoryProvider

BLOG = {
    "site": {
        "title": "Example Blog",
        "description": "Notes on things",
        "url": "https://example.com/",
        "language": "en_US",
        "icon": "https://example.com/icon.png",
    },
    "current_user": 2,
    "post_types": [
        {"name": "post", "label": "Posts", "singular_label": "Post", "builtin": True,
         "taxonomies": ["category", "post_tag"]},
        {"name": "page", "label": "Pages", "singular_label": "Page", "builtin": True, "hierarchical": True},
        {"name": "book", "label": "Books", "singular_label": "Book",
         "archive_url": "https://example.com/books/", "taxonomies": ["genre"]},
        {"name": "attachment", "label": "Media", "builtin": True},
    ],
    "taxonomies": [
        {"name": "category", "label": "Categories", "hierarchical": True, "object_types": ["post"]},
        {"name": "post_tag", "label": "Tags", "object_types": ["post"]},
        {"name": "genre", "label": "Genres", "hierarchical": True, "object_types": ["book"]},
        {"name": "post_format", "label": "Formats", "object_types": ["post"]},
    ],
    "terms": [
        {"id": 3, "name": "News", "slug": "news", "taxonomy": "category",
         "url": "https://example.com/category/news/"},
        {"id": 7, "name": "Guides", "slug": "guides", "taxonomy": "category", "parent_id": 3,
         "description": "How-to <em>guides</em>", "url": "https://example.com/category/news/guides/"},
        {"id": 9, "name": "python", "slug": "python", "taxonomy": "post_tag",
         "url": "https://example.com/tag/python/"},
        {"id": 11, "name": "Fiction", "slug": "fiction", "taxonomy": "genre",
         "url": "https://example.com/genre/fiction/"},
    ],
    "users": [
        {"id": 2, "display_name": "Ada Lovelace", "first_name": "Ada", "last_name": "Lovelace",
         "username": "ada", "email": "ada@example.com", "nicename": "ada",
         "posts_url": "https://example.com/author/ada/"},
    ],
    "posts": [
        {"id": 42, "title": "Hello <b>World</b>", "post_type": "post",
         "content": "<p>First paragraph of the post.</p>\n<p>Second one.</p>",
         "url": "https://example.com/hello-world/", "slug": "hello-world",
         "date": "2024-05-01T10:00:00", "modified_date": "2024-05-02T12:00:00",
         "thumbnail": "https://example.com/hello.jpg", "comment_count": 3, "author_id": 2,
         "terms": {"category": [7], "post_tag": [9]}},
        {"id": 10, "title": "About", "post_type": "page", "url": "https://example.com/about/", "author_id": 2},
        {"id": 11, "title": "Team", "post_type": "page", "parent_id": 10,
         "url": "https://example.com/about/team/", "author_id": 2},
        {"id": 50, "title": "Dune", "post_type": "book", "url": "https://example.com/books/dune/",
         "terms": {"genre": [11]}},
    ],
}


@pytest.fixture
def blog_data() -> dict:
    return copy.deepcopy(BLOG)


@pytest.fixture
def provider(blog_data) -> InMemoryProvider:
    return InMemoryProvider(blog_data)


@pytest.fixture
def post_page() -> Page:
    return Page(kind=PageKind.SINGULAR, url="https://example.com/hello-world/", object_id=42, post_type="post")


@pytest.fixture
def front_page() -> Page:
    return Page(kind=PageKind.SINGULAR, url="https://example.com/", object_id=10, post_type="page",
                is_front_page=True)
