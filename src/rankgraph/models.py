"""Core models for rankgraph."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class FieldKind(Enum):
    """Kinds of nodes in a schema field tree."""
    SCALAR = "Scalar"
    GROUP = "Group"
    HIDDEN = "Hidden"
    TITLE = "Title"


class PageKind(Enum):
    """What the current request renders."""
    SINGULAR = "singular"
    POST_TYPE_ARCHIVE = "post_type_archive"
    TERM_ARCHIVE = "term_archive"
    AUTHOR_ARCHIVE = "author_archive"
    DATE_ARCHIVE = "date_archive"
    BLOG = "blog"
    SEARCH = "search"
    NOT_FOUND = "404"

    @classmethod
    def from_string(cls, value: str) -> PageKind:
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Unknown page kind: {value}")


@dataclass
class FieldSpec:
    """A node in a schema's field tree."""
    id: str
    kind: FieldKind = FieldKind.SCALAR
    default_value: str | list | None = None
    required: bool = False
    visible_by_default: bool = False
    cloneable: bool = False
    flatten: bool = False
    sub_fields: list[FieldSpec] = field(default_factory=list)
    variant_tag: str | None = None
    label: str = ""
    tooltip: str = ""
    options: dict | None = None

    @property
    def is_emitted(self) -> bool:
        return bool(self.id) and (self.required or self.visible_by_default)

    def with_overrides(self, **changes) -> FieldSpec:
        return replace(self, **changes)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "kind": self.kind.value,
            "default_value": self.default_value,
            "required": self.required,
            "visible_by_default": self.visible_by_default,
            "cloneable": self.cloneable,
            "flatten": self.flatten,
            "variant_tag": self.variant_tag,
            "label": self.label,
            "tooltip": self.tooltip,
        }
        if self.options:
            data["options"] = self.options
        if self.kind == FieldKind.GROUP:
            data["sub_fields"] = [f.to_dict() for f in self.sub_fields]
        return data


@dataclass
class RuleSet:
    """Visibility rules plus literal entity references."""
    rules: list[str] = field(default_factory=list)
    specific_ids: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rules and not self.specific_ids

    @classmethod
    def from_dict(cls, data: dict | None) -> RuleSet:
        data = data or {}
        return cls(
            rules=[str(r) for r in data.get("rules") or []],
            specific_ids=[str(s) for s in data.get("specific") or []],
        )

    def to_dict(self) -> dict:
        return {"rules": list(self.rules), "specific": list(self.specific_ids)}


@dataclass
class SchemaDefinition:
    """One schema instance: its type, where it shows, and its fields.

    ``values`` holds the stored field values of a saved instance. When it is
    None the defaults are parsed from ``fields``.
    """
    title: str
    type: str
    show_on: RuleSet = field(default_factory=RuleSet)
    not_show_on: RuleSet = field(default_factory=RuleSet)
    fields: list[FieldSpec] = field(default_factory=list)
    values: dict | None = None

    @classmethod
    def from_dict(cls, data: dict, fields: list[FieldSpec] | None = None) -> SchemaDefinition:
        schema_type = data.get("type") or data.get("title") or "Thing"
        return cls(
            title=data.get("title") or schema_type,
            type=schema_type,
            show_on=RuleSet.from_dict(data.get("show_on")),
            not_show_on=RuleSet.from_dict(data.get("not_show_on")),
            fields=list(fields or []),
            values=dict(data["fields"]) if isinstance(data.get("fields"), dict) else None,
        )

    def to_dict(self) -> dict:
        from rankgraph.renderer import parse_fields

        return {
            "title": self.title,
            "type": self.type,
            "show_on": self.show_on.to_dict(),
            "not_show_on": self.not_show_on.to_dict(),
            "fields": self.values if self.values is not None else parse_fields(self.fields),
        }


@dataclass
class Page:
    """Descriptor of the page being rendered, supplied by the host."""
    kind: PageKind
    url: str = ""
    object_id: int | None = None
    post_type: str | None = None
    taxonomy: str | None = None
    is_front_page: bool = False
    search_query: str = ""
    title: str | None = None
    date: datetime | None = None

    @property
    def is_singular(self) -> bool:
        return self.kind == PageKind.SINGULAR

    @property
    def is_archive(self) -> bool:
        return self.kind in (
            PageKind.POST_TYPE_ARCHIVE,
            PageKind.TERM_ARCHIVE,
            PageKind.AUTHOR_ARCHIVE,
            PageKind.DATE_ARCHIVE,
        )

    @classmethod
    def from_dict(cls, data: dict) -> Page:
        date = data.get("date")
        if isinstance(date, str) and date:
            date = datetime.fromisoformat(date)
        object_id = data.get("object_id")
        return cls(
            kind=PageKind.from_string(data.get("kind", "singular")),
            url=data.get("url", ""),
            object_id=int(object_id) if object_id is not None else None,
            post_type=data.get("post_type"),
            taxonomy=data.get("taxonomy"),
            is_front_page=bool(data.get("is_front_page", False)),
            search_query=data.get("search_query", ""),
            title=data.get("title"),
            date=date or None,
        )


@dataclass
class PageContext:
    """What the rule evaluator may know about the current request."""
    page: Page
    post_terms: dict[str, list[int]] = field(default_factory=dict)
    product_type: str | None = None
    post_types: set[str] = field(default_factory=set)

    @property
    def kind(self) -> PageKind:
        return self.page.kind

    def has_term(self, term_id: int, taxonomy: str | None = None) -> bool:
        if taxonomy is not None:
            return term_id in self.post_terms.get(taxonomy, [])
        return any(term_id in ids for ids in self.post_terms.values())


# ---------------------------------------------------------------------------
# Content entities returned by the content provider
# ---------------------------------------------------------------------------

@dataclass
class Term:
    id: int
    name: str
    slug: str = ""
    taxonomy: str = ""
    description: str = ""
    url: str = ""
    parent_id: int = 0


@dataclass
class Post:
    id: int
    title: str
    post_type: str = "post"
    excerpt: str = ""
    content: str = ""
    url: str = ""
    slug: str = ""
    date: datetime | None = None
    modified_date: datetime | None = None
    thumbnail: str = ""
    comment_count: int = 0
    author_id: int | None = None
    parent_id: int = 0
    custom_fields: dict = field(default_factory=dict)


@dataclass
class User:
    id: int
    display_name: str = ""
    first_name: str = ""
    last_name: str = ""
    username: str = ""
    nickname: str = ""
    email: str = ""
    website_url: str = ""
    nicename: str = ""
    description: str = ""
    posts_url: str = ""
    avatar: str = ""


@dataclass
class Site:
    title: str = ""
    description: str = ""
    url: str = ""
    language: str = "en_US"
    icon: str = ""


@dataclass
class Product:
    """Commerce facts about a product entity."""
    type: str = "simple"
    price: str = ""
    price_with_tax: str = ""
    low_price: str = ""
    high_price: str = ""
    offer_count: int = 0
    sku: str = ""
    stock: str = ""
    currency: str = ""
    rating: str = ""
    review_count: int = 0
    image: str = ""
    image_width: int | None = None
    image_height: int | None = None
    description: str = ""
    sale_from: str = ""
    sale_to: str = ""


@dataclass
class PostTypeInfo:
    name: str
    label: str
    singular_label: str = ""
    hierarchical: bool = False
    builtin: bool = False
    archive_url: str = ""
    taxonomies: list[str] = field(default_factory=list)


@dataclass
class TaxonomyInfo:
    name: str
    label: str
    hierarchical: bool = False
    object_types: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Schema type generators
# ---------------------------------------------------------------------------

class SchemaType(ABC):
    """Base class for all schema type generators."""
    name: str
    title: str
    docs_url: str = ""
    show_on: RuleSet
    not_show_on: RuleSet = RuleSet()

    @abstractmethod
    def fields(self) -> list[FieldSpec]:
        """Return the field tree for this schema type."""

    def type_options(self) -> dict:
        """Choices offered for the ``@type`` field, if any."""
        return {}

    def definition(self, fields: list[FieldSpec] | None = None) -> SchemaDefinition:
        return SchemaDefinition(
            title=self.title,
            type=self.name,
            show_on=RuleSet(list(self.show_on.rules), list(self.show_on.specific_ids)),
            not_show_on=RuleSet(list(self.not_show_on.rules), list(self.not_show_on.specific_ids)),
            fields=list(fields) if fields is not None else self.fields(),
        )
