"""Schema type: Person, filled from the post author."""
from __future__ import annotations

from rankgraph.models import FieldSpec, RuleSet, SchemaType
from rankgraph.schemas._helpers import helper_property, id_field, title_field


class Person(SchemaType):
    name = "Person"
    title = "Person"
    docs_url = "https://schema.org/Person"
    show_on = RuleSet(rules=["post|all"])

    def fields(self) -> list[FieldSpec]:
        return [
            title_field("Person"),
            id_field(),
            FieldSpec("name", required=True, default_value="%author.display_name%", label="Name"),
            FieldSpec("url", default_value="%author.posts_url%", visible_by_default=True, label="URL"),
            FieldSpec("givenName", default_value="%author.first_name%", visible_by_default=True, label="Given name"),
            FieldSpec("familyName", default_value="%author.last_name%", visible_by_default=True, label="Family name"),
            FieldSpec("brand", default_value="%site.title%", visible_by_default=True, label="Brand"),
            FieldSpec("mainEntityOfPage", default_value="", visible_by_default=True, label="Main entity of page"),
            helper_property("description", default_value="%author.description%"),
            FieldSpec("email", label="Email"),
            FieldSpec("image", default_value="%author.avatar%", visible_by_default=True, label="Image"),
            FieldSpec("telephone", label="Telephone"),
            FieldSpec("sameAs", default_value="", cloneable=True, visible_by_default=True, label="Same as"),
        ]


SCHEMA_TYPE = Person()
