"""Schema type: SearchAction for the site search box."""
from __future__ import annotations

from rankgraph.models import FieldKind, FieldSpec, RuleSet, SchemaType
from rankgraph.schemas._helpers import SITE_ID, id_field, title_field

SEARCH_TARGET = "%site.url%?s={search_term_string}"


class SearchAction(SchemaType):
    name = "SearchAction"
    title = "SearchAction"
    docs_url = "https://schema.org/SearchAction"
    show_on = RuleSet(rules=["basic-global"])

    def fields(self) -> list[FieldSpec]:
        return [
            title_field("SearchAction"),
            id_field(SITE_ID),
            FieldSpec("target", FieldKind.HIDDEN, required=True, default_value=SEARCH_TARGET),
            FieldSpec(
                "query-input",
                FieldKind.HIDDEN,
                required=True,
                default_value="required name=search_term_string",
            ),
        ]


SCHEMA_TYPE = SearchAction()
