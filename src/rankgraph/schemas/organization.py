"""Schema type: Organization and its subtypes."""
from __future__ import annotations

from rankgraph.models import FieldSpec, RuleSet, SchemaType
from rankgraph.schemas._helpers import SITE_ID, helper_property, id_field, title_field

_TYPE_GROUPS = {
    "general": ("General", ["Organization", "Corporation", "NGO"]),
    "education": ("Educational", [
        "EducationalOrganization", "CollegeOrUniversity", "ElementarySchool",
        "HighSchool", "MiddleSchool", "Preschool", "School",
    ]),
    "government": ("Government", ["GovernmentOrganization", "FundingAgency"]),
    "medical": ("Medical", ["MedicalOrganization", "DiagnosticLab", "VeterinaryCare"]),
    "arts": ("Arts & Performance", ["PerformingGroup", "DanceGroup", "MusicGroup", "TheaterGroup"]),
    "media": ("Media", ["NewsMediaOrganization"]),
    "research": ("Research", ["Project", "ResearchProject", "Consortium"]),
    "sports": ("Sports", ["SportsOrganization", "SportsTeam"]),
    "services": ("Services", ["Airline", "LibrarySystem", "WorkersUnion"]),
}


class Organization(SchemaType):
    """The organization behind the site."""

    name = "Organization"
    title = "Organization"
    docs_url = "https://schema.org/Organization"
    show_on = RuleSet(rules=["basic-global"])

    def type_options(self) -> dict:
        """Grouped ``@type`` choices: ``{group: {"label": ..., "options": {...}}}``."""
        return {
            key: {"label": label, "options": {t: t for t in types}}
            for key, (label, types) in _TYPE_GROUPS.items()
        }

    def fields(self) -> list[FieldSpec]:
        return [
            id_field(SITE_ID),
            title_field("Organization"),
            FieldSpec(
                "@type",
                default_value="Organization",
                visible_by_default=True,
                options=self.type_options(),
                label="Type",
            ),
            helper_property("name", required=True, default_value="%site.title%"),
            FieldSpec("email", visible_by_default=True, label="Email"),
            FieldSpec("faxNumber", label="Fax number"),
            helper_property("Person", id="founder", cloneable=True, label="Founder"),
            FieldSpec("foundingDate", label="Founding date"),
            FieldSpec("keywords", label="Keywords"),
            FieldSpec("logo", default_value="%site.icon%", visible_by_default=True, label="Logo"),
            FieldSpec("sameAs", default_value="", cloneable=True, visible_by_default=True, label="Same as"),
            FieldSpec("slogan", default_value="%site.description%", visible_by_default=True, label="Slogan"),
            FieldSpec("telephone", default_value="", visible_by_default=True, label="Telephone"),
            helper_property("url", default_value="%site.url%", visible_by_default=True),
        ]


SCHEMA_TYPE = Organization()
