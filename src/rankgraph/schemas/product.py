"""Schema type: Product, available when a commerce source is present."""
from __future__ import annotations

from rankgraph.models import FieldKind, FieldSpec, RuleSet, SchemaType
from rankgraph.schemas._helpers import helper_property, id_field, title_field, type_tag


class Product(SchemaType):
    name = "Product"
    title = "Product"
    docs_url = "https://developers.google.com/search/docs/advanced/structured-data/product"
    show_on = RuleSet(rules=["product|all"])

    def fields(self) -> list[FieldSpec]:
        return [
            title_field("Product"),
            id_field(),
            helper_property("name", required=True),
            helper_property("description", visible_by_default=True),
            FieldSpec(
                "brand",
                FieldKind.GROUP,
                visible_by_default=True,
                label="Brand",
                sub_fields=[
                    type_tag("Brand"),
                    FieldSpec("name", default_value="%site.title%", visible_by_default=True, label="Brand name"),
                ],
            ),
            helper_property("url", default_value="%post.url%", visible_by_default=True),
            FieldSpec("sku", default_value="%product.sku%", visible_by_default=True, label="SKU"),
            FieldSpec(
                "image",
                FieldKind.GROUP,
                visible_by_default=True,
                label="Image",
                sub_fields=[
                    FieldSpec("@id", FieldKind.HIDDEN, default_value="%product.image%", visible_by_default=True),
                    type_tag("ImageObject", visible=True),
                    FieldSpec("url", default_value="%product.image%", visible_by_default=True, label="URL"),
                    FieldSpec("width", default_value="%product.image_width%", visible_by_default=True, label="Width"),
                    FieldSpec(
                        "height", default_value="%product.image_height%", visible_by_default=True, label="Height"
                    ),
                ],
            ),
            helper_property("mainEntityOfPage"),
            helper_property("aggregateRating", visible_by_default=True),
            FieldSpec(
                "offers",
                FieldKind.GROUP,
                visible_by_default=True,
                label="Offers",
                sub_fields=[
                    FieldSpec(
                        "@type",
                        required=True,
                        default_value="Offer",
                        options={"Offer": "Offer", "AggregateOffer": "AggregateOffer"},
                        label="Offer type",
                    ),
                    FieldSpec(
                        "price", required=True, default_value="%product.price%", variant_tag="Offer", label="Price"
                    ),
                    FieldSpec("priceCurrency", required=True, default_value="%product.currency%", label="Currency"),
                    FieldSpec("availability", required=True, default_value="%product.stock%", label="Availability"),
                    FieldSpec(
                        "lowPrice",
                        required=True,
                        default_value="%product.low_price%",
                        variant_tag="AggregateOffer",
                        label="Low price",
                    ),
                    FieldSpec(
                        "highPrice",
                        default_value="%product.high_price%",
                        visible_by_default=True,
                        variant_tag="AggregateOffer",
                        label="High price",
                    ),
                    FieldSpec(
                        "offerCount",
                        default_value="%product.offer_count%",
                        visible_by_default=True,
                        variant_tag="AggregateOffer",
                        label="Offer count",
                    ),
                ],
            ),
        ]


SCHEMA_TYPE = Product()
