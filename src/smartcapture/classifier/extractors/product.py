# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Product extractor: name, price, rating, availability, identifiers."""

from __future__ import annotations

import math
from typing import Any

from smartcapture.classifier import PageType, ProductFields
from smartcapture.classifier.extractors.base import (
    first_of,
    first_offer,
    first_string,
    itemprop_content,
    itemprop_element,
    itemprop_text,
    itemprop_value,
    og,
    person_or_org_name,
    to_int,
    to_number,
)
from smartcapture.dom import Document, attr_of, find_jsonld, select_one
from smartcapture.sanitizer import clean_optional


def _scalar_to_str(value: Any) -> str | None:
    """Price/SKU values arrive as strings or JSON numbers."""
    if isinstance(value, bool) or (isinstance(value, float) and not math.isfinite(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (int, float)):
        return str(value)
    return clean_optional(value, max_len=100)


def availability_in_stock(value: Any) -> bool | None:
    """Map a schema.org availability value to in-stock.

    Only the ``InStock`` / ``OutOfStock`` substrings decide; anything else
    (PreOrder, LimitedAvailability, missing) means "not stated" → None.
    """
    if not isinstance(value, str):
        return None
    if "InStock" in value:
        return True
    if "OutOfStock" in value:
        return False
    return None


def _image_url(value: Any) -> str | None:
    if isinstance(value, dict):
        value = value.get("url") or value.get("contentUrl")
    return clean_optional(first_string(value), max_len=2048)


class ProductExtractor:
    page_type = PageType.PRODUCT

    def extract(self, doc: Document, url: str = "") -> ProductFields:
        ld = find_jsonld(doc, "Product") or {}
        offer = first_offer(ld.get("offers")) or {}
        rating = ld.get("aggregateRating")
        rating = rating if isinstance(rating, dict) else {}

        return ProductFields(
            name=first_of(clean_optional(ld.get("name")), itemprop_text(doc, "name"), og(doc, "og:title")),
            price=first_of(
                _scalar_to_str(offer.get("price")),
                itemprop_value(doc, "price"),
                og(doc, "product:price:amount"),
                og(doc, "og:price:amount"),
            ),
            currency=first_of(
                clean_optional(offer.get("priceCurrency")),
                itemprop_content(doc, "priceCurrency"),
                og(doc, "product:price:currency"),
                og(doc, "og:price:currency"),
            ),
            rating=first_of(
                to_number(rating.get("ratingValue")),
                to_number(itemprop_value(doc, "ratingValue")),
            ),
            review_count=first_of(
                to_int(rating.get("reviewCount")),
                to_int(rating.get("ratingCount")),
                to_int(itemprop_value(doc, "reviewCount")),
            ),
            in_stock=first_of(
                availability_in_stock(offer.get("availability")),
                self._microdata_availability(doc),
            ),
            sku=first_of(
                _scalar_to_str(ld.get("sku")),
                itemprop_value(doc, "sku"),
                clean_optional(attr_of(select_one(doc, "//*[@data-sku]"), "data-sku")),
            ),
            brand=first_of(person_or_org_name(ld.get("brand")), itemprop_text(doc, "brand")),
            image_url=first_of(
                _image_url(ld.get("image")),
                self._microdata_image(doc),
                og(doc, "og:image"),
            ),
        )

    @staticmethod
    def _microdata_availability(doc: Document) -> bool | None:
        el = itemprop_element(doc, "availability")
        if el is None:
            return None
        return availability_in_stock(attr_of(el, "href") or attr_of(el, "content"))

    @staticmethod
    def _microdata_image(doc: Document) -> str | None:
        el = itemprop_element(doc, "image")
        return clean_optional(attr_of(el, "src") or attr_of(el, "content"), max_len=2048)
