# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Recipe extractor. Times are reported in whole minutes."""

from __future__ import annotations

import math
from typing import Any

from smartcapture.classifier import PageType, RecipeFields
from smartcapture.classifier.extractors.base import (
    first_of,
    first_string,
    itemprop_content,
    itemprop_text,
    parse_iso_duration,
    to_number,
)
from smartcapture.dom import Document, clean_text_of, find_jsonld, select, select_one
from smartcapture.sanitizer import clean_optional


def iso_duration_minutes(value: Any) -> int | None:
    """``PT1H15M`` → 75. Seconds are ignored; a zero duration means unknown."""
    parts = parse_iso_duration(value)
    if parts is None:
        return None
    hours, minutes, _ = parts
    return hours * 60 + minutes or None


def _servings(value: Any) -> str | None:
    if isinstance(value, bool) or (isinstance(value, float) and not math.isfinite(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (int, float)):
        return str(value)
    return clean_optional(first_string(value))


def _calories(doc: Document, ld: dict[str, Any]) -> float | None:
    nutrition = ld.get("nutrition")
    if isinstance(nutrition, dict):
        return to_number(nutrition.get("calories"))
    return to_number(itemprop_text(doc, "calories"))


def _ingredients(doc: Document, ld: dict[str, Any]) -> tuple[str, ...]:
    listed = ld.get("recipeIngredient")
    if isinstance(listed, list):
        cleaned = (clean_optional(item, max_len=512) for item in listed)
        return tuple(item for item in cleaned if item)
    items = (clean_text_of(el) for el in select(doc, "//*[@itemprop='recipeIngredient']"))
    return tuple(text for text in items if text)


class RecipeExtractor:
    page_type = PageType.RECIPE

    def extract(self, doc: Document, url: str = "") -> RecipeFields:
        ld: dict[str, Any] = find_jsonld(doc, "Recipe") or {}

        return RecipeFields(
            recipe_name=first_of(
                clean_optional(ld.get("name")),
                clean_optional(clean_text_of(select_one(doc, "//*[@itemprop='name'] | //h1"))),
            ),
            prep_time=first_of(
                iso_duration_minutes(ld.get("prepTime")),
                iso_duration_minutes(itemprop_content(doc, "prepTime")),
            ),
            cook_time=first_of(
                iso_duration_minutes(ld.get("cookTime")),
                iso_duration_minutes(itemprop_content(doc, "cookTime")),
            ),
            total_time=first_of(
                iso_duration_minutes(ld.get("totalTime")),
                iso_duration_minutes(itemprop_content(doc, "totalTime")),
            ),
            servings=first_of(_servings(ld.get("recipeYield")), itemprop_text(doc, "recipeYield")),
            calories=_calories(doc, ld),
            ingredients=_ingredients(doc, ld),
            cuisine_type=first_of(
                clean_optional(first_string(ld.get("recipeCuisine"))),
                itemprop_text(doc, "recipeCuisine"),
            ),
        )

