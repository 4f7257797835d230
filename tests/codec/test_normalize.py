"""Tests for pre-validation normalization."""

from __future__ import annotations

import dataclasses
from typing import Any, TypedDict

from pydantic import AliasChoices, AliasPath, BaseModel, Field

from codecpolicy.codec.normalize import normalize
from tests.conftest import Customer


class _Aliased(BaseModel):
    user_name: str | None = Field(default=None, alias="userName")
    tags: list[str] = Field(alias="tagList")


class _AliasedByName(BaseModel):
    model_config = {"validate_by_name": True}

    user_name: str | None = Field(default=None, alias="userName")


class _Choices(BaseModel):
    city: str | None = Field(default=None, validation_alias=AliasChoices("city", "town"))
    zip_code: str | None = Field(default=None, validation_alias=AliasPath("address", "zip"))


class _Defaults(BaseModel):
    labels: list[str] = Field(default_factory=lambda: ["default"])
    extra: dict[str, Any] | None = None


@dataclasses.dataclass(frozen=True)
class _Point:
    label: str
    tags: list[str]
    extra: dict[str, int] | None = None
    aliases: list[str] = dataclasses.field(default_factory=lambda: ["p"])


class _MovieExtras(TypedDict, total=False):
    ratings: dict[str, int]


class _Movie(_MovieExtras):
    title: str
    cast: list[str]


class TestNormalizeModel:
    def test_unknown_fields_dropped(self) -> None:
        result = normalize(Customer, {"emails": [], "unexpected": 1})
        assert "unexpected" not in result

    def test_empty_strings_left_for_validation(self) -> None:
        result = normalize(Customer, {"name": "", "emails": []})
        assert result["name"] == ""

    def test_null_and_missing_collections_become_empty(self) -> None:
        result = normalize(Customer, {"emails": None})
        assert result["emails"] == []
        assert result["attributes"] == {}

    def test_missing_collection_with_default_left_to_default(self) -> None:
        assert normalize(_Defaults, {}) == {"extra": {}}

    def test_nested_models_normalized(self) -> None:
        result = normalize(
            Customer,
            {"emails": [], "addresses": [{"street": "x", "tags": None, "zone": 4}]},
        )
        assert result["addresses"] == [{"street": "x", "tags": []}]

    def test_non_mapping_passed_through(self) -> None:
        assert normalize(Customer, "not an object") == "not an object"


class TestNormalizeAliases:
    def test_alias_key_used(self) -> None:
        result = normalize(_Aliased, {"userName": "a", "tagList": None, "user_name": "x"})
        assert result == {"userName": "a", "tagList": []}

    def test_missing_collection_inserted_under_alias(self) -> None:
        assert normalize(_Aliased, {}) == {"tagList": []}

    def test_name_accepted_when_validating_by_name(self) -> None:
        assert normalize(_AliasedByName, {"user_name": "a"}) == {"user_name": "a"}

    def test_alias_choices(self) -> None:
        assert normalize(_Choices, {"town": "a", "county": "b"}) == {"town": "a"}

    def test_alias_path_passed_through(self) -> None:
        raw = {"address": {"zip": "", "other": 1}}
        assert normalize(_Choices, raw) == raw


class TestNormalizeRecords:
    def test_dataclass_fields(self) -> None:
        result = normalize(_Point, {"label": "a", "tags": None, "unexpected": 1})
        assert result == {"label": "a", "tags": [], "extra": {}}

    def test_typed_dict_fields(self) -> None:
        result = normalize(_Movie, {"title": "a", "year": 1999})
        assert result == {"title": "a", "cast": []}

    def test_typed_dict_optional_collection_left_absent(self) -> None:
        assert "ratings" not in normalize(_Movie, {"title": "a", "cast": []})


class TestNormalizeShapes:
    def test_string_leaf_untouched(self) -> None:
        assert normalize(str, "") == ""

    def test_null_collections(self) -> None:
        assert normalize(list[int], None) == []
        assert normalize(set[int], None) == set()
        assert normalize(dict[str, int], None) == {}
        assert normalize(list[int] | None, None) == []

    def test_collection_items_normalized(self) -> None:
        assert normalize(list[list[int]], [None, [1]]) == [[], [1]]
        assert normalize(dict[str, list[int]], {"a": None}) == {"a": []}

    def test_tuple_items_normalized(self) -> None:
        assert normalize(tuple[list[int], ...], [None, [1]]) == [[], [1]]
        assert normalize(tuple[int, list[int]], [1, None]) == [1, []]

    def test_other_shapes_untouched(self) -> None:
        assert normalize(int, "") == ""
        assert normalize(Any, {"a": [""]}) == {"a": [""]}
