"""Tests for project-options normalization."""

from __future__ import annotations

import pytest

from alignzo.core.catalog import normalize_catalog
from alignzo.core.errors import CatalogLoadError
from alignzo.core.models.enums import CatalogLoadErrorKind
from tests.helpers.mocks import project_options_body

pytestmark = pytest.mark.unit


class TestNestedShape:
    def test_sorted_and_active_only(self):
        catalog = normalize_catalog("proj-1", project_options_body())

        assert catalog.project_id == "proj-1"
        assert catalog.category_ids() == ["c1", "c2"]
        assert [opt.id for opt in catalog.get("c1").options] == ["o1", "o2"]
        assert [opt.id for opt in catalog.get("c2").options] == ["o3", "o4"]

    def test_option_fields_mapped(self):
        catalog = normalize_catalog("proj-1", project_options_body())
        large = catalog.get("c2").get_option("o4")

        assert large.name == "Large"
        assert large.value == "L"
        assert large.category_id == "c2"

    def test_value_falls_back_to_name(self):
        catalog = normalize_catalog("proj-1", project_options_body())
        assert catalog.get("c1").get_option("o1").value == "Frontend"

    def test_description_kept(self):
        catalog = normalize_catalog("proj-1", project_options_body())
        assert catalog.get("c1").description == "Part of the product"


class TestShapeVariants:
    def test_category_options_key(self):
        body = {
            "categories": [
                {"id": "c1", "name": "Area", "category_options": [{"id": "o1", "name": "UI"}]}
            ]
        }
        catalog = normalize_catalog("p", body)
        assert catalog.get("c1").get_option("o1").name == "UI"

    def test_flattened_options(self):
        body = {
            "categories": [{"id": "c1", "name": "Area"}, {"id": 2, "name": "Effort"}],
            "options": [
                {"id": "o1", "category_id": "c1", "option_name": "UI", "sort_order": 1},
                {"id": "o0", "category_id": "c1", "option_name": "API", "sort_order": 0},
                {"id": "o3", "category_id": 2, "option_name": "Small"},
            ],
        }
        catalog = normalize_catalog("p", body)

        assert [opt.id for opt in catalog.get("c1").options] == ["o0", "o1"]
        assert catalog.get("2").options[0].name == "Small"

    def test_bare_list(self):
        catalog = normalize_catalog("p", [{"id": "c1", "name": "Area", "options": []}])
        assert catalog.category_ids() == ["c1"]

    def test_missing_sort_order_defaults_to_zero_and_keeps_order(self):
        body = {
            "categories": [
                {"id": "b", "name": "B"},
                {"id": "a", "name": "A", "sort_order": None},
                {"id": "z", "name": "Z", "sort_order": -1},
            ]
        }
        assert normalize_catalog("p", body).category_ids() == ["z", "b", "a"]

    def test_empty_body_is_an_empty_catalog(self):
        assert normalize_catalog("p", {"categories": []}).is_empty
        assert normalize_catalog("p", {}).is_empty


class TestMalformed:
    @pytest.mark.parametrize(
        "body",
        [
            "nope",
            None,
            {"categories": "nope"},
            {"categories": [{"name": "no id"}]},
            {"categories": ["not an object"]},
            {"categories": [{"id": "c1", "options": [{"name": "no id"}]}]},
            {"categories": [{"id": "c1", "sort_order": "first"}]},
            {"categories": [{"id": "c1", "name": "A", "description": 5, "options": []}]},
            {"categories": [{"id": "c1", "name": "A", "description": ["x"]}]},
        ],
    )
    def test_raises_catalog_load_error(self, body):
        with pytest.raises(CatalogLoadError) as exc_info:
            normalize_catalog("proj-1", body)

        assert exc_info.value.code == "CATALOG_LOAD_FAILED"
        assert exc_info.value.project_id == "proj-1"
        assert exc_info.value.kind == CatalogLoadErrorKind.MALFORMED
