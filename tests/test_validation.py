"""
Contract checks that abort a run before anything is processed.
"""

import logging

import pytest

from app.engine import analyze_sales_data
from app.models import Dataset
from app.strategies import AnalysisOptions, default_options
from app.validation import (
    AnalysisError,
    InvalidDatasetError,
    InvalidOptionsError,
    InvalidSellerError,
    validate_dataset,
    validate_options,
)


def valid_data(**overrides):
    data = {
        "sellers": [{"id": "S-1", "first_name": "Olga", "last_name": "Orlova"}],
        "products": [{"sku": "SKU-1", "price": 10, "purchase_price": 4}],
        "purchase_records": [
            {"seller_id": "S-1", "total_amount": 10, "items": [{"sku": "SKU-1", "quantity": 1}]},
        ],
    }
    data.update(overrides)
    return data


class TestDatasetShape:
    def test_valid_dataset_parses(self):
        dataset = validate_dataset(valid_data())
        assert isinstance(dataset, Dataset)
        assert dataset.sellers[0].full_name == "Olga Orlova"

    def test_dataset_model_accepted(self):
        dataset = Dataset.model_validate(valid_data())
        assert validate_dataset(dataset) == dataset

    def test_missing_dataset(self):
        with pytest.raises(InvalidDatasetError, match="missing"):
            validate_dataset(None)

    @pytest.mark.parametrize("field", ["sellers", "products", "purchase_records"])
    def test_collection_must_be_a_list(self, field):
        with pytest.raises(InvalidDatasetError, match=field):
            validate_dataset(valid_data(**{field: {"not": "a list"}}))

    @pytest.mark.parametrize("field", ["sellers", "products", "purchase_records"])
    def test_collection_must_not_be_empty(self, field):
        with pytest.raises(InvalidDatasetError, match="Empty"):
            validate_dataset(valid_data(**{field: []}))

    def test_missing_collection(self):
        data = valid_data()
        del data["products"]
        with pytest.raises(InvalidDatasetError):
            validate_dataset(data)

    def test_non_text_seller_name(self):
        sellers = [{"id": "S-1", "first_name": {"given": "Olga"}, "last_name": "Orlova"}]
        with pytest.raises(InvalidDatasetError, match="Malformed dataset"):
            validate_dataset(valid_data(sellers=sellers))

    def test_product_gaps_are_not_fatal(self):
        products = [{"sku": "SKU-1", "price": 10, "purchase_price": 4}, {"price": 5}, {"sku": ["x"]}]
        dataset = validate_dataset(valid_data(products=products))
        assert [p.sku for p in dataset.products] == ["SKU-1", None, None]

    def test_odd_seller_ids_on_records_are_not_fatal(self):
        records = [{"seller_id": 1.5, "total_amount": 1}, {"seller_id": ["S-1"], "items": "n/a"}]
        dataset = validate_dataset(valid_data(purchase_records=records))
        assert dataset.purchase_records[0].seller_id == 1.5
        assert dataset.purchase_records[1].items == []

    def test_empty_sellers_fails_before_processing(self):
        calls = []
        options = {
            "calculate_revenue": lambda item: calls.append(item) or 0,
            "calculate_bonus": lambda i, t, s: calls.append(s) or 0,
        }
        with pytest.raises(InvalidDatasetError):
            analyze_sales_data(valid_data(sellers=[]), options)
        assert calls == []


class TestSellerIdentity:
    @pytest.mark.parametrize("field", ["id", "first_name", "last_name"])
    def test_seller_missing_field_aborts(self, field, caplog):
        broken = {"id": "S-2", "first_name": "Elena", "last_name": "Volkova"}
        del broken[field]
        data = valid_data(sellers=[valid_data()["sellers"][0], broken])

        with pytest.raises(InvalidSellerError):
            validate_dataset(data)
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert field in errors[0].getMessage()

    def test_blank_name_counts_as_missing(self):
        with pytest.raises(InvalidSellerError):
            validate_dataset(valid_data(sellers=[{"id": "S-1", "first_name": "", "last_name": "X"}]))

    def test_seller_error_is_a_dataset_error(self):
        assert issubclass(InvalidSellerError, InvalidDatasetError)
        assert issubclass(InvalidDatasetError, AnalysisError)
        assert issubclass(AnalysisError, ValueError)


class TestOptions:
    def test_options_model_passes_through(self):
        options = default_options()
        assert validate_options(options) is options

    def test_mapping_is_converted(self):
        options = validate_options({"calculate_revenue": len, "calculate_bonus": max})
        assert isinstance(options, AnalysisOptions)

    @pytest.mark.parametrize("options", [None, "options", 42, ["calculate_revenue"]])
    def test_options_must_be_a_mapping(self, options):
        with pytest.raises(InvalidOptionsError):
            validate_options(options)

    @pytest.mark.parametrize("options", [
        {},
        {"calculate_revenue": lambda item: 0},
        {"calculate_bonus": lambda i, t, s: 0},
        {"calculate_revenue": "revenue", "calculate_bonus": lambda i, t, s: 0},
    ])
    def test_both_strategies_required(self, options):
        with pytest.raises(InvalidOptionsError, match="calculate_revenue and calculate_bonus"):
            validate_options(options)

    def test_missing_options_abort_the_run(self):
        with pytest.raises(InvalidOptionsError):
            analyze_sales_data(valid_data(), None)
