import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from app.models import Dataset
from app.strategies import AnalysisOptions

logger = logging.getLogger(__name__)

_COLLECTIONS = ("sellers", "products", "purchase_records")
_SELLER_FIELDS = ("id", "first_name", "last_name")


class AnalysisError(ValueError):
    """The caller broke the input contract; nothing was processed."""


class InvalidDatasetError(AnalysisError):
    pass


class InvalidSellerError(InvalidDatasetError):
    pass


class InvalidOptionsError(AnalysisError):
    pass


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def validate_dataset(data: Any, log: Optional[logging.Logger] = None) -> Dataset:
    log = log or logger

    if data is None:
        raise InvalidDatasetError("Dataset is missing")

    collections = {name: _field(data, name) for name in _COLLECTIONS}
    for name, value in collections.items():
        if not isinstance(value, (list, tuple)):
            raise InvalidDatasetError(f"'{name}' must be a list")
    empty = [name for name, value in collections.items() if len(value) == 0]
    if empty:
        raise InvalidDatasetError(f"Empty input collections: {', '.join(empty)}")

    # one malformed seller aborts the whole batch
    for seller in collections["sellers"]:
        missing = [f for f in _SELLER_FIELDS if _is_missing(_field(seller, f))]
        if missing:
            log.error(f"Malformed seller record {seller!r}: missing {', '.join(missing)}")
            raise InvalidSellerError("Seller records must contain id, first_name and last_name")

    try:
        return Dataset.model_validate(collections)
    except ValidationError as exc:
        raise InvalidDatasetError(f"Malformed dataset: {exc}") from exc


def validate_options(options: Any) -> AnalysisOptions:
    if isinstance(options, AnalysisOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidOptionsError("Options must be a mapping of strategy functions")

    revenue = options.get("calculate_revenue")
    bonus = options.get("calculate_bonus")
    if not callable(revenue) or not callable(bonus):
        raise InvalidOptionsError("Options must provide calculate_revenue and calculate_bonus functions")
    return AnalysisOptions(calculate_revenue=revenue, calculate_bonus=bonus)
