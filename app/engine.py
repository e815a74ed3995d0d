import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Optional

from app.models import TOP_PRODUCTS_LIMIT, Dataset, SellerId, SellerReport, SellerStat, coerce_number
from app.store import DataStore
from app.strategies import AnalysisOptions
from app.validation import InvalidDatasetError, InvalidOptionsError, validate_dataset, validate_options

logger = logging.getLogger(__name__)

_TWO_DP = Decimal("0.01")


def _two_dp(value: float) -> Decimal:
    return Decimal(str(value)).quantize(_TWO_DP, rounding=ROUND_HALF_UP)


def _strategy_result(value: Any, strategy: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidOptionsError(f"{strategy} strategy returned a non-numeric value: {value!r}")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise InvalidOptionsError(f"{strategy} strategy returned a non-finite value: {value!r}")
    return number


def accumulate(
    dataset: Dataset,
    store: DataStore,
    options: AnalysisOptions,
    log: Optional[logging.Logger] = None,
) -> dict[SellerId, SellerStat]:
    log = log or logger
    stats = {seller.id: SellerStat.for_seller(seller) for seller in store.list_sellers()}
    skipped = 0

    for record in dataset.purchase_records:
        seller = store.get_seller(record.seller_id)
        if seller is None:
            log.warning(f"Seller {record.seller_id!r} not found, skipping purchase record")
            skipped += 1
            continue
        stat = stats[seller.id]

        # seller revenue follows the record total, profit follows the line items
        stat.record_sale(coerce_number(record.total_amount, 0))

        for item in record.items:
            if not item.sku or not item.has_quantity:
                log.warning(f"Line item without sku or quantity ({item.sku!r}), skipping")
                continue

            product = store.get_product(item.sku)
            if product is None:
                continue

            quantity = coerce_number(item.quantity, 1)
            cost = product.purchase_price * quantity
            revenue = _strategy_result(options.calculate_revenue(item), "Revenue")
            stat.record_item(item.sku, quantity, revenue - cost)

    log.info(
        f"Accumulated {len(dataset.purchase_records) - skipped} purchase records "
        f"for {len(stats)} sellers ({skipped} skipped)"
    )
    return stats


def rank(
    stats: dict[SellerId, SellerStat],
    options: AnalysisOptions,
    top_limit: int = TOP_PRODUCTS_LIMIT,
) -> list[SellerReport]:
    # sorted() is stable with reverse=True, so equal profits keep seller order
    ordered = sorted(stats.values(), key=lambda s: s.profit, reverse=True)
    total = len(ordered)

    reports: list[SellerReport] = []
    for index, stat in enumerate(ordered):
        if not (math.isfinite(stat.revenue) and math.isfinite(stat.profit)):
            raise InvalidDatasetError(f"Totals for seller {stat.seller_id!r} overflowed")
        bonus = _strategy_result(options.calculate_bonus(index, total, stat.model_copy(deep=True)), "Bonus")

        reports.append(SellerReport(
            seller_id=stat.seller_id,
            name=stat.name,
            revenue=_two_dp(stat.revenue),
            profit=_two_dp(stat.profit),
            sales_count=stat.sales_count,
            top_products=stat.ranked_products(top_limit),
            bonus=_two_dp(bonus),
        ))
    return reports


def analyze_sales_data(
    data: Any,
    options: Any,
    *,
    log: Optional[logging.Logger] = None,
    top_limit: int = TOP_PRODUCTS_LIMIT,
) -> list[SellerReport]:
    """
    Build the profit-ranked seller scorecard for one batch.

    ``data`` holds ``sellers``, ``products`` and ``purchase_records``; ``options``
    supplies ``calculate_revenue`` and ``calculate_bonus`` (see
    ``app.strategies.default_options``). Contract violations raise ``AnalysisError``
    before anything is computed; unknown sellers and bad line items are logged
    to ``log`` and skipped.
    """
    dataset = validate_dataset(data, log)
    strategies = validate_options(options)

    store = DataStore.from_dataset(dataset)
    stats = accumulate(dataset, store, strategies, log)
    return rank(stats, strategies, top_limit)
