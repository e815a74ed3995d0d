"""
Reference revenue and bonus strategies.

The pipeline never computes item revenue or bonuses itself; it calls the two
callables carried by ``AnalysisOptions``. The functions below are the default
policies used by the API.
"""

from typing import Callable

from pydantic import BaseModel

from app.models import LineItem, SellerStat, coerce_number

RevenueFn = Callable[[LineItem], float]
BonusFn = Callable[[int, int, SellerStat], float]

# rank 0, ranks 1-2, everyone else but the last place
_TOP_RATE = 0.15
_PODIUM_RATE = 0.10
_BASE_RATE = 0.05


class AnalysisOptions(BaseModel):
    calculate_revenue: RevenueFn
    calculate_bonus: BonusFn


def calculate_simple_revenue(item: LineItem) -> float:
    """Sale price times quantity, less the line's percentage discount."""
    quantity = coerce_number(item.quantity, 1)
    return item.sale_price * quantity * (1 - item.discount / 100)


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStat) -> float:
    # Rank 0 is checked before "last place", so a lone seller still gets 15 %.
    if index == 0:
        return seller.profit * _TOP_RATE
    if index in (1, 2):
        return seller.profit * _PODIUM_RATE
    if index == total - 1:
        return 0.0
    return seller.profit * _BASE_RATE


def default_options() -> AnalysisOptions:
    return AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=calculate_bonus_by_profit,
    )
