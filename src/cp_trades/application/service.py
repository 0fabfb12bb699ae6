"""TradeService — read-only access to the construction trade catalogue."""

from dataclasses import asdict

from src.cp_trades.application.schemas import (
    AllTradeRequirements,
    CategoryCount,
    InsuranceMinimumsItem,
    TradeList,
    TradeRequirements,
    TradeSearchResult,
    TradeStats,
    TradeValidation,
)
from src.cp_trades.domain.catalogue import (
    ALL_TRADES,
    DEFAULT_MINIMUMS,
    TRADE_CATEGORIES,
    TRADE_MINIMUMS,
    InsuranceMinimums,
    category_of,
    is_valid_trade,
    minimums_for,
    search_trades,
)


def _item(minimums: InsuranceMinimums) -> InsuranceMinimumsItem:
    return InsuranceMinimumsItem(**asdict(minimums))


class TradeService:
    def list_trades(self) -> TradeList:
        return TradeList(trades=list(ALL_TRADES), count=len(ALL_TRADES))

    def categorized(self) -> dict[str, list[str]]:
        return {category: list(trades) for category, trades in TRADE_CATEGORIES.items()}

    def search(self, query: str) -> TradeSearchResult:
        results = search_trades(query)
        return TradeSearchResult(query=query, results=results, count=len(results))

    def requirements(self, trade: str) -> TradeRequirements:
        """Minimums for one trade; unknown trades get the default minimums."""
        return TradeRequirements(trade=trade, requirements=_item(minimums_for(trade)))

    def all_requirements(self) -> AllTradeRequirements:
        return AllTradeRequirements(
            trades={trade: _item(m) for trade, m in TRADE_MINIMUMS.items()},
            default=_item(DEFAULT_MINIMUMS),
        )

    def stats(self) -> TradeStats:
        return TradeStats(
            total_trades=len(ALL_TRADES),
            total_categories=len(TRADE_CATEGORIES),
            category_counts=[
                CategoryCount(category=category, count=len(trades))
                for category, trades in TRADE_CATEGORIES.items()
            ],
        )

    def validate(self, trade: str) -> TradeValidation:
        return TradeValidation(
            trade=trade, is_valid=is_valid_trade(trade), category=category_of(trade)
        )
