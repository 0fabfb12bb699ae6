from pydantic import BaseModel


class TradeList(BaseModel):
    trades: list[str]
    count: int


class TradeSearchResult(BaseModel):
    query: str
    results: list[str]
    count: int


class InsuranceMinimumsItem(BaseModel):
    gl_minimum: int
    wc_minimum: int
    auto_minimum: int
    umbrella_minimum: int


class TradeRequirements(BaseModel):
    trade: str
    requirements: InsuranceMinimumsItem


class AllTradeRequirements(BaseModel):
    """Trade-specific minimums plus the default applied to every other trade."""

    trades: dict[str, InsuranceMinimumsItem]
    default: InsuranceMinimumsItem


class CategoryCount(BaseModel):
    category: str
    count: int


class TradeStats(BaseModel):
    total_trades: int
    total_categories: int
    category_counts: list[CategoryCount]


class TradeValidation(BaseModel):
    trade: str
    is_valid: bool
    category: str | None
