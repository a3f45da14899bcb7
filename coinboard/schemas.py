from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class ErrorBody(BaseModel):
    """
    Error payload returned by the API on non-success responses.

    Only `error` is recognized; any other field is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    error: Optional[str] = None


class PriceChange(BaseModel):
    """Percentage change keyed by quote currency."""

    model_config = ConfigDict(extra="ignore")

    usd: float


class TrendingCoinData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    price: Optional[float] = None
    price_change_percentage_24h: PriceChange


class TrendingCoinItem(BaseModel):
    """
    A coin entry of the /search/trending endpoint.

    Reference: https://docs.coingecko.com/reference/trending-search
    """

    model_config = ConfigDict(extra="ignore")

    # Basic information
    id: str
    name: str
    symbol: str
    large: str

    # Market information
    market_cap_rank: Optional[int] = None
    data: TrendingCoinData


class TrendingCoin(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item: TrendingCoinItem


class TrendingResponse(BaseModel):
    """Response format for /search/trending (only the coins list is used)."""

    model_config = ConfigDict(extra="ignore")

    coins: List[TrendingCoin] = []
