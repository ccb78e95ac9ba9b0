"""Pydantic models for Balancer V1 subgraph responses.

Numeric fields arrive as decimal strings (e.g. "0.003", "1523.08").
"""

from pydantic import BaseModel, ConfigDict, Field

from sampler.models.types import Address


class SubgraphToken(BaseModel):
    """A token entry inside a subgraph pool record."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    address: Address
    balance: str
    decimals: int = Field(ge=0, le=77)
    denorm_weight: str = Field(alias="denormWeight")
    symbol: str | None = None


class SubgraphPool(BaseModel):
    """A single pool record as returned by the pools query."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    swap_fee: str = Field(alias="swapFee")
    total_weight: str = Field(alias="totalWeight")
    tokens_list: list[str] = Field(default_factory=list, alias="tokensList")
    tokens: list[SubgraphToken] = Field(default_factory=list)
    public_swap: bool | None = Field(default=None, alias="publicSwap")

    def token_addresses(self) -> list[str]:
        """Lowercase addresses of every token in the pool."""
        return [token.address.lower() for token in self.tokens]


class SubgraphPoolsData(BaseModel):
    """The `data` object of a pools query response."""

    pools: list[SubgraphPool] = Field(default_factory=list)
