"""Asset and Position: the leaves of the portfolio book.

An Asset describes one tradable instrument. Only its price may change
after construction; expected return and volatility are fixed for the
lifetime of the object.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass


class Asset:
    """A tradable instrument with a price, expected return and volatility.

    Parameters:
        name: Unique, non-empty identifier (usually a ticker).
        price: Last price, >= 0.
        expected_return: Annualized expected return (mu). Any sign.
        volatility: Annualized standard deviation of returns (sigma), >= 0.
    """

    __slots__ = ("_name", "_price", "_mu", "_sigma")

    def __init__(
        self,
        name: str,
        price: float,
        expected_return: float,
        volatility: float,
    ) -> None:
        if not name:
            raise ValueError("Asset: name must be non-empty.")
        if not price >= 0.0:
            raise ValueError(f"Asset: price must be >= 0, got {price}.")
        if not volatility >= 0.0:
            raise ValueError(f"Asset: volatility (sigma) must be >= 0, got {volatility}.")
        if math.isnan(expected_return):
            raise ValueError("Asset: expected return must be a number, got NaN.")
        self._name = name
        self._price = float(price)
        self._mu = float(expected_return)
        self._sigma = float(volatility)

    @property
    def name(self) -> str:
        return self._name

    @property
    def price(self) -> float:
        return self._price

    @price.setter
    def price(self, value: float) -> None:
        self.set_price(value)

    @property
    def expected_return(self) -> float:
        return self._mu

    @property
    def volatility(self) -> float:
        return self._sigma

    def set_price(self, price: float) -> None:
        """Replace the price. Rejects negative values."""
        if not price >= 0.0:
            raise ValueError(f"Asset.set_price: price must be >= 0, got {price}.")
        self._price = float(price)

    def copy(self) -> "Asset":
        return copy.copy(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return (
            self._name == other._name
            and self._price == other._price
            and self._mu == other._mu
            and self._sigma == other._sigma
        )

    def __repr__(self) -> str:
        return (
            f"Asset(name={self._name!r}, price={self._price!r}, "
            f"expected_return={self._mu!r}, volatility={self._sigma!r})"
        )


@dataclass
class Position:
    """A holding of one Asset at a strictly positive quantity."""

    asset: Asset
    quantity: float

    def __post_init__(self) -> None:
        if not self.quantity > 0.0:
            raise ValueError(f"Position: quantity must be > 0, got {self.quantity}.")
        self.quantity = float(self.quantity)

    @property
    def name(self) -> str:
        return self.asset.name

    @property
    def value(self) -> float:
        """Market value: price x quantity."""
        return self.asset.price * self.quantity

    def copy(self) -> "Position":
        return Position(asset=self.asset.copy(), quantity=self.quantity)
