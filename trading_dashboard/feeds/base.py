"""Abstract base class for price feeds."""

from abc import ABC, abstractmethod
from decimal import Decimal

from ..models import PricePoint

Series = tuple[PricePoint, ...]


class PriceFeed(ABC):
    """Source of the bounded price series shown on the charts widget."""

    @abstractmethod
    def initialize(self, point_count: int, base_price: Decimal) -> Series:
        """Build the series shown when the dashboard opens.

        Args:
            point_count: Number of points to produce.
            base_price: Price the series starts from.

        Returns:
            Tuple of PricePoints, oldest first.
        """
        pass

    @abstractmethod
    def advance(self, series: Series) -> Series:
        """Return a new series extended by one point.

        Args:
            series: Current series. Must not be modified.

        Returns:
            The extended series, with the oldest points evicted if it would
            exceed the feed's cap.
        """
        pass
