"""
Signal Service Interface

Defines the contract for the scan aggregation layer.
"""

from abc import abstractmethod

from app.services.base import BaseService
from app.schemas.signals import CoinMarket, ScanRequest, ScanResponse, SignalResult


class SignalServiceInterface(BaseService[ScanRequest, ScanResponse]):
    """
    Signal Service Contract.

    INPUT: ScanRequest
        - symbols: normalized tickers (max 12)

    OUTPUT: ScanResponse
        - symbols: the normalized request
        - data: one SignalResult per resolvable ticker, provider order
        - ts: response timestamp (epoch ms)

    Raises ExternalAPIError when the batched snapshot cannot be fetched.
    Per-asset chart failures never raise; they degrade that asset only.
    """

    @property
    def name(self) -> str:
        return "SignalService"

    @abstractmethod
    async def execute(self, input_data: ScanRequest) -> ScanResponse:
        """Fetch, score and assemble all requested assets."""
        pass

    @abstractmethod
    async def score_market(self, market: CoinMarket) -> SignalResult:
        """Fetch chart history for one asset and score it."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the market data provider."""
        pass
