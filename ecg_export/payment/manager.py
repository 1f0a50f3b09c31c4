"""Payment flow for the detailed ECG analysis."""

from abc import ABC, abstractmethod
from typing import Optional

import structlog

from ..core.config import PaymentConfig
from ..core.exceptions import PaymentError
from ..core.models import PaymentRequest, PaymentResult, PaymentSummaryItem

logger = structlog.get_logger(__name__)


class PaymentGateway(ABC):
    """Abstract platform payment sheet."""

    @abstractmethod
    def can_make_payments(self) -> bool:
        """Whether payments are possible on this device."""
        pass

    @abstractmethod
    def can_make_payments_using_networks(self) -> bool:
        """Whether a card on a supported network is set up."""
        pass

    @abstractmethod
    async def authorize(self, request: PaymentRequest) -> bool:
        """
        Present the payment sheet and wait for the outcome.

        Returns:
            True if the payment was authorized
        """
        pass


class SimulatedPaymentGateway(PaymentGateway):
    """Gateway that authorizes every payment."""

    def __init__(self, available: bool = True, has_cards: bool = True, authorize_result: bool = True):
        self.available = available
        self.has_cards = has_cards
        self.authorize_result = authorize_result
        self.requests = []

    def can_make_payments(self) -> bool:
        return self.available

    def can_make_payments_using_networks(self) -> bool:
        return self.has_cards

    async def authorize(self, request: PaymentRequest) -> bool:
        self.requests.append(request)
        return self.authorize_result


class PaymentManager:
    """Runs a payment attempt and reports its terminal state."""

    def __init__(self, gateway: PaymentGateway, config: Optional[PaymentConfig] = None):
        self.gateway = gateway
        self.config = config or PaymentConfig()

    def build_request(self) -> PaymentRequest:
        """Payment request for one detailed analysis."""
        return PaymentRequest(
            merchant_identifier=self.config.merchant_identifier,
            country_code=self.config.country_code,
            currency_code=self.config.currency_code,
            summary_items=[PaymentSummaryItem(label=self.config.label, amount=self.config.amount)],
        )

    async def start_payment(self) -> PaymentResult:
        """
        Attempt a payment.

        Raises:
            PaymentError: The gateway raised while authorizing
        """
        if not self.gateway.can_make_payments():
            logger.warning("payment_unavailable")
            return PaymentResult.FAILURE

        if not self.gateway.can_make_payments_using_networks():
            logger.warning("payment_no_cards")
            return PaymentResult.FAILURE

        request = self.build_request()
        logger.info("payment_started", amount=str(request.total), currency=request.currency_code)

        try:
            authorized = await self.gateway.authorize(request)
        except Exception as e:
            raise PaymentError(f"Payment authorization failed: {e}") from e

        if not authorized:
            logger.warning("payment_not_authorized")
            return PaymentResult.FAILURE

        logger.info("payment_succeeded")
        return PaymentResult.SUCCESS
