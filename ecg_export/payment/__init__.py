"""Payment module for ECG export system."""

from .manager import PaymentGateway, PaymentManager, SimulatedPaymentGateway

__all__ = ["PaymentGateway", "PaymentManager", "SimulatedPaymentGateway"]
