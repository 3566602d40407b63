"""
Multicard SDK Resources

Resource classes for interacting with the Multicard API.
"""

from .base import AsyncBaseResource, SyncBaseResource
from .cards import AsyncCardsResource, CardsResource
from .holds import AsyncHoldsResource, HoldsResource
from .invoices import AsyncInvoicesResource, InvoicesResource
from .payments import AsyncPaymentsResource, PaymentsResource
from .payouts import AsyncPayoutsResource, PayoutsResource
from .registry import AsyncRegistryResource, RegistryResource

__all__ = [
    "AsyncBaseResource",
    "SyncBaseResource",
    "AsyncCardsResource",
    "CardsResource",
    "AsyncHoldsResource",
    "HoldsResource",
    "AsyncInvoicesResource",
    "InvoicesResource",
    "AsyncPaymentsResource",
    "PaymentsResource",
    "AsyncPayoutsResource",
    "PayoutsResource",
    "AsyncRegistryResource",
    "RegistryResource",
]
