"""Domain models for PartyRental."""

from party_rental.domain.models import (
    Address,
    ChecklistPhase,
    Client,
    ClientRef,
    ClientType,
    CompanySettings,
    InventoryItem,
    ItemSnapshot,
    ItemStatus,
    Kit,
    KitMember,
    KitSnapshot,
    LedgerEntry,
    LedgerWindow,
    Notification,
    NotificationType,
    Payment,
    PaymentInfo,
    PaymentMethod,
    PaymentStatus,
    Rental,
    RentalStatus,
    Transaction,
    TransactionType,
)

__all__ = [
    "Address",
    "ChecklistPhase",
    "Client",
    "ClientRef",
    "ClientType",
    "CompanySettings",
    "InventoryItem",
    "ItemSnapshot",
    "ItemStatus",
    "Kit",
    "KitMember",
    "KitSnapshot",
    "LedgerEntry",
    "LedgerWindow",
    "Notification",
    "NotificationType",
    "Payment",
    "PaymentInfo",
    "PaymentMethod",
    "PaymentStatus",
    "Rental",
    "RentalStatus",
    "Transaction",
    "TransactionType",
]
