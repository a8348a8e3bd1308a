"""Domain dataclasses and enums."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ItemStatus(str, Enum):
    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"


class ClientType(str, Enum):
    INDIVIDUAL = "pf"
    ORGANIZATION = "pj"


class PaymentMethod(str, Enum):
    PIX = "pix"
    CARD = "card"
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    PAYMENT_LINK = "payment_link"
    OTHER = "other"


class RentalStatus(str, Enum):
    BOOKED = "booked"
    PICKED_UP = "picked-up"
    RETURNED = "returned"
    OVERDUE = "overdue"
    QUOTE_REQUESTED = "quote-requested"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class ChecklistPhase(str, Enum):
    PICKUP = "pickup"
    RETURN = "return"


class NotificationType(str, Enum):
    OVERDUE_RETURN = "overdue_return"
    PAYMENT_DUE = "payment_due"
    LOW_STOCK = "low_stock"


class TransactionType(str, Enum):
    REVENUE = "revenue"
    EXPENSE = "expense"


class LedgerWindow(str, Enum):
    MONTH = "month"
    THREE_MONTHS = "3months"
    ALL = "all"


@dataclass(slots=True)
class InventoryItem:
    id: Optional[str]
    name: str
    category: str
    quantity: int
    price: float
    status: ItemStatus = ItemStatus.AVAILABLE
    image_url: str = ""
    low_stock_threshold: Optional[int] = None
    maintenance_notes: Optional[str] = None
    purchase_cost: Optional[float] = None


@dataclass(slots=True)
class Address:
    cep: str = ""
    street: str = ""
    number: str = ""
    complement: Optional[str] = None
    neighborhood: str = ""
    city: str = ""
    state: str = ""


@dataclass(slots=True)
class Client:
    id: Optional[str]
    type: ClientType
    name: str
    phone: str
    email: str
    address: Address = field(default_factory=Address)
    cpf: Optional[str] = None
    birth_date: Optional[str] = None
    cnpj: Optional[str] = None
    legal_name: Optional[str] = None
    contact_name: Optional[str] = None
    how_found: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True, slots=True)
class KitMember:
    id: str
    name: str


@dataclass(slots=True)
class Kit:
    id: Optional[str]
    name: str
    price: float
    item_ids: list[str] = field(default_factory=list)
    items: list[KitMember] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Payment:
    id: str
    date: str
    amount: float
    method: PaymentMethod


@dataclass(frozen=True, slots=True)
class ClientRef:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class ItemSnapshot:
    """Item as it was priced when the rental was booked."""

    id: str
    name: str
    quantity: int
    price: float


@dataclass(frozen=True, slots=True)
class KitSnapshot:
    """Kit as it was priced when the rental was booked."""

    id: str
    name: str
    price: float
    items: tuple[KitMember, ...] = ()


@dataclass(slots=True)
class Rental:
    id: Optional[str]
    client: ClientRef
    event_date: str
    pickup_date: str
    return_date: str
    total_value: float
    discount: float = 0.0
    notes: str = ""
    status: RentalStatus = RentalStatus.BOOKED
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_history: list[Payment] = field(default_factory=list)
    items: list[ItemSnapshot] = field(default_factory=list)
    kits: list[KitSnapshot] = field(default_factory=list)
    pickup_checklist: dict[str, bool] = field(default_factory=dict)
    return_checklist: dict[str, bool] = field(default_factory=dict)
    delivery_service: bool = False
    delivery_fee: Optional[float] = None
    setup_service: bool = False
    setup_fee: Optional[float] = None
    delivery_address: Optional[str] = None


@dataclass(slots=True)
class LedgerEntry:
    """Standalone expense or revenue, not tied to a rental."""

    id: Optional[str]
    description: str
    category: str
    date: str
    amount: float
    payment_method: Optional[PaymentMethod] = None
    item_id: Optional[str] = None


Expense = LedgerEntry
Revenue = LedgerEntry


@dataclass(slots=True)
class PaymentInfo:
    pix_key: str = ""
    bank_name: str = ""
    agency: str = ""
    account: str = ""


@dataclass(slots=True)
class CompanySettings:
    company_name: str = ""
    cnpj: str = ""
    address: str = ""
    logo_url: str = ""
    payment_info: PaymentInfo = field(default_factory=PaymentInfo)
    contract_terms: str = ""


@dataclass(frozen=True, slots=True)
class Notification:
    id: str
    type: NotificationType
    message: str
    reference_id: str


@dataclass(frozen=True, slots=True)
class Transaction:
    type: TransactionType
    date: str
    description: str
    amount: float
    reference_id: str
    method: Optional[str] = None
