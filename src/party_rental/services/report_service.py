"""Financial aggregation for the dashboard, ledger and reports.

Every figure is a reduction over the stored rentals, expenses and revenues;
nothing here is persisted.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from party_rental.config import MAINTENANCE_CATEGORY, POPULAR_ITEMS_LIMIT, TREND_MONTHS
from party_rental.domain.models import (
    Client,
    InventoryItem,
    ItemStatus,
    LedgerEntry,
    LedgerWindow,
    Rental,
    RentalStatus,
    Transaction,
    TransactionType,
)
from party_rental.logging_config import get_logger
from party_rental.repositories.client_repo import ClientRepo
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.inventory_repo import InventoryRepo
from party_rental.repositories.ledger_repo import ExpenseRepo, RevenueRepo
from party_rental.repositories.rental_repo import RentalRepo
from party_rental.services.lifecycle import final_value
from party_rental.utils.dates import month_index, try_parse_date
from party_rental.utils.formatting import month_label


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_items: int
    rented_items: int
    upcoming_events: int
    monthly_revenue: float
    monthly_expenses: float

    @property
    def monthly_net_profit(self) -> float:
        return self.monthly_revenue - self.monthly_expenses


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    revenue: float
    expenses: float

    @property
    def net(self) -> float:
        return self.revenue - self.expenses


@dataclass(frozen=True, slots=True)
class TrendPoint:
    year: int
    month: int
    label: str
    rental_count: int


@dataclass(frozen=True, slots=True)
class PopularItem:
    name: str
    count: int


@dataclass(frozen=True, slots=True)
class ItemReport:
    id: str
    name: str
    purchase_cost: float
    total_revenue: float
    maintenance_costs: float
    rental_count: int
    roi: Optional[float]

    @property
    def profit(self) -> float:
        return self.total_revenue - self.maintenance_costs


@dataclass(frozen=True, slots=True)
class ClientReport:
    id: str
    name: str
    rental_count: int
    total_spent: float


def _in_month(value: str, today: date) -> bool:
    parsed = try_parse_date(value)
    return parsed is not None and month_index(parsed) == month_index(today)


def rental_payment_transactions(rentals: Iterable[Rental]) -> list[Transaction]:
    return [
        Transaction(
            type=TransactionType.REVENUE,
            date=payment.date,
            description=f"Pgto. Aluguel: {rental.client.name}",
            amount=payment.amount,
            reference_id=rental.id or "",
            method=payment.method.value,
        )
        for rental in rentals
        for payment in rental.payment_history
    ]


def _ledger_transactions(
    entries: Iterable[LedgerEntry], kind: TransactionType
) -> list[Transaction]:
    return [
        Transaction(
            type=kind,
            date=entry.date,
            description=entry.description,
            amount=entry.amount,
            reference_id=entry.id or "",
            method=entry.payment_method.value if entry.payment_method else None,
        )
        for entry in entries
    ]


def window_start(window: LedgerWindow, today: date) -> Optional[date]:
    """First day included by a ledger window; ``None`` means no lower bound."""
    if window == LedgerWindow.MONTH:
        return today.replace(day=1)
    if window == LedgerWindow.THREE_MONTHS:
        return (today - relativedelta(months=2)).replace(day=1)
    return None


def build_transactions(
    rentals: Iterable[Rental],
    revenues: Iterable[LedgerEntry],
    expenses: Iterable[LedgerEntry],
    window: LedgerWindow | str = LedgerWindow.ALL,
    today: Optional[date] = None,
) -> list[Transaction]:
    """Merge payments, revenues and expenses into one ledger, newest first."""
    today = today or date.today()
    start = window_start(LedgerWindow(window), today)
    merged = (
        rental_payment_transactions(rentals)
        + _ledger_transactions(revenues, TransactionType.REVENUE)
        + _ledger_transactions(expenses, TransactionType.EXPENSE)
    )
    selected: list[Transaction] = []
    for transaction in merged:
        when = try_parse_date(transaction.date)
        if when is None:
            continue
        if start is not None and not start <= when <= today:
            continue
        selected.append(transaction)
    return sorted(selected, key=lambda transaction: transaction.date, reverse=True)


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    revenue = 0.0
    expenses = 0.0
    for transaction in transactions:
        if transaction.type == TransactionType.REVENUE:
            revenue += transaction.amount
        else:
            expenses += transaction.amount
    return LedgerSummary(revenue=revenue, expenses=expenses)


def dashboard_stats(
    inventory: Iterable[InventoryItem],
    rentals: Iterable[Rental],
    expenses: Iterable[LedgerEntry],
    today: Optional[date] = None,
) -> DashboardStats:
    today = today or date.today()
    inventory = list(inventory)
    rentals = list(rentals)
    upcoming = 0
    for rental in rentals:
        event = try_parse_date(rental.event_date)
        if rental.status == RentalStatus.BOOKED and event is not None and event >= today:
            upcoming += 1
    monthly_revenue = sum(
        payment.amount
        for rental in rentals
        for payment in rental.payment_history
        if _in_month(payment.date, today)
    )
    monthly_expenses = sum(
        expense.amount for expense in expenses if _in_month(expense.date, today)
    )
    return DashboardStats(
        total_items=len(inventory),
        rented_items=sum(1 for item in inventory if item.status == ItemStatus.RENTED),
        upcoming_events=upcoming,
        monthly_revenue=monthly_revenue,
        monthly_expenses=monthly_expenses,
    )


def rental_trend(
    rentals: Iterable[Rental], today: Optional[date] = None, months: int = TREND_MONTHS
) -> list[TrendPoint]:
    """Rental counts by event month for the trailing months, oldest first."""
    today = today or date.today()
    counts = [0] * months
    current = month_index(today)
    for rental in rentals:
        event = try_parse_date(rental.event_date)
        if event is None:
            continue
        diff = current - month_index(event)
        if 0 <= diff < months:
            counts[months - 1 - diff] += 1
    points: list[TrendPoint] = []
    for offset, count in enumerate(counts):
        month = today - relativedelta(months=months - 1 - offset)
        points.append(
            TrendPoint(
                year=month.year,
                month=month.month,
                label=month_label(month.month),
                rental_count=count,
            )
        )
    return points


def popular_items(
    rentals: Iterable[Rental], limit: int = POPULAR_ITEMS_LIMIT
) -> list[PopularItem]:
    counts: Counter[str] = Counter()
    for rental in rentals:
        # Occurrences, not quantities: each name counts once per rental.
        counts.update({item.name for item in rental.items})
        counts.update(f"{kit.name} (Kit)" for kit in rental.kits)
    return [PopularItem(name=name, count=count) for name, count in counts.most_common(limit)]


def _is_maintenance_cost_of(expense: LedgerEntry, item: InventoryItem) -> bool:
    if expense.category != MAINTENANCE_CATEGORY:
        return False
    if expense.item_id:
        return expense.item_id == item.id
    # Legacy expenses carry only the item name in the description.
    return bool(item.name) and item.name in expense.description


def item_reports(
    inventory: Iterable[InventoryItem],
    rentals: Iterable[Rental],
    expenses: Iterable[LedgerEntry],
) -> list[ItemReport]:
    rentals = list(rentals)
    expenses = list(expenses)
    reports: list[ItemReport] = []
    for item in inventory:
        revenue = 0.0
        rental_count = 0
        for rental in rentals:
            booked = [entry for entry in rental.items if entry.id == item.id]
            if booked:
                rental_count += 1
                revenue += sum(entry.price * entry.quantity for entry in booked)
        costs = sum(
            expense.amount for expense in expenses if _is_maintenance_cost_of(expense, item)
        )
        purchase_cost = item.purchase_cost or 0.0
        roi = (revenue - costs) / purchase_cost * 100 if purchase_cost > 0 else None
        reports.append(
            ItemReport(
                id=item.id or "",
                name=item.name,
                purchase_cost=purchase_cost,
                total_revenue=revenue,
                maintenance_costs=costs,
                rental_count=rental_count,
                roi=roi,
            )
        )
    return sorted(reports, key=lambda report: report.profit, reverse=True)


def client_reports(clients: Iterable[Client], rentals: Iterable[Rental]) -> list[ClientReport]:
    rentals = list(rentals)
    reports: list[ClientReport] = []
    for client in clients:
        own = [rental for rental in rentals if rental.client.id == client.id]
        reports.append(
            ClientReport(
                id=client.id or "",
                name=client.name,
                rental_count=len(own),
                total_spent=sum(final_value(rental) for rental in own),
            )
        )
    return sorted(reports, key=lambda report: report.total_spent, reverse=True)


class ReportService:
    """Load collections from the store and run the aggregations over them."""

    def __init__(self, store: LocalDocumentStore) -> None:
        self._inventory_repo = InventoryRepo(store)
        self._rental_repo = RentalRepo(store)
        self._client_repo = ClientRepo(store)
        self._expense_repo = ExpenseRepo(store)
        self._revenue_repo = RevenueRepo(store)
        self._logger = get_logger(self.__class__.__name__)

    def dashboard(self, today: Optional[date] = None) -> DashboardStats:
        return dashboard_stats(
            self._inventory_repo.list_all(),
            self._rental_repo.list_all(),
            self._expense_repo.list_all(),
            today,
        )

    def transactions(
        self, window: LedgerWindow | str = LedgerWindow.MONTH, today: Optional[date] = None
    ) -> list[Transaction]:
        return build_transactions(
            self._rental_repo.list_all(),
            self._revenue_repo.list_all(),
            self._expense_repo.list_all(),
            window,
            today,
        )

    def trend(self, today: Optional[date] = None) -> list[TrendPoint]:
        return rental_trend(self._rental_repo.list_all(), today)

    def popular_items(self) -> list[PopularItem]:
        return popular_items(self._rental_repo.list_all())

    def item_reports(self) -> list[ItemReport]:
        return item_reports(
            self._inventory_repo.list_all(),
            self._rental_repo.list_all(),
            self._expense_repo.list_all(),
        )

    def client_reports(self) -> list[ClientReport]:
        return client_reports(self._client_repo.list_all(), self._rental_repo.list_all())
