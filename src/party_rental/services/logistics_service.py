"""Daily deliveries and collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional
from urllib.parse import quote

from party_rental.domain.models import Rental
from party_rental.repositories.document_store import LocalDocumentStore
from party_rental.repositories.rental_repo import RentalRepo
from party_rental.utils.dates import to_iso_date

MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


@dataclass(slots=True)
class DailyTasks:
    day: str
    deliveries: list[Rental] = field(default_factory=list)
    collections: list[Rental] = field(default_factory=list)

    def addresses(self) -> list[str]:
        """Distinct delivery addresses, deliveries first."""
        seen: dict[str, None] = {}
        for rental in [*self.deliveries, *self.collections]:
            if rental.delivery_address:
                seen.setdefault(rental.delivery_address, None)
        return list(seen)


def daily_tasks(rentals: Iterable[Rental], day: str | date) -> DailyTasks:
    day_iso = to_iso_date(day)
    tasks = DailyTasks(day=day_iso)
    for rental in rentals:
        if not rental.delivery_service:
            continue
        if rental.pickup_date == day_iso:
            tasks.deliveries.append(rental)
        if rental.return_date == day_iso:
            tasks.collections.append(rental)
    return tasks


def route_url(addresses: Iterable[str]) -> Optional[str]:
    """Google Maps directions through every address, or ``None`` if there are none."""
    waypoints = [quote(address, safe="") for address in addresses if address]
    if not waypoints:
        return None
    return MAPS_DIRECTIONS_URL + "/".join(waypoints)


class LogisticsService:
    def __init__(self, store: LocalDocumentStore) -> None:
        self._rental_repo = RentalRepo(store)

    def tasks_for(self, day: str | date) -> DailyTasks:
        return daily_tasks(self._rental_repo.list_all(), day)

    def route_for(self, day: str | date) -> Optional[str]:
        return route_url(self.tasks_for(day).addresses())
