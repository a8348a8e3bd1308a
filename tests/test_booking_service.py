import unittest
from datetime import date
from unittest import mock

from party_rental.config import PUBLIC_BOOKING_NOTE
from party_rental.domain.models import (
    ClientType,
    ItemStatus,
    PaymentMethod,
    PaymentStatus,
    RentalStatus,
)
from party_rental.repositories import ClientRepo, RentalRepo
from party_rental.services import lifecycle
from party_rental.services.booking_service import BookingService
from party_rental.services.errors import NotFoundError, ValidationError
from party_rental.services.rental_service import RentalService

from tests.support import add_client, add_item, make_store


class FindOrCreateClientTests(unittest.TestCase):
    def setUp(self):
        self.store = make_store()
        self.service = BookingService(self.store)

    def test_existing_phone_returns_stored_client(self):
        existing = add_client(self.store, name="Ana", phone="11988887777")

        client = self.service.find_or_create_client("Outro Nome", "11988887777", "x@y.z")

        self.assertEqual(client, existing)
        self.assertEqual(len(ClientRepo(self.store).list_all()), 1)

    def test_new_phone_creates_individual_with_blank_address(self):
        client = self.service.find_or_create_client("Bruno", "11911112222", "b@example.com")

        stored = ClientRepo(self.store).get_by_id(client.id)
        self.assertEqual(stored.type, ClientType.INDIVIDUAL)
        self.assertEqual(stored.email, "b@example.com")
        self.assertEqual(stored.address.street, "")
        self.assertEqual(stored.address.cep, "")

    def test_name_and_phone_are_required(self):
        with self.assertRaises(ValidationError):
            self.service.find_or_create_client("", "1199")
        with self.assertRaises(ValidationError):
            self.service.find_or_create_client("Ana", " ")


class BookBasicTests(unittest.TestCase):
    def setUp(self):
        self.store = make_store()
        self.service = BookingService(self.store)
        self.client = add_client(self.store)
        self.bounce = add_item(self.store, "Pula-pula", price=300.0, quantity=1)
        self.pool = add_item(self.store, "Piscina", price=100.0, quantity=1)

    def test_creates_booked_rental_with_half_deposit(self):
        rental = self.service.book_basic(
            self.client.id, "2024-08-10", [self.bounce.id, self.pool.id]
        )

        self.assertEqual(rental.status, RentalStatus.BOOKED)
        self.assertEqual(rental.payment_status, PaymentStatus.PARTIAL)
        self.assertEqual(rental.total_value, 400.0)
        self.assertEqual(rental.pickup_date, "2024-08-10")
        self.assertEqual(rental.return_date, "2024-08-10")
        self.assertEqual({item.quantity for item in rental.items}, {1})
        self.assertEqual(len(rental.payment_history), 1)
        deposit = rental.payment_history[0]
        self.assertEqual(deposit.amount, 200.0)
        self.assertEqual(deposit.method, PaymentMethod.PIX)
        self.assertEqual(deposit.date, date.today().isoformat())
        self.assertEqual(rental.notes, PUBLIC_BOOKING_NOTE)

    def test_explicit_deposit_amount_is_used(self):
        rental = self.service.book_basic(self.client.id, "2024-08-10", [self.bounce.id], 120.0)

        self.assertEqual(rental.payment_history[0].amount, 120.0)
        self.assertEqual(lifecycle.balance_due(rental), 180.0)

    def test_items_already_booked_that_day_are_rejected(self):
        self.service.book_basic(self.client.id, "2024-08-10", [self.bounce.id])

        with self.assertRaises(ValidationError):
            self.service.book_basic(self.client.id, "2024-08-10", [self.bounce.id])
        self.assertEqual(
            [item.id for item in self.service.catalog("2024-08-10")], [self.pool.id]
        )
        self.assertEqual(len(self.service.catalog("2024-08-11")), 2)

    def test_items_under_maintenance_are_not_offered(self):
        RentalService(self.store).report_damage(
            RentalService(self.store)
            .create_rental(self.client.id, "2024-07-01", {self.pool.id: 1})
            .id,
            self.pool.id,
            "Furo",
        )

        self.assertEqual([item.id for item in self.service.catalog("2024-09-01")], [self.bounce.id])
        self.assertEqual(
            [item.status for item in self.service.catalog("2024-09-01")], [ItemStatus.AVAILABLE]
        )

    def test_unknown_client_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.service.book_basic("local_x", "2024-08-10", [self.bounce.id])

    def test_non_finite_deposit_is_rejected(self):
        for deposit in (float("nan"), float("inf"), 0.0):
            with self.assertRaises(ValidationError):
                self.service.book_basic(self.client.id, "2024-08-10", [self.bounce.id], deposit)
        self.assertEqual(len(self.service.catalog("2024-08-10")), 2)

    def test_empty_cart_is_rejected(self):
        with self.assertRaises(ValidationError):
            self.service.book_basic(self.client.id, "2024-08-10", [])


class PayBalanceTests(unittest.TestCase):
    def setUp(self):
        self.store = make_store()
        self.service = BookingService(self.store)
        client = add_client(self.store)
        item = add_item(self.store, "Pula-pula", price=300.0)
        self.rental = self.service.book_basic(client.id, "2024-08-10", [item.id])

    def test_settles_remaining_balance(self):
        rental = self.service.pay_balance(self.rental.id)

        self.assertEqual(rental.payment_status, PaymentStatus.PAID)
        self.assertEqual(lifecycle.balance_due(rental), 0.0)
        settlement = rental.payment_history[-1]
        self.assertEqual(settlement.method, PaymentMethod.PAYMENT_LINK)
        self.assertEqual(settlement.amount, 150.0)
        self.assertTrue(settlement.id.startswith("payment_link_"))
        self.assertEqual(RentalService(self.store).get_rental(self.rental.id), rental)

    def test_nothing_to_pay_is_rejected(self):
        self.service.pay_balance(self.rental.id)

        with self.assertRaises(ValidationError):
            self.service.pay_balance(self.rental.id)

    def test_missing_rental_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.service.pay_balance("local_404")

    def test_rental_removed_before_settlement_is_not_found(self):
        with mock.patch.object(RentalRepo, "update", return_value=False):
            with self.assertRaises(NotFoundError):
                self.service.pay_balance(self.rental.id)

        self.assertEqual(
            RentalService(self.store).get_rental(self.rental.id).payment_status,
            PaymentStatus.PARTIAL,
        )

    def test_cent_valued_balance_is_settled_exactly(self):
        client = add_client(self.store, name="Bia", phone="11900000000")
        cup = add_item(self.store, "Taça", price=69.9, quantity=1)
        rental = self.service.book_basic(client.id, "2024-08-11", [cup.id])
        self.assertEqual(rental.payment_history[0].amount, 34.95)

        rental = self.service.pay_balance(rental.id)

        self.assertEqual(rental.payment_history[-1].amount, 34.95)
        self.assertEqual(rental.payment_status, PaymentStatus.PAID)


if __name__ == "__main__":
    unittest.main()
