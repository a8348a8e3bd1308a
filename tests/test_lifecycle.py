import unittest
from datetime import date

from party_rental.domain.models import ChecklistPhase, PaymentStatus, RentalStatus
from party_rental.services import lifecycle
from party_rental.services.errors import NotFoundError, ValidationError

from tests.support import build_rental, payment


class PaymentStatusTests(unittest.TestCase):
    def test_status_follows_total_paid_after_every_change(self):
        rental = build_rental(items=[("a", "Cadeira", 2, 100.0)], discount=20.0)
        expectations = [
            (payment(50.0, "p1"), PaymentStatus.PARTIAL),
            (payment(130.0, "p2"), PaymentStatus.PAID),
            (payment(10.0, "p3"), PaymentStatus.PAID),
        ]
        for new_payment, expected in expectations:
            rental = lifecycle.add_payment(rental, new_payment)
            self.assertEqual(rental.payment_status, expected)

        rental = lifecycle.remove_payment(rental, "p3")
        self.assertEqual(rental.payment_status, PaymentStatus.PAID)
        self.assertEqual(lifecycle.balance_due(rental), 0.0)
        rental = lifecycle.remove_payment(rental, "p2")
        self.assertEqual(rental.payment_status, PaymentStatus.PARTIAL)
        rental = lifecycle.remove_payment(rental, "p1")
        self.assertEqual(rental.payment_status, PaymentStatus.PENDING)

    def test_overpayment_leaves_negative_balance(self):
        rental = lifecycle.add_payment(build_rental(), payment(150.0))

        self.assertEqual(rental.payment_status, PaymentStatus.PAID)
        self.assertEqual(lifecycle.balance_due(rental), -50.0)

    def test_non_positive_payment_is_rejected(self):
        with self.assertRaises(ValidationError):
            lifecycle.add_payment(build_rental(), payment(0.0))

    def test_non_finite_payment_is_rejected(self):
        for amount in (float("nan"), float("inf")):
            with self.assertRaises(ValidationError):
                lifecycle.add_payment(build_rental(), payment(amount))

    def test_exact_payment_of_cent_valued_total_is_paid(self):
        rental = build_rental(items=[("a", "Taça", 3, 69.9)])

        rental = lifecycle.add_payment(rental, payment(209.70))

        self.assertEqual(rental.payment_status, PaymentStatus.PAID)
        self.assertEqual(lifecycle.balance_due(rental), 0.0)

    def test_cent_valued_payments_sum_without_drift(self):
        rental = build_rental(items=[("a", "Balão", 3, 0.1)])
        rental = lifecycle.add_payment(rental, payment(0.1, "p1"))
        rental = lifecycle.add_payment(rental, payment(0.2, "p2"))

        self.assertEqual(lifecycle.total_paid(rental.payment_history), 0.3)
        self.assertEqual(rental.payment_status, PaymentStatus.PAID)

    def test_removing_unknown_payment_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            lifecycle.remove_payment(build_rental(), "missing")

    def test_discount_edit_recomputes_status(self):
        rental = lifecycle.add_payment(build_rental(), payment(80.0))
        self.assertEqual(rental.payment_status, PaymentStatus.PARTIAL)

        rental.discount = 20.0
        self.assertEqual(lifecycle.with_payment_status(rental).payment_status, PaymentStatus.PAID)


class ChecklistTests(unittest.TestCase):
    def setUp(self):
        self.rental = build_rental(
            items=[("a", "Cadeira", 10, 5.0)],
            kits=[("k1", "Kit Festa", 300.0, [("b", "Pula-pula"), ("c", "Luzes")])],
        )

    def test_checklist_covers_items_and_kit_members(self):
        self.assertEqual(lifecycle.checklist_item_ids(self.rental), ["a", "b", "c"])

    def test_pickup_rejected_while_any_id_is_unchecked(self):
        rental = lifecycle.set_checklist_item(self.rental, ChecklistPhase.PICKUP, "a")
        rental = lifecycle.set_checklist_item(rental, ChecklistPhase.PICKUP, "b")

        with self.assertRaises(ValidationError):
            lifecycle.confirm_phase(rental, ChecklistPhase.PICKUP)

    def test_pickup_and_return_succeed_with_complete_checklists(self):
        rental = lifecycle.set_checklist_item(self.rental, ChecklistPhase.PICKUP, "a")
        rental = lifecycle.check_kit(rental, ChecklistPhase.PICKUP, "k1")
        rental = lifecycle.confirm_phase(rental, ChecklistPhase.PICKUP)
        self.assertEqual(rental.status, RentalStatus.PICKED_UP)

        rental = lifecycle.check_kit(rental, ChecklistPhase.RETURN, "k1")
        rental = lifecycle.set_checklist_item(rental, ChecklistPhase.RETURN, "a")
        rental = lifecycle.confirm_phase(rental, ChecklistPhase.RETURN)
        self.assertEqual(rental.status, RentalStatus.RETURNED)

    def test_reconfirming_is_a_no_op(self):
        rental = build_rental(status=RentalStatus.RETURNED)

        self.assertIs(lifecycle.confirm_phase(rental, ChecklistPhase.PICKUP), rental)
        self.assertIs(lifecycle.confirm_phase(rental, ChecklistPhase.RETURN), rental)

    def test_unchecking_an_item_blocks_confirmation_again(self):
        rental = lifecycle.set_checklist_item(self.rental, ChecklistPhase.PICKUP, "a")
        rental = lifecycle.check_kit(rental, ChecklistPhase.PICKUP, "k1")
        rental = lifecycle.set_checklist_item(rental, ChecklistPhase.PICKUP, "c", checked=False)

        self.assertEqual(lifecycle.pending_checklist_items(rental, ChecklistPhase.PICKUP), ["c"])
        with self.assertRaises(ValidationError):
            lifecycle.confirm_phase(rental, ChecklistPhase.PICKUP)

    def test_quote_cannot_be_picked_up(self):
        rental = build_rental(status=RentalStatus.QUOTE_REQUESTED)
        rental = lifecycle.set_checklist_item(rental, ChecklistPhase.PICKUP, "a")

        with self.assertRaises(ValidationError):
            lifecycle.confirm_phase(rental, ChecklistPhase.PICKUP)

    def test_return_requires_pickup(self):
        rental = lifecycle.set_checklist_item(build_rental(), ChecklistPhase.RETURN, "a")

        with self.assertRaises(ValidationError):
            lifecycle.confirm_phase(rental, ChecklistPhase.RETURN)

    def test_foreign_ids_are_rejected(self):
        with self.assertRaises(ValidationError):
            lifecycle.set_checklist_item(self.rental, ChecklistPhase.PICKUP, "zzz")
        with self.assertRaises(ValidationError):
            lifecycle.check_kit(self.rental, ChecklistPhase.PICKUP, "k9")


class OverdueTests(unittest.TestCase):
    def test_past_return_date_is_overdue_until_returned(self):
        today = date(2024, 6, 13)
        rental = build_rental(status=RentalStatus.PICKED_UP)

        self.assertEqual(lifecycle.effective_status(rental, today), RentalStatus.OVERDUE)
        rental.status = RentalStatus.RETURNED
        self.assertEqual(lifecycle.effective_status(rental, today), RentalStatus.RETURNED)

    def test_return_date_today_is_not_overdue(self):
        rental = build_rental(status=RentalStatus.PICKED_UP)

        self.assertFalse(lifecycle.is_overdue(rental, date(2024, 6, 12)))
        self.assertEqual(
            lifecycle.effective_status(rental, date(2024, 6, 12)), RentalStatus.PICKED_UP
        )


class NotesTests(unittest.TestCase):
    def test_append_note_adds_a_line(self):
        self.assertEqual(lifecycle.append_note("", "linha"), "linha")
        self.assertEqual(lifecycle.append_note("a", "b"), "a\nb")


if __name__ == "__main__":
    unittest.main()
