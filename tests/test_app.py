import io
import logging
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from party_rental.app import main
from party_rental.config import APP_HOME_ENV
from party_rental.db.connection import get_connection
from party_rental.db.migrations import apply_migrations
from party_rental.paths import get_db_path
from party_rental.repositories import LocalDocumentStore
from party_rental.services.rental_service import RentalService
from party_rental.utils.config_store import load_app_config

from tests.support import add_client, add_item


class CommandLineTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self._env = mock.patch.dict(os.environ, {APP_HOME_ENV: self._tmp.name})
        self._env.start()
        root = logging.getLogger()
        self._handlers = list(root.handlers)
        self._level = root.level
        self._excepthook = sys.excepthook

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers:
            if handler not in self._handlers:
                handler.close()
        root.handlers[:] = self._handlers
        root.setLevel(self._level)
        sys.excepthook = self._excepthook
        self._env.stop()
        self._tmp.cleanup()

    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def _seed(self):
        connection = get_connection(get_db_path())
        try:
            apply_migrations(connection)
            store = LocalDocumentStore(connection)
            client = add_client(store, name="Ana")
            item = add_item(store, "Tenda", price=300.0, quantity=1)
            add_item(store, "Mesa", price=20.0, quantity=10)
            rentals = RentalService(store)
            rental = rentals.create_rental(
                client.id,
                "2024-06-11",
                {item.id: 1},
                pickup_date="2024-06-10",
                return_date="2024-06-12",
                delivery_service=True,
                delivery_address="Rua A, 1",
            )
            rentals.add_payment(rental.id, 100.0, "pix", paid_at="2024-06-05")
        finally:
            connection.close()

    def test_dashboard_on_empty_store(self):
        code, out, _ = self._run("--today", "2024-06-15", "dashboard")

        self.assertEqual(code, 0)
        self.assertIn("Itens no estoque:    0", out)
        self.assertTrue((Path(self._tmp.name) / "logs" / "app.log").exists())

    def test_reports_over_seeded_data(self):
        self._seed()

        code, out, _ = self._run("--today", "2024-06-15", "ledger", "--window", "month")
        self.assertEqual(code, 0)
        self.assertIn("Pgto. Aluguel: Ana", out)
        self.assertIn("R$ 100,00", out)

        code, out, _ = self._run("availability", "--date", "2024-06-11")
        self.assertEqual(code, 0)
        self.assertIn("Mesa", out)
        self.assertNotIn("Tenda", out)

        code, out, _ = self._run("logistics", "--date", "2024-06-10")
        self.assertIn("https://www.google.com/maps/dir/Rua%20A%2C%201", out)

        code, out, _ = self._run("--today", "2024-06-15", "notifications")
        self.assertIn("Devolução de Ana está atrasada", out)

        code, out, _ = self._run("--today", "2024-06-15", "reports")
        self.assertIn("Tenda: 1", out)
        self.assertIn("ROI N/A", out)

    def test_config_updates_business_settings(self):
        code, out, _ = self._run("config", "--deposit-rate", "0.3", "--due-window", "10")

        self.assertEqual(code, 0)
        self.assertIn("Sinal: 30%", out)
        config = load_app_config(Path(self._tmp.name) / "config.json")
        self.assertEqual(config.deposit_rate, 0.3)
        self.assertEqual(config.payment_due_window_days, 10)

    def test_invalid_config_value_is_reported(self):
        code, _, err = self._run("config", "--deposit-rate", "2")

        self.assertEqual(code, 1)
        self.assertIn("Erro:", err)

    def test_invalid_date_argument_exits_with_usage_error(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("availability", "--date", "amanhã")
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
