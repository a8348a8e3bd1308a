import http.client
import json
import socket
import unittest
import urllib.error
from unittest import mock

from party_rental.domain.models import Address
from party_rental.services import postal_service
from party_rental.services.logistics_service import LogisticsService, daily_tasks, route_url
from party_rental.services.rental_service import RentalService
from party_rental.utils.formatting import format_address

from tests.support import add_client, add_item, build_rental, make_store


class DailyTasksTests(unittest.TestCase):
    def test_splits_deliveries_and_collections(self):
        rentals = [
            build_rental(
                rental_id="d",
                pickup_date="2024-06-10",
                return_date="2024-06-12",
                delivery_service=True,
                delivery_address="Rua A, 1",
            ),
            build_rental(
                rental_id="c",
                pickup_date="2024-06-08",
                return_date="2024-06-10",
                delivery_service=True,
                delivery_address="Rua B, 2",
            ),
            build_rental(rental_id="self", pickup_date="2024-06-10", return_date="2024-06-10"),
        ]

        tasks = daily_tasks(rentals, "2024-06-10")

        self.assertEqual([r.id for r in tasks.deliveries], ["d"])
        self.assertEqual([r.id for r in tasks.collections], ["c"])
        self.assertEqual(tasks.addresses(), ["Rua A, 1", "Rua B, 2"])

    def test_route_url_encodes_distinct_waypoints(self):
        self.assertEqual(
            route_url(["Rua A, 1", "Av. São João/SP"]),
            "https://www.google.com/maps/dir/Rua%20A%2C%201/Av.%20S%C3%A3o%20Jo%C3%A3o%2FSP",
        )
        self.assertIsNone(route_url([]))

    def test_service_reads_stored_rentals(self):
        store = make_store()
        client = add_client(store)
        item = add_item(store, "Tenda")
        RentalService(store).create_rental(
            client.id,
            "2024-06-11",
            {item.id: 1},
            pickup_date="2024-06-10",
            return_date="2024-06-12",
            delivery_service=True,
            delivery_address="Rua das Flores, 10",
        )

        service = LogisticsService(store)

        self.assertEqual(len(service.tasks_for("2024-06-10").deliveries), 1)
        self.assertEqual(len(service.tasks_for("2024-06-12").collections), 1)
        self.assertEqual(
            service.route_for("2024-06-10"),
            "https://www.google.com/maps/dir/Rua%20das%20Flores%2C%2010",
        )
        self.assertIsNone(service.route_for("2024-06-11"))


class PostalLookupTests(unittest.TestCase):
    def test_maps_viacep_fields(self):
        payload = {
            "cep": "01310-100",
            "logradouro": "Avenida Paulista",
            "complemento": "de 612 a 1510 - lado par",
            "bairro": "Bela Vista",
            "localidade": "São Paulo",
            "uf": "SP",
        }
        with mock.patch.object(postal_service, "_fetch_address", return_value=payload) as fetch:
            address = postal_service.lookup_address("01310-100")

        fetch.assert_called_once_with("01310100")
        self.assertEqual(address.street, "Avenida Paulista")
        self.assertEqual(address.neighborhood, "Bela Vista")
        self.assertEqual(address.city, "São Paulo")
        self.assertEqual(address.state, "SP")
        self.assertEqual(address.number, "")

    def test_unknown_cep_returns_none(self):
        with mock.patch.object(postal_service, "_fetch_address", return_value={"erro": True}):
            self.assertIsNone(postal_service.lookup_address("99999999"))

    def test_failures_degrade_to_none(self):
        failures = [
            urllib.error.URLError("offline"),
            socket.timeout(),
            json.JSONDecodeError("bad", "", 0),
            urllib.error.HTTPError("https://viacep.com.br", 500, "erro", {}, None),
        ]
        for failure in failures:
            with mock.patch.object(postal_service, "_fetch_address", side_effect=failure):
                with self.assertLogs("party_rental.services.postal_service", level="ERROR"):
                    self.assertIsNone(postal_service.lookup_address("01310100"))

    def test_undecodable_body_degrades_to_none(self):
        response = mock.MagicMock()
        response.__enter__.return_value.read.return_value = b'{"cep": "\xff"}'
        with mock.patch.object(postal_service.urllib.request, "urlopen", return_value=response):
            with self.assertLogs("party_rental.services.postal_service", level="ERROR"):
                self.assertIsNone(postal_service.lookup_address("01310100"))

    def test_dropped_connections_degrade_to_none(self):
        failures = [
            ConnectionResetError("reset"),
            http.client.IncompleteRead(b"{"),
            http.client.RemoteDisconnected("closed"),
        ]
        for failure in failures:
            with mock.patch.object(postal_service.urllib.request, "urlopen", side_effect=failure):
                with self.assertLogs("party_rental.services.postal_service", level="ERROR"):
                    self.assertIsNone(postal_service.lookup_address("01310100"))

    def test_malformed_cep_skips_the_request(self):
        with mock.patch.object(postal_service, "_fetch_address") as fetch:
            self.assertIsNone(postal_service.lookup_address("123"))
        fetch.assert_not_called()


class FormatAddressTests(unittest.TestCase):
    def test_skips_blank_parts(self):
        address = Address(
            cep="01310-100",
            street="Avenida Paulista",
            number="1000",
            neighborhood="Bela Vista",
            city="São Paulo",
            state="SP",
        )

        self.assertEqual(
            format_address(address),
            "Avenida Paulista, 1000, Bela Vista, São Paulo/SP, 01310-100",
        )
        self.assertEqual(format_address(Address()), "")


if __name__ == "__main__":
    unittest.main()
