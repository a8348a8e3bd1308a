"""Command-line entry point."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from party_rental.config import AppConfig
from party_rental.db.connection import get_connection
from party_rental.db.migrations import apply_migrations
from party_rental.domain.models import LedgerWindow, TransactionType
from party_rental.logging_config import configure_logging, get_logger
from party_rental.paths import get_config_path, get_db_path
from party_rental.repositories import InventoryRepo, LocalDocumentStore, RentalRepo
from party_rental.services.errors import ServiceError
from party_rental.services.inventory_service import available_items
from party_rental.services.logistics_service import LogisticsService, route_url
from party_rental.services.notification_service import NotificationService
from party_rental.services.postal_service import lookup_address
from party_rental.services.report_service import ReportService, summarize
from party_rental.utils.config_store import load_app_config, save_app_config
from party_rental.utils.dates import parse_date
from party_rental.utils.formatting import format_address, format_currency, format_date
from party_rental.version import __version__


def _date_arg(value: str) -> date:
    try:
        parsed = parse_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"data inválida: {value}") from exc
    if parsed is None:
        raise argparse.ArgumentTypeError("data obrigatória")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="party_rental", description="Painel de operações da locadora."
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--today",
        type=_date_arg,
        default=None,
        help="Data de referência (AAAA-MM-DD). Padrão: hoje.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("dashboard", help="Resumo do mês e do estoque.")
    commands.add_parser("notifications", help="Alertas de devolução, pagamento e estoque.")

    ledger = commands.add_parser("ledger", help="Extrato de receitas e despesas.")
    ledger.add_argument(
        "--window",
        choices=[window.value for window in LedgerWindow],
        default=LedgerWindow.MONTH.value,
        help="Período do extrato.",
    )

    commands.add_parser("reports", help="Tendência, itens populares, ROI e LTV.")

    availability = commands.add_parser("availability", help="Itens livres em uma data.")
    availability.add_argument("--date", type=_date_arg, required=True)
    availability.add_argument("--end", type=_date_arg, default=None)

    logistics = commands.add_parser("logistics", help="Entregas e recolhimentos do dia.")
    logistics.add_argument("--date", type=_date_arg, required=True)

    cep = commands.add_parser("cep", help="Consulta de endereço por CEP.")
    cep.add_argument("cep")

    config = commands.add_parser("config", help="Mostra ou altera parâmetros do negócio.")
    config.add_argument("--deposit-rate", type=float, default=None)
    config.add_argument("--due-window", type=int, default=None)
    return parser


def _print_dashboard(store: LocalDocumentStore, today: date) -> None:
    stats = ReportService(store).dashboard(today)
    print(f"Receita do mês:      {format_currency(stats.monthly_revenue)}")
    print(f"Despesas do mês:     {format_currency(stats.monthly_expenses)}")
    print(f"Lucro líquido:       {format_currency(stats.monthly_net_profit)}")
    print(f"Itens no estoque:    {stats.total_items}")
    print(f"Itens alugados:      {stats.rented_items}")
    print(f"Próximos eventos:    {stats.upcoming_events}")


def _print_notifications(store: LocalDocumentStore, config: AppConfig, today: date) -> None:
    notifications = NotificationService(
        store, window_days=config.payment_due_window_days
    ).list_notifications(today)
    if not notifications:
        print("Nenhuma notificação.")
        return
    for notification in notifications:
        print(f"[{notification.type.value}] {notification.message}")


def _print_ledger(store: LocalDocumentStore, window: str, today: date) -> None:
    transactions = ReportService(store).transactions(window, today)
    for transaction in transactions:
        sign = "+" if transaction.type == TransactionType.REVENUE else "-"
        print(
            f"{format_date(transaction.date)}  {sign}{format_currency(transaction.amount)}"
            f"  {transaction.description}"
        )
    summary = summarize(transactions)
    print(
        f"Receitas: {format_currency(summary.revenue)} | "
        f"Despesas: {format_currency(summary.expenses)} | "
        f"Saldo: {format_currency(summary.net)}"
    )


def _print_reports(store: LocalDocumentStore, today: date) -> None:
    reports = ReportService(store)
    print("Aluguéis por mês:")
    for point in reports.trend(today):
        print(f"  {point.label}/{point.year}: {point.rental_count}")
    print("Itens mais alugados:")
    for item in reports.popular_items():
        print(f"  {item.name}: {item.count}")
    print("Rentabilidade por item:")
    for report in reports.item_reports():
        roi = "N/A" if report.roi is None else f"{report.roi:.1f}%"
        print(
            f"  {report.name}: receita {format_currency(report.total_revenue)}, "
            f"manutenção {format_currency(report.maintenance_costs)}, "
            f"lucro {format_currency(report.profit)}, ROI {roi}"
        )
    print("Valor por cliente (LTV):")
    for client in reports.client_reports():
        print(
            f"  {client.name}: {client.rental_count} aluguel(is), "
            f"{format_currency(client.total_spent)}"
        )


def _print_availability(
    store: LocalDocumentStore, start: date, end: Optional[date]
) -> None:
    items = available_items(
        InventoryRepo(store).list_all(), RentalRepo(store).list_all(), start, end
    )
    if not items:
        print("Nenhum item disponível.")
        return
    for item in sorted(items, key=lambda item: item.name.casefold()):
        print(f"{item.name} ({item.category}) - {format_currency(item.price)}")


def _print_logistics(store: LocalDocumentStore, day: date) -> None:
    tasks = LogisticsService(store).tasks_for(day)
    print(f"Entregas em {format_date(day)}:")
    for rental in tasks.deliveries:
        print(f"  {rental.client.name}: {rental.delivery_address or '—'}")
    print(f"Recolhimentos em {format_date(day)}:")
    for rental in tasks.collections:
        print(f"  {rental.client.name}: {rental.delivery_address or '—'}")
    url = route_url(tasks.addresses())
    print(f"Rota: {url}" if url else "Nenhum endereço para a rota.")


def _print_cep(cep: str) -> int:
    address = lookup_address(cep)
    if address is None:
        print("CEP não encontrado.")
        return 1
    print(format_address(address))
    return 0


def _update_config(args: argparse.Namespace) -> None:
    config_path = get_config_path()
    config = load_app_config(config_path)
    if args.deposit_rate is not None or args.due_window is not None:
        if args.deposit_rate is not None and not 0 < args.deposit_rate <= 1:
            raise ServiceError("O percentual do sinal deve estar entre 0 e 1.")
        if args.due_window is not None and args.due_window < 0:
            raise ServiceError("A janela de vencimento não pode ser negativa.")
        config = replace(
            config,
            deposit_rate=config.deposit_rate if args.deposit_rate is None else args.deposit_rate,
            payment_due_window_days=(
                config.payment_due_window_days
                if args.due_window is None
                else args.due_window
            ),
        )
        save_app_config(config_path, config)
    print(f"Sinal: {config.deposit_rate:.0%}")
    print(f"Aviso de pagamento: {config.payment_due_window_days} dia(s)")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one console command against the local store."""
    args = build_parser().parse_args(argv)
    configure_logging()
    logger = get_logger(__name__)
    config = load_app_config(get_config_path())
    today = args.today or date.today()

    connection = get_connection(get_db_path())
    try:
        apply_migrations(connection)
        store = LocalDocumentStore(connection)
        logger.info("Comando %s (%s)", args.command, config.app_name)
        if args.command == "dashboard":
            _print_dashboard(store, today)
        elif args.command == "notifications":
            _print_notifications(store, config, today)
        elif args.command == "ledger":
            _print_ledger(store, args.window, today)
        elif args.command == "reports":
            _print_reports(store, today)
        elif args.command == "availability":
            _print_availability(store, args.date, args.end)
        elif args.command == "logistics":
            _print_logistics(store, args.date)
        elif args.command == "cep":
            return _print_cep(args.cep)
        elif args.command == "config":
            _update_config(args)
    except ServiceError as exc:
        logger.warning("Comando %s falhou: %s", args.command, exc)
        print(f"Erro: {exc}", file=sys.stderr)
        return 1
    finally:
        connection.close()
    return 0
