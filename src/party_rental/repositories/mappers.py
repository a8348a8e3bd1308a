"""Document record mappers for domain models."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

from party_rental.domain.models import (
    Address,
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
    Payment,
    PaymentInfo,
    PaymentMethod,
    PaymentStatus,
    Rental,
    RentalStatus,
)
from party_rental.utils.dates import to_iso_date

EnumT = TypeVar("EnumT")

Record = Mapping[str, Any]


def _coerce_enum(enum_cls: type[EnumT], raw: Any, default: EnumT) -> EnumT:
    if raw is None or raw == "":
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        return default


def _optional_enum(enum_cls: type[EnumT], raw: Any) -> Optional[EnumT]:
    if raw is None or raw == "":
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return None


def _optional_number(raw: Any, cast: Callable[[Any], Any] = float) -> Any:
    if raw is None or raw == "":
        return None
    try:
        return cast(raw)
    except (TypeError, ValueError):
        return None


def _date_value(raw: Any) -> str:
    try:
        return to_iso_date(raw)
    except (ValueError, OverflowError):
        return str(raw)


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def inventory_item_from_record(record: Record) -> InventoryItem:
    return InventoryItem(
        id=record.get("id"),
        name=record.get("name") or "",
        category=record.get("category") or "",
        quantity=int(record.get("quantity") or 0),
        price=float(record.get("price") or 0),
        status=_coerce_enum(ItemStatus, record.get("status"), ItemStatus.AVAILABLE),
        image_url=record.get("imageUrl") or "",
        low_stock_threshold=_optional_number(record.get("lowStockThreshold"), int),
        maintenance_notes=record.get("maintenanceNotes"),
        purchase_cost=_optional_number(record.get("purchaseCost")),
    )


def inventory_item_to_record(item: InventoryItem) -> Dict[str, Any]:
    return {
        "name": item.name,
        "category": item.category,
        "quantity": item.quantity,
        "price": item.price,
        "imageUrl": item.image_url,
        "status": _enum_value(item.status),
        "lowStockThreshold": item.low_stock_threshold,
        "maintenanceNotes": item.maintenance_notes,
        "purchaseCost": item.purchase_cost,
    }


def address_from_record(record: Optional[Record]) -> Address:
    record = record or {}
    return Address(
        cep=record.get("cep") or "",
        street=record.get("street") or "",
        number=record.get("number") or "",
        complement=record.get("complement"),
        neighborhood=record.get("neighborhood") or "",
        city=record.get("city") or "",
        state=record.get("state") or "",
    )


def address_to_record(address: Address) -> Dict[str, Any]:
    return {
        "cep": address.cep,
        "street": address.street,
        "number": address.number,
        "complement": address.complement,
        "neighborhood": address.neighborhood,
        "city": address.city,
        "state": address.state,
    }


def client_from_record(record: Record) -> Client:
    return Client(
        id=record.get("id"),
        type=_coerce_enum(ClientType, record.get("type"), ClientType.INDIVIDUAL),
        name=record.get("name") or "",
        phone=record.get("phone") or "",
        email=record.get("email") or "",
        address=address_from_record(record.get("address")),
        cpf=record.get("cpf"),
        birth_date=record.get("birthDate"),
        cnpj=record.get("cnpj"),
        legal_name=record.get("legalName"),
        contact_name=record.get("contactName"),
        how_found=record.get("howFound"),
        notes=record.get("notes"),
    )


def client_to_record(client: Client) -> Dict[str, Any]:
    return {
        "type": _enum_value(client.type),
        "name": client.name,
        "phone": client.phone,
        "email": client.email,
        "address": address_to_record(client.address),
        "cpf": client.cpf,
        "birthDate": client.birth_date,
        "cnpj": client.cnpj,
        "legalName": client.legal_name,
        "contactName": client.contact_name,
        "howFound": client.how_found,
        "notes": client.notes,
    }


def _kit_members(raw: Any) -> list[KitMember]:
    members: list[KitMember] = []
    for entry in raw or []:
        if isinstance(entry, Mapping) and entry.get("id"):
            members.append(KitMember(id=str(entry["id"]), name=entry.get("name") or ""))
    return members


def _kit_members_to_records(members: Any) -> list[Dict[str, Any]]:
    return [{"id": member.id, "name": member.name} for member in members]


def kit_from_record(record: Record) -> Kit:
    return Kit(
        id=record.get("id"),
        name=record.get("name") or "",
        price=float(record.get("price") or 0),
        item_ids=[str(item_id) for item_id in record.get("itemIds") or []],
        items=_kit_members(record.get("items")),
    )


def kit_to_record(kit: Kit) -> Dict[str, Any]:
    return {
        "name": kit.name,
        "price": kit.price,
        "itemIds": list(kit.item_ids),
        "items": _kit_members_to_records(kit.items),
    }


def payment_from_record(record: Record) -> Payment:
    return Payment(
        id=str(record.get("id") or ""),
        date=_date_value(record.get("date")),
        amount=float(record.get("amount") or 0),
        method=_coerce_enum(PaymentMethod, record.get("method"), PaymentMethod.OTHER),
    )


def payment_to_record(payment: Payment) -> Dict[str, Any]:
    return {
        "id": payment.id,
        "date": payment.date,
        "amount": payment.amount,
        "method": _enum_value(payment.method),
    }


def _item_snapshot_from_record(record: Record) -> ItemSnapshot:
    return ItemSnapshot(
        id=str(record.get("id") or ""),
        name=record.get("name") or "",
        quantity=int(record.get("quantity") or 0),
        price=float(record.get("price") or 0),
    )


def _kit_snapshot_from_record(record: Record) -> KitSnapshot:
    return KitSnapshot(
        id=str(record.get("id") or ""),
        name=record.get("name") or "",
        price=float(record.get("price") or 0),
        items=tuple(_kit_members(record.get("items"))),
    )


def _checklist(raw: Any) -> dict[str, bool]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(key): bool(value) for key, value in raw.items()}


def rental_from_record(record: Record) -> Rental:
    client = record.get("client") or {}
    return Rental(
        id=record.get("id"),
        client=ClientRef(id=str(client.get("id") or ""), name=client.get("name") or ""),
        event_date=_date_value(record.get("eventDate")),
        pickup_date=_date_value(record.get("pickupDate")),
        return_date=_date_value(record.get("returnDate")),
        total_value=float(record.get("totalValue") or 0),
        discount=float(record.get("discount") or 0),
        notes=record.get("notes") or "",
        status=_coerce_enum(RentalStatus, record.get("status"), RentalStatus.BOOKED),
        payment_status=_coerce_enum(
            PaymentStatus, record.get("paymentStatus"), PaymentStatus.PENDING
        ),
        payment_history=[
            payment_from_record(entry) for entry in record.get("paymentHistory") or []
        ],
        items=[_item_snapshot_from_record(entry) for entry in record.get("items") or []],
        kits=[_kit_snapshot_from_record(entry) for entry in record.get("kits") or []],
        pickup_checklist=_checklist(record.get("pickupChecklist")),
        return_checklist=_checklist(record.get("returnChecklist")),
        delivery_service=bool(record.get("deliveryService") or False),
        delivery_fee=_optional_number(record.get("deliveryFee")),
        setup_service=bool(record.get("setupService") or False),
        setup_fee=_optional_number(record.get("setupFee")),
        delivery_address=record.get("deliveryAddress"),
    )


def rental_to_record(rental: Rental) -> Dict[str, Any]:
    return {
        "client": {"id": rental.client.id, "name": rental.client.name},
        "eventDate": rental.event_date,
        "pickupDate": rental.pickup_date,
        "returnDate": rental.return_date,
        "totalValue": rental.total_value,
        "discount": rental.discount,
        "notes": rental.notes,
        "status": _enum_value(rental.status),
        "paymentStatus": _enum_value(rental.payment_status),
        "paymentHistory": [payment_to_record(p) for p in rental.payment_history],
        "items": [
            {
                "id": item.id,
                "name": item.name,
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in rental.items
        ],
        "kits": [
            {
                "id": kit.id,
                "name": kit.name,
                "price": kit.price,
                "items": _kit_members_to_records(kit.items),
            }
            for kit in rental.kits
        ],
        "pickupChecklist": dict(rental.pickup_checklist),
        "returnChecklist": dict(rental.return_checklist),
        "deliveryService": rental.delivery_service,
        "deliveryFee": rental.delivery_fee,
        "setupService": rental.setup_service,
        "setupFee": rental.setup_fee,
        "deliveryAddress": rental.delivery_address,
    }


def ledger_entry_from_record(record: Record) -> LedgerEntry:
    return LedgerEntry(
        id=record.get("id"),
        description=record.get("description") or "",
        category=record.get("category") or "",
        date=_date_value(record.get("date")),
        amount=float(record.get("amount") or 0),
        payment_method=_optional_enum(PaymentMethod, record.get("paymentMethod")),
        item_id=record.get("itemId"),
    )


def ledger_entry_to_record(entry: LedgerEntry) -> Dict[str, Any]:
    return {
        "description": entry.description,
        "category": entry.category,
        "date": entry.date,
        "amount": entry.amount,
        "paymentMethod": _enum_value(entry.payment_method),
        "itemId": entry.item_id,
    }


def settings_from_record(record: Record) -> CompanySettings:
    payment = record.get("paymentInfo") or {}
    return CompanySettings(
        company_name=record.get("companyName") or "",
        cnpj=record.get("cnpj") or "",
        address=record.get("address") or "",
        logo_url=record.get("logoUrl") or "",
        payment_info=PaymentInfo(
            # Older records kept the pix key at the top level.
            pix_key=payment.get("pixKey") or record.get("pixKey") or "",
            bank_name=payment.get("bankName") or "",
            agency=payment.get("agency") or "",
            account=payment.get("account") or "",
        ),
        contract_terms=record.get("contractTerms") or "",
    )


def settings_to_record(settings: CompanySettings) -> Dict[str, Any]:
    return {
        "companyName": settings.company_name,
        "cnpj": settings.cnpj,
        "address": settings.address,
        "logoUrl": settings.logo_url,
        "paymentInfo": {
            "pixKey": settings.payment_info.pix_key,
            "bankName": settings.payment_info.bank_name,
            "agency": settings.payment_info.agency,
            "account": settings.payment_info.account,
        },
        "contractTerms": settings.contract_terms,
    }
