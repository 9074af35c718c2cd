# storefront/storefront/application/delivery.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from storefront.application import response_templates as rt
from storefront.core.errors import DeliveryValidationError
from storefront.domain.entities import DeliveryDetails

TIME_SLOTS: List[str] = [
    "09:00 - 11:00",
    "11:00 - 13:00",
    "13:00 - 15:00",
    "15:00 - 17:00",
    "17:00 - 19:00",
]

_WEEKDAYS_ES = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
_MONTHS_ES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]


def parse_delivery_date(value: str) -> Optional[date]:
    try:
        return date.fromisoformat((value or "").strip())
    except ValueError:
        return None


def format_delivery_date(d: date) -> str:
    """Long Spanish label, e.g. 'lunes, 19 de octubre de 2026'."""
    return f"{_WEEKDAYS_ES[d.weekday()]}, {d.day} de {_MONTHS_ES[d.month - 1]} de {d.year}"


@dataclass(frozen=True)
class DeliveryForm:
    """Raw delivery fields as entered by the shopper."""
    recipient_name: str = ""
    delivery_address: str = ""
    delivery_date: str = ""
    delivery_time: str = ""

    def missing_fields(self) -> List[str]:
        fields = ("recipient_name", "delivery_address", "delivery_date", "delivery_time")
        return [f for f in fields if not (getattr(self, f) or "").strip()]

    def validate(self, today: Optional[date] = None) -> List[str]:
        if self.missing_fields():
            return [rt.missing_fields_error()]

        errors: List[str] = []
        d = parse_delivery_date(self.delivery_date)
        if d is None:
            errors.append(rt.invalid_date_error(self.delivery_date))
        elif d < (today or date.today()):
            errors.append(rt.past_date_error())

        if self.delivery_time.strip() not in TIME_SLOTS:
            errors.append(rt.invalid_slot_error(self.delivery_time))
        return errors

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def to_details(self, today: Optional[date] = None) -> DeliveryDetails:
        errors = self.validate(today=today)
        if errors:
            raise DeliveryValidationError(errors)
        return DeliveryDetails(
            recipient_name=self.recipient_name.strip(),
            delivery_address=self.delivery_address.strip(),
            delivery_date=parse_delivery_date(self.delivery_date),  # type: ignore[arg-type]
            delivery_time=self.delivery_time.strip(),
        )
