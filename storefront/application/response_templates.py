# =========================
# FILE: storefront/storefront/application/response_templates.py
# Shopper-facing texts (es-MX storefront)
# =========================
from __future__ import annotations


def missing_fields_error() -> str:
    return "Todos los campos, incluyendo fecha y hora, son obligatorios."


def invalid_date_error(value: str) -> str:
    return f"La fecha de entrega no es válida: {value!r}. Usa el formato AAAA-MM-DD."


def past_date_error() -> str:
    return "La fecha de entrega no puede estar en el pasado."


def invalid_slot_error(value: str) -> str:
    return f"El horario {value!r} no está disponible. Elige uno de los horarios ofrecidos."


def message_too_long_warning() -> str:
    return (
        "🚨 El mensaje es demasiado largo para enviarse por WhatsApp.\n"
        "Por favor, contacta al cliente directamente para confirmar."
    )


def handoff_failed_warning() -> str:
    return "No se pudo abrir WhatsApp. Tu pedido quedó registrado; compártelo manualmente."


def catalog_error(reason: str) -> str:
    return f"No se pudieron cargar los productos: {reason}"


def no_products_found() -> str:
    return "No se encontraron productos. Intenta con otra búsqueda o revisa nuestros productos."
