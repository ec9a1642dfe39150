# customer_registry/utils.py
import re

_WHITESPACE = re.compile(r"\s+")
_NON_DIGITS = re.compile(r"\D")


def normalize_phone(number: str) -> str:
    """Remove todo espaço em branco; usado na busca por telefone."""
    return _WHITESPACE.sub("", number)


def format_phone_for_whatsapp(number: str) -> str:
    return _NON_DIGITS.sub("", number)


def whatsapp_link(number: str) -> str:
    return f"https://wa.me/{format_phone_for_whatsapp(number)}"
