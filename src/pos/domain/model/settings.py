"""Bill settings: the configuration object handed to the cart and renderers.

Settings come from a local key-value store that anyone can edit, so
``from_mapping`` is forgiving: unknown keys are ignored and missing or
malformed values fall back to the defaults below.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

import structlog

from pos.domain.exceptions import ValidationError
from pos.domain.formatting import DEFAULT_CURRENCY_SYMBOL

logger = structlog.get_logger()

# Keys as written by the settings screen.
_CAMEL_CASE_KEYS = {
    "restaurantName": "restaurant_name",
    "taxRate": "tax_rate",
    "billFontSize": "bill_font_size",
    "footerText": "footer_text",
    "includeLogoOnBill": "include_logo_on_bill",
    "showUpiQrCode": "show_upi_qr_code",
    "showServerName": "show_server_name",
    "showItemizedTax": "show_itemized_tax",
    "logoUrl": "logo_url",
    "qrCodeUrl": "qr_code_url",
    "currency": "currency_symbol",
    "currencySymbol": "currency_symbol",
}


@dataclass(frozen=True)
class BillSettings:
    restaurant_name: str = "Restaurant"
    address: str = ""
    phone: str = ""
    tax_rate: Decimal = Decimal("0")
    bill_font_size: int = 7
    footer_text: str = "Thank you for dining with us!"
    include_logo_on_bill: bool = False
    show_upi_qr_code: bool = False
    show_server_name: bool = True
    show_itemized_tax: bool = True
    logo_url: str | None = None
    qr_code_url: str | None = None
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL

    @staticmethod
    def from_mapping(raw: Mapping[str, Any] | None) -> BillSettings:
        """Build settings from a partial mapping, defaulting anything unusable."""
        defaults = BillSettings()
        values: dict[str, Any] = {}
        known = {f.name for f in fields(BillSettings)}

        for key, value in (raw or {}).items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known or value is None:
                continue
            if name in ("logo_url", "qr_code_url"):
                values[name] = str(value).strip() or None
                continue
            coerced = _coerce(name, value, getattr(defaults, name))
            if coerced is None:
                logger.warning("bill_setting_ignored", setting=name, value=value)
                continue
            values[name] = coerced

        return BillSettings(**values)

    def to_mapping(self) -> dict[str, Any]:
        data = asdict(self)
        data["tax_rate"] = str(self.tax_rate)
        return data

    def with_value(self, key: str, value: Any) -> BillSettings:
        """Return a copy with one setting changed.

        Unlike ``from_mapping`` this is strict: an unknown key or a value
        that does not fit the setting raises ValidationError.
        """
        name = _CAMEL_CASE_KEYS.get(key, key)
        if name not in {f.name for f in fields(BillSettings)}:
            raise ValidationError(f"Unknown setting '{key}'")
        if name in ("logo_url", "qr_code_url"):
            return replace(self, **{name: str(value).strip() or None})
        coerced = _coerce(name, value, getattr(BillSettings(), name))
        if coerced is None:
            raise ValidationError(f"Invalid value for {name}: {value!r}")
        return replace(self, **{name: coerced})


def _coerce(name: str, value: Any, default: Any) -> Any:
    """Return *value* converted to the type of *default*, or None if it can't be."""
    if name == "tax_rate":
        try:
            rate = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return None
        if not rate.is_finite() or rate < 0:
            return None
        return rate
    if name == "bill_font_size":
        try:
            size = int(value)
        except (TypeError, ValueError):
            return None
        return size if size > 0 else None
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false", "1", "0", "yes", "no"):
            return value.strip().lower() in ("true", "1", "yes")
        return None
    text = str(value)
    # Text settings with a non-empty default cannot be blanked
    if default and not text.strip():
        return None
    return text
