"""
Normalization of upstream minor-unit balances into DecimalAmount.

Upstream JSON carries amounts as numbers or as decimal strings depending on the provider. Everything is reduced to
an int here, at the parsing boundary, before any arithmetic happens.
"""
from decimal import Decimal

from tronkit.balance.assets import Asset
from tronkit.core import AmountFormatError
from tronkit.data import DecimalAmount

__all__ = ["parse_minor_units", "normalize"]


def parse_minor_units(value) -> int:
    """
    int / digit string / integral Decimal -> int. None and "" are the zero balance.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise AmountFormatError("Boolean is not a balance")
    if isinstance(value, int):
        minor_units = value
    elif isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0
        if not text.isdigit() or not text.isascii():
            raise AmountFormatError(f"Balance string is not an unsigned integer: {value!r}")
        minor_units = int(text)
    elif isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise AmountFormatError(f"Balance is not an integral number of minor units: {value}")
        minor_units = int(value)
    elif isinstance(value, float):
        raise AmountFormatError("Floating point balances are rejected; parse JSON with parse_float=Decimal")
    else:
        raise AmountFormatError(f"Unsupported balance type {type(value)}")

    if minor_units < 0:
        raise AmountFormatError(f"Balance cannot be negative: {minor_units}")
    return minor_units


def normalize(minor_units, asset: Asset, decimals: int | None = None) -> DecimalAmount:
    """
    Minor units of `asset` as an exact DecimalAmount. `decimals` overrides the asset's precision when the provider
    reports its own.
    """
    scale = asset.decimals if decimals is None else decimals
    return DecimalAmount(parse_minor_units(minor_units), scale)
