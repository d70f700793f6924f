"""
Currency formatting

Amounts are shown in the configured currency (INR by default) with two
decimals. Rupee amounts use Indian digit grouping: the last three digits,
then pairs (1,23,456.50).
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from flask import current_app, has_app_context

DEFAULT_CURRENCY_CODE = 'INR'
DEFAULT_CURRENCY_SYMBOL = '₹'

_CENT = Decimal('0.01')
_STRIP_PATTERN = re.compile(r'[^\d.\-]')


def _currency_settings():
    if has_app_context():
        return (
            current_app.config.get('CURRENCY_CODE') or DEFAULT_CURRENCY_CODE,
            current_app.config.get('CURRENCY_SYMBOL') or DEFAULT_CURRENCY_SYMBOL,
        )
    return DEFAULT_CURRENCY_CODE, DEFAULT_CURRENCY_SYMBOL


def _group_digits(digits: str, code: str) -> str:
    if code != 'INR' or len(digits) <= 3:
        return f"{int(digits):,}"
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ','.join(pairs + [tail])


def format_currency_value(amount) -> str:
    """Grouped two-decimal amount without the symbol, for inputs and exports."""
    code, _ = _currency_settings()
    value = Decimal(str(amount or 0)).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = '-' if value < 0 else ''
    whole, fraction = f"{abs(value):.2f}".split('.')
    return f"{sign}{_group_digits(whole, code)}.{fraction}"


def format_currency(amount) -> str:
    _, symbol = _currency_settings()
    formatted = format_currency_value(amount)
    if formatted.startswith('-'):
        return f"-{symbol}{formatted[1:]}"
    return f"{symbol}{formatted}"


def parse_currency(value) -> Decimal:
    """Strip symbol, grouping and whitespace; unparseable input is 0."""
    if value is None:
        return Decimal('0')
    cleaned = _STRIP_PATTERN.sub('', str(value))
    try:
        result = Decimal(cleaned)
    except InvalidOperation:
        return Decimal('0')
    if not result.is_finite():
        return Decimal('0')
    return result
