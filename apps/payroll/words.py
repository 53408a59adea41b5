"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Amount in words with Indian digit grouping (Crore, Lakh,
             Thousand, Hundred) for salary slips.
-------------------------------------------------------------------------
"""
from decimal import Decimal

from apps.core.utils import money

UNITS = ['', 'One', 'Two', 'Three', 'Four', 'Five', 'Six', 'Seven', 'Eight', 'Nine']
TEENS = ['Ten', 'Eleven', 'Twelve', 'Thirteen', 'Fourteen', 'Fifteen', 'Sixteen',
         'Seventeen', 'Eighteen', 'Nineteen']
TENS = ['', '', 'Twenty', 'Thirty', 'Forty', 'Fifty', 'Sixty', 'Seventy', 'Eighty', 'Ninety']

GROUPS = [
    (10_000_000, 'Crore'),
    (100_000, 'Lakh'),
    (1_000, 'Thousand'),
    (100, 'Hundred'),
]


def two_digit_words(number: int) -> str:
    if number < 10:
        return UNITS[number]
    if number < 20:
        return TEENS[number - 10]
    unit = number % 10
    return TENS[number // 10] + (f" {UNITS[unit]}" if unit else '')


def number_to_words(number: int) -> str:
    """
    Spell a non-negative whole number.

    Example:
        >>> number_to_words(125050)
        'One Lakh Twenty Five Thousand and Fifty'
    """
    if number == 0:
        return 'Zero'

    parts = []
    for size, name in GROUPS:
        count, number = divmod(number, size)
        if count:
            # Counts above 99 only happen for Crore
            count_words = two_digit_words(count) if count < 100 else number_to_words(count)
            parts.append(f"{count_words} {name}")
    if number:
        if parts:
            parts.append('and')
        parts.append(two_digit_words(number))
    return ' '.join(parts)


def amount_in_words(amount) -> str:
    """Rupee amount in words, with paise appended when present."""
    value = money(amount)
    if value < 0:
        return f"Minus {amount_in_words(-value)}"
    rupees = int(value)
    paise = int((value - Decimal(rupees)) * 100)
    words = number_to_words(rupees)
    if paise:
        words = f"{words} and {two_digit_words(paise)} Paise"
    return words
