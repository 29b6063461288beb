"""
Amount Parsing Module

Converts user-entered amount text into Decimal and formats amounts for
display. NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Union
import re

from .exceptions import ValidationError

# Set global decimal context for financial precision
getcontext().prec = 28

ZERO = Decimal('0')
AMOUNT_PLACES = 2
CENT = Decimal('0.01')

# Largest single amount and largest balance; both stay well inside the
# 28 digit context so sums and differences are exact
MAX_AMOUNT = Decimal('1000000000000000')
MAX_BALANCE = Decimal('1000000000000000000')

CURRENCY_SYMBOLS = re.compile(r'[\s$€£¥]')


def parse_amount(value: str) -> Decimal:
    """
    Safely convert form text to a non-negative Decimal amount
    
    Args:
        value: Amount as typed by the user ("1,250.50", "$ 20", "7,5")
        
    Returns:
        Decimal value
        
    Raises:
        ValidationError: If the text is empty, not a number, not finite or negative
    """
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError("Amount must be a non-empty string")
    
    # Remove currency symbols and whitespace; anything else must parse
    clean_value = CURRENCY_SYMBOLS.sub('', value.strip())
    
    # Handle comma as decimal separator (European format)
    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - comma must be the thousands separator
        if clean_value.rfind(',') > clean_value.find('.'):
            raise ValidationError(f"Ambiguous separators in '{value}'; use '.' for decimals")
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Likely decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Likely thousands separator
            clean_value = clean_value.replace(',', '')
    elif ',' in clean_value:
        clean_value = clean_value.replace(',', '')
    
    try:
        amount = Decimal(clean_value)
    except InvalidOperation:
        raise ValidationError(f"Cannot convert '{value}' to an amount")
    
    return ensure_amount(amount)


def ensure_amount(amount: Union[Decimal, int, str]) -> Decimal:
    """
    Validate an amount handed to the ledger
    
    Ints and strings are converted; floats are rejected so binary rounding
    never reaches a balance. Valid amounts come back quantized to cents.
    
    Raises:
        ValidationError: If the amount is not a finite, non-negative number,
            exceeds MAX_AMOUNT or has more than two decimal places
    """
    if isinstance(amount, bool) or isinstance(amount, float):
        raise ValidationError(f"Amount must be Decimal, int or str, got {type(amount).__name__}")
    
    if not isinstance(amount, Decimal):
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise ValidationError(f"Cannot convert '{amount}' to an amount")
    
    if not amount.is_finite():
        raise ValidationError("Amount must be a finite number")
    
    if amount < ZERO:
        raise ValidationError(f"Amount must not be negative: {format_amount(amount)}")
    
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {format_amount(MAX_AMOUNT)}")
    
    # Magnitude is bounded above, so quantizing cannot overflow the context
    rounded = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if rounded != amount:
        raise ValidationError(f"Amount must have at most {AMOUNT_PLACES} decimal places: {format_amount(amount)}")
    
    return rounded


def format_amount(amount: Decimal) -> str:
    """Format an amount for display, keeping at least one decimal place"""
    if not amount.is_finite():
        return str(amount)
    
    text = format(amount, 'f')
    if '.' not in text:
        return f"{text}.0"
    
    text = text.rstrip('0')
    if text.endswith('.'):
        text += '0'
    return text
