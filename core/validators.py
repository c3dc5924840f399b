"""
Custom validators for marketplace models.
"""

import re
from django.core.exceptions import ValidationError


WALLET_ADDRESS_PATTERN = re.compile(r'^0x[0-9a-fA-F]+$')


def validate_wallet_address(value):
    """
    Validate a wallet or contract address.
    
    Addresses are opaque placeholders here, so only the shape is checked:
    a ``0x`` prefix followed by at least one hexadecimal digit.
    
    Args:
        value: Address string to validate
        
    Raises:
        ValidationError: If the address format is invalid
    """
    if not value:  # Empty value is allowed (optional field)
        return
    
    if not WALLET_ADDRESS_PATTERN.match(value):
        raise ValidationError(
            'Address must start with "0x" followed by hexadecimal digits.',
            code='invalid_address'
        )


def validate_string_list(value):
    """
    Validate that a JSON value is a list of non-empty strings.
    
    Used for ordered string collections such as user skills and project tags.
    
    Args:
        value: Decoded JSON value
        
    Raises:
        ValidationError: If value is not a list of strings
    """
    if value is None:
        return
    
    if not isinstance(value, list):
        raise ValidationError('Value must be a list of strings.', code='not_a_list')
    
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ValidationError(
                'Every item must be a non-empty string.',
                code='invalid_list_item'
            )


def validate_terms_document(value):
    """Contract terms must be a key/value document."""
    if not isinstance(value, dict):
        raise ValidationError(
            'Terms must be a key/value object.',
            code='invalid_terms'
        )
