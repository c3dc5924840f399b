"""
Helpers shared by the service layer and the API.
"""

import re
import secrets

from django.conf import settings
from django.utils.module_loading import import_string


_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def to_snake_case(name):
    """Convert ``clientId`` to ``client_id``."""
    return _CAMEL_BOUNDARY.sub('_', name).lower()


def to_camel_case(name):
    """Convert ``client_id`` to ``clientId``."""
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def generate_contract_address():
    """
    Return a placeholder smart contract address.
    
    The value has no cryptographic meaning; it only stands in for a deployed
    contract so the client has something to display.
    """
    return f'0x{secrets.token_hex(5)}'


def get_contract_address_generator():
    """Resolve the callable configured in CONTRACT_ADDRESS_GENERATOR."""
    return import_string(settings.CONTRACT_ADDRESS_GENERATOR)
