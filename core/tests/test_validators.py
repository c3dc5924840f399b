"""
Tests for field validators and case helpers.
"""

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from core.utils import (
    generate_contract_address,
    get_contract_address_generator,
    to_camel_case,
    to_snake_case,
)
from core.validators import (
    validate_string_list,
    validate_terms_document,
    validate_wallet_address,
)


class WalletAddressValidatorTests(SimpleTestCase):

    def test_empty_address_allowed(self):
        validate_wallet_address('')

    def test_valid_addresses(self):
        for address in ['0x1', '0xABCdef0123456789', '0x' + 'a' * 40]:
            validate_wallet_address(address)

    def test_invalid_addresses(self):
        for address in ['0x', 'abc', '0xZZ', ' 0x12', '1x12']:
            with self.assertRaises(ValidationError):
                validate_wallet_address(address)


class StringListValidatorTests(SimpleTestCase):

    def test_valid_lists(self):
        validate_string_list([])
        validate_string_list(['Solidity', 'React'])

    def test_not_a_list(self):
        with self.assertRaises(ValidationError):
            validate_string_list('Solidity')

    def test_blank_or_non_string_items(self):
        for value in [['ok', ''], ['ok', 7], [None]]:
            with self.assertRaises(ValidationError):
                validate_string_list(value)


class TermsDocumentValidatorTests(SimpleTestCase):

    def test_dict_required(self):
        validate_terms_document({})
        validate_terms_document({'scope': 'Full audit'})
        with self.assertRaises(ValidationError):
            validate_terms_document(['scope'])


class CaseConversionTests(SimpleTestCase):

    def test_to_snake_case(self):
        self.assertEqual(to_snake_case('clientId'), 'client_id')
        self.assertEqual(to_snake_case('autoReleaseAfterDays'), 'auto_release_after_days')
        self.assertEqual(to_snake_case('title'), 'title')
        self.assertEqual(to_snake_case('client_id'), 'client_id')

    def test_to_camel_case(self):
        self.assertEqual(to_camel_case('client_id'), 'clientId')
        self.assertEqual(to_camel_case('non_field_errors'), 'nonFieldErrors')
        self.assertEqual(to_camel_case('id'), 'id')


class ContractAddressTests(SimpleTestCase):

    def test_generated_address_shape(self):
        address = generate_contract_address()
        self.assertRegex(address, r'^0x[0-9a-f]{10}$')
        validate_wallet_address(address)

    def test_generated_addresses_differ(self):
        self.assertNotEqual(generate_contract_address(), generate_contract_address())

    @override_settings(CONTRACT_ADDRESS_GENERATOR='core.utils.generate_contract_address')
    def test_generator_resolved_from_settings(self):
        self.assertIs(get_contract_address_generator(), generate_contract_address)
