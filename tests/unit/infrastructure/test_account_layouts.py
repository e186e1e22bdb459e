"""
Unit tests for SPL Governance account layouts.

Builds raw Realm and TokenOwnerRecord bytes and decodes them.

Usage:
    pytest tests/unit/infrastructure/test_account_layouts.py
"""

import pytest

from huissier.domain.exceptions.ledger import AccountDecodeError
from huissier.infrastructure.governance.account_layouts import (
    REALM_V1,
    TOKEN_OWNER_RECORD_V1,
    TOKEN_OWNER_RECORD_V2,
    account_type_filter,
    decode_realm,
    decode_token_owner_record,
    realm_filter,
)
from tests.helpers.accounts import realm_bytes, token_owner_record_bytes
from tests.helpers.wallets import new_address


class TestDecodeRealm:
    """Unit tests for decode_realm."""

    def test_realm_with_council(self):
        """Test council mint, community mint and name are read."""
        address, community, council = new_address(), new_address(), new_address()

        config = decode_realm(
            address, realm_bytes(community, council, authority=new_address())
        )

        assert config.address == address
        assert config.community_mint == community
        assert config.council_mint == council
        assert config.name == "DAO"

    def test_realm_without_council(self):
        """Test absent council mint decodes to None."""
        config = decode_realm(new_address(), realm_bytes(new_address(), name="Solo"))

        assert config.council_mint is None
        assert config.name == "Solo"

    def test_realm_v1(self):
        """Test legacy realm account type is accepted."""
        council = new_address()

        config = decode_realm(
            new_address(), realm_bytes(new_address(), council, account_type=REALM_V1)
        )

        assert config.council_mint == council

    def test_wrong_account_type(self):
        """Test token owner record bytes are not a realm."""
        data = token_owner_record_bytes(
            new_address(), new_address(), new_address(), 1
        )

        with pytest.raises(AccountDecodeError):
            decode_realm(new_address(), data)

    def test_truncated(self):
        """Test short data raises AccountDecodeError."""
        data = realm_bytes(new_address(), new_address())[:70]

        with pytest.raises(AccountDecodeError):
            decode_realm(new_address(), data)

    def test_empty(self):
        """Test empty data raises AccountDecodeError."""
        with pytest.raises(AccountDecodeError):
            decode_realm(new_address(), b"")


class TestDecodeTokenOwnerRecord:
    """Unit tests for decode_token_owner_record."""

    @pytest.mark.parametrize(
        "account_type", [TOKEN_OWNER_RECORD_V1, TOKEN_OWNER_RECORD_V2]
    )
    def test_record_fields(self, account_type):
        """Test every field is read for both record versions."""
        realm, mint, owner = new_address(), new_address(), new_address()
        address = new_address()

        record = decode_token_owner_record(
            address,
            token_owner_record_bytes(
                realm, mint, owner, 2**40, account_type=account_type
            ),
        )

        assert record.address == address
        assert record.realm == realm
        assert record.governing_token_mint == mint
        assert record.governing_token_owner == owner
        assert record.governing_token_deposit_amount == 2**40
        assert record.governance_delegate is None

    def test_record_with_delegate(self):
        """Test delegate option is read."""
        delegate = new_address()

        record = decode_token_owner_record(
            new_address(),
            token_owner_record_bytes(
                new_address(), new_address(), new_address(), 0, delegate=delegate
            ),
        )

        assert record.governance_delegate == delegate
        assert record.references(delegate)

    def test_invalid_option_tag(self):
        """Test corrupt delegate option raises AccountDecodeError."""
        data = bytearray(
            token_owner_record_bytes(new_address(), new_address(), new_address(), 1)
        )
        data[121] = 7

        with pytest.raises(AccountDecodeError):
            decode_token_owner_record(new_address(), bytes(data))

    def test_wrong_account_type(self):
        """Test realm bytes are not a token owner record."""
        with pytest.raises(AccountDecodeError):
            decode_token_owner_record(new_address(), realm_bytes(new_address()))


class TestFilters:
    """Unit tests for getProgramAccounts filters."""

    def test_account_type_filter(self):
        """Test type byte is base58 encoded at offset 0."""
        assert account_type_filter(TOKEN_OWNER_RECORD_V2) == {
            "memcmp": {"offset": 0, "bytes": "J"}
        }
        assert account_type_filter(TOKEN_OWNER_RECORD_V1) == {
            "memcmp": {"offset": 0, "bytes": "3"}
        }

    def test_realm_filter(self):
        """Test realm key is matched at offset 1."""
        realm = new_address()

        assert realm_filter(realm) == {"memcmp": {"offset": 1, "bytes": realm}}
