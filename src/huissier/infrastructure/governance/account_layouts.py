"""
SPL Governance account layouts.

Decoders for the borsh-serialized Realm and TokenOwnerRecord accounts.
Only the fields Huissier needs are read.
"""

import struct
from typing import Optional, Tuple

import base58
from solders.pubkey import Pubkey  # type: ignore

from huissier.domain.entities.membership import MembershipRecord, RealmConfig
from huissier.domain.exceptions.ledger import AccountDecodeError

# GovernanceAccountType discriminators (first byte of every account)
REALM_V1 = 1
TOKEN_OWNER_RECORD_V1 = 2
REALM_V2 = 16
TOKEN_OWNER_RECORD_V2 = 17

REALM_ACCOUNT_TYPES = (REALM_V1, REALM_V2)
TOKEN_OWNER_RECORD_TYPES = (TOKEN_OWNER_RECORD_V1, TOKEN_OWNER_RECORD_V2)

PUBKEY_LENGTH = 32

# Realm: type | community_mint | RealmConfig{legacy1, legacy2, reserved[6],
# min_community_weight u64, max_voter_weight_source (u8 + u64),
# council_mint Option<Pubkey>} | reserved[6] | u16 | authority Option | name
REALM_COMMUNITY_MINT_OFFSET = 1
REALM_COUNCIL_MINT_OFFSET = 58

# TokenOwnerRecord V1 and V2 share these offsets
TOR_REALM_OFFSET = 1
TOR_MINT_OFFSET = 33
TOR_OWNER_OFFSET = 65
TOR_DEPOSIT_OFFSET = 97
TOR_DELEGATE_OFFSET = 121


def account_type_filter(account_type: int) -> dict:
    """getProgramAccounts memcmp filter on the account type byte."""
    return {
        "memcmp": {
            "offset": 0,
            "bytes": base58.b58encode(bytes([account_type])).decode(),
        }
    }


def realm_filter(realm_pub_key: str) -> dict:
    """getProgramAccounts memcmp filter on the realm field of a record."""
    return {"memcmp": {"offset": TOR_REALM_OFFSET, "bytes": realm_pub_key}}


def decode_realm(address: str, data: bytes) -> RealmConfig:
    """
    Decode a Realm account.

    Args:
        address: Realm account address
        data: Raw account data

    Returns:
        RealmConfig

    Raises:
        AccountDecodeError: If data is not a Realm account
    """
    if not data or data[0] not in REALM_ACCOUNT_TYPES:
        raise AccountDecodeError(address, "not a realm account")

    try:
        community_mint = _read_pubkey(data, REALM_COMMUNITY_MINT_OFFSET)
        council_mint, offset = _read_optional_pubkey(data, REALM_COUNCIL_MINT_OFFSET)

        # reserved[6] + u16
        offset += 8
        _, offset = _read_optional_pubkey(data, offset)
        name, _ = _read_string(data, offset)
    except (struct.error, IndexError, UnicodeDecodeError, ValueError) as e:
        raise AccountDecodeError(address, str(e))

    return RealmConfig(
        address=address,
        community_mint=community_mint,
        council_mint=council_mint,
        name=name,
    )


def decode_token_owner_record(address: str, data: bytes) -> MembershipRecord:
    """
    Decode a TokenOwnerRecord (V1 or V2) account.

    Args:
        address: Record account address
        data: Raw account data

    Returns:
        MembershipRecord

    Raises:
        AccountDecodeError: If data is not a token owner record
    """
    if not data or data[0] not in TOKEN_OWNER_RECORD_TYPES:
        raise AccountDecodeError(address, "not a token owner record")

    try:
        (deposit,) = struct.unpack_from("<Q", data, TOR_DEPOSIT_OFFSET)
        delegate, _ = _read_optional_pubkey(data, TOR_DELEGATE_OFFSET)
        return MembershipRecord(
            address=address,
            realm=_read_pubkey(data, TOR_REALM_OFFSET),
            governing_token_mint=_read_pubkey(data, TOR_MINT_OFFSET),
            governing_token_owner=_read_pubkey(data, TOR_OWNER_OFFSET),
            governing_token_deposit_amount=deposit,
            governance_delegate=delegate,
        )
    except (struct.error, IndexError, ValueError) as e:
        raise AccountDecodeError(address, str(e))


def _read_pubkey(data: bytes, offset: int) -> str:
    raw = data[offset : offset + PUBKEY_LENGTH]
    if len(raw) != PUBKEY_LENGTH:
        raise ValueError(f"truncated pubkey at offset {offset}")
    return str(Pubkey.from_bytes(raw))


def _read_optional_pubkey(data: bytes, offset: int) -> Tuple[Optional[str], int]:
    """Borsh Option<Pubkey>: 0 = None (1 byte), 1 = Some (1 + 32 bytes)."""
    tag = data[offset]
    if tag == 0:
        return None, offset + 1
    if tag == 1:
        return _read_pubkey(data, offset + 1), offset + 1 + PUBKEY_LENGTH
    raise ValueError(f"invalid option tag {tag} at offset {offset}")


def _read_string(data: bytes, offset: int) -> Tuple[str, int]:
    """Borsh String: u32 little-endian length + UTF-8 bytes."""
    (length,) = struct.unpack_from("<I", data, offset)
    start = offset + 4
    raw = data[start : start + length]
    if len(raw) != length:
        raise ValueError(f"truncated string at offset {offset}")
    return raw.decode("utf-8"), start + length
