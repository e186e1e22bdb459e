"""
SPL Governance ledger client.

Solana JSON-RPC client that reads Realm and TokenOwnerRecord accounts.
"""

import asyncio
import base64
import binascii
import time
from typing import Any, List, Optional

import aiohttp

from huissier.domain.entities.membership import MembershipRecord, RealmConfig
from huissier.domain.exceptions.ledger import LedgerError
from huissier.domain.services.i_governance_ledger import IGovernanceLedger
from huissier.infrastructure.governance.account_layouts import (
    TOKEN_OWNER_RECORD_TYPES,
    account_type_filter,
    decode_realm,
    decode_token_owner_record,
    realm_filter,
)
from huissier.infrastructure.monitoring.metrics import (
    ledger_request_duration_seconds,
    ledger_requests_total,
)


class SplGovernanceClient(IGovernanceLedger):
    """
    Read-only SPL Governance client over Solana RPC.

    Every request is bounded by the session timeout. Failures are not
    retried: transport errors, timeouts and RPC errors all surface as
    LedgerError.
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        total_timeout: float = 15.0,
        connect_timeout: float = 5.0,
    ):
        """
        Initialize SPL Governance client.

        Args:
            rpc_url: Solana RPC endpoint URL
            commitment: Commitment level for reads
            total_timeout: Total request timeout in seconds
            connect_timeout: Connection timeout in seconds
        """
        self.rpc_url = rpc_url
        self.commitment = commitment
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self._session: Optional[aiohttp.ClientSession] = None
        self._request_id = 0

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(
                    limit=100,
                    limit_per_host=30,
                    ttl_dns_cache=300,
                ),
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    # ================================================================
    # IGovernanceLedger
    # ================================================================

    async def get_realm_config(self, realm_pub_key: str) -> RealmConfig:
        """
        Fetch and decode a Realm account.

        Raises:
            LedgerError: If the account is missing or unreadable
        """
        result = await self._rpc(
            "getAccountInfo",
            [realm_pub_key, {"encoding": "base64", "commitment": self.commitment}],
        )

        account = result.get("value") if isinstance(result, dict) else None
        if not account:
            raise LedgerError(
                f"Realm account not found: {realm_pub_key}",
                method="getAccountInfo",
            )

        return decode_realm(realm_pub_key, self._account_data(realm_pub_key, account))

    async def get_membership_records(
        self,
        governance_id: str,
        realm_pub_key: str,
    ) -> List[MembershipRecord]:
        """
        Fetch all token owner records of a realm.

        V1 records come before V2 records; within a version the RPC
        node's order is kept.

        Raises:
            LedgerError: If any query fails or returns malformed data
        """
        records: List[MembershipRecord] = []

        for account_type in TOKEN_OWNER_RECORD_TYPES:
            accounts = await self._rpc(
                "getProgramAccounts",
                [
                    governance_id,
                    {
                        "encoding": "base64",
                        "commitment": self.commitment,
                        "filters": [
                            account_type_filter(account_type),
                            realm_filter(realm_pub_key),
                        ],
                    },
                ],
            )
            if not isinstance(accounts, list):
                raise LedgerError(
                    "Unexpected getProgramAccounts result",
                    method="getProgramAccounts",
                )

            for entry in accounts:
                if not isinstance(entry, dict):
                    raise LedgerError(
                        "Unexpected getProgramAccounts entry",
                        method="getProgramAccounts",
                    )
                address = entry.get("pubkey", "")
                data = self._account_data(address, entry.get("account"))
                records.append(decode_token_owner_record(address, data))

        return records

    # ================================================================
    # JSON-RPC transport
    # ================================================================

    async def _rpc(self, method: str, params: list) -> Any:
        """
        Single JSON-RPC call.

        Returns:
            The "result" member of the response

        Raises:
            LedgerError: On transport error, timeout or RPC error
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        start_time = time.time()
        status = "error"
        try:
            session = await self._get_session()
            async with session.post(self.rpc_url, json=payload) as response:
                if response.status >= 400:
                    raise LedgerError(
                        f"RPC HTTP {response.status} for {method}",
                        method=method,
                    )
                data = await response.json(content_type=None)

            if not isinstance(data, dict):
                raise LedgerError(f"Malformed RPC response for {method}", method=method)

            if "error" in data:
                error = data["error"]
                if isinstance(error, dict):
                    error = error.get("message", error)
                raise LedgerError(f"RPC error for {method}: {error}", method=method)

            status = "success"
            return data.get("result")

        except asyncio.TimeoutError:
            raise LedgerError(f"RPC timeout for {method}", method=method)
        except aiohttp.ClientError as e:
            raise LedgerError(f"RPC transport error for {method}: {e}", method=method)
        except ValueError as e:
            raise LedgerError(f"Invalid RPC JSON for {method}: {e}", method=method)
        finally:
            ledger_requests_total.labels(method=method, status=status).inc()
            ledger_request_duration_seconds.labels(method=method).observe(
                time.time() - start_time
            )

    def _account_data(self, address: str, account: Any) -> bytes:
        """Extract raw bytes from a base64-encoded account payload."""
        if not isinstance(account, dict):
            raise LedgerError(
                f"Unexpected account payload for {address}",
                method="decode",
            )
        data = account.get("data")
        if not isinstance(data, list) or len(data) != 2 or data[1] != "base64":
            raise LedgerError(
                f"Unexpected account encoding for {address}",
                method="decode",
            )
        try:
            return base64.b64decode(data[0])
        except (binascii.Error, TypeError, ValueError) as e:
            raise LedgerError(
                f"Invalid account data for {address}: {e}", method="decode"
            )
