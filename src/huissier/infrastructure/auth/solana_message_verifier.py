"""
Solana wallet message verifier.

Verifies Ed25519 signatures over the server challenge message.
Two client conventions are supported:
- combined signature + payload, base64 encoded ("open")
- detached signature, base58 encoded
"""

import base64
import binascii

import base58
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from huissier.domain.services.i_signature_verifier import ISignatureVerifier


class SolanaMessageVerifier(ISignatureVerifier):
    """
    Ed25519 verifier for wallet-signed challenges.

    The challenge (auth_message) is fixed per deployment and held by the
    server; clients only send the signature.
    """

    def __init__(self, auth_message: str):
        """
        Initialize verifier.

        Args:
            auth_message: Challenge string clients must sign
        """
        self.auth_message = auth_message

    def verify(self, signed_message: str, public_key: str) -> bool:
        """
        Verify signed challenge for a wallet.

        Tries the combined scheme first; falls back to the detached
        scheme only when no message can be recovered.

        Args:
            signed_message: base64 signed payload or base58 signature
            public_key: Wallet public key (base58)

        Returns:
            True if signature is valid, False otherwise
        """
        verify_key = self._load_verify_key(public_key)
        if verify_key is None:
            return False

        recovered = self._open(signed_message, verify_key)
        if recovered is None:
            return self._verify_detached(signed_message, verify_key)

        return recovered.decode("utf-8", errors="replace") == self.auth_message

    def _load_verify_key(self, public_key: str) -> VerifyKey | None:
        try:
            return VerifyKey(base58.b58decode(public_key))
        except ValueError:
            return None

    def _open(self, signed_message: str, verify_key: VerifyKey) -> bytes | None:
        """Recover payload from combined signature, None on failure."""
        try:
            smessage = base64.b64decode(signed_message, validate=True)
        except (binascii.Error, ValueError):
            return None

        try:
            return verify_key.verify(smessage)
        except (BadSignatureError, ValueError):
            return None

    def _verify_detached(self, signed_message: str, verify_key: VerifyKey) -> bool:
        """Verify base58 detached signature over the challenge."""
        try:
            signature = base58.b58decode(signed_message)
            verify_key.verify(self.auth_message.encode("utf-8"), signature)
            return True
        except (BadSignatureError, ValueError):
            return False
