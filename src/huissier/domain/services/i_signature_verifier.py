"""
Signature verifier service interface.
"""

from abc import ABC, abstractmethod


class ISignatureVerifier(ABC):
    """
    Abstract verifier for wallet-signed challenge messages.

    Verification is pure: same inputs, same answer, no side effects.
    """

    @abstractmethod
    def verify(self, signed_message: str, public_key: str) -> bool:
        """
        Verify that public_key signed the server challenge.

        Args:
            signed_message: Encoded signature (or signature + payload)
            public_key: Wallet public key (base58)

        Returns:
            True if signature is valid, False otherwise
        """
