"""
Application use cases.
"""

from huissier.application.use_cases.authenticate_realm_member import (
    AuthenticateRealmMember,
)
from huissier.application.use_cases.provision_chat_member import (
    ProvisionChatMember,
)
from huissier.application.use_cases.resolve_realm_membership import (
    ResolveRealmMembership,
)

__all__ = [
    "AuthenticateRealmMember",
    "ProvisionChatMember",
    "ResolveRealmMembership",
]
