"""
Unit tests for membership and chat entities.

Usage:
    pytest tests/unit/domain/test_membership.py
"""

import pytest

from huissier.domain.entities.chat import ChatChannel, ChatIdentity
from huissier.domain.entities.membership import (
    MembershipRecord,
    MembershipResolution,
    RealmConfig,
)


def _record(**overrides):
    fields = {
        "governing_token_owner": "owner",
        "governing_token_mint": "council",
        "governing_token_deposit_amount": 1,
    }
    fields.update(overrides)
    return MembershipRecord(**fields)


class TestMembershipRecord:
    """Unit tests for MembershipRecord entity."""

    def test_references_owner_and_delegate(self):
        """Test owner and delegate both match."""
        record = _record(governance_delegate="delegate")

        assert record.references("owner")
        assert record.references("delegate")
        assert not record.references("stranger")

    def test_references_without_delegate(self):
        """Test missing delegate never matches."""
        assert not _record().references(None)

    def test_holds_council_token(self):
        """Test council tier needs mint match and nonzero deposit."""
        assert _record().holds_council_token("council")
        assert not _record(governing_token_deposit_amount=0).holds_council_token(
            "council"
        )
        assert not _record().holds_council_token("community")
        assert not _record().holds_council_token(None)

    def test_negative_deposit_rejected(self):
        """Test negative deposit raises ValueError."""
        with pytest.raises(ValueError):
            _record(governing_token_deposit_amount=-1)


class TestRealmConfig:
    """Unit tests for RealmConfig entity."""

    def test_defaults(self):
        """Test realm without council mint or name."""
        config = RealmConfig("realm", "community")

        assert config.council_mint is None
        assert config.name == ""


class TestMembershipResolution:
    """Unit tests for MembershipResolution."""

    def test_denied(self):
        """Test denied resolution carries no council tier."""
        resolution = MembershipResolution.denied()

        assert resolution.authorized is False
        assert resolution.has_council_token is False


class TestChatEntities:
    """Unit tests for ChatIdentity and ChatChannel."""

    def test_with_team_appends(self):
        """Test team is appended after existing teams."""
        identity = ChatIdentity(id="w1", teams=("a",))

        assert identity.with_team("b").teams == ("a", "b")

    def test_with_team_no_duplicate(self):
        """Test existing team is not added twice."""
        identity = ChatIdentity(id="w1", teams=("a",))

        assert identity.with_team("a") is identity

    def test_channel_cid_and_members(self):
        """Test cid format and membership check."""
        channel = ChatChannel("team", "acommunity", "Community", "a", frozenset({"w1"}))

        assert channel.cid == "team:acommunity"
        assert channel.has_member("w1")
        assert not channel.has_member("w2")
