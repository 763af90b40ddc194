"""Tests for the membership registry."""

import pytest

from council_app.errors import Unauthorized
from council_app.membership.registry import MembershipRegistry


class TestMembershipRegistry:
    """Test MembershipRegistry construction and queries."""

    def test_founder_always_member(self):
        registry = MembershipRegistry("alice", ["bob", "carol"])

        assert registry.is_member("alice")
        assert registry.members == frozenset({"alice", "bob", "carol"})

    def test_founder_only(self):
        registry = MembershipRegistry("alice")

        assert len(registry) == 1
        assert list(registry) == ["alice"]

    def test_duplicates_collapse(self):
        registry = MembershipRegistry("alice", ["bob", "bob", "alice"])

        assert len(registry) == 2

    def test_non_member(self):
        registry = MembershipRegistry("alice", ["bob"])

        assert registry.is_member("mallory") is False
        assert "mallory" not in registry

    @pytest.mark.parametrize("principal", [None, 42, ["alice"], {"id": "alice"}, ""])
    def test_is_member_total(self, principal):
        """Test is_member never raises, whatever it is given."""
        registry = MembershipRegistry("alice", ["bob"])

        assert registry.is_member(principal) is False

    def test_members_are_immutable(self):
        registry = MembershipRegistry("alice", ["bob"])

        with pytest.raises(AttributeError):
            registry.members.add("mallory")

    def test_source_list_changes_do_not_leak(self):
        source = ["bob"]
        registry = MembershipRegistry("alice", source)

        source.append("mallory")

        assert not registry.is_member("mallory")

    def test_iteration_is_sorted(self):
        registry = MembershipRegistry("carol", ["bob", "alice"])

        assert list(registry) == ["alice", "bob", "carol"]

    def test_require_member(self):
        registry = MembershipRegistry("alice")

        registry.require_member("alice", "cast_vote")
        with pytest.raises(Unauthorized) as exc_info:
            registry.require_member("mallory", "cast_vote")

        assert exc_info.value.principal == "mallory"
        assert exc_info.value.operation == "cast_vote"
        assert exc_info.value.recoverable is False

    def test_from_config(self):
        config = {"membership": {"founder": "alice", "members": ["bob", "carol"]}}

        registry = MembershipRegistry.from_config(config)

        assert registry.founder == "alice"
        assert registry.members == frozenset({"alice", "bob", "carol"})

    def test_from_config_null_members(self):
        config = {"membership": {"founder": "alice", "members": None}}

        assert MembershipRegistry.from_config(config).members == frozenset({"alice"})
