"""
Membership module.

Holds the immutable set of principals allowed to propose and vote.
"""
from .registry import MembershipRegistry, Principal

__all__ = ["MembershipRegistry", "Principal"]
