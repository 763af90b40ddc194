"""
Council App - Threshold Vote Governance Engine

A small governance primitive: a fixed set of members propose actions and
vote yes/no. Once a proposal collects the configured number of "yes" votes,
its action is executed exactly once.
"""

__version__ = "0.1.0"
__author__ = "Council Team"
