"""
Keysmith Analyzers
===================

Checks that inspect rather than generate: statistical audits of the
randomness feeding the generators and strength scoring of existing
passwords.
"""

from keysmith.analyzers.randomness import RandomnessAuditor
from keysmith.analyzers.strength import PasswordStrengthAnalyzer

__all__ = ["RandomnessAuditor", "PasswordStrengthAnalyzer"]
