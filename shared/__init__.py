"""
Keysmith Shared Module
=======================

Configuration, logging, console and statistics helpers used by the
Keysmith package and its command-line interface.
"""

from shared.config import KeysmithConfig

__all__ = ["KeysmithConfig"]
