"""
Keysmith Output Module
=======================

Console display and JSON report generation for Keysmith results.
"""

from keysmith.output.console import KeysmithConsoleOutput
from keysmith.output.report import KeysmithReportGenerator

__all__ = [
    "KeysmithConsoleOutput",
    "KeysmithReportGenerator",
]
