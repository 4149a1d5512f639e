"""Reporters for slice results.

Output is str; the caller decides the destination.
"""

from callslice.application.reporters.console import ConsoleConfig, ConsoleReporter
from callslice.application.reporters.json import JsonReporter
from callslice.application.reporters.protocol import ReporterProtocol

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
    "JsonReporter",
    "ReporterProtocol",
]
