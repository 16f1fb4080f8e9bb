"""Wizard navigation and chart registry."""

from deckchart.workflow.context import SessionContext
from deckchart.workflow.registry import ChartConfigRegistry
from deckchart.workflow.wizard import WizardController

__all__ = [
    "ChartConfigRegistry",
    "SessionContext",
    "WizardController",
]
