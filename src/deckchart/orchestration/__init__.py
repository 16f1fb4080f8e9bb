"""Orchestration of remote presentation exports."""

from deckchart.orchestration.export import ExportOrchestrator, ExportSubscriber

__all__ = [
    "ExportOrchestrator",
    "ExportSubscriber",
]
