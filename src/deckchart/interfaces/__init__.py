"""Presentation-facing session facade and upload validation."""

from deckchart.interfaces.session import ChartSession
from deckchart.interfaces.validators import UploadValidator

__all__ = [
    "ChartSession",
    "UploadValidator",
]
