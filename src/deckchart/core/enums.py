"""Enumerations for Deckchart core types."""

from enum import Enum, IntEnum


class ChartType(str, Enum):
    """Chart types that the export service can render into a slide."""

    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    AREA = "area"
    SCATTER = "scatter"
    COMBO = "combo"

    @property
    def display_name(self) -> str:
        """Name shown in the type picker."""
        return _CHART_TYPE_INFO[self][0]

    @property
    def description(self) -> str:
        """One-line description shown in the type picker."""
        return _CHART_TYPE_INFO[self][1]

    def default_title(self, number: int) -> str:
        """Title for the ``number``-th chart created in a session.

        Args:
            number: 1-based creation index across all chart types

        Returns:
            Title such as ``"Bar Chart 1"``
        """
        return f"{self.value.capitalize()} Chart {number}"


_CHART_TYPE_INFO: dict[ChartType, tuple[str, str]] = {
    ChartType.BAR: ("Bar Chart", "Compare values across categories"),
    ChartType.LINE: ("Line Chart", "Show trends over time or categories"),
    ChartType.PIE: ("Pie Chart", "Show proportion of a whole"),
    ChartType.AREA: ("Area Chart", "Highlight magnitude of change"),
    ChartType.SCATTER: ("Scatter Plot", "Show correlation between variables"),
    ChartType.COMBO: ("Combo Chart", "Combine multiple chart types"),
}

if set(_CHART_TYPE_INFO) != set(ChartType):  # pragma: no cover
    raise RuntimeError("Chart type info table is not exhaustive")


class WizardStep(IntEnum):
    """Ordered steps of the chart wizard."""

    UPLOAD = 0
    SELECT_TYPE = 1
    PREVIEW_EXPORT = 2

    @property
    def label(self) -> str:
        """Label shown in the step indicator."""
        return _STEP_LABELS[self]


_STEP_LABELS: dict[WizardStep, str] = {
    WizardStep.UPLOAD: "Upload Data",
    WizardStep.SELECT_TYPE: "Select Chart Type",
    WizardStep.PREVIEW_EXPORT: "Preview & Export",
}


class ExportPhase(str, Enum):
    """Lifecycle phase of the current export attempt."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether the attempt has resolved."""
        return self in (ExportPhase.SUCCEEDED, ExportPhase.FAILED)


class ErrorCode(str, Enum):
    """Application error codes for structured error responses."""

    E400_VALIDATION = "E400_VALIDATION"
    E408_TIMEOUT = "E408_TIMEOUT"
    E409_EXPORT_IN_PROGRESS = "E409_EXPORT_IN_PROGRESS"
    E413_TOO_LARGE = "E413_TOO_LARGE"
    E415_UNSUPPORTED_FORMAT = "E415_UNSUPPORTED_FORMAT"
    E424_UPSTREAM_SERVICE = "E424_UPSTREAM_SERVICE"
    E428_PRECONDITION = "E428_PRECONDITION"
    E503_TRANSPORT = "E503_TRANSPORT"
