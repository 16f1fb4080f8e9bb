"""Pydantic models for Deckchart data structures."""

import mimetypes
import uuid
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import ChartType, ExportPhase, WizardStep


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


class DataPreview(BaseModel):
    """Shape of an uploaded table, used by the preview step."""

    model_config = ConfigDict(frozen=True)

    rows: int = Field(..., ge=0, description="Number of data rows")
    cols: int = Field(..., ge=0, description="Number of columns")
    columns: list[str] = Field(default_factory=list, description="Column names in file order")


class DataFile(BaseModel):
    """Uploaded data file handle.

    Shared by reference between the wizard state and the export orchestrator;
    neither mutates it.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, description="Opaque handle identity")
    name: str = Field(..., min_length=1, description="Original file name")
    content: bytes = Field(..., repr=False, description="Raw file content")
    content_type: str | None = Field(default=None, description="MIME type reported by the uploader")
    preview: DataPreview | None = Field(default=None, description="Table shape, when it could be profiled")

    @property
    def size_bytes(self) -> int:
        """Size of the file content in bytes."""
        return len(self.content)

    @property
    def size_mb(self) -> float:
        """Size of the file content in megabytes."""
        return self.size_bytes / 1024 / 1024

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "DataFile":
        """Build a handle from a file on disk.

        Args:
            path: Path to the data file
            content_type: MIME type; guessed from the file name when omitted

        Returns:
            DataFile with the file's content loaded
        """
        path = Path(path)
        if content_type is None:
            content_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, content=path.read_bytes(), content_type=content_type)


class ChartConfig(BaseModel):
    """A named, typed chart the user has committed to generating."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, description="Opaque unique identifier")
    type: ChartType = Field(..., description="Chart type sent to the export service")
    title: str = Field(..., min_length=1, description="Display title")


class WizardState(BaseModel):
    """Navigation state of one wizard session."""

    model_config = ConfigDict(validate_assignment=True)

    current_step: WizardStep = Field(default=WizardStep.UPLOAD, description="Step currently shown")
    visited_max: WizardStep = Field(default=WizardStep.UPLOAD, description="Highest step ever reached")
    data_file: DataFile | None = Field(default=None, description="Uploaded data file")
    selected_type: ChartType | None = Field(default=None, description="Chart type picked on the type step")

    @model_validator(mode="after")
    def check_visited_max(self) -> "WizardState":
        """Ensure the visited high-water mark never trails the current step."""
        if self.visited_max < self.current_step:
            raise ValueError("visited_max must be >= current_step")
        return self


class ExportState(BaseModel):
    """Outcome of the current export attempt."""

    model_config = ConfigDict(frozen=True)

    phase: ExportPhase = Field(default=ExportPhase.IDLE, description="Attempt lifecycle phase")
    download_handle: str | None = Field(default=None, description="Absolute URI of the generated file")
    error_message: str | None = Field(default=None, description="User-facing failure message")
    chart_id: str | None = Field(default=None, description="Chart the attempt was started for")
    attempt: int = Field(default=0, ge=0, description="Sequence number of the attempt")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    reason: str | None = Field(default=None, description="Detailed reason for the error")
    suggestion: str | None = Field(default=None, description="Suggested correction")


class ErrorResponse(BaseModel):
    """Serializable form of an error for the presentation layer."""

    code: str = Field(..., description="Error code (e.g., E400_VALIDATION)")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] | None = Field(default=None, description="Detailed error information")
    hint: str | None = Field(default=None, description="Correction hint for the user")
