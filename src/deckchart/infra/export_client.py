"""HTTP client for the remote presentation generation service."""

from __future__ import annotations

from typing import Any, Protocol

import requests
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from deckchart.core.enums import ChartType
from deckchart.core.errors import ExportTimeoutError, RemoteError, TransportError
from deckchart.core.models import DataFile
from deckchart.infra.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://chart-generator-api.onrender.com"


class ExportSettings(BaseSettings):
    """Settings for the export service connection."""

    model_config = SettingsConfigDict(
        env_prefix="DECKCHART_EXPORT_",
        env_file=".env",
        extra="ignore",
    )

    base_url: str = Field(DEFAULT_BASE_URL, description="Base address of the export service")
    generate_path: str = Field("/generate-chart", description="Path of the generation operation")
    connect_timeout: float = Field(5.0, gt=0, description="Connection timeout in seconds")
    read_timeout: float = Field(60.0, gt=0, description="Read timeout in seconds")
    open_download: bool = Field(default=True, description="Open the generated file once it is ready")

    @property
    def generate_url(self) -> str:
        """Absolute URL of the generation operation."""
        return self.resolve(self.generate_path)

    def resolve(self, path: str) -> str:
        """Resolve a service-relative path against the base address.

        Args:
            path: Relative path such as ``/files/abc.pptx``; absolute URLs pass through

        Returns:
            Absolute URL
        """
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


class ExportClient(Protocol):
    """Protocol for export service transports."""

    settings: ExportSettings

    def generate(
        self,
        data_file: DataFile,
        chart_type: ChartType,
        *,
        slide_position: int | None = None,
        template_file: DataFile | None = None,
    ) -> str:
        """Ask the service to generate a presentation.

        Args:
            data_file: Uploaded table to chart
            chart_type: Chart type tag
            slide_position: Optional slide index for the chart
            template_file: Optional presentation template

        Returns:
            Absolute URI of the generated file

        Raises:
            RemoteError: If the service answers with a non-success status
            TransportError: If the service is unreachable or the response is malformed
        """
        ...


class RequestsExportClient:
    """Export client built on a ``requests`` session."""

    def __init__(self, settings: ExportSettings | None = None, session: requests.Session | None = None) -> None:
        """Initialize the client.

        Args:
            settings: Connection settings, defaults to environment variables
            session: HTTP session to reuse; a new one is created when omitted
        """
        self.settings = settings or ExportSettings()
        self.session = session or requests.Session()

    def generate(
        self,
        data_file: DataFile,
        chart_type: ChartType,
        *,
        slide_position: int | None = None,
        template_file: DataFile | None = None,
    ) -> str:
        """Post the multipart generation request and return the download URI."""
        url = self.settings.generate_url
        data: dict[str, str] = {"chartType": chart_type.value}
        if slide_position is not None:
            data["slidePosition"] = str(slide_position)

        files: dict[str, tuple[str, bytes, str]] = {"dataFile": _file_part(data_file)}
        if template_file is not None:
            files["templateFile"] = _file_part(template_file)

        logger.debug(
            "Sending export request",
            url=url,
            chart_type=chart_type.value,
            file_name=data_file.name,
            size_bytes=data_file.size_bytes,
        )

        try:
            response = self.session.post(
                url,
                data=data,
                files=files,
                timeout=(self.settings.connect_timeout, self.settings.read_timeout),
            )
        except requests.ConnectTimeout as e:
            raise ExportTimeoutError(self.settings.connect_timeout) from e
        except requests.Timeout as e:
            raise ExportTimeoutError(self.settings.read_timeout) from e
        except requests.RequestException as e:
            raise TransportError(f"Could not reach the export service: {e}") from e

        if not response.ok:
            message = _extract_error_message(response)
            logger.warning("Export service returned an error", url=url, status_code=response.status_code)
            raise RemoteError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError("Export service returned a malformed response") from e

        download_url = payload.get("downloadUrl") if isinstance(payload, dict) else None
        if not isinstance(download_url, str) or not download_url:
            raise TransportError("Export service response did not include a download URL")

        return self.settings.resolve(download_url)


def _file_part(data_file: DataFile) -> tuple[str, bytes, str]:
    return (data_file.name, data_file.content, data_file.content_type or "application/octet-stream")


def _extract_error_message(response: requests.Response) -> str:
    """Read the ``error`` field of a failure body, falling back to the status line."""
    fallback = f"API Error: {response.status_code} {response.reason or ''}".strip()
    try:
        payload: Any = response.json()
    except ValueError:
        return fallback

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, str) and error.strip():
            return error
    return fallback
