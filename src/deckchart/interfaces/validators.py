"""Validation of uploaded data files."""

import io
from typing import ClassVar

import polars as pl

from deckchart.core.errors import DataTooLargeError, UnsupportedFormatError, ValidationError
from deckchart.core.models import DataFile, DataPreview, ErrorDetail
from deckchart.infra.logging import get_logger

logger = get_logger(__name__)


class UploadValidator:
    """Accepts CSV and Excel uploads and profiles CSV tables.

    A file is accepted when either its MIME type or its extension is a
    supported one. Excel workbooks are passed through unprofiled.
    """

    MAX_FILE_SIZE_MB = 10
    MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
    VALID_CONTENT_TYPES: ClassVar[frozenset[str]] = frozenset(
        {
            "application/vnd.ms-excel",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            "text/csv",
            "application/csv",
        }
    )
    VALID_EXTENSIONS: ClassVar[tuple[str, ...]] = (".xlsx", ".xls", ".csv")
    CSV_CONTENT_TYPES: ClassVar[frozenset[str]] = frozenset({"text/csv", "application/csv"})

    def validate(self, data_file: DataFile) -> DataFile:
        """Check an uploaded file and attach its table preview.

        Args:
            data_file: File handle from the upload widget

        Returns:
            The same file, with ``preview`` set when it is a CSV

        Raises:
            UnsupportedFormatError: If the file is not CSV/Excel or cannot be parsed
            DataTooLargeError: If the file exceeds the size limit
            ValidationError: If the file is empty
        """
        if not self.is_supported(data_file):
            raise UnsupportedFormatError(
                "Please upload a valid Excel or CSV file",
                supported_formats=list(self.VALID_EXTENSIONS),
            )

        if data_file.size_bytes == 0:
            raise ValidationError("The uploaded file is empty", hint="Choose a file that contains data")

        if data_file.size_bytes > self.MAX_FILE_SIZE_BYTES:
            raise DataTooLargeError(
                f"File '{data_file.name}' is too large",
                max_size_mb=self.MAX_FILE_SIZE_MB,
                actual_size_mb=data_file.size_mb,
            )

        if self.is_csv(data_file):
            data_file = data_file.model_copy(update={"preview": self._profile_csv(data_file)})

        logger.info(
            "Upload accepted",
            file_name=data_file.name,
            content_type=data_file.content_type,
            size_bytes=data_file.size_bytes,
            rows=data_file.preview.rows if data_file.preview else None,
        )
        return data_file

    def is_supported(self, data_file: DataFile) -> bool:
        """Whether the MIME type or file extension is accepted."""
        if data_file.content_type in self.VALID_CONTENT_TYPES:
            return True
        return data_file.name.lower().endswith(self.VALID_EXTENSIONS)

    def is_csv(self, data_file: DataFile) -> bool:
        """Whether the file should be read as CSV."""
        return data_file.content_type in self.CSV_CONTENT_TYPES or data_file.name.lower().endswith(".csv")

    def _profile_csv(self, data_file: DataFile) -> DataPreview:
        try:
            df = pl.read_csv(io.BytesIO(data_file.content), infer_schema_length=1000)
        except Exception as e:
            logger.warning("Failed to parse CSV upload", file_name=data_file.name, error=str(e))
            raise UnsupportedFormatError(
                f"Could not read '{data_file.name}' as CSV",
                supported_formats=list(self.VALID_EXTENSIONS),
                details=[ErrorDetail(field="data_file", reason=str(e))],
            ) from e

        if df.width == 0:
            raise ValidationError("The uploaded file has no columns", hint="Provide data with at least one column")

        return DataPreview(rows=df.height, cols=df.width, columns=list(df.columns))
