"""Presentation boundary for one chart wizard session."""

from collections.abc import Callable
from concurrent.futures import Future
from types import TracebackType

from deckchart.core.enums import ChartType, WizardStep
from deckchart.core.errors import ValidationError
from deckchart.core.models import ChartConfig, DataFile, ErrorDetail, ExportState, WizardState
from deckchart.infra.downloads import DownloadOpener
from deckchart.infra.export_client import ExportClient
from deckchart.infra.logging import get_logger
from deckchart.interfaces.validators import UploadValidator
from deckchart.orchestration.export import ExportOrchestrator, ExportSubscriber
from deckchart.workflow.context import SessionContext
from deckchart.workflow.wizard import WizardController

logger = get_logger(__name__)


class ChartSession:
    """Accepts user intents and exposes the state a UI renders.

    Intents that the user can get wrong raise ``DeckchartError`` subclasses
    without changing state; the UI shows ``error.message`` as a notice.

    Example:
        >>> with ChartSession() as session:
        ...     session.file_chosen(DataFile.from_path("sales.csv"))
        ...     session.next()
        ...     session.type_chosen("pie")
        ...     session.next()
        ...     session.request_export().result()
    """

    def __init__(
        self,
        client: ExportClient | None = None,
        opener: DownloadOpener | None = None,
        validator: UploadValidator | None = None,
    ) -> None:
        """Start a session.

        Args:
            client: Export service transport
            opener: Download hand-off callback
            validator: Upload validator
        """
        self.context = SessionContext()
        self.wizard = WizardController(self.context)
        self.exporter = ExportOrchestrator(self.context, client=client, opener=opener)
        self.validator = validator or UploadValidator()

    # Reads

    @property
    def wizard_state(self) -> WizardState:
        """Snapshot of the wizard state."""
        return self.context.wizard.model_copy()

    @property
    def charts(self) -> tuple[ChartConfig, ...]:
        """Charts created in this session, in creation order."""
        return self.context.registry.list()

    @property
    def active_chart(self) -> ChartConfig | None:
        """Chart currently previewed and exported."""
        return self.context.registry.active()

    @property
    def export_state(self) -> ExportState:
        """State of the current export attempt."""
        return self.exporter.state

    def subscribe(self, callback: ExportSubscriber) -> Callable[[], None]:
        """Register for export state changes; returns an unsubscribe callable."""
        return self.exporter.subscribe(callback)

    # Intents

    def file_chosen(self, data_file: DataFile) -> DataFile:
        """Accept an uploaded file, replacing any previous one."""
        accepted = self.validator.validate(data_file)
        previous = self.context.wizard.data_file
        self.context.wizard.data_file = accepted
        if previous is not None and previous.id != accepted.id:
            self.exporter.invalidate()
        return accepted

    def file_removed(self) -> None:
        """Drop the uploaded file."""
        if self.context.wizard.data_file is None:
            return
        self.context.wizard.data_file = None
        self.exporter.invalidate()

    def type_chosen(self, chart_type: ChartType | str) -> None:
        """Record the chart type picked on the type step."""
        try:
            selected = ChartType(chart_type)
        except ValueError as e:
            raise ValidationError(
                "Please select a chart type",
                details=[ErrorDetail(field="chart_type", reason=str(e))],
                hint=f"Choose one of: {', '.join(t.value for t in ChartType)}",
            ) from e
        self.context.wizard.selected_type = selected

    def next(self) -> ChartConfig | None:
        """Advance one step; returns the chart created by the move, if any."""
        return self.wizard.go_next()

    def previous(self) -> None:
        """Go back one step."""
        self.wizard.go_previous()

    def jump(self, step: int | WizardStep) -> bool:
        """Jump to an earlier step from the step indicator."""
        return self.wizard.jump_to(step)

    def create_another(self) -> bool:
        """Start another chart for the same file."""
        return self.wizard.start_new_chart()

    def select_chart(self, chart_id: str) -> ChartConfig | None:
        """Make a previously created chart the active one."""
        chart = self.context.registry.select(chart_id)
        if chart is not None:
            self.context.wizard.selected_type = chart.type
        return chart

    def request_export(self) -> "Future[ExportState]":
        """Export the active chart for the uploaded file."""
        return self.exporter.export(self.context.wizard.data_file, self.context.registry.active())

    # Lifecycle

    def close(self) -> None:
        """Tear the session down, waiting for an in-flight export to settle."""
        self.exporter.shutdown(wait=True)
        logger.debug("Session closed", charts=len(self.context.registry))

    def __enter__(self) -> "ChartSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
