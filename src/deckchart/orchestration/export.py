"""Orchestration of asynchronous presentation exports."""

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from deckchart.core.enums import ExportPhase
from deckchart.core.errors import ConcurrentExportError, PreconditionError, RemoteError, TransportError
from deckchart.core.models import ChartConfig, DataFile, ExportState
from deckchart.infra.downloads import DownloadOpener, open_in_browser
from deckchart.infra.export_client import ExportClient, RequestsExportClient
from deckchart.infra.logging import get_logger
from deckchart.workflow.context import SessionContext

logger = get_logger(__name__)

ExportSubscriber = Callable[[ExportState], None]

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred during export."


class ExportOrchestrator:
    """Runs one export request at a time and tracks its outcome.

    ``export`` returns immediately with a future; the request itself runs on
    a single background worker. Progress is observable by polling ``state``
    or through ``subscribe``. Subscribers for terminal states are called from
    the worker thread.

    Changing the active chart or replacing the data file returns the state to
    idle. An attempt started before such a change is stale: its outcome is
    still delivered through its own future but never published as the
    current state, and it does not open the download.
    """

    def __init__(
        self,
        context: SessionContext,
        client: ExportClient | None = None,
        opener: DownloadOpener | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            context: Session context; the orchestrator resets on its registry's activations
            client: Export service transport, defaults to a requests-based client
            opener: Callback that hands the download URI to the host; defaults to
                the system browser when the settings enable opening downloads
        """
        self.context = context
        self.client = client or RequestsExportClient()
        if opener is None and self.client.settings.open_download:
            opener = open_in_browser
        self.opener = opener

        self._lock = threading.Lock()
        # held across a state change and its notification so subscribers see changes in order
        self._notify_lock = threading.RLock()
        self._closed = False
        self._state = ExportState()
        self._attempts = 0
        self._live_attempt: int | None = None
        self._in_flight: Future[ExportState] | None = None
        self._subscribers: list[ExportSubscriber] = []
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="deckchart-export")
        self._remove_listener = context.registry.add_listener(self._on_active_chart_changed)

    @property
    def state(self) -> ExportState:
        """Current export state."""
        with self._lock:
            return self._state

    @property
    def is_busy(self) -> bool:
        """Whether a request is still in flight, stale or not."""
        return self._in_flight is not None and not self._in_flight.done()

    def subscribe(self, callback: ExportSubscriber) -> Callable[[], None]:
        """Register a callback invoked with every new export state.

        Returns:
            Callable that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def export(self, data_file: DataFile | None, chart: ChartConfig | None) -> "Future[ExportState]":
        """Start an export of ``chart`` for ``data_file``.

        Args:
            data_file: Uploaded data file
            chart: Chart configuration to export

        Returns:
            Future resolving to the attempt's final state; it never raises

        Raises:
            PreconditionError: If the data file or the chart is missing
            ConcurrentExportError: If another request is still in flight
            RuntimeError: If the orchestrator has been shut down
        """
        if self._closed:
            raise RuntimeError("Export orchestrator has been shut down")

        missing = [name for name, value in (("data_file", data_file), ("chart", chart)) if value is None]
        if missing:
            raise PreconditionError("Please ensure data is uploaded and a chart is selected.", missing=missing)

        if self.is_busy:
            logger.info("Rejected export while another is in flight", chart_id=chart.id)
            raise ConcurrentExportError()

        with self._lock:
            self._attempts += 1
            attempt = self._attempts
            self._live_attempt = attempt
        self._publish(ExportState(phase=ExportPhase.RUNNING, chart_id=chart.id, attempt=attempt), attempt)

        logger.info(
            "Export started",
            attempt=attempt,
            chart_id=chart.id,
            chart_type=chart.type.value,
            file_name=data_file.name,
        )
        future = self._executor.submit(self._run, attempt, data_file, chart)
        self._in_flight = future
        return future

    def reset(self, reason: str = "reset") -> None:
        """Return to idle and mark any in-flight attempt as stale."""
        with self._notify_lock:
            with self._lock:
                stale = self._live_attempt
                self._live_attempt = None
                changed = self._state != ExportState()
                if changed:
                    self._state = ExportState()
            if changed:
                self._notify(ExportState())
        if stale is not None and self.is_busy:
            logger.info("In-flight export marked stale", attempt=stale, reason=reason)

    def invalidate(self) -> None:
        """Reset because the session's data file was replaced or removed."""
        self.reset(reason="data file changed")

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker and detach from the registry."""
        self._closed = True
        self._remove_listener()
        self._executor.shutdown(wait=wait)

    def _on_active_chart_changed(self, chart: ChartConfig) -> None:
        self.reset(reason=f"active chart changed to {chart.id}")

    def _run(self, attempt: int, data_file: DataFile, chart: ChartConfig) -> ExportState:
        try:
            download_uri = self.client.generate(data_file, chart.type)
        except RemoteError as e:
            logger.warning("Export rejected by service", attempt=attempt, status_code=e.status_code, error=e.message)
            outcome = self._failed(chart, attempt, e.message)
        except TransportError as e:
            logger.warning("Export transport failure", attempt=attempt, error_code=e.code.value, error=e.message)
            outcome = self._failed(chart, attempt, e.message)
        except Exception:
            logger.exception("Unexpected error during export", attempt=attempt)
            outcome = self._failed(chart, attempt, UNKNOWN_ERROR_MESSAGE)
        else:
            outcome = ExportState(
                phase=ExportPhase.SUCCEEDED,
                download_handle=download_uri,
                chart_id=chart.id,
                attempt=attempt,
            )
            logger.info("Export succeeded", attempt=attempt, chart_id=chart.id, download_uri=download_uri)

        with self._notify_lock:
            if not self._publish(outcome, attempt):
                logger.info("Discarded stale export result", attempt=attempt, phase=outcome.phase.value)
                return outcome

            # a reset from a subscriber may have made this attempt stale during notification
            if outcome.phase == ExportPhase.SUCCEEDED and self.opener is not None and self._is_live(attempt):
                self._open(outcome.download_handle)
        return outcome

    def _is_live(self, attempt: int) -> bool:
        with self._lock:
            return attempt == self._live_attempt

    def _open(self, uri: str) -> None:
        try:
            self.opener(uri)
        except Exception:
            logger.exception("Failed to open download", download_uri=uri)

    def _publish(self, state: ExportState, attempt: int) -> bool:
        """Make ``state`` current if ``attempt`` is still live.

        Returns:
            Whether the state was published
        """
        with self._notify_lock:
            with self._lock:
                if attempt != self._live_attempt:
                    return False
                self._state = state
            self._notify(state)
        return True

    def _notify(self, state: ExportState) -> None:
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("Export subscriber failed", phase=state.phase.value)

    @staticmethod
    def _failed(chart: ChartConfig, attempt: int, message: str) -> ExportState:
        return ExportState(phase=ExportPhase.FAILED, error_message=message, chart_id=chart.id, attempt=attempt)
