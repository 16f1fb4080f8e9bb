"""Registry of chart configurations created during a session."""

from collections.abc import Callable, Iterator

from deckchart.core.enums import ChartType
from deckchart.core.models import ChartConfig
from deckchart.infra.logging import get_logger

logger = get_logger(__name__)

ActiveChartListener = Callable[[ChartConfig], None]


class ChartConfigRegistry:
    """Ordered chart configurations with a single active selection.

    Entries are never removed. Once the first entry exists one entry is always
    active. Every activation, including the one performed by ``create``, is
    reported to the registered listeners.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._charts: list[ChartConfig] = []
        self._active_id: str | None = None
        self._listeners: list[ActiveChartListener] = []

    def create(self, chart_type: ChartType) -> ChartConfig:
        """Append a new configuration and make it active.

        The title is numbered by creation order across all chart types.

        Args:
            chart_type: Type of the new chart

        Returns:
            The created configuration
        """
        chart_type = ChartType(chart_type)
        chart = ChartConfig(type=chart_type, title=chart_type.default_title(len(self._charts) + 1))
        self._charts.append(chart)
        logger.info("Chart configuration created", chart_id=chart.id, chart_type=chart.type.value, title=chart.title)
        self._activate(chart)
        return chart

    def select(self, chart_id: str) -> ChartConfig | None:
        """Make the configuration with ``chart_id`` active.

        Unknown ids are ignored.

        Returns:
            The selected configuration, or None when the id is unknown
        """
        chart = self.get(chart_id)
        if chart is None:
            logger.debug("Ignoring selection of unknown chart", chart_id=chart_id)
            return None
        self._activate(chart)
        return chart

    def get(self, chart_id: str) -> ChartConfig | None:
        """Look up a configuration by id."""
        return next((chart for chart in self._charts if chart.id == chart_id), None)

    def list(self) -> tuple[ChartConfig, ...]:
        """All configurations in creation order."""
        return tuple(self._charts)

    def active(self) -> ChartConfig | None:
        """The active configuration, if any has been created."""
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    def add_listener(self, listener: ActiveChartListener) -> Callable[[], None]:
        """Register a callback invoked with each newly activated configuration.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _activate(self, chart: ChartConfig) -> None:
        self._active_id = chart.id
        for listener in list(self._listeners):
            listener(chart)

    def __len__(self) -> int:
        return len(self._charts)

    def __iter__(self) -> Iterator[ChartConfig]:
        return iter(self.list())
