"""Session-scoped state shared by the workflow components."""

from dataclasses import dataclass, field

from deckchart.core.models import WizardState
from deckchart.workflow.registry import ChartConfigRegistry


@dataclass
class SessionContext:
    """State owned by one user session.

    Created at session start and passed to the wizard controller and the
    export orchestrator. The data file lives in ``wizard.data_file`` and is
    shared by every chart of the session.
    """

    wizard: WizardState = field(default_factory=WizardState)
    registry: ChartConfigRegistry = field(default_factory=ChartConfigRegistry)
