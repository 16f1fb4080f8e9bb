"""Step sequencer for the upload → select type → preview/export wizard."""

from deckchart.core.enums import WizardStep
from deckchart.core.errors import ValidationError
from deckchart.core.models import ChartConfig, WizardState
from deckchart.infra.logging import get_logger
from deckchart.workflow.context import SessionContext

logger = get_logger(__name__)

LAST_STEP = max(WizardStep)


class WizardController:
    """Gates navigation between wizard steps.

    Forward moves are validated against the current step; backward moves and
    jumps into already visited earlier steps are always allowed. All
    operations are synchronous.
    """

    def __init__(self, context: SessionContext) -> None:
        """Initialize the controller.

        Args:
            context: Session context holding the wizard state and chart registry
        """
        self.context = context

    @property
    def state(self) -> WizardState:
        """The session's wizard state."""
        return self.context.wizard

    @property
    def current_step(self) -> WizardStep:
        """Step currently shown."""
        return self.state.current_step

    def can_go_next(self) -> bool:
        """Whether ``go_next`` would advance from the current step."""
        try:
            self._check_can_leave(self.current_step)
        except ValidationError:
            return False
        return self.current_step < LAST_STEP

    def go_next(self) -> ChartConfig | None:
        """Advance one step.

        Leaving the type step creates and activates a new chart configuration.
        Calling this on the last step does nothing.

        Returns:
            The chart created by this transition, if any

        Raises:
            ValidationError: If the current step's required input is missing
        """
        step = self.current_step
        if step >= LAST_STEP:
            return None

        self._check_can_leave(step)

        created = None
        if step == WizardStep.SELECT_TYPE:
            created = self.context.registry.create(self.state.selected_type)

        self._move_to(WizardStep(step + 1))
        return created

    def go_previous(self) -> None:
        """Go back one step, if not already on the first."""
        if self.current_step > WizardStep.UPLOAD:
            self._move_to(WizardStep(self.current_step - 1))

    def jump_to(self, step: int) -> bool:
        """Jump directly to a strictly earlier step.

        The current step and later steps are not reachable this way, since
        that would skip their validation.

        Returns:
            Whether the jump happened
        """
        if not self.is_step_clickable(step):
            return False
        self._move_to(WizardStep(step))
        return True

    def is_step_clickable(self, step: int) -> bool:
        """Whether the step indicator entry for ``step`` accepts clicks."""
        return 0 <= step < self.current_step

    def start_new_chart(self) -> bool:
        """Return to the type step to add another chart for the same file.

        Only available on the preview step. The data file and existing charts
        are kept.

        Returns:
            Whether the wizard was reset
        """
        if self.current_step != WizardStep.PREVIEW_EXPORT:
            return False
        self.state.selected_type = None
        self._move_to(WizardStep.SELECT_TYPE)
        return True

    def _check_can_leave(self, step: WizardStep) -> None:
        if step == WizardStep.UPLOAD and self.state.data_file is None:
            raise ValidationError("Please upload a data file", hint="Choose a CSV or Excel file to continue")
        if step == WizardStep.SELECT_TYPE and self.state.selected_type is None:
            raise ValidationError("Please select a chart type")

    def _move_to(self, step: WizardStep) -> None:
        previous = self.current_step
        # visited_max first: the state rejects current_step > visited_max
        if step > self.state.visited_max:
            self.state.visited_max = step
        self.state.current_step = step
        logger.debug("Wizard step changed", from_step=previous.name, to_step=step.name)
