"""Unit tests for WizardController."""

import random

import pytest

from deckchart.core.enums import ChartType, WizardStep
from deckchart.core.errors import ValidationError
from deckchart.core.models import DataFile
from deckchart.workflow.context import SessionContext
from deckchart.workflow.wizard import WizardController


@pytest.fixture
def context() -> SessionContext:
    return SessionContext()


@pytest.fixture
def controller(context: SessionContext) -> WizardController:
    return WizardController(context)


@pytest.fixture
def data_file() -> DataFile:
    return DataFile(name="sales.csv", content=b"a,b\n1,2\n", content_type="text/csv")


def advance_to_preview(controller: WizardController, data_file: DataFile, chart_type: ChartType) -> None:
    controller.state.data_file = data_file
    controller.go_next()
    controller.state.selected_type = chart_type
    controller.go_next()


class TestGoNext:
    """Tests for forward navigation."""

    def test_upload_requires_file(self, controller: WizardController) -> None:
        """Test step 0 cannot be left without a data file."""
        with pytest.raises(ValidationError, match="upload a data file"):
            controller.go_next()
        assert controller.current_step == WizardStep.UPLOAD
        assert controller.state.visited_max == WizardStep.UPLOAD

    def test_upload_to_select_type(self, controller: WizardController, data_file: DataFile) -> None:
        """Test advancing from upload once a file is present."""
        controller.state.data_file = data_file

        assert controller.go_next() is None
        assert controller.current_step == WizardStep.SELECT_TYPE
        assert controller.state.visited_max == WizardStep.SELECT_TYPE

    def test_select_type_requires_type(self, controller, context, data_file) -> None:
        """Test step 1 without a type raises and creates nothing."""
        controller.state.data_file = data_file
        controller.go_next()

        with pytest.raises(ValidationError, match="select a chart type"):
            controller.go_next()

        assert controller.current_step == WizardStep.SELECT_TYPE
        assert len(context.registry) == 0

    def test_select_type_creates_chart(self, controller, context, data_file) -> None:
        """Test leaving the type step creates exactly one active chart."""
        controller.state.data_file = data_file
        controller.go_next()
        controller.state.selected_type = ChartType.PIE

        created = controller.go_next()

        assert created is not None
        assert created.type == ChartType.PIE
        assert created.title == "Pie Chart 1"
        assert context.registry.list() == (created,)
        assert context.registry.active() == created
        assert controller.current_step == WizardStep.PREVIEW_EXPORT
        assert controller.state.visited_max == WizardStep.PREVIEW_EXPORT

    def test_noop_on_last_step(self, controller, context, data_file) -> None:
        """Test go_next on the preview step changes nothing."""
        advance_to_preview(controller, data_file, ChartType.BAR)

        assert controller.go_next() is None
        assert controller.current_step == WizardStep.PREVIEW_EXPORT
        assert len(context.registry) == 1

    def test_can_go_next(self, controller: WizardController, data_file: DataFile) -> None:
        """Test the Next button gating mirrors go_next."""
        assert not controller.can_go_next()
        controller.state.data_file = data_file
        assert controller.can_go_next()
        controller.go_next()
        assert not controller.can_go_next()
        controller.state.selected_type = ChartType.LINE
        assert controller.can_go_next()
        controller.go_next()
        assert not controller.can_go_next()


class TestGoPrevious:
    """Tests for backward navigation."""

    def test_noop_on_first_step(self, controller: WizardController) -> None:
        """Test going back from the first step does nothing."""
        controller.go_previous()
        assert controller.current_step == WizardStep.UPLOAD

    def test_keeps_visited_max(self, controller: WizardController, data_file: DataFile) -> None:
        """Test going back never lowers the high-water mark."""
        advance_to_preview(controller, data_file, ChartType.BAR)

        controller.go_previous()
        controller.go_previous()

        assert controller.current_step == WizardStep.UPLOAD
        assert controller.state.visited_max == WizardStep.PREVIEW_EXPORT


class TestJumpTo:
    """Tests for step indicator jumps."""

    def test_jump_forward_is_noop(self, controller: WizardController) -> None:
        """Test jumping ahead from step 0 is ignored."""
        assert controller.jump_to(2) is False
        assert controller.current_step == WizardStep.UPLOAD

    def test_jump_to_current_is_noop(self, controller: WizardController, data_file: DataFile) -> None:
        """Test clicking the current step is ignored."""
        controller.state.data_file = data_file
        controller.go_next()
        assert controller.jump_to(1) is False
        assert controller.current_step == WizardStep.SELECT_TYPE

    def test_jump_back(self, controller, context, data_file) -> None:
        """Test jumping to an earlier step."""
        advance_to_preview(controller, data_file, ChartType.BAR)

        assert controller.jump_to(WizardStep.UPLOAD) is True
        assert controller.current_step == WizardStep.UPLOAD
        assert len(context.registry) == 1

    def test_jump_forward_to_visited_step_is_noop(self, controller: WizardController, data_file: DataFile) -> None:
        """Test visited later steps are still not reachable by jumping."""
        advance_to_preview(controller, data_file, ChartType.BAR)
        controller.jump_to(0)

        assert controller.jump_to(2) is False
        assert controller.current_step == WizardStep.UPLOAD

    @pytest.mark.parametrize("step", [-1, 3, 99])
    def test_out_of_range(self, controller: WizardController, data_file: DataFile, step: int) -> None:
        """Test invalid step numbers are ignored."""
        advance_to_preview(controller, data_file, ChartType.BAR)
        assert controller.jump_to(step) is False
        assert controller.current_step == WizardStep.PREVIEW_EXPORT

    def test_is_step_clickable(self, controller: WizardController, data_file: DataFile) -> None:
        """Test only strictly earlier steps are clickable."""
        controller.state.data_file = data_file
        controller.go_next()
        assert [controller.is_step_clickable(step) for step in WizardStep] == [True, False, False]


class TestStartNewChart:
    """Tests for creating another chart."""

    def test_resets_type_and_keeps_file(self, controller, context, data_file) -> None:
        """Test returning to the type step for a second chart."""
        advance_to_preview(controller, data_file, ChartType.BAR)
        first = context.registry.active()

        assert controller.start_new_chart() is True

        assert controller.current_step == WizardStep.SELECT_TYPE
        assert controller.state.selected_type is None
        assert controller.state.data_file is data_file
        assert context.registry.list() == (first,)

    def test_second_chart_numbering(self, controller, context, data_file) -> None:
        """Test the second chart is numbered after the first."""
        advance_to_preview(controller, data_file, ChartType.BAR)
        controller.start_new_chart()
        controller.state.selected_type = ChartType.LINE
        second = controller.go_next()

        assert [c.title for c in context.registry.list()] == ["Bar Chart 1", "Line Chart 2"]
        assert context.registry.active() == second

    def test_only_on_preview_step(self, controller: WizardController, data_file: DataFile) -> None:
        """Test the reset is unavailable before the preview step."""
        controller.state.data_file = data_file
        controller.go_next()
        controller.state.selected_type = ChartType.PIE

        assert controller.start_new_chart() is False
        assert controller.state.selected_type == ChartType.PIE


class TestStepBounds:
    """Navigation never leaves the wizard's step range."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_navigation(self, seed: int, data_file: DataFile) -> None:
        """Test random intent sequences keep the step within bounds."""
        rng = random.Random(seed)
        context = SessionContext()
        controller = WizardController(context)
        controller.state.data_file = data_file
        controller.state.selected_type = ChartType.AREA

        for _ in range(200):
            action = rng.choice(["next", "previous", "jump", "new"])
            if action == "next":
                controller.go_next()
            elif action == "previous":
                controller.go_previous()
            elif action == "jump":
                controller.jump_to(rng.randint(-1, 3))
            else:
                controller.start_new_chart()
                controller.state.selected_type = rng.choice(list(ChartType))

            assert WizardStep.UPLOAD <= controller.current_step <= WizardStep.PREVIEW_EXPORT
            assert controller.state.visited_max >= controller.current_step
