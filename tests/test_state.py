import pytest

from renderclient.model.state import AppState, Event, Phase, SubmissionMachine, TransitionError


def run(machine, *events):
    for event in events:
        machine.fire(event)
    return machine.history


class TestSubmissionMachine:
    def test_success_cycle(self):
        history = run(
            SubmissionMachine(),
            Event.SUBMIT_CLICKED, Event.VALIDATION_PASSED, Event.REQUEST_SENT,
            Event.RENDER_COMPLETED, Event.RESULT_SHOWN, Event.SETTLED,
        )
        assert history == [
            Phase.IDLE, Phase.VALIDATING, Phase.SUBMITTING, Phase.AWAITING,
            Phase.SUCCEEDED, Phase.DISPLAYING, Phase.IDLE,
        ]

    def test_failure_cycle(self):
        history = run(
            SubmissionMachine(),
            Event.SUBMIT_CLICKED, Event.VALIDATION_PASSED, Event.REQUEST_SENT,
            Event.RENDER_FAILED, Event.RESULT_SHOWN, Event.SETTLED,
        )
        assert history[-3:] == [Phase.FAILED, Phase.REPORTING_ERROR, Phase.IDLE]

    def test_invalid_cycle(self):
        history = run(SubmissionMachine(), Event.SUBMIT_CLICKED, Event.VALIDATION_FAILED, Event.SETTLED)
        assert history == [Phase.IDLE, Phase.VALIDATING, Phase.INVALID, Phase.IDLE]

    def test_submit_not_accepted_while_awaiting(self):
        machine = SubmissionMachine()
        run(machine, Event.SUBMIT_CLICKED, Event.VALIDATION_PASSED, Event.REQUEST_SENT)
        assert machine.in_flight
        assert not machine.accepts(Event.SUBMIT_CLICKED)
        with pytest.raises(TransitionError):
            machine.fire(Event.SUBMIT_CLICKED)
        assert machine.phase == Phase.AWAITING

    def test_render_result_cannot_skip_validation(self):
        with pytest.raises(TransitionError):
            SubmissionMachine().fire(Event.RENDER_COMPLETED)

    @pytest.mark.parametrize("event", [Event.FIELD_CHANGED, Event.CATALOG_LOADED])
    def test_passive_events_keep_phase(self, event):
        machine = SubmissionMachine()
        run(machine, Event.SUBMIT_CLICKED, Event.VALIDATION_PASSED, Event.REQUEST_SENT)
        assert machine.fire(event) == Phase.AWAITING
        assert machine.history[-1] == Phase.AWAITING


class TestAppState:
    def test_defaults(self):
        state = AppState()
        assert state.phase == Phase.IDLE
        assert state.catalog == []
        assert state.selected_scenario is None
        assert state.fields["from.z"] == "-5"
        assert state.fields["from.y"] == "1.5"

    def test_set_catalog_selects_first(self):
        state = AppState()
        state.set_catalog(["Hexagon", "Three Spheres"])
        assert state.selected_scenario == "Hexagon"

    def test_set_catalog_keeps_valid_selection(self):
        state = AppState()
        state.set_catalog(["Hexagon", "Three Spheres"])
        state.selected_scenario = "Three Spheres"
        state.set_catalog(["Three Spheres", "Hexagon"])
        assert state.selected_scenario == "Three Spheres"

    def test_empty_catalog_clears_selection(self):
        state = AppState()
        state.set_catalog(["Hexagon"])
        state.set_catalog([])
        assert state.catalog == []
        assert state.selected_scenario is None

    def test_reset_fields(self):
        state = AppState()
        state.fields["light.x"] = "garbage"
        state.reset_fields()
        assert state.fields["light.x"] == "-5"
