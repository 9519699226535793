"""
Application State & Submission Cycle
====================================
This module defines the central data structure for the running client and
the finite-state machine of a render submission.

Why is this file needed?
------------------------
1. State Management: Field texts, the scenario catalog, the selection and
   the last result live in one struct owned by the controller.
2. Ordering: Every step of a submission is an explicit transition, so a
   render can only be sent after validation passed and a new submission can
   only start once the previous one settled.

Classes:
    Phase: Where the current submission cycle stands.
    Event: Inputs that move the cycle forward.
    SubmissionMachine: Transition table plus phase history.
    AppState: The container passed to controllers and views.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Dict, List, Optional

from renderclient.model.fields import format_number
from renderclient.model.geometry import default_field_values
from renderclient.model.results import RenderResult

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    IDLE = "Idle"
    VALIDATING = "Validating"
    INVALID = "Invalid"
    SUBMITTING = "Submitting"
    AWAITING = "Awaiting"
    SUCCEEDED = "Succeeded"
    DISPLAYING = "Displaying"
    FAILED = "Failed"
    REPORTING_ERROR = "ReportingError"


class Event(StrEnum):
    FIELD_CHANGED = "FieldChanged"
    CATALOG_LOADED = "CatalogLoaded"
    SUBMIT_CLICKED = "SubmitClicked"
    VALIDATION_FAILED = "ValidationFailed"
    VALIDATION_PASSED = "ValidationPassed"
    REQUEST_SENT = "RequestSent"
    RENDER_COMPLETED = "RenderCompleted"
    RENDER_FAILED = "RenderFailed"
    RESULT_SHOWN = "ResultShown"
    SETTLED = "Settled"


# Events accepted in any phase without moving it
PASSIVE_EVENTS = frozenset({Event.FIELD_CHANGED, Event.CATALOG_LOADED})

TRANSITIONS: Dict[tuple[Phase, Event], Phase] = {
    (Phase.IDLE, Event.SUBMIT_CLICKED): Phase.VALIDATING,
    (Phase.VALIDATING, Event.VALIDATION_FAILED): Phase.INVALID,
    (Phase.VALIDATING, Event.VALIDATION_PASSED): Phase.SUBMITTING,
    (Phase.SUBMITTING, Event.REQUEST_SENT): Phase.AWAITING,
    (Phase.AWAITING, Event.RENDER_COMPLETED): Phase.SUCCEEDED,
    (Phase.AWAITING, Event.RENDER_FAILED): Phase.FAILED,
    (Phase.SUCCEEDED, Event.RESULT_SHOWN): Phase.DISPLAYING,
    (Phase.FAILED, Event.RESULT_SHOWN): Phase.REPORTING_ERROR,
    (Phase.INVALID, Event.SETTLED): Phase.IDLE,
    (Phase.DISPLAYING, Event.SETTLED): Phase.IDLE,
    (Phase.REPORTING_ERROR, Event.SETTLED): Phase.IDLE,
}


class TransitionError(RuntimeError):
    """An event arrived in a phase that does not accept it."""


class SubmissionMachine:
    def __init__(self) -> None:
        self.phase: Phase = Phase.IDLE
        self.history: List[Phase] = [Phase.IDLE]

    @property
    def is_idle(self) -> bool:
        return self.phase == Phase.IDLE

    @property
    def in_flight(self) -> bool:
        return self.phase in (Phase.SUBMITTING, Phase.AWAITING)

    def accepts(self, event: Event) -> bool:
        return event in PASSIVE_EVENTS or (self.phase, event) in TRANSITIONS

    def fire(self, event: Event) -> Phase:
        if event in PASSIVE_EVENTS:
            return self.phase

        try:
            target = TRANSITIONS[(self.phase, event)]
        except KeyError:
            raise TransitionError(f"Event '{event}' is not allowed in phase '{self.phase}'.") from None

        logger.debug(f"{self.phase} --{event}--> {target}")
        self.phase = target
        self.history.append(target)
        return target


def default_field_texts() -> Dict[str, str]:
    return {key: format_number(v) for key, v in default_field_values().items()}


@dataclass
class AppState:
    """
    Everything the client knows during a session.
    Pass this instance to the controller; views only read from it.
    """
    fields: Dict[str, str] = field(default_factory=default_field_texts)
    catalog: List[str] = field(default_factory=list)
    selected_scenario: Optional[str] = None
    last_result: Optional[RenderResult] = None
    machine: SubmissionMachine = field(default_factory=SubmissionMachine)

    @property
    def phase(self) -> Phase:
        return self.machine.phase

    def set_catalog(self, values: List[str]) -> None:
        """Replace the catalog and keep the selection valid."""
        self.catalog = list(values)
        if self.selected_scenario not in self.catalog:
            self.selected_scenario = self.catalog[0] if self.catalog else None

    def reset_fields(self) -> None:
        self.fields = default_field_texts()
        logger.info("Scene parameters have been reset.")
