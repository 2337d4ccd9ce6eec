"""In-memory workflow transition log."""

from __future__ import annotations

import logging as py_logging

from gitmenu.models import WorkflowEvent, WorkflowState

logger = py_logging.getLogger(__name__)


class EventLog:
    def __init__(self) -> None:
        self._events: list[WorkflowEvent] = []

    def record(self, workflow: str, state: WorkflowState, message: str = "") -> None:
        self._events.append(WorkflowEvent(workflow=workflow, state=state, message=message))
        logger.info("workflow-event workflow=%s state=%s message=%s", workflow, state.value, message)

    def list_events(self) -> list[WorkflowEvent]:
        return list(self._events)

    def states(self, workflow: str) -> list[WorkflowState]:
        return [event.state for event in self._events if event.workflow == workflow]

    def clear(self) -> None:
        self._events.clear()
