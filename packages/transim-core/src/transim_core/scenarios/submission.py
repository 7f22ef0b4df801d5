"""Scenarios modifying the reported submission state."""

from __future__ import annotations

import logging
import threading
from collections import deque

from transim_core.scenarios.base import Scenario, with_state
from transim_core.scenarios.translation import TranslateInvalidXliffScenario
from transim_schemas.models import SubmissionModel
from transim_schemas.primitives import SubmissionId, SubmissionState

_log = logging.getLogger(__name__)


class SubmissionCanceledByGlobalLinkScenario(Scenario):
    """The backend cancels submissions instead of completing them."""

    id = "submission-canceled-by-globallink"
    description = "Completed and delivered submissions are reported cancelled."

    _overridden_states = frozenset(
        {SubmissionState.COMPLETED, SubmissionState.DELIVERED}
    )

    def intercept_submission(self, submission: SubmissionModel) -> SubmissionModel:
        if submission.state in self._overridden_states:
            return with_state(submission, SubmissionState.CANCELLED)
        return submission


class SubmissionErrorScenario(Scenario):
    """Every submission reports an error."""

    id = "submission-error"
    description = "Submissions carry the error flag."

    def intercept_submission(self, submission: SubmissionModel) -> SubmissionModel:
        return submission.updated(error=True)


class SubmissionRedeliveredScenario(TranslateInvalidXliffScenario):
    """Downloads are broken and the backend redelivers afterwards.

    The first COMPLETED of a submission is reported as is. The downloaded
    XLIFF is invalid, so callers are expected to ask again; any later
    COMPLETED is reported as REDELIVERED.
    """

    id = "submission-redelivered"
    description = "Invalid XLIFF on download, then REDELIVERED."

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._completed: set[SubmissionId] = set()

    def intercept_submission(self, submission: SubmissionModel) -> SubmissionModel:
        if submission.state != SubmissionState.COMPLETED:
            return submission
        with self._lock:
            if submission.submission_id not in self._completed:
                self._completed.add(submission.submission_id)
                return submission
        _log.info(
            "Submission %s was already completed once, now simulating redelivery.",
            submission.submission_id,
        )
        return with_state(submission, SubmissionState.REDELIVERED)


ENFORCED_STATE_FLOW: tuple[SubmissionState, ...] = (
    SubmissionState.IN_PRE_PROCESS,
    SubmissionState.STARTED,
    SubmissionState.ANALYZED,
    # Approval: order unknown, any order serves for testing.
    SubmissionState.AWAITING_APPROVAL,
    SubmissionState.AWAITING_QUOTE_APPROVAL,
    SubmissionState.TRANSLATE,
    # Review is assumed to follow translation.
    SubmissionState.REVIEW,
    SubmissionState.COMPLETED,
)

INTERRUPT_FLOW_STATES = frozenset(
    {SubmissionState.CANCELLED, SubmissionState.CANCELLATION_CONFIRMED}
)


class _SubmissionStateFlow:
    def __init__(self, submission_id: SubmissionId) -> None:
        self.submission_id = submission_id
        self.seeded = False
        self.active: deque[SubmissionState] = deque()

    def replay(self, actual: SubmissionState) -> SubmissionState:
        if actual in INTERRUPT_FLOW_STATES:
            self.active.clear()
            return actual
        if actual == SubmissionState.STARTED and not self.seeded:
            self.active.extend(ENFORCED_STATE_FLOW)
            self.seeded = True
        if not self.active:
            return actual
        replayed = self.active.popleft()
        _log.info(
            "Submission %s: Replaying state %s instead of actual state %s "
            "(replay done? %s).",
            self.submission_id,
            replayed,
            actual,
            not self.active,
        )
        return replayed


class FullRegularApprovalStateFlowScenario(Scenario):
    """Walk each submission through all states of a regular approval flow.

    The flow is seeded once per submission, on its first STARTED reading,
    and is interrupted by cancellation. Later STARTED readings pass through
    unchanged instead of restarting the flow.
    """

    id = "full-regular-approval-state-flow"
    description = "Replay all approval states before COMPLETED."

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._flows: dict[SubmissionId, _SubmissionStateFlow] = {}

    def intercept_submission(self, submission: SubmissionModel) -> SubmissionModel:
        actual = SubmissionState(submission.state)
        with self._lock:
            flow = self._flows.setdefault(
                submission.submission_id,
                _SubmissionStateFlow(submission.submission_id),
            )
            replayed = flow.replay(actual)
        if replayed == actual:
            return submission
        return with_state(submission, replayed)
