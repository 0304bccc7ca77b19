import pytest

from common.api_error import InvalidTransitionError
from hospital.db.models import AppointmentStatus as S, LifecycleAction as A
from hospital.services.v1 import action_for, allowed_actions, is_terminal, next_status


@pytest.mark.parametrize(
    "current, action, expected",
    [
        (S.PENDING, A.CONFIRM, S.CONFIRMED),
        (S.PENDING, A.CANCEL, S.CANCELLED),
        (S.CONFIRMED, A.COMPLETE, S.COMPLETED),
        (S.CANCELLED, A.REOPEN, S.PENDING),
    ],
)
def test_lifecycle_edges(current, action, expected):
    assert next_status(current, action) is expected


@pytest.mark.parametrize(
    "current, action",
    [
        (S.PENDING, A.COMPLETE),
        (S.CONFIRMED, A.CANCEL),
        (S.CONFIRMED, A.REOPEN),
        (S.CANCELLED, A.CONFIRM),
        (S.COMPLETED, A.REOPEN),
    ],
)
def test_other_actions_are_rejected(current, action):
    with pytest.raises(InvalidTransitionError) as exc:
        next_status(current, action)
    assert exc.value.status_code == 409


def test_allowed_actions_per_status():
    assert allowed_actions(S.PENDING) == [A.CONFIRM, A.CANCEL]
    assert allowed_actions(S.CONFIRMED) == [A.COMPLETE]
    assert allowed_actions(S.CANCELLED) == [A.REOPEN]
    assert allowed_actions(S.COMPLETED) == []


def test_completed_is_the_only_terminal_status():
    assert [status for status in S if is_terminal(status)] == [S.COMPLETED]


def test_action_for_target_status():
    assert action_for(S.PENDING, S.CONFIRMED) is A.CONFIRM
    assert action_for(S.CANCELLED, S.PENDING) is A.REOPEN
    with pytest.raises(InvalidTransitionError):
        action_for(S.PENDING, S.COMPLETED)
    with pytest.raises(InvalidTransitionError):
        action_for(S.COMPLETED, S.PENDING)
