import pytest

from notificationtimeout.errors import HookError, HookConflictError, HandleReleasedError
from notificationtimeout.hooks import HookTable, SLOTS, SET_URGENCY, DESTROY


def test_empty_slot_calls_original():
    table = HookTable()
    assert table.call(SET_URGENCY, object(), lambda u: u * 2, 3) == 6


def test_hook_gets_target_and_forward():
    table = HookTable()
    target = object()
    seen = []

    def hook(t, forward, value):
        seen.append(t)
        return forward(value + 1)

    table.install({SET_URGENCY: hook})
    assert table.call(SET_URGENCY, target, lambda v: v * 10, 1) == 20
    assert seen == [target]


def test_unknown_slot_rejected():
    table = HookTable()
    with pytest.raises(HookError):
        table.install({"bogus": lambda *a: None})
    assert table.snapshot() == dict.fromkeys(SLOTS)


def test_release_restores_identical_slots():
    table = HookTable()
    first = table.install({DESTROY: lambda *a: None})
    before = table.snapshot()
    handle = table.install({slot: (lambda *a: None) for slot in SLOTS})
    handle.release()
    after = table.snapshot()
    assert all(after[slot] is before[slot] for slot in SLOTS)
    assert handle.saved == {}
    first.release()
    assert table.snapshot() == dict.fromkeys(SLOTS)


def test_double_release_raises():
    handle = HookTable().install({DESTROY: lambda *a: None})
    handle.release()
    with pytest.raises(HandleReleasedError):
        handle.release()


def test_release_under_another_hook_conflicts():
    table = HookTable()
    lower = table.install({DESTROY: lambda *a: None})
    upper_hook = lambda *a: None
    upper = table.install({DESTROY: upper_hook})
    with pytest.raises(HookConflictError):
        lower.release()
    assert table.get(DESTROY) is upper_hook
    assert not lower.released
    upper.release()
    lower.release()
    assert table.get(DESTROY) is None


def test_handle_as_context_manager():
    table = HookTable()
    with table.install({DESTROY: lambda *a: None}) as handle:
        assert table.get(DESTROY) is not None
    assert handle.released
    assert table.get(DESTROY) is None
