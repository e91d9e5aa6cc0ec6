from notificationtimeout.tray import AppSource, Notification, Urgency, DestroyReason


def _notify(source, notification_id, timeout=5000, urgency=Urgency.NORMAL):
    notification = Notification(source, notification_id, "n{}".format(notification_id), timeout=timeout)
    notification.set_urgency(urgency)
    source.add_notification(notification)
    return notification


def test_first_notification_shown_others_queued(tray):
    source = AppSource(tray, "app")
    first = _notify(source, 1)
    second = _notify(source, 2)
    assert tray.notification is first
    assert tray.queue == [second]
    assert tray.expire_at == 5000


def test_expires_after_timeout_then_next_shown(tray, clock):
    source = AppSource(tray, "app")
    reasons = []
    first = _notify(source, 1)
    first.on_destroyed.append(lambda n, r: reasons.append(r))
    second = _notify(source, 2, timeout=2000)
    clock.advance(4999)
    tray.update_state()
    assert tray.notification is first
    clock.advance(1)
    tray.update_state()
    assert reasons == [DestroyReason.EXPIRED]
    assert first.destroyed
    assert tray.notification is second
    assert tray.expire_at == 7000


def test_zero_timeout_never_expires(tray, clock):
    source = AppSource(tray, "app")
    n = _notify(source, 1, timeout=0)
    clock.advance(10 ** 7)
    tray.update_state()
    assert tray.notification is n


def test_critical_never_expires(tray, clock):
    source = AppSource(tray, "app")
    n = _notify(source, 1, urgency=Urgency.CRITICAL)
    clock.advance(10 ** 7)
    tray.update_state()
    assert tray.notification is n


def test_idle_user_keeps_notification(tray, clock, idle):
    idle["time"] = 60000
    source = AppSource(tray, "app")
    n = _notify(source, 1)
    clock.advance(6000)
    tray.update_state()
    assert tray.notification is n
    # the user comes back
    idle["time"] = 0
    tray.update_state()
    assert n.destroyed


def test_replacing_notification(tray):
    source = AppSource(tray, "app")
    reasons = []
    old = _notify(source, 7)
    old.on_destroyed.append(lambda n, r: reasons.append(r))
    new = _notify(source, 7)
    assert reasons == [DestroyReason.REPLACED]
    assert source.notifications == {7: new}
    assert tray.notification is new


def test_close_notification_destroys(tray):
    source = AppSource(tray, "app")
    n = _notify(source, 1)
    source.close_notification(n)
    assert n.destroyed
    assert tray.notification is None


def test_destroying_twice_is_noop(tray):
    source = AppSource(tray, "app")
    reasons = []
    n = _notify(source, 1)
    n.on_destroyed.append(lambda n, r: reasons.append(r))
    n.destroy()
    n.destroy()
    assert reasons == [DestroyReason.DISMISSED]


def test_source_destroy_closes_all(tray):
    source = AppSource(tray, "app")
    notifications = [_notify(source, i) for i in (1, 2, 3)]
    source.destroy()
    assert all(n.destroyed for n in notifications)
    assert source.notifications == {}
    assert tray.queue == []


def test_replacement_of_shown_notification_stays_on_screen(tray):
    first = AppSource(tray, "a")
    other = AppSource(tray, "b")
    old = _notify(first, 7)
    queued = _notify(other, 9)
    # the daemon updates the tray whenever a notification goes
    old.on_destroyed.append(lambda n, r: tray.update_state())
    new = _notify(first, 7)
    assert old.destroyed
    assert tray.notification is new
    assert tray.queue == [queued]


def test_replacement_of_queued_notification_keeps_its_place(tray):
    source = AppSource(tray, "app")
    shown = _notify(source, 1)
    old = _notify(source, 2)
    last = _notify(source, 3)
    new = _notify(source, 2)
    assert tray.notification is shown
    assert tray.queue == [new, last]
    assert old.destroyed
