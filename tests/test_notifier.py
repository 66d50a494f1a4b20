# /tests/test_notifier.py

from scholar_track.services.notifier import NotificationLevel, Notifier


def test_history_is_bounded_and_ordered():
    notifier = Notifier(max_history=2)
    notifier.error("first")
    notifier.warning("second")
    notifier.success("third")

    assert [n.message for n in notifier.history] == ["second", "third"]
    assert notifier.history[0].level == "warning"


def test_messages_filter_by_level():
    notifier = Notifier()
    notifier.error("Failed to fetch students")
    notifier.success("Student created successfully")

    assert notifier.messages() == ["Failed to fetch students", "Student created successfully"]
    assert notifier.messages(NotificationLevel.ERROR) == ["Failed to fetch students"]


def test_notifications_are_logged_at_their_level(caplog):
    notifier = Notifier()
    with caplog.at_level("WARNING", logger="scholar_track"):
        notifier.warning("Background task student.created failed: mail server down")

    assert caplog.records[-1].levelname == "WARNING"
    assert "mail server down" in caplog.records[-1].getMessage()
