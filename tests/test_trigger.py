import pytest

from epicpoints.normalizers.jira import decode_event
from epicpoints.services.trigger import should_reconcile

from conftest import make_body


@pytest.mark.parametrize(
    "event_type,description,expect",
    [
        ("issue_created", "@bot subtract", True),
        ("issue_created", "hey @bot subtract 3 please", True),
        ("issue_created", "@Bot Subtract", False),
        ("issue_created", "@bot  subtract", False),
        ("issue_created", "", False),
        ("issue_created", None, False),
        ("issue_updated", "@bot subtract", False),
        ("issue_deleted", "@bot subtract", False),
    ],
)
def test_should_reconcile(event_type, description, expect):
    event = decode_event(make_body(event_type=event_type, description=description))
    assert should_reconcile(event) is expect


def test_custom_phrase():
    event = decode_event(make_body(description="/points"))
    assert should_reconcile(event, phrase="/points") is True
    assert should_reconcile(event) is False
