class ReconciliationError(Exception):
    kind = "error"


class DecodeError(ReconciliationError):
    """The payload is not valid JSON or does not fit the event model."""

    kind = "decode"


class InputError(ReconciliationError):
    """A triggered event lacks the custom fields the workflow needs."""

    kind = "input"


class RemoteError(ReconciliationError):
    """A Jira call failed or returned data that cannot be used."""

    kind = "remote"
