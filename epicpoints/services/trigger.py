from epicpoints.models.webhooks.jira import IssueEventType, JiraWebhookEvent

TRIGGER_PHRASE = "@bot subtract"


def should_reconcile(event: JiraWebhookEvent, phrase: str = TRIGGER_PHRASE) -> bool:
    if event.issue_event_type_name != IssueEventType.CREATED.value:
        return False
    description = event.issue.fields.description
    return bool(description) and phrase in description
