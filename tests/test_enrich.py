import pytest

from zendesk_app.core.config import ZendeskSettings
from zendesk_app.core.enrich import (
    Enrichment,
    default_enrichments,
    join_params_to_tickets,
    system_user_id,
    ticket_app,
    ticket_closed_at,
    tickets_as_records,
    tickets_to_dataframe,
)
from zendesk_app.core.models import CustomFieldModel, TicketModel

APP_FIELD = 360001


def _ticket(tid=1, status="open", external_id="user_42", updated_at="2020-01-01T00:00:00Z", app="ios"):
    return TicketModel(
        id=tid,
        subject=f"Ticket {tid}",
        description="Cannot log in",
        status=status,
        priority="normal",
        requester_id=100,
        submitter_id=100,
        assignee_id=7,
        brand_id=3,
        external_id=external_id,
        created_at="2019-12-30T10:00:00Z",
        updated_at=updated_at,
        tags=["login"],
        custom_fields=[CustomFieldModel(id=5, value="x"), CustomFieldModel(id=APP_FIELD, value=app)],
    )


def _settings():
    return ZendeskSettings("acme", "agent@acme.test", "tok", custom_field_ids={"appName": APP_FIELD})


def test_closed_at_only_for_closed():
    closed = join_params_to_tickets([_ticket(status="closed")], [Enrichment("closed_at", ticket_closed_at)])
    opened = join_params_to_tickets([_ticket(status="open")], [Enrichment("closed_at", ticket_closed_at)])
    assert closed[0].closed_at == "2020-01-01T00:00:00Z"
    assert opened[0].closed_at is None


def test_system_user_id():
    assert system_user_id(_ticket(external_id="user_42")) == 42
    assert system_user_id(_ticket(external_id=None)) is None
    assert system_user_id(_ticket(external_id="customer-9")) is None
    assert system_user_id(_ticket(external_id="user_abc")) is None


def test_ticket_app_reads_configured_field():
    assert ticket_app(APP_FIELD)(_ticket(app="android")) == "android"
    assert ticket_app(999)(_ticket()) is None


def test_default_enrichments_preserve_order():
    tickets = [_ticket(tid=1, status="closed"), _ticket(tid=2, external_id="user_7")]
    out = join_params_to_tickets(tickets, default_enrichments(_settings()))
    assert [t.id for t in out] == [1, 2]
    assert out[0] is tickets[0]
    assert out[0].closed_at == "2020-01-01T00:00:00Z"
    assert out[1].user_id == 7
    assert out[1].app == "ios"


def test_enrichment_from_ticket_id():
    seen = []

    def derive(ticket_id):
        seen.append(ticket_id)
        return f"author-{ticket_id}"

    out = join_params_to_tickets([_ticket(tid=9)], [Enrichment("last_comment_author_name", derive, from_ticket=False)])
    assert seen == [9]
    assert out[0].last_comment_author_name == "author-9"


def test_enrichment_rejects_unknown_field():
    with pytest.raises(ValueError):
        Enrichment("subject", ticket_closed_at)


def test_tickets_as_records_keep_all_fields():
    tickets = join_params_to_tickets([_ticket(status="closed"), _ticket(tid=2)], default_enrichments(_settings()))
    records = tickets_as_records(tickets)
    assert len(records) == 2
    first = records[0]
    assert first["id"] == 1
    assert first["subject"] == "Ticket 1"
    assert first["closed_at"] == "2020-01-01T00:00:00Z"
    assert first["user_id"] == 42
    assert first["app"] == "ios"
    assert first["custom_fields"][1] == {"id": APP_FIELD, "value": "ios"}


def test_tickets_to_dataframe_sorted():
    tickets = [_ticket(tid=1, updated_at="2020-01-01T00:00:00Z"), _ticket(tid=2, updated_at="2021-01-01T00:00:00Z")]
    df = tickets_to_dataframe(tickets)
    assert list(df["id"]) == [2, 1]
    assert df.loc[0, "tags"] == "login"
    assert tickets_to_dataframe([]).empty
