from zendesk_app.core.query import GroupSearch, OrganizationSearch, TicketSearch, UserSearch, build_query


def test_build_query_skips_falsy_values():
    assert build_query("ticket", {"status": "open", "priority": 0}, {}, {}, []) == 'type:ticket,status:"open",'


def test_build_query_unsupported_type():
    assert build_query("comment", {"status": "open"}) == ""


def test_build_query_aliases_conditions_exclude():
    query = build_query(
        "ticket",
        {"created_from": "2024-01-01", "status": "solved", "subject": "refund"},
        aliases={"created_from": "created"},
        conditions={"created_from": ">"},
        exclude=["subject"],
    )
    assert query == 'type:ticket,created>"2024-01-01",status:"solved",'


def test_ticket_search_request():
    search = TicketSearch(status="pending", created_from="2024-05-01", created_to="2024-06-01")
    assert search.to_query() == 'type:ticket,status:"pending",created>"2024-05-01",created<"2024-06-01",'
    assert search.to_query(exclude=["created_to"]) == 'type:ticket,status:"pending",created>"2024-05-01",'


def test_other_entity_requests():
    assert TicketSearch().to_query() == "type:ticket,"
    assert UserSearch(user=17).to_query() == 'type:user,user:"17",'
    assert GroupSearch(name="Tier 2").to_query() == 'type:group,name:"Tier 2",'
    assert OrganizationSearch(name="Acme").to_query() == 'type:organization,name:"Acme",'
