from __future__ import annotations

import inspect

import pytest

from bitly_client import BitlyClient, UsageError
from bitly_client.endpoints import ENDPOINTS


def test_every_endpoint_is_bound_once() -> None:
    names = [e.name for e in ENDPOINTS]
    assert len(names) == len(set(names))
    for name in names:
        assert callable(getattr(BitlyClient, name))


def test_bound_methods_expose_real_signatures() -> None:
    sig = inspect.signature(BitlyClient.link_clicks)
    assert list(sig.parameters)[:2] == ["self", "link"]
    assert sig.parameters["unit"].default == "day"
    assert sig.parameters["timezone"].default == "America/New_York"
    assert sig.parameters["limit"].kind is inspect.Parameter.KEYWORD_ONLY


@pytest.mark.parametrize("method", ["expand", "info"])
def test_identifier_required_before_any_request(backend, make_client, method: str) -> None:
    client = make_client()
    with pytest.raises(UsageError) as exc:
        getattr(client, method)()
    assert exc.value.kind == "usage"
    with pytest.raises(UsageError):
        getattr(client, method)(short_url="", hash="")
    assert backend.requests == []


def test_expand_returns_first_result(backend, make_client) -> None:
    backend.reply_json(
        {"status_code": 200, "status_txt": "OK", "data": {"expand": [{"long_url": "http://example.com"}]}}
    )
    client = make_client()

    assert client.expand(short_url="http://bit.ly/x") == {"long_url": "http://example.com"}
    assert backend.last.url.path == "/v3/expand"
    assert backend.last.url.params["shortUrl"] == "http://bit.ly/x"


def test_expand_by_hash_list_returns_all_results(backend, make_client) -> None:
    backend.reply_data({"expand": [{"hash": "a"}, {"hash": "b"}]})
    client = make_client()

    assert client.expand(hash=["a", "b"]) == [{"hash": "a"}, {"hash": "b"}]
    assert backend.last.url.params.get_list("hash") == ["a", "b"]


def test_info_sends_expand_user_literal(backend, make_client) -> None:
    backend.reply_data({"info": [{"hash": "abc", "title": "t"}]})
    client = make_client()

    assert client.info(hash="abc", expand_user=False) == {"hash": "abc", "title": "t"}
    assert backend.last.url.params["expand_user"] == "false"
    assert "shortUrl" not in backend.last.url.params


def test_shorten_coerces_new_hash(backend, make_client) -> None:
    backend.reply_data({"url": "http://bit.ly/x", "hash": "x", "new_hash": 1})
    client = make_client()

    result = client.shorten("http://example.com", domain="j.mp")

    assert result["new_hash"] is True
    assert backend.last.url.params["longUrl"] == "http://example.com"
    assert backend.last.url.params["domain"] == "j.mp"


def test_user_link_edit_derives_edit(backend, make_client) -> None:
    backend.reply_data({"link_edit": {"link": "http://bit.ly/x"}})
    client = make_client()

    assert client.user_link_edit("http://bit.ly/x", title="T", private=False) == {"link": "http://bit.ly/x"}
    params = backend.last.url.params
    assert params["edit"] == "title,private"
    assert params["private"] == "false"
    assert params["link"] == "http://bit.ly/x"


def test_user_link_save_unwraps(backend, make_client) -> None:
    backend.reply_data({"link_save": {"link": "http://bit.ly/y", "new_link": 1}})
    client = make_client()
    assert client.user_link_save("http://example.com", title="T")["link"] == "http://bit.ly/y"
    assert backend.last.url.params["longUrl"] == "http://example.com"


def test_search_joins_fields_and_sends_cities(backend, make_client) -> None:
    backend.reply_data({"results": [{"aggregate_link": "x"}]})
    client = make_client()

    results = client.search("python", fields=["aggregate_link", "title"], cities="us-ny-new_york")

    assert results == [{"aggregate_link": "x"}]
    params = backend.last.url.params
    assert params["fields"] == "aggregate_link,title"
    assert params["cities"] == "us-ny-new_york"
    assert params["limit"] == "10"
    assert params["offset"] == "0"


@pytest.mark.parametrize("body, expected", [("OK", True), ("FAIL", False)])
def test_bundle_archive_compares_raw_body(backend, make_client, body: str, expected: bool) -> None:
    backend.reply_text(body)
    client = make_client()
    assert client.bundle_archive("http://bitly.com/bundles/o_x/1") is expected
    assert backend.last.url.path == "/v3/bundle/archive"


def test_bundle_edit_derives_edit(backend, make_client) -> None:
    backend.reply_data({"bundle": {"title": "New"}})
    client = make_client()

    assert client.bundle_edit("b1", title="New", description=None, preview=True) == {"title": "New"}
    params = backend.last.url.params
    assert params["edit"] == "title,preview"
    assert "description" not in params
    assert params["preview"] == "true"


def test_metric_defaults_are_applied(backend, make_client) -> None:
    client = make_client()
    client.link_clicks("http://bit.ly/x")

    params = backend.last.url.params
    assert backend.last.url.path == "/v3/link/clicks"
    assert params["unit"] == "day"
    assert params["timezone"] == "America/New_York"
    assert params["limit"] == "100"
    assert params["unit_reference_ts"] == "now"
    assert "units" not in params
    assert "rollup" not in params


def test_falsy_values_are_sent_not_dropped(backend, make_client) -> None:
    client = make_client()
    client.link_clicks("http://bit.ly/x", units=0, rollup=False)

    params = backend.last.url.params
    assert params["units"] == "0"
    assert params["rollup"] == "false"


def test_none_falls_back_to_default(backend, make_client) -> None:
    client = make_client()
    client.user_network_history(limit=None)

    params = backend.last.url.params
    assert params["limit"] == "20"
    assert params["expand_client_id"] == "false"
    assert "offset" not in params


def test_user_link_history_sends_limit(backend, make_client) -> None:
    client = make_client()
    client.user_link_history(archived=True)
    assert backend.last.url.params["limit"] == "50"
    assert backend.last.url.params["archived"] == "true"


def test_unwrap_takes_first_list_item(backend, make_client) -> None:
    backend.reply_data({"link_lookup": [{"aggregate_link": "http://bit.ly/a"}]})
    client = make_client()
    assert client.link_lookup("http://example.com") == {"aggregate_link": "http://bit.ly/a"}


def test_pro_domain_is_coerced_to_bool(backend, make_client) -> None:
    backend.reply_data({"domain": "nyti.ms", "bitly_pro_domain": 1})
    client = make_client()
    assert client.bitly_pro_domain("nyti.ms") is True


def test_bundle_methods_unwrap_bundle(backend, make_client) -> None:
    backend.reply_data({"bundle": {"bundle_link": "b1", "links": []}})
    client = make_client()

    assert client.bundle_link_comment_add("b1", "http://bit.ly/x", "nice") == {"bundle_link": "b1", "links": []}
    params = backend.last.url.params
    assert backend.last.url.path == "/v3/bundle/link_comment_add"
    assert params["bundle_link"] == "b1"
    assert params["comment"] == "nice"


def test_referrer_paths_use_documented_names(backend, make_client) -> None:
    client = make_client()
    client.link_referrers_by_domain("http://bit.ly/x")
    assert backend.last.url.path == "/v3/link/referrers_by_domain"
    client.link_referring_domains("http://bit.ly/x")
    assert backend.last.url.path == "/v3/link/referring_domains"


def test_missing_required_argument_is_type_error(backend, make_client) -> None:
    client = make_client()
    with pytest.raises(TypeError):
        client.link_clicks()
    with pytest.raises(TypeError):
        client.link_clicks("http://bit.ly/x", bogus=1)
    assert backend.requests == []
