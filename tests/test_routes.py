import pytest

from random_gateway.settings import settings

from .helpers import ScriptedInvoker, failed, ok


def test_two_successes(client, use_invoker):
    invoker = use_invoker(ScriptedInvoker([ok(1), ok(1)]))

    r = client.get("/", params={"min": 1, "max": 1, "count": 2})

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == (
        "Result: 2 attempts & 2 successful random values\n"
        "random values:\t1,1\n"
    )
    assert [(c.min, c.max) for c in invoker.calls] == [(1, 1), (1, 1)]


def test_one_failure(client, use_invoker):
    use_invoker(ScriptedInvoker([ok(3), failed("GetRandom(min=1, max=5): HTTP 500")]))

    r = client.get("/numbers", params={"min": 1, "max": 5, "count": 2})

    assert r.status_code == 200
    assert "Result: 2 attempts & 1 successful random values\n" in r.text
    assert "Failed to send to: \nGetRandom(min=1, max=5): HTTP 500\n" in r.text
    assert "random values:\t3\n" in r.text


def test_all_failures_omit_values_line(client, use_invoker):
    use_invoker(ScriptedInvoker([failed("a"), failed("b")]))

    r = client.get("/", params={"min": 0, "max": 9, "count": 2})

    assert r.text == (
        "Result: 2 attempts & 0 successful random values\n"
        "Failed to send to: \na\nb\n"
    )


def test_any_path_is_served(client, use_invoker):
    use_invoker(ScriptedInvoker([ok(7)]))

    r = client.get("/some/deep/path", params={"min": 7, "max": 7, "count": 1})

    assert r.text.startswith("Result: 1 attempts & 1 successful random values\n")


@pytest.mark.parametrize(
    "query",
    [
        {"min": 5, "max": 1, "count": 3},
        {"min": 1, "max": 5, "count": 0},
        {"min": 1, "max": 5, "count": -2},
        {"min": 1, "max": 5},
        {"max": 5, "count": 2},
        {"min": "x", "max": 5, "count": 2},
        {"min": 1, "max": "", "count": 2},
        {},
    ],
)
def test_invalid_params_give_empty_200(client, use_invoker, query):
    invoker = use_invoker(ScriptedInvoker([]))

    r = client.get("/", params=query)

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == ""
    assert invoker.calls == []


def test_params_parse_like_leading_integers(client, use_invoker):
    invoker = use_invoker(ScriptedInvoker([ok(2), ok(3)]))

    r = client.get("/", params={"min": " 2abc", "max": "+3.9", "count": "2 units"})

    assert "Result: 2 attempts & 2 successful random values" in r.text
    assert {(c.min, c.max) for c in invoker.calls} == {(2, 3)}


def test_service_headers(client, use_invoker):
    use_invoker(ScriptedInvoker([]))

    r = client.get("/", params={"count": 0})

    assert r.headers["X-Gateway-Version"] == settings.GATEWAY_VERSION
    assert r.headers["X-Random-Function"] == settings.FUNCTION_NAME


def test_count_beyond_list_size_gives_empty_200(client, use_invoker):
    invoker = use_invoker(ScriptedInvoker([]))

    r = client.get("/", params={"min": 1, "max": 1, "count": "99999999999999999999"})

    assert r.status_code == 200
    assert r.text == ""
    assert invoker.calls == []


def test_configured_max_count(client, use_invoker, monkeypatch):
    monkeypatch.setattr(settings, "MAX_COUNT", 2)
    invoker = use_invoker(ScriptedInvoker([ok(1), ok(1)]))

    assert client.get("/", params={"min": 1, "max": 1, "count": 3}).text == ""
    assert client.get("/", params={"min": 1, "max": 1, "count": 2}).text.startswith("Result: 2 attempts")
    assert len(invoker.calls) == 2


@pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json", "/docs/oauth2-redirect"])
def test_framework_paths_are_fanned_out(client, use_invoker, path):
    use_invoker(ScriptedInvoker([ok(1)]))

    r = client.get(path, params={"min": 1, "max": 1, "count": 1})

    assert r.status_code == 200
    assert r.text == "Result: 1 attempts & 1 successful random values\nrandom values:\t1\n"
