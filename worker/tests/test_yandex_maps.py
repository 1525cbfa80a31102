import pytest

from pizza_worker.vendors import yandex_maps


class DummyResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise yandex_maps.requests.HTTPError("http error")

    def json(self):
        if self._invalid_json:
            raise ValueError("no json")
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        return self.response


@pytest.fixture
def session():
    return DummySession()


def test_search_places_sends_expected_params(session):
    session.response = DummyResponse(payload={"features": []})

    payload = yandex_maps.search_places(session, "пицца Сыктывкар", "key")

    assert payload == {"features": []}
    url, params, timeout = session.calls[0]
    assert url == "https://search-maps.yandex.ru/v1/"
    assert params == {
        "apikey": "key",
        "text": "пицца Сыктывкар",
        "type": "biz",
        "lang": "ru_RU",
        "results": 20,
    }
    assert timeout == 10


def test_search_places_http_error(session):
    session.response = DummyResponse(status_code=403)
    with pytest.raises(yandex_maps.requests.HTTPError):
        yandex_maps.search_places(session, "пицца Сыктывкар", "bad-key")


@pytest.mark.parametrize(
    "response",
    [
        DummyResponse(payload={"type": "FeatureCollection"}),
        DummyResponse(payload={"features": None}),
        DummyResponse(payload=["not", "a", "dict"]),
        DummyResponse(invalid_json=True),
    ],
)
def test_search_places_malformed_payload(session, response):
    session.response = response
    with pytest.raises(yandex_maps.YandexMapsError):
        yandex_maps.search_places(session, "пицца Сыктывкар", "key")
