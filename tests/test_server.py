"""Tests for the POST /api/youtube endpoint."""

import pytest

import config
from errors import UpstreamError
from fakes import CHANNEL_ID, FakeClient, make_video
from response_cache import InMemoryCache
from server import create_app


class FailingClient(FakeClient):
    def get_channel(self, channel_id):
        raise UpstreamError("API key not valid. Please pass a valid API key.")


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("YOUTUBE_API_KEY", "test-key")


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)
    monkeypatch.delenv("VITE_YOUTUBE_API_KEY", raising=False)
    monkeypatch.setattr(config, "YOUTUBE_API_KEY", "")


def _app(client_cls=FakeClient, **client_kwargs):
    created = []

    def factory(api_key):
        client = client_cls(**client_kwargs)
        created.append((api_key, client))
        return client

    app = create_app(cache=InMemoryCache(), client_factory=factory)
    return app.test_client(), created


class TestYouTubeEndpoint:

    def test_get_not_allowed(self, api_key):
        client, _ = _app()
        resp = client.get("/api/youtube")
        assert resp.status_code == 405
        assert resp.get_json() == {"message": "Method Not Allowed"}

    def test_missing_api_key(self, no_api_key):
        client, _ = _app()
        resp = client.post("/api/youtube", json={"query": "@testchannel", "count": 10})
        assert resp.status_code == 500
        assert resp.get_json()["message"] == "YouTube API key is not configured."

    @pytest.mark.parametrize("body", [{}, {"query": "@testchannel"}, {"count": 10}])
    def test_missing_fields(self, api_key, body):
        client, _ = _app()
        resp = client.post("/api/youtube", json=body)
        assert resp.status_code == 400
        assert resp.get_json() == {"message": "Missing query or count."}

    @pytest.mark.parametrize("body", [["@testchannel", 10], "@testchannel", 10, None])
    def test_non_object_body(self, api_key, body):
        client, _ = _app()
        resp = client.post("/api/youtube", json=body)
        assert resp.status_code == 400
        assert resp.get_json() == {"message": "Missing query or count."}

    def test_bad_count(self, api_key):
        client, _ = _app()
        resp = client.post("/api/youtube", json={"query": "@testchannel", "count": "many"})
        assert resp.status_code == 400

    def test_channel_not_found_is_500(self, api_key):
        client, _ = _app()
        resp = client.post("/api/youtube", json={"query": "@nobody", "count": 10})
        assert resp.status_code == 500
        assert resp.get_json()["message"] == 'Channel with handle "@nobody" not found.'

    def test_upstream_message_forwarded(self, api_key):
        client, _ = _app(FailingClient)
        resp = client.post("/api/youtube", json={"query": CHANNEL_ID, "count": 10})
        assert resp.status_code == 500
        assert resp.get_json()["message"] == "API key not valid. Please pass a valid API key."

    def test_success(self, api_key):
        client, created = _app(videos=[make_video(0), make_video(1)])
        resp = client.post("/api/youtube", json={"query": "@testchannel", "count": 1})

        assert resp.status_code == 200
        data = resp.get_json()
        assert set(data) == {"channelData", "videoData", "analysis"}
        assert data["channelData"]["id"] == CHANNEL_ID
        assert len(data["videoData"]) == 1
        assert created[0][0] == "test-key"

    def test_second_request_served_from_cache(self, api_key):
        client, created = _app(videos=[make_video(0)])
        body = {"query": "@testchannel", "count": 5}
        first = client.post("/api/youtube", json=body).get_json()
        second = client.post("/api/youtube", json=body).get_json()

        assert first == second
        # The second request builds a client but never calls it
        assert len(created[1][1].calls) == 0
