"""
test_innertube.py — Tests for the internal-API client and JSON path helper.

All HTTP goes through the FakeHttp fixture; nothing touches the network.
"""

from __future__ import annotations

import pytest
import requests

from yt_subtitles.errors import TransportError, UpstreamShapeError, UpstreamStatusError
from yt_subtitles.innertube import InnerTubeClient, dig
from yt_subtitles.session import new_session


# ---------------------------------------------------------------------------
# call()
# ---------------------------------------------------------------------------

class TestCall:

    def test_request_shape(self, config, fake_http, rng) -> None:
        """URL, key param, headers and body carry the session and payload."""
        fake_http.on_post("player", {"ok": True})
        session = new_session(config, rng)
        client = InnerTubeClient(config, fake_http)

        result = client.call("player", {"videoId": "dQw4w9WgXcQ"}, session)

        assert result == {"ok": True}
        endpoint, kwargs = fake_http.posts[0]
        assert endpoint == "player"
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["timeout"] == config.timeout
        assert kwargs["json"]["videoId"] == "dQw4w9WgXcQ"
        assert kwargs["json"]["context"] == session.payload()

        headers = kwargs["headers"]
        assert headers["Content-Type"] == "application/json"
        assert headers["X-Goog-Visitor-Id"] == session.visitor_data
        assert headers["X-Youtube-Client-Name"] == "1"
        assert headers["X-Youtube-Client-Version"] == config.client_version
        assert headers["Origin"] == "https://www.youtube.com"
        assert headers["Referer"] == "https://www.youtube.com/"
        assert headers["User-Agent"]

    def test_posts_to_base_url(self, config, fake_http, rng, monkeypatch) -> None:
        seen = []
        original = fake_http.post

        def spy(url, **kwargs):
            seen.append(url)
            return original(url, **kwargs)

        monkeypatch.setattr(fake_http, "post", spy)
        fake_http.on_post("next", {})
        InnerTubeClient(config, fake_http).call("next", {}, new_session(config, rng))

        assert seen == ["https://www.youtube.com/youtubei/v1/next"]

    def test_network_failure_is_transport_error(self, config, fake_http, rng) -> None:
        fake_http.on_post("player", raises=requests.ConnectionError("refused"))
        client = InnerTubeClient(config, fake_http)

        with pytest.raises(TransportError) as excinfo:
            client.call("player", {}, new_session(config, rng))
        assert excinfo.value.endpoint == "player"

    def test_timeout_is_transport_error(self, config, fake_http, rng) -> None:
        fake_http.on_post("player", raises=requests.Timeout("slow"))
        with pytest.raises(TransportError):
            InnerTubeClient(config, fake_http).call("player", {}, new_session(config, rng))

    def test_non_success_status(self, config, fake_http, rng) -> None:
        fake_http.on_post("player", {"error": {}}, status=403)

        with pytest.raises(UpstreamStatusError) as excinfo:
            InnerTubeClient(config, fake_http).call("player", {}, new_session(config, rng))
        assert excinfo.value.status == 403

    def test_non_json_body(self, config, fake_http, rng) -> None:
        fake_http.on_post("player")  # no JSON registered
        with pytest.raises(TransportError, match="not JSON"):
            InnerTubeClient(config, fake_http).call("player", {}, new_session(config, rng))

    def test_json_array_body(self, config, fake_http, rng) -> None:
        fake_http.on_post("player", [1, 2, 3])
        with pytest.raises(TransportError, match="JSON object"):
            InnerTubeClient(config, fake_http).call("player", {}, new_session(config, rng))


# ---------------------------------------------------------------------------
# dig()
# ---------------------------------------------------------------------------

class TestDig:

    def test_follows_keys_and_indexes(self) -> None:
        data = {"a": [{"b": "x"}]}
        assert dig(data, "a", 0, "b") == "x"

    def test_missing_key(self) -> None:
        with pytest.raises(UpstreamShapeError) as excinfo:
            dig({"a": {}}, "a", "b", "c")
        assert excinfo.value.path == "a.b"

    def test_index_out_of_range(self) -> None:
        with pytest.raises(UpstreamShapeError):
            dig({"a": []}, "a", 0)

    def test_wrong_type(self) -> None:
        with pytest.raises(UpstreamShapeError):
            dig({"a": "text"}, "a", "b")

    def test_explicit_null_is_missing(self) -> None:
        with pytest.raises(UpstreamShapeError):
            dig({"a": None}, "a")
