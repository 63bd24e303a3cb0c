import pytest
from fastapi.testclient import TestClient

from main import app
from xiaohongshu import services
from xiaohongshu.errors import (
    BrowserError,
    DecodeError,
    EvaluationError,
    MissingFieldError,
    NoFeedsError,
    PageTimeoutError,
)
from xiaohongshu.models import TopicFeed, TopicInfo, TopicResponse
from xiaohongshu.state import Diagnostic

client = TestClient(app)


def _stub(monkeypatch, outcome):
    calls = []

    async def fake_get_topic_feeds(topic_id):
        calls.append(topic_id)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(services, "get_topic_feeds", fake_get_topic_feeds)
    return calls


def test_topic_endpoint_returns_camel_case_response(monkeypatch):
    response = TopicResponse(
        topic=TopicInfo(name="Coffee", view_num_text="10万"),
        feeds=[TopicFeed(title="t1", create_time=1700000000000)],
    )
    calls = _stub(monkeypatch, response)

    resp = client.post("/api/xiaohongshu/topic", json={"topic_id": "coffee"})

    assert resp.status_code == 200
    assert calls == ["coffee"]
    body = resp.json()
    assert body["count"] == 1
    assert body["topic"]["name"] == "Coffee"
    assert body["topic"]["viewNumText"] == "10万"
    assert body["feeds"][0]["title"] == "t1"
    assert body["feeds"][0]["createTime"] == 1700000000000


@pytest.mark.parametrize(
    "error, status",
    [
        (ValueError("topic id must not be empty"), 400),
        (NoFeedsError(Diagnostic(path="topic.topicNotes", missing_segment="topicNotes")), 404),
        (MissingFieldError(Diagnostic(path="topic.topicData.pageInfo", missing_segment="topic")), 502),
        (DecodeError("TopicInfo", "{bad", "json_invalid"), 502),
        (EvaluationError("script failed in page: boom"), 502),
        (BrowserError("failed to start firefox: geckodriver not found"), 502),
        (PageTimeoutError("page not ready"), 504),
    ],
)
def test_topic_endpoint_maps_errors(monkeypatch, error, status):
    _stub(monkeypatch, error)
    resp = client.post("/api/xiaohongshu/topic", json={"topic_id": "coffee"})
    assert resp.status_code == status
    assert resp.json()["detail"] == str(error)


def test_topic_endpoint_requires_topic_id():
    resp = client.post("/api/xiaohongshu/topic", json={})
    assert resp.status_code == 422
