import pytest
from pydantic import ValidationError

from xiaohongshu.models import TopicFeed, TopicInfo, TopicResponse


@pytest.mark.parametrize("size", [0, 1, 5])
def test_count_matches_feeds(size):
    feeds = [TopicFeed(title=f"t{i}") for i in range(size)]
    response = TopicResponse(topic=TopicInfo(name="Coffee"), feeds=feeds)
    assert response.count == size == len(response.feeds)


def test_records_are_immutable():
    info = TopicInfo(name="Coffee")
    with pytest.raises(ValidationError):
        info.name = "Tea"


def test_response_serialises_camel_case_with_count():
    response = TopicResponse(
        topic=TopicInfo(name="Coffee", view_num_text="10万"),
        feeds=[TopicFeed(title="t1", create_time=5)],
    )
    data = response.model_dump(by_alias=True)
    assert data["count"] == 1
    assert data["topic"]["viewNumText"] == "10万"
    assert data["feeds"][0]["createTime"] == 5
    assert data["feeds"][0]["interactionInfo"] == {
        "likeText": "",
        "collectText": "",
        "commentText": "",
    }


def test_response_ignores_supplied_count():
    response = TopicResponse.model_validate({"topic": {}, "feeds": [{}], "count": 7})
    assert response.count == 1
