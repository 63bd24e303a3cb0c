"""
小红书话题模块用到的所有Pydantic数据模型定义。
包括话题信息、Feed条目、用户、互动信息以及API请求/响应体。
页面状态中的字段均为驼峰命名（如 viewNumText），通过别名自动映射。
"""
from __future__ import annotations  # 兼容未来类型注解语法

from typing import Any, Tuple  # 类型注解

from pydantic import BaseModel, ConfigDict, computed_field, model_validator  # Pydantic基类与配置
from pydantic.alias_generators import to_camel  # snake_case -> camelCase 别名


class PageRecord(BaseModel):
    """
    页面数据记录的公共基类。
    - 只读（frozen），一次抓取内创建后不再修改
    - 忽略页面新增的未知字段
    - 缺失字段或值为 null 的字段取零值
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null 与字段缺失等价，交给默认值处理
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class TopicInfo(PageRecord):
    """
    话题信息（来自 topic.topicData.pageInfo）。
    字段：
        name: str                      # 话题名称
        desc: str                      # 话题描述
        view_num_text: str             # 浏览量文本，如 "1.2万 浏览"
        discuss_comment_num_text: str  # 讨论数文本
    """
    name: str = ""  # 话题名称
    desc: str = ""  # 话题描述
    view_num_text: str = ""  # 浏览量文本
    discuss_comment_num_text: str = ""  # 讨论数文本


class TopicFeedUser(PageRecord):
    """Feed 作者信息。"""
    nickname: str = ""  # 昵称
    avatar_url: str = ""  # 头像链接
    is_forbidden: bool = False  # 是否被封禁


class TopicInteractionInfo(PageRecord):
    """Feed 互动信息，均为页面上展示的文本。"""
    like_text: str = ""  # 点赞数文本
    collect_text: str = ""  # 收藏数文本
    comment_text: str = ""  # 评论数文本


class TopicFeed(PageRecord):
    """
    话题页中的单条Feed（来自 topic.topicNotes）。
    字段：
        type: str                               # 笔记类型，如 normal / video
        title: str                              # 标题
        desc: str                               # 描述
        user: TopicFeedUser                     # 作者
        interaction_info: TopicInteractionInfo  # 互动信息
        create_time: int                        # 创建时间（毫秒时间戳）
        cursor_score: str                       # 翻页游标
    """
    type: str = ""  # 笔记类型
    title: str = ""  # 标题
    desc: str = ""  # 描述
    user: TopicFeedUser = TopicFeedUser()  # 作者
    interaction_info: TopicInteractionInfo = TopicInteractionInfo()  # 互动信息
    create_time: int = 0  # 创建时间（毫秒）
    cursor_score: str = ""  # 翻页游标


class TopicResponse(PageRecord):
    """
    话题页的完整抓取结果。
    feeds 保持页面渲染顺序；count 由 feeds 计算得出，二者永远一致。
    """
    topic: TopicInfo  # 话题信息
    feeds: Tuple[TopicFeed, ...] = ()  # Feed 列表

    @computed_field
    @property
    def count(self) -> int:
        return len(self.feeds)


class TopicRequest(BaseModel):
    """
    前端/客户端发起话题抓取时的请求体结构。
    字段：
        topic_id: str  # 话题ID，会被拼接到话题页地址中
    """
    topic_id: str  # 话题ID


class ErrorResponse(BaseModel):
    """API统一错误响应体。"""
    detail: str  # 错误信息
