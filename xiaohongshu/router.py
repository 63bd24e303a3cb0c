"""
小红书话题抓取 API 路由

本文件负责暴露 /api/xiaohongshu/topic 接口，供前端或调度系统抓取指定话题页。
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException

# 数据模型：请求体、响应体、错误体
from .models import ErrorResponse, TopicRequest, TopicResponse
# 异常类型：用于映射 HTTP 状态码
from .errors import NoFeedsError, PageTimeoutError, TopicError
# 业务逻辑：实际抓取实现
from . import services

# 创建路由器实例
router = APIRouter()

#
# POST /api/xiaohongshu/topic
# 说明：
#   - 请求体：{"topic_id": "话题ID"}
#   - 返回话题信息与 Feed 列表（count 与 feeds 长度一致）
#   - 话题ID为空返回 400，话题没有 Feed 返回 404
#   - 页面结构不符或解析失败返回 502，页面超时返回 504
#
@router.post(
    "/api/xiaohongshu/topic",
    response_model=TopicResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def topic_endpoint(payload: TopicRequest) -> TopicResponse:
    """
    抓取指定话题页。
    参数：payload.topic_id（字符串，话题ID）
    返回：TopicResponse（话题信息与 Feed 列表）
    """
    try:
        return await services.get_topic_feeds(payload.topic_id)
    except NoFeedsError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except PageTimeoutError as exc:
        raise HTTPException(status_code=504, detail=str(exc))
    except TopicError as exc:
        # 页面结构变化、解析失败或脚本执行失败
        raise HTTPException(status_code=502, detail=str(exc))
    except ValueError as exc:
        # 话题ID非法
        raise HTTPException(status_code=400, detail=str(exc))
