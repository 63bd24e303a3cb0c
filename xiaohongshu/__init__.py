"""
小红书话题模块初始化与挂载

本文件负责：
1. 定义 setup_xiaohongshu(app) 方法，将话题抓取路由挂载到主 FastAPI 应用。
2. 通过 include_router 注册 /api/xiaohongshu/topic 路由（见 router.py）。

页面抓取与解析流程见 services.py。
"""
from fastapi import FastAPI  # 导入 FastAPI 主类，用于类型标注和应用实例传递

from .router import router as xiaohongshu_router  # 导入话题路由对象


def setup_xiaohongshu(app: FastAPI) -> None:
    """
    挂载话题抓取路由到主 FastAPI 应用。
    参数：app，主 FastAPI 应用实例。
    """
    app.include_router(xiaohongshu_router)


__all__ = ["setup_xiaohongshu", "xiaohongshu_router"]  # 模块导出，供主应用引用
