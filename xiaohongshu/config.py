"""
小红书话题抓取模块的统一配置文件。
集中管理页面地址模板、超时、等待间隔、浏览器类型等参数。
所有配置项均可通过环境变量覆盖，方便部署和调试。
"""
from __future__ import annotations  # 兼容未来类型注解语法

import os  # 用于读取环境变量，实现灵活配置


def _get_bool_env(name: str, default: bool) -> bool:
    """
    读取布尔型环境变量，支持多种写法（1/true/yes/on），无则返回默认值。
    用于控制无头模式等布尔配置。
    """
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# 话题页地址模板，{topic_id} 会被替换为话题ID
TOPIC_URL_TEMPLATE = os.getenv(
    "XHS_TOPIC_URL_TEMPLATE", "https://www.xiaohongshu.com/topic/normal/{topic_id}"
)

PAGE_TIMEOUT = float(os.getenv("XHS_PAGE_TIMEOUT", "60"))  # 单次话题抓取的总超时（秒）
READY_TIMEOUT = float(os.getenv("XHS_READY_TIMEOUT", "30"))  # 等待 __INITIAL_STATE__ 出现的超时（秒）
STABLE_TIMEOUT = float(os.getenv("XHS_STABLE_TIMEOUT", "10"))  # 等待页面稳定的超时（秒）
SETTLE_DELAY = float(os.getenv("XHS_SETTLE_DELAY", "2"))  # 状态就绪后额外等待的时间（秒）
POLL_INTERVAL = float(os.getenv("XHS_POLL_INTERVAL", "0.5"))  # 轮询页面状态的间隔（秒）

EXCERPT_LIMIT = 500  # 解析失败时日志/异常中保留的原始数据长度上限

BROWSER = os.getenv("XHS_BROWSER", "firefox").strip().lower()  # 浏览器类型：firefox 或 chrome
HEADLESS = _get_bool_env("XHS_HEADLESS", True)  # 是否使用无头模式
WINDOW_SIZE = (1280, 900)  # 浏览器窗口大小

MAX_CONCURRENT_PAGES = int(os.getenv("XHS_MAX_CONCURRENT_PAGES", "2"))  # 同时打开的页面数上限
