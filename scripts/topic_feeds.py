"""scripts/topic_feeds.py

抓取单个小红书话题页并以 JSON 输出结果：
- 打开话题页，等待 window.__INITIAL_STATE__ 就绪
- 输出话题信息与 Feed 列表
- `--allow-empty`：话题存在但没有 Feed 列表时只打印警告并正常退出

用法（PowerShell）：
    python scripts\\topic_feeds.py 5be0bd2ab6e7e10001b5a7fb --indent 2

"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

# Ensure project root is on sys.path so local packages (xiaohongshu) are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from xiaohongshu.errors import NoFeedsError, TopicError
from xiaohongshu.services import get_topic_feeds

logger = logging.getLogger("xhs_topic.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch topic info and feeds from a xiaohongshu topic page")
    parser.add_argument("topic_id", help="话题ID")
    parser.add_argument("--allow-empty", action="store_true", help="话题没有 Feed 列表时不视为错误")
    parser.add_argument("--indent", type=int, default=None, help="JSON 缩进")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    return parser


async def run(args: argparse.Namespace) -> int:
    try:
        result = await get_topic_feeds(args.topic_id)
    except NoFeedsError as exc:
        if args.allow_empty:
            logger.warning("%s", exc)
            return 0
        logger.error("%s", exc)
        return 1
    except (TopicError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    print(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=args.indent))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
