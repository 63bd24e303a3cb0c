from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional

from xiaohongshu.errors import EvaluationError, PageTimeoutError
from xiaohongshu.state import LEAF_SCRIPT, NODE_SCRIPT, STATE_READY_SCRIPT

_NO_STATE = object()
_MISSING = object()


class BigInt:
    """A page value JSON.stringify refuses, like a JS BigInt."""

    def __init__(self, value: int):
        self.value = value


class FakePage:
    """
    In-memory stand-in for SeleniumPage.

    Serves a fixed state tree and answers the state scripts the way the
    browser would, walking only the requested path.
    """

    def __init__(self, state: Any = _NO_STATE, ready_after: int = 0):
        self.state = state
        self.ready_after = ready_after
        self.visited: List[str] = []
        self.ready_checks = 0
        self.scripts: List[str] = []

    async def navigate(self, url: str) -> None:
        self.visited.append(url)

    async def wait_stable(self, timeout: float) -> None:
        return None

    async def await_predicate(self, script: str, timeout: float) -> None:
        async def _poll() -> None:
            while not await self.evaluate(script):
                await asyncio.sleep(0.01)

        try:
            await asyncio.wait_for(_poll(), timeout)
        except asyncio.TimeoutError as exc:
            raise PageTimeoutError(f"page not ready after {timeout:.1f} seconds: {script}") from exc

    async def evaluate(self, script: str, *args: Any) -> Any:
        self.scripts.append(script)
        if script == STATE_READY_SCRIPT:
            self.ready_checks += 1
            if self.state is _NO_STATE:
                return False
            return self.ready_checks > self.ready_after
        if script == NODE_SCRIPT:
            path, probe, with_keys = args
            return json.dumps(self._node_info(self._walk(path), probe, with_keys))
        if script == LEAF_SCRIPT:
            node = self._walk(args[0])
            if node is _MISSING or node is None:
                return ""
            try:
                return json.dumps(node, ensure_ascii=False)
            except TypeError as exc:
                raise EvaluationError(f"script failed in page: {exc}") from exc
        raise AssertionError(f"unexpected script: {script}")

    def _walk(self, path: List[str]) -> Any:
        node = _MISSING if self.state is _NO_STATE else self.state
        for key in path:
            if not isinstance(node, dict):
                return _MISSING
            node = node.get(key, _MISSING)
        return node

    @staticmethod
    def _node_info(node: Any, probe: List[str], with_keys: bool) -> Dict[str, Any]:
        info: Dict[str, Any] = {"kind": "missing", "keys": [], "present": []}
        if node is None:
            info["kind"] = "null"
        elif isinstance(node, list):
            info["kind"] = "array"
        elif isinstance(node, dict):
            info["kind"] = "object"
            info["present"] = [key for key in probe if key in node]
            if with_keys:
                info["keys"] = list(node)
        elif node is not _MISSING:
            info["kind"] = "scalar"
        return info


def make_state(
    page_info: Optional[Dict[str, Any]] = None,
    notes: Optional[List[Dict[str, Any]]] = None,
    wrapper: str = "value",
) -> Dict[str, Any]:
    topic: Dict[str, Any] = {}
    if page_info is not None:
        topic["topicData"] = {wrapper: {"pageInfo": page_info}}
    if notes is not None:
        topic["topicNotes"] = {wrapper: notes}
    return {"global": {}, "user": {}, "topic": topic}


COFFEE_INFO = {
    "name": "Coffee",
    "desc": "d",
    "viewNumText": "10万",
    "discussCommentNumText": "200",
}


def make_note(title: str = "t1", **extra: Any) -> Dict[str, Any]:
    note = {
        "type": "normal",
        "title": title,
        "desc": "note desc",
        "user": {"nickname": "bean", "avatarUrl": "https://img.example/a.jpg", "isForbidden": False},
        "interactionInfo": {"likeText": "1.2万", "collectText": "300", "commentText": "45"},
        "createTime": 1700000000000,
        "cursorScore": "1700000000000.0",
    }
    note.update(extra)
    return note
