"""
Locate values inside the page's ``window.__INITIAL_STATE__`` tree.

The state tree is not under our control: keys move between page builds and
some slices are wrapped in an observable-like container whose payload sits
under ``value`` or ``_value``.

Lookups run against the live page. :data:`NODE_SCRIPT` reports the kind of
one node (missing, null, object, ...) and :data:`LEAF_SCRIPT` serialises a
single resolved value, so nothing outside the requested path is ever turned
into JSON. The container policy and the diagnostic walk stay in Python.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

STATE_ROOT = "window.__INITIAL_STATE__"

# Keys under which a wrapped slice keeps its payload, checked in order.
CONTAINER_KEYS: Tuple[str, ...] = ("value", "_value")

STATE_READY_SCRIPT = "return window.__INITIAL_STATE__ !== undefined;"

# arguments: key path from the root, keys to probe, whether to list own keys.
# Probed keys use ``node[key] !== undefined`` so getters on a Vue ref count.
NODE_SCRIPT = """
const path = arguments[0];
const probe = arguments[1] || [];
const withKeys = arguments[2];
let node = window.__INITIAL_STATE__;
for (const key of path) {
  if (node === undefined || node === null || typeof node !== "object") {
    node = undefined;
    break;
  }
  node = node[key];
}
const info = {kind: "missing", keys: [], present: []};
if (node === null) {
  info.kind = "null";
} else if (Array.isArray(node)) {
  info.kind = "array";
} else if (typeof node === "object") {
  info.kind = "object";
  info.present = probe.filter(function (key) { return node[key] !== undefined; });
  if (withKeys) {
    info.keys = Object.keys(node);
  }
} else if (node !== undefined) {
  info.kind = "scalar";
}
return JSON.stringify(info);
"""

# arguments: key path from the root. Empty string when the value is absent or null.
LEAF_SCRIPT = """
let node = window.__INITIAL_STATE__;
for (const key of arguments[0]) {
  if (node === undefined || node === null) {
    return "";
  }
  node = node[key];
}
if (node === undefined || node === null) {
  return "";
}
return JSON.stringify(node);
"""


@dataclass(frozen=True)
class StatePath:
    """
    Where a value lives in the state tree.

    ``segments`` are walked from the root, the node they lead to is unwrapped
    through the first key of :data:`CONTAINER_KEYS` it holds, and ``field``
    (if any) is read from the unwrapped payload.
    """

    segments: Tuple[str, ...]
    field: Optional[str] = None

    @property
    def dotted(self) -> str:
        parts = list(self.segments)
        if self.field:
            parts.append(self.field)
        return ".".join(parts)


@dataclass(frozen=True)
class NodeInfo:
    """Shape of one node of the live state tree, as reported by NODE_SCRIPT."""

    kind: str
    keys: Tuple[str, ...] = ()
    present: Tuple[str, ...] = ()

    @property
    def exists(self) -> bool:
        return self.kind != "missing"

    @property
    def has_data(self) -> bool:
        return self.kind not in ("missing", "null")


@dataclass(frozen=True)
class Diagnostic:
    """What a failed lookup found instead of the expected value."""

    path: str
    missing_segment: Optional[str] = None
    resolved_path: str = STATE_ROOT
    available_keys: Tuple[str, ...] = ()
    # the segment is there but holds null
    null_segment: bool = False

    @property
    def empty(self) -> bool:
        """True when the whole path exists but its payload is empty."""
        return self.missing_segment is None

    def describe(self) -> str:
        if self.empty:
            return f"{self.path}: structure present, data empty"
        if self.missing_segment == STATE_ROOT:
            return f"{STATE_ROOT} does not exist"
        if self.null_segment:
            return f"{self.resolved_path}.{self.missing_segment} is present but null"
        keys = ", ".join(self.available_keys) or "<none>"
        return (
            f"{self.resolved_path}.{self.missing_segment} does not exist, "
            f"{self.resolved_path} keys: {keys}"
        )


def container_key(present: Iterable[str]) -> Optional[str]:
    """Pick the wrapper key to unwrap through, or None for an unwrapped node."""
    present = set(present)
    for key in CONTAINER_KEYS:
        if key in present:
            return key
    return None


async def describe_node(
    page, keys: Sequence[str], probe: Sequence[str] = (), with_keys: bool = False
) -> NodeInfo:
    raw = await page.evaluate(NODE_SCRIPT, list(keys), list(probe), with_keys)
    data = json.loads(raw) if raw else {}
    return NodeInfo(
        kind=data.get("kind", "missing"),
        keys=tuple(str(key) for key in data.get("keys") or ()),
        present=tuple(data.get("present") or ()),
    )


async def locate(page, path: StatePath) -> str:
    """
    Return the value at ``path`` as JSON text.

    An empty string means the path did not resolve or resolved to null; use
    :func:`diagnose` to find out which.
    """
    node = await describe_node(page, path.segments, CONTAINER_KEYS)
    if not node.has_data:
        logger.debug("State lookup of %s stopped at a %s node", path.dotted, node.kind)
        return ""
    leaf = list(path.segments)
    wrapper = container_key(node.present)
    if wrapper:
        leaf.append(wrapper)
    if path.field:
        leaf.append(path.field)
    return await page.evaluate(LEAF_SCRIPT, leaf) or ""


async def diagnose(page, path: StatePath) -> Diagnostic:
    """Walk ``path`` in the page one segment at a time and report the first gap."""
    dotted = path.dotted
    parent = await describe_node(page, (), with_keys=True)
    if not parent.has_data:
        return Diagnostic(path=dotted, missing_segment=STATE_ROOT, resolved_path="window")

    walked = []
    resolved = STATE_ROOT
    node = parent
    for segment in path.segments:
        walked.append(segment)
        node = await describe_node(page, walked, CONTAINER_KEYS, with_keys=True)
        if not node.has_data:
            return Diagnostic(
                path=dotted,
                missing_segment=segment,
                resolved_path=resolved,
                available_keys=parent.keys,
                null_segment=node.exists,
            )
        parent = node
        resolved = f"{resolved}.{segment}"

    payload = node
    wrapper = container_key(node.present)
    if wrapper:
        walked.append(wrapper)
        payload = await describe_node(page, walked, with_keys=True)
        if not payload.has_data:
            return Diagnostic(path=dotted, resolved_path=resolved)
        resolved = f"{resolved}.{wrapper}"

    if path.field:
        walked.append(path.field)
        leaf = await describe_node(page, walked)
        if not leaf.exists:
            return Diagnostic(
                path=dotted,
                missing_segment=path.field,
                resolved_path=resolved,
                available_keys=payload.keys,
            )
    return Diagnostic(path=dotted, resolved_path=resolved)
