"""
Request Routing
Classifies an inbound request into the API, static or render stage
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

STATIC_METHODS = frozenset({"GET", "HEAD"})


class RouteStage(str, Enum):
    """Routing stages, in precedence order"""
    API = "api"
    STATIC = "static"
    RENDER = "render"


@dataclass(frozen=True)
class RouteDecision:
    stage: RouteStage
    path: str
    target: str
    static_file: Optional[Path] = None


def is_api_path(path: str, prefix: str = "/api") -> bool:
    """True for the prefix itself and anything below it"""
    if prefix == "/":
        return True
    return path == prefix or path.startswith(prefix + "/")


def normalize_api_path(path: str) -> str:
    """
    Append a trailing slash when the last segment has no file extension.

    /api -> /api/, /api/items -> /api/items/, /api/data.json and /api/x/ are unchanged.
    """
    if path.endswith("/"):
        return path
    last_segment = path.rsplit("/", 1)[-1]
    if "." in last_segment:
        return path
    return path + "/"


def resolve_static(root: Path, path: str) -> Optional[Path]:
    """
    Map a request path onto a regular file under the static root.

    Returns None for directories, missing files and anything that resolves
    outside the root.
    """
    relative = path.lstrip("/")
    if not relative:
        return None

    root = root.resolve()
    try:
        candidate = (root / relative).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_file():
            return None
    except (OSError, RuntimeError, ValueError):
        # ValueError: embedded NUL byte
        return None
    return candidate


def route_request(
    method: str,
    path: str,
    api_prefix: str,
    static_root: Path,
    raw_path: Optional[str] = None
) -> RouteDecision:
    """
    Decide which stage serves the request: API prefix, then static file, then render.

    `path` is the decoded path used for matching. `raw_path` is the path as
    the client sent it; the decision's target is built from it so percent
    escapes reach the backend unchanged.
    """
    target = raw_path if raw_path is not None else path

    if is_api_path(path, api_prefix):
        return RouteDecision(RouteStage.API, path, normalize_api_path(target))

    if method.upper() in STATIC_METHODS:
        static_file = resolve_static(static_root, path)
        if static_file is not None:
            return RouteDecision(RouteStage.STATIC, path, target, static_file)

    return RouteDecision(RouteStage.RENDER, path, target)
