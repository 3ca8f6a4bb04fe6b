from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

log = logging.getLogger(__name__)

ARTICLE_VIEW = "ArticleHandler::view"
PREPRINT_VIEW = "PreprintHandler::view"
REFERENCES = "GoogleScholarPlugin::references"

# (hook_name, args) -> True to stop further handlers
HookCallback = Callable[[str, list[Any]], bool]


class HookRegistry:
    """Named extension points; callbacks run in registration order."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookCallback]] = defaultdict(list)

    def add(self, name: str, callback: HookCallback) -> None:
        self._hooks[name].append(callback)

    def callbacks(self, name: str) -> list[HookCallback]:
        return list(self._hooks.get(name, ()))

    def call(self, name: str, *args: Any) -> bool:
        """
        Dispatch *name*. Returns True when a callback handled it
        (and stopped dispatch), False otherwise.
        """
        arg_list = list(args)
        for cb in self.callbacks(name):
            if cb(name, arg_list):
                log.debug("hook %s handled by %r", name, cb)
                return True
        return False
