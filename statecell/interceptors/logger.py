"""
Logger middleware: log every action and the state it produced.
"""

import logging
import time
from typing import Any, Callable, Optional

from ..core.actions import action_type_of
from ..core.canonical import canonical_json_str
from ..core.middleware import Dispatch, MiddlewareAPI
from ..logging_config import get_logger


def create_logger(
    name: str = "statecell.actions",
    level: int = logging.INFO,
    log_state: bool = True,
    store_id: Optional[str] = None,
) -> Callable[[MiddlewareAPI], Callable[[Dispatch], Dispatch]]:
    """
    Build a logger middleware.

    Args:
        name: Logger name
        level: Level used for the per-action lines
        log_state: Include canonical JSON of the next state
        store_id: Correlation id attached to each record

    Returns:
        Middleware
    """
    log = get_logger(name, store_id=store_id)

    def middleware(api: MiddlewareAPI) -> Callable[[Dispatch], Dispatch]:
        def link(next_dispatch: Dispatch) -> Dispatch:
            def handle(action: Any) -> Any:
                if callable(action):
                    action_type = "<function>"
                else:
                    action_type = action_type_of(action)
                log.log(level, "dispatching %s", action_type)

                started = time.perf_counter()
                result = next_dispatch(action)
                elapsed_ms = (time.perf_counter() - started) * 1000

                if log_state:
                    log.log(
                        level,
                        "next state after %s (%.2f ms): %s",
                        action_type,
                        elapsed_ms,
                        canonical_json_str(api.get_state()),
                    )
                else:
                    log.log(level, "dispatched %s (%.2f ms)", action_type, elapsed_ms)
                return result

            return handle

        return link

    return middleware


logger = create_logger()
