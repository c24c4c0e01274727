"""Logging setup with contextual dimensions.

``logger`` is the process-wide base logger. Request handlers and services derive
child loggers with ``with_context`` so every line carries the request id and the
acting identity.
"""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from familytree.core.config import settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a prefix and a set of context dimensions.

    Dimensions are appended to each message as ``key=value`` pairs and are also
    attached to the record as ``extra`` so structured handlers can pick them up.
    """

    def __init__(
        self,
        logger: logging.Logger,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(logger, dimensions or {})
        self.prefix = prefix
        self.dimensions: Dict[str, Any] = dict(dimensions or {})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping]:
        extra = dict(kwargs.get("extra") or {})
        extra.update(self.dimensions)
        kwargs["extra"] = extra
        if self.dimensions:
            dims = " ".join(f"{k}={v}" for k, v in self.dimensions.items())
            return f"{self.prefix}{msg} [{dims}]", kwargs
        return f"{self.prefix}{msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a child logger with additional dimensions."""
        merged = {**self.dimensions, **{k: v for k, v in dimensions.items() if v is not None}}
        return ContextualLogger(self.logger, prefix=self.prefix, dimensions=merged)


def _configure_root_logger() -> logging.Logger:
    base = logging.getLogger("familytree")
    if not base.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        base.addHandler(handler)
    base.setLevel(settings.LOG_LEVEL)
    base.propagate = False
    return base


logger = ContextualLogger(_configure_root_logger())
