"""
Logging helpers for facet estimation.

Every record an estimation emits carries the query text and the sample
size as ``extra`` fields, so log pipelines can group the warnings and the
per-query summary of one estimation together.
"""

import logging
from typing import Any


class FacetsLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds estimation context to all log messages.

    Caller-supplied ``extra`` keys win over the adapter's context.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Add extra context to log record."""
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra", {}))
        kwargs["extra"] = extra
        return msg, kwargs
