"""Metrics hook protocol and no-op default implementation.

The converter reports a handful of data points per call.  A
:class:`NoopMetricsHook` is used unless :attr:`AdfifyConfig.metrics` is
set to an object implementing :class:`MetricsHook`.

Emitted metric names:

* ``adfify.conversions_total``          -- counter
* ``adfify.nodes_created_total``        -- counter (top-level nodes)
* ``adfify.conversion_warnings_total``  -- counter, tagged by ``code``
* ``adfify.conversion_duration_ms``     -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* is an optional ``str -> str`` mapping that implementations may
    translate into labels, tags or name suffixes.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Metrics backend that discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
