"""
Cache Statistics

Read-only view over an ObjectCache instance: hit/miss counters, routing
state and the size of every locally held entry.
"""

from typing import TYPE_CHECKING, Any

import orjson

if TYPE_CHECKING:
    from object_cache.infrastructure.cache.cache_manager import ObjectCache


def entry_size_kb(value: Any) -> float:
    """Approximate serialized size of a value in kilobytes."""
    try:
        size = len(orjson.dumps(value))
    except TypeError:
        size = len(repr(value).encode("utf-8"))
    return round(size / 1024, 2)


class StatsReporter:
    """
    Builds statistics snapshots and the human-readable report.

    Usage:
        reporter = StatsReporter(cache)
        reporter.snapshot()["hit_rate"]
        print(reporter.render())
    """

    def __init__(self, cache: "ObjectCache"):
        self._cache = cache

    def snapshot(self) -> dict[str, Any]:
        """
        Collect current counters and routing state.

        Returns:
            Dict with hit/miss counts, hit rate, remote status and local
            entry sizes
        """
        hits = self._cache.cache_hits
        misses = self._cache.cache_misses
        total = hits + misses
        status = self._cache.remote_status
        local = self._cache.local

        return {
            "cache_hits": hits,
            "cache_misses": misses,
            "total_requests": total,
            "hit_rate": round(hits / total, 4) if total else 0.0,
            "remote_available": status.available,
            "degraded_reason": status.reason,
            "tenant_prefix": self._cache.tenant_prefix,
            "local_entries": local.size(),
            "local_sizes_kb": {key: entry_size_kb(value) for key, value in local.items()},
        }

    def render(self) -> str:
        """Plain-text report, one local entry per line."""
        stats = self.snapshot()
        lines = [
            f"Cache Hits: {stats['cache_hits']}",
            f"Cache Misses: {stats['cache_misses']}",
            f"Using Redis? {'yes' if stats['remote_available'] else 'no'}",
        ]
        if stats["degraded_reason"]:
            lines.append(f"Degraded: {stats['degraded_reason']}")

        lines.append("Local entries:")
        for key, size in stats["local_sizes_kb"].items():
            lines.append(f"  {key} - {size:.2f} kb")

        return "\n".join(lines)
