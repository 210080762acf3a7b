"""
Analysis Cache - Skip re-analysis of content we've already seen.

Keyed by a SHA-256 hash of the content input (text, type and metadata), so the
same submission returns the stored ContentAnalysis instantly. Entries expire
after a TTL and the oldest are evicted past max_entries (LRU). Writing an
existing key overwrites it.
"""
import asyncio
import hashlib
import json
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from config import settings
from models.content import ContentAnalysis, ContentInput


def content_hash(content: ContentInput) -> str:
    """Stable hash of everything that can change the analysis result."""
    payload = json.dumps(
        {
            "content": content.content,
            "type": content.type.value,
            "metadata": content.metadata.model_dump(),
        },
        sort_keys=True,
    )
    return hashlib.sha256(payload.encode()).hexdigest()


@dataclass
class CachedAnalysis:
    analysis: ContentAnalysis
    created_at: float = field(default_factory=time.time)


class AnalysisCache:
    """TTL + LRU cache for content analyses.

    - Expires entries after TTL seconds
    - Also expires oldest entries when max_entries exceeded
    - Key is hash of (content, type, metadata)
    """

    def __init__(self, ttl_seconds: int = 1800, max_entries: int = 100):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._cache: "OrderedDict[str, CachedAnalysis]" = OrderedDict()
        self._lock = asyncio.Lock()
        self.hits = 0
        self.misses = 0

    def _expired(self, entry: CachedAnalysis, now: float) -> bool:
        return now - entry.created_at > self.ttl_seconds

    async def get(self, content: ContentInput) -> Optional[ContentAnalysis]:
        """Get cached analysis if it exists and has not expired."""
        async with self._lock:
            key = content_hash(content)

            entry = self._cache.get(key)
            if entry is None:
                self.misses += 1
                return None

            if self._expired(entry, time.time()):
                del self._cache[key]
                self.misses += 1
                return None

            # Move to end (LRU touch)
            self._cache.move_to_end(key)
            self.hits += 1
            return entry.analysis

    async def set(self, content: ContentInput, analysis: ContentAnalysis) -> None:
        async with self._lock:
            key = content_hash(content)
            self._cache.pop(key, None)

            # Evict oldest if at capacity
            while self._cache and len(self._cache) >= self.max_entries:
                self._cache.popitem(last=False)

            self._cache[key] = CachedAnalysis(analysis=analysis)

    async def clear(self) -> int:
        async with self._lock:
            count = len(self._cache)
            self._cache.clear()
            return count

    async def cleanup_expired(self) -> int:
        """Remove all expired entries. Returns count removed."""
        async with self._lock:
            now = time.time()
            expired = [k for k, v in self._cache.items() if self._expired(v, now)]
            for key in expired:
                del self._cache[key]
            return len(expired)

    def stats(self) -> Dict[str, Any]:
        now = time.time()
        valid_count = sum(1 for v in self._cache.values() if not self._expired(v, now))
        return {
            "total_entries": len(self._cache),
            "valid_entries": valid_count,
            "expired_entries": len(self._cache) - valid_count,
            "hits": self.hits,
            "misses": self.misses,
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
        }


# Singleton instance
analysis_cache = AnalysisCache(
    ttl_seconds=settings.cache_ttl_seconds,
    max_entries=settings.cache_max_entries,
)
