"""
Cache metadata collected while the client tree adds its data.

Each client may add tags that describe what its output depends on and may
tighten the expiry date. The aggregated metadata of the root client is handed
to the output cache, which uses the tags for invalidation and the expiry date
for the lifetime of the stored entry.
"""

from datetime import datetime
from typing import Any, Iterable, Optional

from django.utils import timezone


class CacheMetadata:
    """
    Monotonic accumulator of cache tags and the earliest expiry date.

    Tags only grow (set union) and the expiry only moves to earlier dates
    (minimum). An expiry of None means no client restricted the lifetime.
    """

    def __init__(self, tags: Optional[Iterable[str]] = None, expire: Optional[datetime] = None):
        self._tags: set[str] = set()
        self._expire: Optional[datetime] = None

        self.add_tags(tags or [])
        self.expire_at(expire)

    @property
    def tags(self) -> frozenset:
        return frozenset(self._tags)

    @property
    def expire(self) -> Optional[datetime]:
        return self._expire

    def add_tag(self, tag: str) -> None:
        self._tags.add(str(tag))

    def add_tags(self, tags: Iterable[str]) -> None:
        for tag in tags:
            self.add_tag(tag)

    def expire_at(self, expire: Optional[datetime]) -> None:
        """
        Tighten the expiry date.

        Args:
            expire: Date the output becomes invalid, None for no restriction
        """
        if expire is None:
            return

        if self._expire is None or expire < self._expire:
            self._expire = expire

    def add_item(self, domain: str, item: Any) -> None:
        """
        Add the tags and expiry date for a domain item shown in the output.

        Adds the generic domain tag (e.g. "supplier") and the item specific
        tag (e.g. "supplier:42"). If the item has a "date_end" in the future,
        the output must expire when the item does.

        Args:
            domain: Domain name of the item, e.g. "supplier" or "product"
            item: Domain object with an "id" and an optional "date_end" attribute
        """
        self.add_tag(domain)
        self.add_tag(f"{domain}:{item.id}")

        date_end = getattr(item, 'date_end', None)
        if date_end is not None and date_end > timezone.now():
            self.expire_at(date_end)

    def add_items(self, domain: str, items: Iterable[Any]) -> None:
        for item in items:
            self.add_item(domain, item)

    def merge(self, other: "CacheMetadata") -> "CacheMetadata":
        """Merge the tags and expiry of another metadata object into this one."""
        self.add_tags(other.tags)
        self.expire_at(other.expire)
        return self

    def __repr__(self) -> str:
        return f"CacheMetadata(tags={sorted(self._tags)!r}, expire={self._expire!r})"
