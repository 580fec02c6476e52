#!/usr/bin/env python3
"""
Movie record and field-name mapping

Storage uses camelCase keys (yearOfRelease, imdbRating); attributes are
snake_case. Both spellings are accepted wherever a field name is given.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Storage key -> attribute name
STORAGE_TO_ATTR = {
    'id': 'id',
    'title': 'title',
    'director': 'director',
    'yearOfRelease': 'year_of_release',
    'genre': 'genre',
    'imdbRating': 'imdb_rating',
}
ATTR_TO_STORAGE = {attr: key for key, attr in STORAGE_TO_ATTR.items()}

# Fields matched by free-text search
SEARCH_FIELDS = ('title', 'director', 'genre')


def resolve_field(name: str) -> Optional[str]:
    """Map a storage key or attribute name to the attribute name, None if unknown"""
    if name in STORAGE_TO_ATTR:
        return STORAGE_TO_ATTR[name]
    if name in ATTR_TO_STORAGE:
        return name
    return None


@dataclass
class Movie:
    """One catalog entry"""
    id: Optional[int] = None  # stored records may lack one; they load but never match an id lookup
    title: Any = None
    director: Any = None
    year_of_release: Any = None  # int from the CLI, text from OMDb ("2019–2020")
    genre: Any = None
    imdb_rating: Any = None
    # Stored keys that are not Movie fields, written back unchanged
    extra: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default=None):
        """Field value by storage key or attribute name"""
        attr = resolve_field(name)
        if attr is not None:
            return getattr(self, attr)
        return self.extra.get(name, default)

    def has_field(self, name: str) -> bool:
        return resolve_field(name) is not None or name in self.extra

    def merge(self, fields: Dict[str, Any]) -> None:
        """Overlay the given fields; unmentioned fields keep their values. id is never changed."""
        for name, value in fields.items():
            attr = resolve_field(name)
            if attr == 'id':
                continue
            if attr is not None:
                setattr(self, attr, value)
            else:
                self.extra[name] = value

    def to_dict(self) -> Dict[str, Any]:
        record = {key: getattr(self, attr) for key, attr in STORAGE_TO_ATTR.items()}
        if self.id is None:
            del record['id']
        record.update(self.extra)
        return record

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> 'Movie':
        known = {}
        extra = {}
        for key, value in record.items():
            # Only storage spellings map to fields; anything else is kept verbatim
            attr = STORAGE_TO_ATTR.get(key)
            if attr is not None:
                known[attr] = value
            else:
                extra[key] = value
        return cls(extra=extra, **known)
