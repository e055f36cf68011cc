"""Release index for World Imagery Wayback.

Components:
- ReleaseRecord: Immutable description of one wayback release
- ReleaseDate / extract_release_date: Release date derived from a release title
- is_valid_release_entry: Structural check of raw configuration entries
- ReleaseIndex: Ordered timeline with release-number and previous-release lookups

Usage:
    from wayback_core.releases import ReleaseIndex

    index = ReleaseIndex(http_client, settings)
    newest = index.get_timeline()[0]
    older = index.get_previous_release_number(newest.release_num)
"""

from .release_models import (
    ReleaseRecord, ReleaseDate, extract_release_date, is_valid_release_entry
)
from .release_index import ReleaseIndex

__all__ = [
    'ReleaseRecord', 'ReleaseDate', 'extract_release_date', 'is_valid_release_entry',
    'ReleaseIndex'
]
