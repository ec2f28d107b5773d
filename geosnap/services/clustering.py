from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from math import floor
from typing import Iterable, List, Optional, Sequence

from geosnap.utils.geo import is_valid_coordinate


logger = logging.getLogger(__name__)

# Axis-aligned box half-width in degrees (~200m at the equator).
GROUP_THRESHOLD_DEG = 0.002


@dataclass(frozen=True)
class PhotoPoint:
    id: int
    latitude: float
    longitude: float
    rating: int = 0
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    image: str = ""

    @classmethod
    def from_model(cls, photo) -> "PhotoPoint":
        return cls(
            id=photo.id,
            latitude=photo.latitude,
            longitude=photo.longitude,
            rating=photo.rating or 0,
            address=photo.address,
            created_at=photo.created_at,
            image=photo.image,
        )


@dataclass
class PhotoGroup:
    latitude: float
    longitude: float
    label: Optional[str]
    photos: List[PhotoPoint] = field(default_factory=list)
    average_rating: int = 0

    @property
    def count(self) -> int:
        return len(self.photos)


def round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


def average_rating(ratings: Iterable[int]) -> int:
    """Rounded mean of the positive ratings; unrated (0) entries are ignored."""
    rated = [r for r in ratings if r and r > 0]
    if not rated:
        return 0
    return round_half_up(sum(rated) / len(rated))


def _newest_first(photos: List[PhotoPoint]) -> List[PhotoPoint]:
    # sorted() is stable with reverse=True, so equal timestamps keep input order
    return sorted(photos, key=lambda p: p.created_at or datetime.min, reverse=True)


def is_near(a: PhotoPoint, b: PhotoPoint, threshold: float = GROUP_THRESHOLD_DEG) -> bool:
    return (abs(a.latitude - b.latitude) < threshold
            and abs(a.longitude - b.longitude) < threshold)


def drop_invalid(photos: Sequence[PhotoPoint]) -> List[PhotoPoint]:
    kept: List[PhotoPoint] = []
    for p in photos:
        if is_valid_coordinate(p.latitude, p.longitude):
            kept.append(p)
        else:
            logger.warning("skipping photo %s with invalid coordinates (%r, %r)",
                           p.id, p.latitude, p.longitude)
    return kept


def group_indices(photos: Sequence[PhotoPoint], threshold: float = GROUP_THRESHOLD_DEG) -> List[List[int]]:
    """Greedy seed-then-scan grouping.

    Each unused photo, taken in input order, seeds a group and absorbs every
    other unused photo inside the seed's box. Membership is tested against the
    seed only, so the result depends on input order.
    """
    n = len(photos)
    used = [False] * n
    groups: List[List[int]] = []
    for seed in range(n):
        if used[seed]:
            continue
        used[seed] = True
        members = [seed]
        for other in range(n):
            if used[other]:
                continue
            if is_near(photos[seed], photos[other], threshold):
                members.append(other)
                used[other] = True
        groups.append(members)
    return groups


def cluster_photos(
    photos: Sequence[PhotoPoint], threshold: float = GROUP_THRESHOLD_DEG
) -> List[PhotoGroup]:
    valid = drop_invalid(photos)
    groups: List[PhotoGroup] = []
    for idxs in group_indices(valid, threshold):
        seed = valid[idxs[0]]
        members = [valid[i] for i in idxs]
        groups.append(PhotoGroup(
            latitude=seed.latitude,
            longitude=seed.longitude,
            label=seed.address,
            photos=_newest_first(members),
            average_rating=average_rating(p.rating for p in members),
        ))
    logger.debug("clustered %d photos into %d groups", len(valid), len(groups))
    return groups
