"""Summary counts over houses and resources.

Each variant is split into a per-document projection and a reduction over the
projected tallies. Both stages only read their inputs, and the reduction of an
empty sequence is an all-zero record.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from mohalla.models.member import is_child_age
from mohalla.schemas.house import HouseOverviewStats
from mohalla.schemas.resource import ResourceCategoryStat, ResourceOverview, ResourceStats
from mohalla.services.predicates import MISSING, resolve_path

HAFIZ = "Hafiz"
ULMA = "Ulma"


def _field(document: Any, name: str, default: Any = None) -> Any:
    value = resolve_path(document, name)
    if value is None or value is MISSING:
        return default
    return value


@dataclass(frozen=True)
class HouseTally:
    members: int = 0
    adults: int = 0
    children: int = 0
    hafiz: int = 0
    ulma: int = 0
    taleem: bool = False
    mashwara: bool = False


def project_house(house: Any) -> HouseTally:
    members = list(_field(house, "members", []))
    ages = [_field(member, "age") for member in members]
    occupations = Counter(_field(member, "occupation") for member in members)
    children = len([age for age in ages if is_child_age(age)])
    return HouseTally(
        members=len(members),
        adults=len([age for age in ages if age is not None and not is_child_age(age)]),
        children=children,
        hafiz=occupations[HAFIZ],
        ulma=occupations[ULMA],
        taleem=bool(_field(house, "taleem", False)),
        mashwara=bool(_field(house, "mashwara", False)),
    )


def reduce_house_tallies(tallies: Iterable[HouseTally]) -> HouseOverviewStats:
    stats = HouseOverviewStats()
    for tally in tallies:
        stats.total_houses += 1
        stats.total_members += tally.members
        stats.total_adults += tally.adults
        stats.total_children += tally.children
        stats.total_hafiz += tally.hafiz
        stats.total_ulma += tally.ulma
        stats.houses_with_taleem += int(tally.taleem)
        stats.houses_with_mashwara += int(tally.mashwara)
    return stats


def overview_stats(houses: Iterable[Any]) -> HouseOverviewStats:
    return reduce_house_tallies(project_house(house) for house in houses)


@dataclass(frozen=True)
class ResourceTally:
    category: str
    downloads: int = 0
    views: int = 0
    size: int = 0


def project_resource(resource: Any) -> ResourceTally:
    return ResourceTally(
        category=_field(resource, "category", "Other"),
        downloads=_field(resource, "download_count", 0),
        views=_field(resource, "view_count", 0),
        size=_field(resource, "file_size", 0),
    )


def reduce_resource_tallies(tallies: Iterable[ResourceTally]) -> ResourceStats:
    overview = ResourceOverview()
    counts: Counter[str] = Counter()
    downloads: Counter[str] = Counter()
    for tally in tallies:
        overview.total_resources += 1
        overview.total_downloads += tally.downloads
        overview.total_views += tally.views
        overview.total_size += tally.size
        counts[tally.category] += 1
        downloads[tally.category] += tally.downloads

    overview.categories = sorted(counts)
    category_stats = [
        ResourceCategoryStat(category=category, count=count, total_downloads=downloads[category])
        for category, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    ]
    return ResourceStats(overview=overview, category_stats=category_stats)


def resource_stats(resources: Iterable[Any]) -> ResourceStats:
    return reduce_resource_tallies(project_resource(resource) for resource in resources)
