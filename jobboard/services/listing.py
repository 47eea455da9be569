"""Public job search: pure filtering and page slicing over already-loaded jobs."""
import math
from dataclasses import dataclass, field
from typing import Iterable, Protocol, TypeVar


class Searchable(Protocol):
    title: str
    location: str
    category: str


J = TypeVar("J", bound=Searchable)


@dataclass(frozen=True)
class JobFilter:
    """
    Search criteria, combined with AND.

    Empty ``categories``/``locations`` and blank search strings match every job.
    """

    categories: frozenset[str] = field(default_factory=frozenset)
    locations: frozenset[str] = field(default_factory=frozenset)
    title: str = ""
    location_query: str = ""

    @classmethod
    def build(
        cls,
        categories: Iterable[str] | None = None,
        locations: Iterable[str] | None = None,
        title: str | None = None,
        location_query: str | None = None,
    ) -> "JobFilter":
        return cls(
            categories=frozenset(categories or ()),
            locations=frozenset(locations or ()),
            title=(title or "").strip(),
            location_query=(location_query or "").strip(),
        )

    def matches(self, job: Searchable) -> bool:
        if self.categories and job.category not in self.categories:
            return False
        if self.locations and job.location not in self.locations:
            return False
        if self.title and self.title.lower() not in (job.title or "").lower():
            return False
        if self.location_query and self.location_query.lower() not in (job.location or "").lower():
            return False
        return True


def filter_jobs(jobs: Iterable[J], criteria: JobFilter) -> list[J]:
    """Keep jobs matching ``criteria``, preserving input order."""
    return [job for job in jobs if criteria.matches(job)]


def page_count(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def paginate(jobs: list[J], page: int, page_size: int = 6) -> list[J]:
    """1-based page slice; pages past the end are empty."""
    if page < 1 or page_size < 1:
        return []
    start = (page - 1) * page_size
    return jobs[start:start + page_size]
