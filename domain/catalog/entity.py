"""
Course catalog - immutable course name to price mapping.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from domain.common.exceptions import DomainValidationException


@dataclass(frozen=True)
class Course:
    """A purchasable course; price is in whole currency units."""

    name: str
    price: int

    def __post_init__(self):
        if not self.name:
            raise DomainValidationException("Course name must not be empty", field="name")
        # bool is an int subclass; reject it explicitly
        if isinstance(self.price, bool) or not isinstance(self.price, int) or self.price <= 0:
            raise DomainValidationException(
                f"Course price must be a positive integer: {self.price!r}",
                field="price",
                details={"course": self.name},
            )

    @property
    def amount_minor_units(self) -> int:
        """Price converted to the gateway's minor units (paise)."""
        return self.price * 100


@dataclass(frozen=True)
class CourseCatalog:
    """
    Read-only course catalog built once at startup.

    Business rules:
    1. Course names are unique
    2. Prices are positive integers in whole currency units
    3. The mapping is never mutated after construction
    """

    _prices: Mapping[str, int] = field(repr=False)

    @classmethod
    def from_courses(cls, courses: Iterable[Course]) -> "CourseCatalog":
        prices: dict[str, int] = {}
        for course in courses:
            if course.name in prices:
                raise DomainValidationException(
                    f"Duplicate course name: {course.name}",
                    field="name",
                    details={"course": course.name},
                )
            prices[course.name] = course.price
        return cls(_prices=MappingProxyType(prices))

    def get(self, name: Optional[str]) -> Optional[Course]:
        if not name:
            return None
        price = self._prices.get(name)
        if price is None:
            return None
        return Course(name=name, price=price)

    def __contains__(self, name: object) -> bool:
        return name in self._prices

    def __iter__(self) -> Iterator[str]:
        return iter(self._prices)

    def __len__(self) -> int:
        return len(self._prices)

    @property
    def names(self) -> list[str]:
        return list(self._prices)
