"""Roster domain models: Person, PersonId and Roster.

A roster is a fixed population. Each member is addressed by a PersonId
equal to their position in the roster; ids are opaque and only valid
against the roster that issued them.

Constraints:
- A roster never reorders or removes members once built (ids are positional)
- A PersonId from roster A must never index roster B
- Ids are fixed-width unsigned 64-bit values, independent of the host
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from uuid import UUID, uuid4

from motionflow.domain.errors.roster import (
    ForeignPersonIdError,
    SampleSizeExceedsPopulationError,
)

# Largest index representable by an unsigned 64-bit id
MAX_PERSON_INDEX = 2**64 - 1


@dataclass(frozen=True, eq=True)
class Person:
    """Data pertaining to a single individual, not necessarily unique.

    Attributes:
        name: Display name.
    """

    name: str


@dataclass(frozen=True, eq=True, order=True)
class PersonId:
    """Opaque handle to a member of exactly one Roster.

    Attributes:
        roster_tag: Tag of the issuing roster.
        index: Position of the person in that roster (unsigned 64-bit).
    """

    roster_tag: UUID
    index: int

    def __post_init__(self) -> None:
        """Validate the index fits an unsigned 64-bit integer."""
        if not 0 <= self.index <= MAX_PERSON_INDEX:
            raise ValueError(
                f"PersonId index must be between 0 and {MAX_PERSON_INDEX}, "
                f"got {self.index}"
            )

    def __repr__(self) -> str:
        return f"PersonId({self.index})"


class Roster:
    """A population, with individuals discriminated by a PersonId.

    The roster is immutable after construction. Sampling uses the
    injected ``random.Random`` so tests can seed it.

    Example:
        >>> roster = Roster.from_names(["Ada", "Brutus", "Cleo"])
        >>> len(roster)
        3
        >>> roster[roster.ids()[0]].name
        'Ada'
    """

    def __init__(
        self,
        persons: Iterable[Person] = (),
        *,
        rng: random.Random | None = None,
    ) -> None:
        """Build a roster.

        Args:
            persons: Members in id order.
            rng: Random source for sampling (defaults to a fresh Random).
        """
        self._persons: tuple[Person, ...] = tuple(persons)
        self._tag: UUID = uuid4()
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_names(
        cls,
        names: Iterable[str],
        *,
        rng: random.Random | None = None,
    ) -> Roster:
        """Build a roster from display names."""
        return cls((Person(name=name) for name in names), rng=rng)

    @property
    def roster_tag(self) -> UUID:
        """Tag carried by every id this roster issues."""
        return self._tag

    def __len__(self) -> int:
        return len(self._persons)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._persons)

    def __contains__(self, person_id: object) -> bool:
        return (
            isinstance(person_id, PersonId)
            and person_id.roster_tag == self._tag
            and person_id.index < len(self._persons)
        )

    def __getitem__(self, person_id: PersonId) -> Person:
        """Look up a person by id.

        Raises:
            ForeignPersonIdError: If the id was issued by another roster.
        """
        if person_id not in self:
            raise ForeignPersonIdError(person_id)
        return self._persons[person_id.index]

    def __str__(self) -> str:
        return "\n".join(person.name for person in self._persons)

    def __repr__(self) -> str:
        return f"Roster(size={len(self._persons)}, tag={self._tag})"

    def _id(self, index: int) -> PersonId:
        return PersonId(roster_tag=self._tag, index=index)

    def ids(self) -> tuple[PersonId, ...]:
        """Return every id in roster order."""
        return tuple(self._id(index) for index in range(len(self._persons)))

    def rand_choice(self) -> PersonId:
        """Return the id of a uniformly random member.

        Raises:
            SampleSizeExceedsPopulationError: If the roster is empty.
        """
        if not self._persons:
            raise SampleSizeExceedsPopulationError(requested=1, population=0)
        return self._id(self._rng.randrange(len(self._persons)))

    def sample(self, n: int) -> tuple[PersonId, ...]:
        """Return ``n`` distinct ids drawn uniformly without replacement.

        Args:
            n: Number of ids to draw.

        Returns:
            Tuple of distinct ids, in draw order.

        Raises:
            ValueError: If n is negative.
            SampleSizeExceedsPopulationError: If n exceeds the roster size.
        """
        if n < 0:
            raise ValueError(f"Sample size must be non-negative, got {n}")
        if n > len(self._persons):
            raise SampleSizeExceedsPopulationError(
                requested=n, population=len(self._persons)
            )
        indices = self._rng.sample(range(len(self._persons)), n)
        return tuple(self._id(index) for index in indices)
