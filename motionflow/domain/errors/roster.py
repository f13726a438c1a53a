"""Roster errors for population lookup and sampling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from motionflow.domain.exceptions import MotionflowError

if TYPE_CHECKING:
    from motionflow.domain.models.roster import PersonId


class RosterError(MotionflowError):
    """Base class for roster errors."""

    pass


class SampleSizeExceedsPopulationError(RosterError):
    """Raised when more unique ids are requested than the population holds.

    This is a configuration error of the caller; retrying with the same
    inputs fails again.

    Attributes:
        requested: Number of ids requested.
        population: Number of people available.
    """

    def __init__(self, requested: int, population: int) -> None:
        self.requested = requested
        self.population = population
        super().__init__(
            f"Cannot sample {requested} unique ids from a population of {population}"
        )


class ForeignPersonIdError(RosterError):
    """Raised when a PersonId is used against a roster that did not issue it.

    Attributes:
        person_id: The foreign identifier.
    """

    def __init__(self, person_id: PersonId) -> None:
        self.person_id = person_id
        super().__init__(
            f"PersonId {person_id.index} was issued by roster {person_id.roster_tag}"
        )
