"""Motion domain model.

A motion is the immutable record of what is being decided, who
proposed it and who is eligible to ultimately vote on it. It is created
once, before any procedure begins, and never mutated thereafter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from motionflow.domain.models.roster import PersonId


@dataclass(frozen=True, eq=True)
class Motion:
    """A proposed action subject to the staged procedure.

    No validation is performed on the voter sets: developers and electors
    may overlap or be disjoint. An empty developer set is legal and makes
    an anonymous motion, which can never leave the Prototype stage.

    Attributes:
        title: Short title.
        description: Full text of the motion.
        developers: Ids of the motion's developers (may be empty).
        electors: Ids of everyone affected by the motion, who vote on it.
        motion_id: Unique identifier of this motion.
    """

    title: str
    description: str
    developers: tuple[PersonId, ...] = field(default_factory=tuple)
    electors: tuple[PersonId, ...] = field(default_factory=tuple)
    motion_id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        """Normalise voter sequences to tuples."""
        if not isinstance(self.developers, tuple):
            object.__setattr__(self, "developers", tuple(self.developers))
        if not isinstance(self.electors, tuple):
            object.__setattr__(self, "electors", tuple(self.electors))

    @property
    def dev_count(self) -> int:
        """Number of developers."""
        return len(self.developers)

    @property
    def elector_count(self) -> int:
        """Number of electors."""
        return len(self.electors)

    @property
    def is_anonymous(self) -> bool:
        """True if the motion has no developers."""
        return not self.developers

    def __str__(self) -> str:
        # Developers and electorate are not displayed
        return f"{self.title}\n\n{self.description}"
