"""
motionflow - Staged Deliberative Decision Procedure

A motion moves through four stages before it becomes binding:
drafting among its developers (Prototype), public debate until a
fixed deadline (Proposal), approval by a random sample of electors
(Petition) and a general vote of the whole electorate (Referendum).

Procedural Truths:
- A stage is only left after its majority (or deadline) is met
- Transitions are one-way and consume the previous stage
- Every voter votes at most once per stage
- A refused transition loses nothing
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
