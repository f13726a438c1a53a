"""Root of the motionflow exception hierarchy."""


class MotionflowError(Exception):
    """Base class of every error raised by motionflow.

    Catching MotionflowError catches refused votes, refused transitions,
    roster errors and procedure lifecycle errors, but never configuration
    ValueErrors.
    """

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
