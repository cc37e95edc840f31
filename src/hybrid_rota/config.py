from dataclasses import dataclass, field
from typing import Literal, Optional, TypeAlias

from hybrid_rota.errors import ValidationError

Rounding: TypeAlias = Literal["ceil", "half_up"]
Strategy: TypeAlias = Literal["random", "balanced"]

ROUNDING_POLICIES: tuple[str, ...] = ("ceil", "half_up")
STRATEGIES: tuple[str, ...] = ("random", "balanced")

DEFAULT_WORKDAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
)


@dataclass
class Config:

    # Calendar shape
    WEEKS: int = 1
    WORKDAYS: list[str] = field(default_factory=lambda: list(DEFAULT_WORKDAYS))

    ### RATIO ###

    # Days in the office out of WORKWEEK_LENGTH; the rest are WFH days
    DAYS_AT_WORK: int = 3
    WORKWEEK_LENGTH: int = 5

    # Daily head-count that should be in the office (checked, not enforced)
    MIN_OFFICE_ATTENDANCE: int = 1

    ### GENERATOR ###

    # "ceil" mirrors "assign until counter >= target"; "half_up" rounds to nearest
    ROUNDING: Rounding = "ceil"

    # Random draws per placement = total slots * RETRY_FACTOR, then round-robin fill
    RETRY_FACTOR: int = 20

    # "random" = randomised placement, "balanced" = CP-SAT minimising attendance shortfall
    STRATEGY: Strategy = "random"

    # RANDOM SEED
    SEED: Optional[int] = None

    ### SOLVER SETUP (balanced strategy only) ###

    TIME_LIMIT_SEC: float = 10.0
    NUM_PARALLEL_WORKERS: int = 4
    LOG_SOLUTIONS_FREQUENCY_SECONDS: float = 5.0

    # Where CSV/PNG/PDF exports are written
    OUTPUT_DIR: str = "outputs"

    @property
    def total_slots(self) -> int:
        return int(self.WEEKS) * len(self.WORKDAYS)

    def validate(self):
        """
        Validate the Config object has sensible values before generating.
        """
        if self.WEEKS < 1:
            raise ValidationError("WEEKS must be >= 1.")
        if not self.WORKDAYS:
            raise ValidationError("WORKDAYS must name at least one day.")
        if len(set(self.WORKDAYS)) != len(self.WORKDAYS):
            raise ValidationError("WORKDAYS must not contain duplicates.")
        if any(not str(day).strip() for day in self.WORKDAYS):
            raise ValidationError("WORKDAYS entries must be non-empty.")
        if self.WORKWEEK_LENGTH <= 0:
            raise ValidationError("WORKWEEK_LENGTH must be > 0.")
        if not (0 <= self.DAYS_AT_WORK <= self.WORKWEEK_LENGTH):
            raise ValidationError(
                f"DAYS_AT_WORK must be within [0, {self.WORKWEEK_LENGTH}]."
            )
        if self.MIN_OFFICE_ATTENDANCE < 1:
            raise ValidationError("MIN_OFFICE_ATTENDANCE must be >= 1.")
        if self.ROUNDING not in ROUNDING_POLICIES:
            raise ValidationError(f"ROUNDING must be one of {ROUNDING_POLICIES}.")
        if self.STRATEGY not in STRATEGIES:
            raise ValidationError(f"STRATEGY must be one of {STRATEGIES}.")
        if self.RETRY_FACTOR <= 0:
            raise ValidationError("RETRY_FACTOR must be > 0.")
        if self.TIME_LIMIT_SEC <= 0.0:
            raise ValidationError("TIME_LIMIT_SEC must be > 0.")
        if self.NUM_PARALLEL_WORKERS <= 0:
            raise ValidationError("NUM_PARALLEL_WORKERS must be > 0.")


def clamp_min_attendance(C: Config, n_people: int) -> int:
    """
    Clamp MIN_OFFICE_ATTENDANCE into [1, n_people] in place and return it.
    With nobody on the rota the value is left untouched.
    """
    if n_people <= 0:
        return C.MIN_OFFICE_ATTENDANCE
    C.MIN_OFFICE_ATTENDANCE = max(1, min(int(n_people), int(C.MIN_OFFICE_ATTENDANCE)))
    return C.MIN_OFFICE_ATTENDANCE


cfg = Config(
    WEEKS=2,
    DAYS_AT_WORK=3,
    MIN_OFFICE_ATTENDANCE=1,
    ROUNDING="ceil",
    RETRY_FACTOR=20,
    STRATEGY="random",
    TIME_LIMIT_SEC=10.0,
    NUM_PARALLEL_WORKERS=4,
    LOG_SOLUTIONS_FREQUENCY_SECONDS=5.0,
)
