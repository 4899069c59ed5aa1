"""Race configuration."""

from enum import Enum

from pydantic import BaseModel, Field


class GameMode(str, Enum):
    """How player decisions are turned into moves."""

    TURN_BASED = "turn_based"
    PROGRAMMING = "programming"


class SpinPolicy(str, Enum):
    """Facing assigned to a car after a spin-out."""

    RANDOM_CARDINAL = "random_cardinal"
    REVERSE = "reverse"


class RaceConfig(BaseModel):
    """Rule options for a race."""

    mode: GameMode = Field(default=GameMode.TURN_BASED, description="Game mode")
    spin_policy: SpinPolicy = Field(
        default=SpinPolicy.RANDOM_CARDINAL,
        description="How a spun car picks its new facing",
    )
    slipstream_range: float = Field(
        default=2.0,
        gt=0.0,
        description="Max Euclidean distance to the car ahead for a slipstream",
    )
    slipstream_bonus: int = Field(
        default=1,
        ge=0,
        description="Speed added by a slipstream",
    )
    strict_moves: bool = Field(
        default=True,
        description="Reject destinations that are not in the offered legal set",
    )
    seed: int | None = Field(default=None, description="Seed for the spin RNG")
