"""
State definitions for row navigation.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .constants import CRUISE_LINEAR, CRUISE_ANGULAR


class NavigationState(Enum):
    """Navigation states. Values are the labels published on the state topic."""
    BEGINNING_MAPPING = "Beginning Mapping"                    # Initial state
    CHANGING_ROWS = "Changing Rows"                            # Turning around a row-end pole
    COMPLETED_ROW_CHANGE = "Completed Row Change"              # Turn finished, row ahead is clear
    AVOIDING_ROW_EDGES = "Avoiding Row Edges"                  # Nudging away from a row boundary
    AVOIDING_UNEXPECTED_OBJECT = "Avoiding Unexpected Object"  # Halted, something right ahead

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class VelocityCommand:
    """Forward speed (m/s) and turn rate (rad/s, positive = left)."""
    linear_x: float = 0.0
    angular_z: float = 0.0

    @classmethod
    def cruise(cls) -> 'VelocityCommand':
        return cls(CRUISE_LINEAR, CRUISE_ANGULAR)

    @classmethod
    def stop(cls) -> 'VelocityCommand':
        return cls(0.0, 0.0)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.linear_x, self.angular_z)


@dataclass(frozen=True)
class Decision:
    """Result of one decision call."""
    state: NavigationState
    command: VelocityCommand


@dataclass
class Session:
    """
    Navigation memory carried between scans.

    `state` is the only field the decision function reads. `command` is the
    latest output for the host loop to publish. `last_announced` and `ticks`
    belong to the status reporter.
    """
    state: NavigationState = NavigationState.BEGINNING_MAPPING
    command: VelocityCommand = field(default_factory=VelocityCommand.stop)
    last_announced: Optional[NavigationState] = None
    ticks: int = 0
