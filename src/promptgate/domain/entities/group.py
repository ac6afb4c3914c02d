"""Group entity.

Groups collect users and the time windows that govern when those users may
send prompts. Membership itself is owned by the membership provider.
"""

from dataclasses import dataclass, field

from promptgate.domain.entities.time_window import TimeWindow


@dataclass(frozen=True)
class Group:
    """Group with its time windows.

    Attributes:
        id: Group identifier.
        name: Group name.
        description: Optional description of the group's purpose.
        time_windows: Windows attached to the group (order is irrelevant).
    """

    id: str
    name: str
    description: str | None = None
    time_windows: tuple[TimeWindow, ...] = field(default_factory=tuple)
