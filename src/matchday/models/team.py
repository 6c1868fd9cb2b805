"""Team models."""

from dataclasses import dataclass, field


@dataclass
class Team:
    """A team formed for a specific game day."""

    id: str
    name: str
    player_ids: list[str] = field(default_factory=list)  # roster, in signup order
