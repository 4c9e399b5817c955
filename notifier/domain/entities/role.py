"""Domain entity representing a user role."""

from dataclasses import dataclass


@dataclass
class Role:
    """Role assigned to a user; ``alias`` is what role-based triggers match."""

    id: int
    name: str
    alias: str


__all__ = ["Role"]
