"""Agent entity — a call-center user who can receive collection cases."""

from dataclasses import dataclass


@dataclass
class Agent:
    id: int
    full_name: str
    is_active: bool = True
