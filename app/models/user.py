# Role enum and in-memory User record
from dataclasses import dataclass
import enum


class Role(str, enum.Enum):
    INTERN = "INTERN"
    ENGINEER = "ENGINEER"
    ADMIN = "ADMIN"


@dataclass
class User:
    id: int
    name: str
    email: str
    role: Role
