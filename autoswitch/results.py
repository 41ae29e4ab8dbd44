from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class FailureKind(Enum):
    NETWORK = "network" # Host unreachable, timed out, connection dropped
    DATA = "data" # The service answered, but with nothing usable
    PERMISSION = "permission" # Not allowed to write the theme setting
    STORE = "store" # Setting store (registry, gsettings) missing or broken


@dataclass(frozen=True)
class Outcome:
    """What a collaborator call produced: a value, or the kind of failure it hit."""
    value: Any = None
    kind: Optional[FailureKind] = None
    message: str = ""

    @classmethod
    def success(cls, value=None):
        return cls(value=value)

    @classmethod
    def failure(cls, kind: FailureKind, message: str = ""):
        return cls(kind=kind, message=message)

    @property
    def ok(self) -> bool:
        return self.kind is None

    @property
    def retryable(self) -> bool:
        return self.kind in (FailureKind.NETWORK, FailureKind.DATA)

    def __str__(self):
        if self.ok:
            return f"ok({self.value!r})"
        return f"{self.kind.value}: {self.message}"
