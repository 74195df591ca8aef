from dataclasses import dataclass
from typing import Tuple


BUNDLE_FIELDS: Tuple[str, ...] = ("frontend", "backend", "database")


@dataclass(frozen=True)
class CodeBundle:
    """
    Normalized generation result.

    Each field holds source text, or "" when the model decided that part
    of the application is not needed.
    """
    frontend: str
    backend: str
    database: str

    @property
    def is_empty(self) -> bool:
        return not (self.frontend or self.backend or self.database)
