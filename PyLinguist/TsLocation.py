from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class TsLocation:
    """
    A place in the application source where a message is used
    """
    filename : str = ""
    line : int = 0

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"
