from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class TsBatch:
    """
    A group of source phrases to be translated in a single request
    """
    number : int
    phrases : tuple[str, ...]
    context : str|None = None
    word_count : int = 0

    def __len__(self) -> int:
        return len(self.phrases)

    def __str__(self) -> str:
        if self.context:
            return f"Batch {self.number} ({self.context}, {len(self.phrases)} phrases)"
        return f"Batch {self.number} ({len(self.phrases)} phrases)"
