from __future__ import annotations

class TranslationReply:
    """
    Outcome of interpreting a provider reply.

    Either succeeded, with a mapping of source text to translation (possibly empty),
    or failed, with a description of what was wrong with the reply.
    """
    def __init__(self, translations : dict[str, str]|None = None, error : str|None = None):
        self.translations : dict[str, str] = translations or {}
        self.error : str|None = error

    @classmethod
    def Succeeded(cls, translations : dict[str, str]) -> TranslationReply:
        return cls(translations=translations)

    @classmethod
    def Failed(cls, error : str) -> TranslationReply:
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def __len__(self) -> int:
        return len(self.translations)

    def __repr__(self) -> str:
        if self.failed:
            return f"TranslationReply(error={repr(self.error)})"
        return f"TranslationReply({len(self.translations)} translations)"
