from typing import Any

from PyLinguist.Helpers.Localization import _

class LinguistError(Exception):
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.error = error
        self.message = message

    def __str__(self) -> str:
        if self.error:
            return str(self.error)
        elif self.message:
            return self.message
        return super().__str__()

class ConfigurationError(LinguistError):
    """ The run configuration is missing, unreadable or invalid """
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)

class DocumentError(LinguistError):
    def __init__(self, message : str, path : str|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.path = path

class DocumentParseError(DocumentError):
    """Error raised when a translation source file cannot be read or parsed."""
    def __init__(self, message : str, path : str|None = None, error : Exception|None = None):
        super().__init__(message, path, error)

class DocumentWriteError(DocumentError):
    """Error raised when a translation source file cannot be written."""
    def __init__(self, message : str, path : str|None = None, error : Exception|None = None):
        super().__init__(message, path, error)

class CsvFormatError(LinguistError):
    """ A single row of a CSV import could not be applied """
    def __init__(self, message : str, row_number : int|None = None, row : list[str]|None = None):
        super().__init__(message)
        self.row_number = row_number
        self.row = row or []

class NoProviderError(LinguistError):
    def __init__(self):
        super().__init__(_("Provider not specified in options"))

class ProviderError(LinguistError):
    def __init__(self, message : str|None = None, provider : Any = None):
        super().__init__(message)
        self.provider = provider

class TranslationError(LinguistError):
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)

class TranslationNetworkError(TranslationError):
    """ The request could not be delivered or the provider returned an error status """
    def __init__(self, message : str, error : Exception|None = None, status_code : int|None = None):
        super().__init__(message, error)
        self.status_code = status_code

class TranslationTimeoutError(TranslationError):
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)

class TranslationResponseError(TranslationError):
    def __init__(self, message : str, response : Any):
        super().__init__(message)
        self.response = response

class TranslationImpossibleError(TranslationError):
    """ No chance of retry succeeding """
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)

class TranslationAuthError(TranslationImpossibleError):
    """ The credential is missing or was rejected by the provider """
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)
