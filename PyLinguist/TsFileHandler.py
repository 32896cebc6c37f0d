from abc import ABC, abstractmethod

from PyLinguist.LinguistError import DocumentWriteError
from PyLinguist.TsDocument import TsDocument
from PyLinguist.Helpers.Localization import _

class TsFileHandler(ABC):
    """
    Abstract interface for reading and writing translation source files.
    Implementations handle format-specific operations while the translation
    logic remains format-agnostic.
    """

    @abstractmethod
    def parse_file(self, path : str) -> TsDocument:
        """
        Read and parse a translation source file.

        Args:
            path: Location of the file to read

        Returns:
            TsDocument: The parsed document

        Raises:
            DocumentParseError: If the file cannot be opened or parsed
        """
        pass

    @abstractmethod
    def parse_string(self, content : str|bytes) -> TsDocument:
        """
        Parse translation source content held in memory.

        Raises:
            DocumentParseError: If the content cannot be parsed
        """
        pass

    @abstractmethod
    def compose_document(self, document : TsDocument, language : str|None = None) -> bytes:
        """
        Serialise a document, tagged with the target language.

        Args:
            document: The document to compose
            language: Target language tag, falls back to the document language

        Returns:
            bytes: UTF-8 encoded file content
        """
        pass

    @abstractmethod
    def get_file_extensions(self) -> list[str]:
        """
        Get file extensions supported by this handler.
        """
        pass

    def write_file(self, path : str, document : TsDocument, language : str|None = None) -> None:
        """
        Compose a document and write it to disk.

        Raises:
            DocumentWriteError: If the file cannot be written
        """
        try:
            content = self.compose_document(document, language)

        except ValueError as e:
            raise DocumentWriteError(_("Unable to compose translation file {path}: {error}").format(path=path, error=str(e)), path, e)

        try:
            with open(path, 'wb') as ts_file:
                ts_file.write(content)

        except OSError as e:
            raise DocumentWriteError(_("Unable to write translation file {path}").format(path=path), path, e)
