from collections.abc import Callable
import logging
import os
import regex

from PyLinguist import TabularExchange
from PyLinguist.Formats.TsXmlFileHandler import TsXmlFileHandler
from PyLinguist.Helpers.Credentials import ReadApiKeyFromFile
from PyLinguist.Helpers.Localization import _
from PyLinguist.LinguistError import (
    ConfigurationError,
    DocumentError,
    DocumentParseError,
    DocumentWriteError,
    LinguistError,
    TranslationImpossibleError,
)
from PyLinguist.Options import Options
from PyLinguist.TabularExchange import ImportResult
from PyLinguist.TsDocument import TsDocument
from PyLinguist.TsFileHandler import TsFileHandler
from PyLinguist.TsMerger import ClearTranslations
from PyLinguist.TsTranslator import TsTranslator

language_attribute_pattern = regex.compile(r'\blanguage="[^"]*"')

class TsProject:
    """
    Runs the steps of a translation job against a single translation source file
    """
    def __init__(self, options : Options, file_handler : TsFileHandler|None = None):
        self.options : Options = options
        self.file_handler : TsFileHandler = file_handler or TsXmlFileHandler()
        self.document : TsDocument|None = None

        self.ts_file_path : str|None = options.ts_file_path
        self.template_ts_file : str|None = options.template_ts_file
        self.lang_postfix : str|None = options.lang_postfix
        self.csv_to_import : str|None = options.csv_to_import
        self.csv_to_export : str|None = options.csv_to_export
        self.api_key_path : str|None = options.api_key_path

    def SeedFromTemplate(self) -> bool:
        """
        Create the translation file from the template if it does not already exist.

        The language attribute of the copy is set to the target language tag.
        Returns True if a new file was created.
        """
        if not self.ts_file_path or not self.template_ts_file:
            return False

        if os.path.exists(self.ts_file_path):
            return False

        try:
            with open(self.template_ts_file, 'r', encoding='utf-8') as template_file:
                content = template_file.read()

        except OSError as e:
            raise DocumentParseError(_("Unable to read template file {path}").format(path=self.template_ts_file), self.template_ts_file, e)

        if self.lang_postfix:
            content = language_attribute_pattern.sub(f'language="{self.lang_postfix}"', content, count=1)

        try:
            with open(self.ts_file_path, 'w', encoding='utf-8', newline='') as ts_file:
                ts_file.write(content)

        except OSError as e:
            raise DocumentWriteError(_("Unable to create {path} from template").format(path=self.ts_file_path), self.ts_file_path, e)

        logging.info(_("Created {path} from template {template}").format(path=self.ts_file_path, template=self.template_ts_file))
        return True

    def LoadDocument(self) -> TsDocument:
        """
        Read the translation source file
        """
        if not self.ts_file_path:
            raise DocumentParseError(_("No translation file specified"))

        self.document = self.file_handler.parse_file(self.ts_file_path)

        logging.info(_("Loaded {messages} messages in {contexts} contexts from {path} ({untranslated} untranslated)").format(
            messages=self.document.message_count,
            contexts=len(self.document),
            path=self.ts_file_path,
            untranslated=self.document.untranslated_count
        ))

        return self.document

    def SaveDocument(self) -> None:
        """
        Write the document back to the translation source file, tagged with the target language
        """
        if not self.document or not self.ts_file_path:
            raise DocumentWriteError(_("No document to save"), self.ts_file_path)

        self.file_handler.write_file(self.ts_file_path, self.document, self.lang_postfix)

        logging.info(_("Saved translations to {path}").format(path=self.ts_file_path))

    def ClearTranslations(self) -> int:
        """
        Remove every translation from the document and write it back
        """
        document = self.document or self.LoadDocument()
        cleared = ClearTranslations(document)
        self.SaveDocument()

        logging.info(_("Cleared {count} translations").format(count=cleared))
        return cleared

    def ImportFromCsv(self) -> ImportResult:
        if not self.document:
            raise DocumentParseError(_("No document loaded"))

        if not self.csv_to_import:
            raise ConfigurationError(_("csv_to_import is not set"))

        return TabularExchange.ImportFromFile(self.csv_to_import, self.document)

    def ExportToCsv(self) -> None:
        if not self.document:
            raise DocumentWriteError(_("No document loaded"))

        if not self.csv_to_export:
            raise ConfigurationError(_("csv_to_export is not set"))

        TabularExchange.ExportToFile(self.csv_to_export, self.document)

    def LoadApiKey(self) -> None:
        """
        Read the API key for the selected provider from the key file, if one is configured
        """
        if not self.api_key_path:
            return

        api_key = ReadApiKeyFromFile(self.api_key_path)
        if not api_key:
            raise ConfigurationError(_("API key file {path} is empty or unreadable").format(path=self.api_key_path))

        self.options.current_provider_settings['api_key'] = api_key

    def TranslateDocument(self, translator : TsTranslator) -> int:
        """
        Request translations for the untranslated messages and merge them into the document
        """
        if not self.document:
            raise DocumentParseError(_("No document loaded"))

        try:
            return translator.TranslateDocument(self.document)

        except TranslationImpossibleError as e:
            logging.error(_("Translation stopped: {error}").format(error=str(e)))
            return translator.messages_updated

    def Run(self, create_translator : Callable[[Options], TsTranslator]) -> int:
        """
        Execute the configured job, returning the process exit code
        """
        try:
            self.SeedFromTemplate()
            self.LoadDocument()

        except DocumentError as e:
            logging.critical(_("Unable to load translation file: {error}").format(error=str(e)))
            return 1

        if self.options.clear_translation:
            try:
                self.ClearTranslations()

            except DocumentError as e:
                logging.critical(_("Failed to clear translations: {error}").format(error=str(e)))
                return 1

            return 0

        if self.options.import_from_csv:
            try:
                self.ImportFromCsv()

            except LinguistError as e:
                logging.error(_("Unable to import translations from CSV: {error}").format(error=str(e)))

        else:
            try:
                if not self.options.preview:
                    self.LoadApiKey()

                translator = create_translator(self.options)

            except LinguistError as e:
                logging.critical(_("Unable to create translator: {error}").format(error=str(e)))
                return 1

            self.TranslateDocument(translator)

        if self.options.write_back_to_ts:
            try:
                self.SaveDocument()

            except DocumentError as e:
                logging.critical(_("Failed to write translation file: {error}").format(error=str(e)))
                return 1

        if self.options.export_to_csv:
            try:
                self.ExportToCsv()

            except LinguistError as e:
                logging.error(_("Unable to export translations to CSV: {error}").format(error=str(e)))

        return 0
