import logging
import lxml.etree as ET

from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Parse import ParseLineNumber
from PyLinguist.Helpers.Text import StripByteOrderMark
from PyLinguist.LinguistError import DocumentParseError
from PyLinguist.TsContext import TsContext
from PyLinguist.TsDocument import TsDocument
from PyLinguist.TsFileHandler import TsFileHandler
from PyLinguist.TsLocation import TsLocation
from PyLinguist.TsMessage import TranslationType, TsMessage

TS_DOCTYPE = "<!DOCTYPE TS>"

class TsXmlFileHandler(TsFileHandler):
    """
    File handler for Qt Linguist .ts files, using lxml for parsing and serialisation.
    """
    def parse_file(self, path : str) -> TsDocument:
        try:
            with open(path, 'rb') as ts_file:
                content = ts_file.read()

        except OSError as e:
            raise DocumentParseError(_("Unable to open translation file {path}").format(path=path), path, e)

        try:
            return self.parse_string(content)

        except DocumentParseError as e:
            e.path = path
            raise

    def parse_string(self, content : str|bytes) -> TsDocument:
        if isinstance(content, str):
            content = content.encode('utf-8')

        content = StripByteOrderMark(content)

        try:
            parser = ET.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)
            root = ET.fromstring(content, parser=parser)

        except ET.XMLSyntaxError as e:
            raise DocumentParseError(_("Malformed translation file: {error}").format(error=str(e)), error=e)

        if root is None or root.tag != 'TS':
            raise DocumentParseError(_("Not a Qt Linguist translation file (root element is {tag})").format(tag=getattr(root, 'tag', None)))

        document = TsDocument(
            language=root.get('language'),
            version=root.get('version'),
            source_language=root.get('sourcelanguage')
        )

        for context_element in root.iterchildren('context'):
            context = self._parse_context(context_element)
            if context is None:
                continue

            document.AddContext(context)

        return document

    def compose_document(self, document : TsDocument, language : str|None = None) -> bytes:
        root = ET.Element('TS')
        root.set('version', document.version)
        language = language or document.language
        if language:
            root.set('language', language)
        if document.source_language:
            root.set('sourcelanguage', document.source_language)

        for context in document:
            context_element = ET.SubElement(root, 'context')
            ET.SubElement(context_element, 'name').text = context.name

            for message in context.messages:
                self._compose_message(context_element, message)

        ET.indent(root, space="    ")

        return ET.tostring(root, xml_declaration=True, encoding='utf-8', doctype=TS_DOCTYPE, pretty_print=True)

    def get_file_extensions(self) -> list[str]:
        return ['.ts']

    def _parse_context(self, context_element) -> TsContext|None:
        name_element = context_element.find('name')
        name = _element_text(name_element)
        if not name:
            logging.warning(_("Skipping context with no name (line {line})").format(line=context_element.sourceline))
            return None

        context = TsContext(name)
        for message_element in context_element.iterchildren('message'):
            context.AddMessage(self._parse_message(message_element))

        return context

    def _parse_message(self, message_element) -> TsMessage:
        locations = [ self._parse_location(element) for element in message_element.iterchildren('location') ]

        source = _element_text(message_element.find('source'))

        translation_element = message_element.find('translation')
        translation = _element_text(translation_element)

        translation_type = TranslationType.FINISHED
        if translation_element is None or translation_element.get('type') == 'unfinished' or not translation:
            translation_type = TranslationType.UNFINISHED

        return TsMessage(source, translation, locations, translation_type)

    def _parse_location(self, location_element) -> TsLocation:
        filename = location_element.get('filename') or ""
        line = ParseLineNumber(location_element.get('line'))
        if line is None:
            if location_element.get('line') is not None:
                logging.debug(f"Invalid line number '{location_element.get('line')}' for {filename}")
            line = 0

        return TsLocation(filename, line)

    def _compose_message(self, context_element, message : TsMessage) -> None:
        message_element = ET.SubElement(context_element, 'message')
        for location in message.locations:
            ET.SubElement(message_element, 'location', filename=location.filename, line=str(location.line))

        ET.SubElement(message_element, 'source').text = message.source

        translation_element = ET.SubElement(message_element, 'translation')
        translation_element.text = message.translation
        if not message.translation:
            translation_element.set('type', 'unfinished')

def _element_text(element) -> str:
    """
    Concatenated text content of an element, or an empty string if there is no element
    """
    if element is None:
        return ""
    return "".join(element.itertext())
