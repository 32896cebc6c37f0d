"""
Flat CSV exchange of translation data, one row per message location.

Exported files are UTF-8 with a byte order mark so that spreadsheet applications
detect the encoding, with the header `name,filename,line,source,translation`.
"""
import csv
import io
import logging

from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Parse import ParseLineNumber
from PyLinguist.Helpers.Text import UTF8_BOM, StripByteOrderMark, Truncate
from PyLinguist.LinguistError import CsvFormatError, DocumentParseError, DocumentWriteError
from PyLinguist.TsDocument import TsDocument

CSV_HEADER = ['name', 'filename', 'line', 'source', 'translation']

class ImportResult:
    """
    Outcome of a CSV import: how many rows were applied, skipped or rejected
    """
    def __init__(self):
        self.rows : int = 0
        self.updated : int = 0
        self.skipped : int = 0
        self.errors : list[CsvFormatError] = []

    def __str__(self) -> str:
        return _("{rows} rows, {updated} translations updated, {skipped} skipped, {errors} errors").format(
            rows=self.rows, updated=self.updated, skipped=self.skipped, errors=len(self.errors))

    def AddError(self, error : CsvFormatError) -> None:
        logging.warning(str(error))
        self.errors.append(error)

def Export(document : TsDocument) -> bytes:
    """
    Flatten a document into CSV rows, one per location of each message
    """
    buffer = io.StringIO(newline='')
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(CSV_HEADER)

    for context in document:
        for message in context.messages:
            for location in message.locations:
                writer.writerow([context.name, location.filename, location.line, message.source, message.translation])

    return UTF8_BOM + buffer.getvalue().encode('utf-8')

def ExportToFile(path : str, document : TsDocument) -> None:
    content = Export(document)
    try:
        with open(path, 'wb') as csv_file:
            csv_file.write(content)

    except OSError as e:
        raise DocumentWriteError(_("Unable to write CSV file {path}").format(path=path), path, e)

    logging.info(_("Exported translations to {path}").format(path=path))

def Import(data : bytes|str, document : TsDocument) -> ImportResult:
    """
    Apply translations from CSV rows to matching messages in the document.

    The first row is treated as a header. Each row updates the first message in
    the named context with the same source text. Rows that cannot be matched are
    logged and skipped, and no contexts or messages are ever created.
    """
    if isinstance(data, bytes):
        try:
            data = StripByteOrderMark(data).decode('utf-8')
        except UnicodeDecodeError as e:
            raise DocumentParseError(_("CSV data is not valid UTF-8"), error=e)

    result = ImportResult()
    reader = csv.reader(io.StringIO(data, newline=''))

    header = next(reader, None)
    if header is None:
        logging.warning(_("CSV data is empty"))
        return result

    for row in reader:
        if not row or not any(field.strip() for field in row):
            continue

        result.rows += 1
        row_number = reader.line_num

        if len(row) < len(CSV_HEADER):
            result.AddError(CsvFormatError(_("Invalid CSV row {row_number} (not enough fields)").format(row_number=row_number), row_number, row))
            continue

        name = row[0].strip()
        line = ParseLineNumber(row[2])
        source = row[3]
        translation = row[4]

        if not translation:
            result.skipped += 1
            continue

        if line is None:
            result.AddError(CsvFormatError(_("Invalid line number '{line}' in CSV row {row_number}").format(line=row[2], row_number=row_number), row_number, row))
            continue

        context = document.GetContext(name)
        if context is None:
            result.AddError(CsvFormatError(_("Context not found: {name} (CSV row {row_number})").format(name=name, row_number=row_number), row_number, row))
            continue

        message = context.FindMessage(source)
        if message is None:
            result.AddError(CsvFormatError(_("Message not found in context {name}: {source} (CSV row {row_number})").format(name=name, source=Truncate(source), row_number=row_number), row_number, row))
            continue

        message.SetTranslation(translation)
        result.updated += 1

    return result

def ImportFromFile(path : str, document : TsDocument) -> ImportResult:
    try:
        with open(path, 'rb') as csv_file:
            data = csv_file.read()

    except OSError as e:
        raise DocumentParseError(_("Unable to open CSV file {path}").format(path=path), path, e)

    result = Import(data, document)
    logging.info(_("Imported translations from {path}: {result}").format(path=path, result=str(result)))
    return result
