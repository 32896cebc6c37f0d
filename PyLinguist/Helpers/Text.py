import regex

UTF8_BOM : bytes = b'\xef\xbb\xbf'

whitespace_pattern = regex.compile(r'\s+')

def CountWords(text : str|None) -> int:
    """
    Count the whitespace-delimited words in a phrase
    """
    if not text:
        return 0
    return len(text.split())

def StripByteOrderMark(data : bytes) -> bytes:
    """
    Remove a leading UTF-8 byte order mark
    """
    if data.startswith(UTF8_BOM):
        return data[len(UTF8_BOM):]
    return data

def Linearise(text : str|None) -> str:
    """
    Collapse a multi-line phrase onto a single line for logging
    """
    if not text:
        return ""
    return whitespace_pattern.sub(' ', text).strip()

def Truncate(text : str|None, max_length : int = 50) -> str:
    """
    Shorten a phrase for display, adding an ellipsis if it was cut
    """
    text = Linearise(text)
    if len(text) <= max_length:
        return text
    return text[:max_length - 3].rstrip() + "..."

# Characters that XML 1.0 does not allow in text content
xml_illegal_pattern = regex.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')

def StripXmlIllegalCharacters(text : str) -> tuple[str, int]:
    """
    Remove characters that cannot be written to an XML document.

    Returns the cleaned text and the number of characters removed.
    """
    return xml_illegal_pattern.subn('', text)
