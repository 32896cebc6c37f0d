import logging

from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Text import StripByteOrderMark

def ReadApiKeyFromFile(api_key_path : str|None) -> str|None:
    """
    Read a bearer token from a plain text file.

    The contents are decoded as UTF-8 with any byte order mark and surrounding
    whitespace removed. Returns None if the file cannot be read or is empty.
    """
    if not api_key_path:
        return None

    try:
        with open(api_key_path, 'rb') as key_file:
            raw = key_file.read()

    except OSError as e:
        logging.warning(_("Unable to open API key file: {path} ({error})").format(path=api_key_path, error=str(e)))
        return None

    try:
        api_key = StripByteOrderMark(raw).decode('utf-8').strip()

    except UnicodeDecodeError as e:
        logging.warning(_("API key file is not valid UTF-8: {path} ({error})").format(path=api_key_path, error=str(e)))
        return None

    return api_key or None
