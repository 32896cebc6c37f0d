import json
import logging
from typing import Any
import regex

from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Text import StripByteOrderMark
from PyLinguist.TranslationReply import TranslationReply

fence_pattern = regex.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")

class TranslationParser:
    """
    Extract source/translation pairs from a chat completion reply
    """
    def __init__(self):
        self.content : str|None = None

    def ParseReply(self, raw : bytes|str|None) -> TranslationReply:
        """
        Interpret the raw body of a chat completion reply.

        The first choice's message content should be a JSON array of objects with
        `source` and `translation` fields, optionally wrapped in a fenced code block.
        Problems are logged and reported as a failed reply rather than raised.
        """
        self.content = None

        reply = self._parse(raw)
        if reply.failed:
            logging.warning(_("Unable to parse translation reply: {error}").format(error=reply.error))

        return reply

    def ExtractContent(self, body : Any) -> str|None:
        """
        Find the message content of the first choice in the reply body
        """
        if not isinstance(body, dict):
            return None

        choices = body.get('choices')
        if not isinstance(choices, list) or not choices:
            return None

        choice = choices[0]
        message = choice.get('message') if isinstance(choice, dict) else None
        content = message.get('content') if isinstance(message, dict) else None

        return content if isinstance(content, str) else None

    def ExtractTranslations(self, entries : list[Any]) -> dict[str, str]:
        """
        Build a mapping of source text to translation, ignoring entries with no source
        """
        translations : dict[str, str] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                logging.debug(f"Ignoring unexpected entry in reply: {entry}")
                continue

            source = entry.get('source')
            translation = entry.get('translation')
            if not isinstance(source, str) or not source:
                continue

            translations[source] = translation if isinstance(translation, str) else ""

        return translations

    def _parse(self, raw : bytes|str|None) -> TranslationReply:
        if not raw:
            return TranslationReply.Failed(_("Empty reply"))

        if isinstance(raw, bytes):
            try:
                raw = StripByteOrderMark(raw).decode('utf-8')
            except UnicodeDecodeError as e:
                return TranslationReply.Failed(_("Reply is not valid UTF-8 ({error})").format(error=str(e)))

        try:
            body = json.loads(raw)
        except json.JSONDecodeError as e:
            return TranslationReply.Failed(_("Reply is not valid JSON ({error})").format(error=str(e)))

        content = self.ExtractContent(body)
        if content is None:
            return TranslationReply.Failed(_("Reply has no message content"))

        match = fence_pattern.search(content)
        if match:
            content = match.group(1)

        self.content = content
        logging.debug(f"Reply content:\n{content}")

        try:
            entries = json.loads(content)
        except json.JSONDecodeError as e:
            return TranslationReply.Failed(_("Message content is not valid JSON ({error})").format(error=str(e)))

        if not isinstance(entries, list):
            return TranslationReply.Failed(_("Message content is not a JSON array"))

        return TranslationReply.Succeeded(self.ExtractTranslations(entries))
