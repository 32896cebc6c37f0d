from PyLinguist.Helpers.Settings import GetStrSetting
from PyLinguist.SettingsType import SettingsType

default_instructions = "You are a translation assistant."

default_prompt_template = (
    "Translate the following phrases into {language} ({tag}). "
    "{context}"
    "Return only a JSON array of objects "
    "in the format [{{\"source\": \"<original>\", \"translation\": \"<translated>\"}}].\n"
    "Phrases:\n"
    "{phrases}"
    )

default_context_template = (
    "These phrases are part of a software system under the context of {context}. "
    "Use that context to choose accurate, natural translations. "
    )

class Instructions:
    """
    The system instructions and prompt templates used to request translations
    """
    def __init__(self, settings : SettingsType|dict):
        self.instructions : str = GetStrSetting(settings, 'instructions') or default_instructions
        self.prompt_template : str = GetStrSetting(settings, 'prompt_template') or default_prompt_template
        self.context_template : str = GetStrSetting(settings, 'context_template') or default_context_template
