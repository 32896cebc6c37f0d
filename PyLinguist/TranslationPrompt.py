from PyLinguist.Helpers.Localization import _
from PyLinguist.Instructions import default_context_template, default_prompt_template
from PyLinguist.LinguistError import TranslationError

linesep = '\n'

class TranslationPrompt:
    """
    Class for formatting a chat prompt to request translation of a batch of phrases
    """
    def __init__(self, instructions : str|None):
        # System message sent ahead of the request
        self.instructions : str|None = instructions

        # Name of the privileged role for the instructions
        self.system_role : str = "system"

        # Templates for formatting the prompt - override these to customize the prompt
        self.prompt_template : str = default_prompt_template
        self.context_template : str = default_context_template

        self.batch_prompt : str|None = None
        self.messages : list[dict[str, str]] = []

    def GenerateMessages(self, phrases : list[str]|tuple[str, ...], language : str, tag : str, context_name : str|None = None) -> None:
        """
        Generate the messages to request translation of a batch of phrases

        :param phrases: source phrases to translate
        :param language: display name of the target language
        :param tag: language tag of the target language, e.g. tr_TR
        :param context_name: name of the context the phrases belong to, if any
        """
        self.messages.clear()

        self.batch_prompt = self.GenerateBatchPrompt(phrases, language, tag, context_name)

        if self.instructions:
            self.messages.append({'role': self.system_role, 'content': self.instructions})

        self.messages.append({'role': 'user', 'content': self.batch_prompt})

    def GenerateBatchPrompt(self, phrases : list[str]|tuple[str, ...], language : str, tag : str, context_name : str|None = None) -> str:
        """
        Create the user prompt for translating a set of phrases
        """
        if not phrases:
            raise TranslationError(_("No source phrases provided"))

        context = self.context_template.format(context=context_name) if context_name else ""

        return self.prompt_template.format(
            language=language or tag,
            tag=tag,
            context=context,
            phrases=linesep.join(phrases)
        )
