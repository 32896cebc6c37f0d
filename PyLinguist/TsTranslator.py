import logging

from PyLinguist.Helpers import FormatErrorMessages, FormatMessages
from PyLinguist.Helpers.Localization import _
from PyLinguist.Helpers.Text import Truncate
from PyLinguist.LinguistError import (
    NoProviderError,
    ProviderError,
    TranslationError,
    TranslationImpossibleError,
    TranslationResponseError,
)
from PyLinguist.Options import Options
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TranslationClient import TranslationClient
from PyLinguist.TranslationProvider import TranslationProvider
from PyLinguist.TsBatch import TsBatch
from PyLinguist.TsBatcher import TsBatcher
from PyLinguist.TsDocument import TsDocument
from PyLinguist.TsMerger import MergeTarget, MergeTranslations

class TsTranslator:
    """
    Divides the untranslated messages of a document into batches and requests translations for them
    """
    def __init__(self, options : Options, translation_provider : TranslationProvider):
        """
        Initialise a TsTranslator with translation options
        """
        self.aborted : bool = False
        self.errors : list[TranslationError] = []

        self.target_language : str = options.lang or ""
        self.target_tag : str = options.lang_postfix or ""
        self.stop_on_error : bool = options.stop_on_error
        self.preview : bool = options.preview

        self.batches_processed : int = 0
        self.messages_updated : int = 0

        if not self.target_tag:
            raise TranslationImpossibleError(_("No target language specified"))

        self.translation_provider : TranslationProvider = translation_provider

        if not self.translation_provider:
            raise NoProviderError()

        settings = SettingsType({
            'max_retries': options.get_int('max_retries'),
            'backoff_time': options.get_float('backoff_time'),
            'rate_limit': options.get_float('rate_limit'),
        })

        try:
            self.client : TranslationClient = self.translation_provider.GetTranslationClient(settings)

        except TranslationError:
            raise

        except Exception as e:
            raise ProviderError(_("Unable to create provider client: {error}").format(error=str(e)), translation_provider)

        if not self.client:
            raise ProviderError(_("Unable to create translation client"), translation_provider)

        self.batcher = TsBatcher(options)

    def StopTranslating(self) -> None:
        """
        Prevent any further batches from being sent
        """
        self.aborted = True
        self.client.AbortTranslation()

    def TranslateDocument(self, document : TsDocument) -> int:
        """
        Translate every untranslated message in the document, batch by batch.

        Failed batches are logged and skipped, unless stop_on_error is set.
        Raises TranslationImpossibleError if translation cannot continue at all.
        Returns the number of messages updated.
        """
        untranslated = document.untranslated_count
        if not untranslated:
            logging.info(_("No untranslated messages found"))
            return 0

        logging.info(_("Translating {count} messages in {contexts} contexts into {language} ({tag})").format(
            count=untranslated, contexts=len(document), language=self.target_language, tag=self.target_tag))

        for batch in self.batcher.BatchDocument(document):
            if self.aborted:
                break

            try:
                self.TranslateBatch(document, batch)

            except TranslationImpossibleError:
                raise

            except TranslationError as e:
                logging.warning(_("Error translating {batch}: {error}").format(batch=str(batch), error=str(e)))
                self.errors.append(e)

                if self.stop_on_error:
                    logging.error(_("Failed to translate {batch}... stopping translation").format(batch=str(batch)))
                    break

        if self.aborted:
            logging.info(_("Translation aborted"))

        if self.preview:
            return 0

        logging.info(_("Translated {count} messages in {batches} batches").format(count=self.messages_updated, batches=self.batches_processed))

        if self.errors:
            logging.warning(_("{count} batches failed: {errors}").format(count=len(self.errors), errors=FormatErrorMessages(self.errors)))

        remaining = document.untranslated_count
        if remaining:
            logging.warning(_("{count} messages are still untranslated").format(count=remaining))

        return self.messages_updated

    def TranslateBatch(self, document : TsDocument, batch : TsBatch) -> int:
        """
        Request translation of a single batch and merge the results into the document
        """
        logging.debug(f"Translating {batch} ({batch.word_count} words)")

        if self.preview:
            prompt = self.client.BuildTranslationPrompt(batch.phrases, self.target_language, self.target_tag, batch.context)
            logging.info(_("Preview of {batch}:\n{messages}").format(batch=str(batch), messages=FormatMessages(prompt.messages)))
            return 0

        raw = self.client.Request(batch.phrases, self.target_language, self.target_tag, batch.context)

        if self.aborted:
            return 0

        reply = self.client.ParseReply(raw)

        self.batches_processed += 1

        if reply.failed:
            raise TranslationResponseError(_("Unable to use reply for {batch}: {error}").format(batch=str(batch), error=reply.error), response=raw)

        unexpected = [ source for source in reply.translations if source not in batch.phrases ]
        if unexpected:
            logging.debug(f"Ignoring {len(unexpected)} phrases that were not requested: {', '.join(Truncate(source) for source in unexpected)}")

        # Empty translations are never merged, so existing translations in scope are kept
        translations = { source: translation for source, translation in reply.translations.items()
                         if source in batch.phrases and translation }

        target : MergeTarget = document
        if batch.context:
            context = document.GetContext(batch.context)
            if context is None:
                raise TranslationError(_("Context {name} not found in document").format(name=batch.context))
            target = context

        updated = MergeTranslations(translations, target)
        self.messages_updated += updated

        missing = [ phrase for phrase in batch.phrases if not translations.get(phrase) ]
        if missing:
            logging.warning(_("{batch}: {count} phrases were not translated").format(batch=str(batch), count=len(missing)))

        logging.info(_("{batch}: {updated} messages updated").format(batch=str(batch), updated=updated))
        return updated
