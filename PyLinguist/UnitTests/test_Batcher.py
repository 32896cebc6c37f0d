import unittest

from PyLinguist.Helpers.Tests import PrepareDocument, log_input_expected_result, log_test_name
from PyLinguist.SettingsType import SettingsType
from PyLinguist.TsBatch import TsBatch
from PyLinguist.TsBatcher import TsBatcher
from PyLinguist.TsContext import TsContext
from PyLinguist.TsDocument import TsDocument
from PyLinguist.TsMessage import TsMessage

from PyLinguist.UnitTests.TestData.login_dialog import login_dialog_data

def BuildDocument(contexts : dict[str, list[tuple[str, str]]]) -> TsDocument:
    document = TsDocument(language='de_DE')
    for name, messages in contexts.items():
        context = document.AddContext(TsContext(name))
        for source, translation in messages:
            context.AddMessage(TsMessage(source, translation))
    return document

class TsBatcherTests(unittest.TestCase):
    large_document = {
        'Alpha': [ (f"Alpha phrase {i}", "") for i in range(7) ] + [ ("Done", "Fertig") ],
        'Beta': [ (f"Beta phrase {i}", "") for i in range(3) ],
        'Gamma': [ ("Translated", "Übersetzt") ],
        'Delta': [ ("Repeat", ""), ("Repeat", ""), ("Unique", ""), ("", "") ],
    }

    def _batch(self, document : TsDocument, **settings) -> list[TsBatch]:
        batcher = TsBatcher(SettingsType(settings))
        return list(batcher.BatchDocument(document))

    def _untranslated_sources(self, document : TsDocument) -> set[tuple[str|None, str]]:
        return { (context.name, message.source) for context in document for message in context.messages if message.needs_translation }

    def test_CountPolicyContextScope(self):
        log_test_name("Count policy, context scope")

        document = BuildDocument(self.large_document)
        batches = self._batch(document, api_call_size=3, batch_policy='count', batch_scope='context')

        sizes = [ len(batch) for batch in batches ]
        contexts = [ batch.context for batch in batches ]

        log_input_expected_result("Batch sizes", [3, 3, 1, 3, 2], sizes)
        self.assertSequenceEqual(sizes, [3, 3, 1, 3, 2])
        self.assertSequenceEqual(contexts, ['Alpha', 'Alpha', 'Alpha', 'Beta', 'Delta'])
        self.assertSequenceEqual([ batch.number for batch in batches ], [1, 2, 3, 4, 5])

        covered = { (batch.context, phrase) for batch in batches for phrase in batch.phrases }
        self.assertSetEqual(covered, self._untranslated_sources(document))

    def test_CountPolicyDocumentScope(self):
        log_test_name("Count policy, document scope")

        document = BuildDocument(self.large_document)
        batches = self._batch(document, api_call_size=4, batch_policy='count', batch_scope='document')

        sizes = [ len(batch) for batch in batches ]
        log_input_expected_result("Batch sizes", [4, 4, 4], sizes)
        self.assertSequenceEqual(sizes, [4, 4, 4])

        # The second batch spans the Alpha and Beta contexts
        self.assertSequenceEqual(batches[1].phrases, ["Alpha phrase 4", "Alpha phrase 5", "Alpha phrase 6", "Beta phrase 0"])

        for batch in batches:
            self.assertIsNone(batch.context)

        covered = { phrase for batch in batches for phrase in batch.phrases }
        expected = { source for dummy, source in self._untranslated_sources(document) }
        self.assertSetEqual(covered, expected)

    def test_NoDuplicatesInBatch(self):
        log_test_name("No duplicate phrases within a batch")

        document = PrepareDocument(login_dialog_data)

        for scope in ['context', 'document']:
            batches = self._batch(document, api_call_size=50, batch_scope=scope)
            for batch in batches:
                with self.subTest(scope=scope, batch=batch.number):
                    self.assertEqual(len(batch.phrases), len(set(batch.phrases)))

        batches = self._batch(document, api_call_size=50, batch_scope='document')
        log_input_expected_result("Document scope", ("OK", "Cancel", "Open &File...", 'Save changes to "%1"?'), batches[0].phrases)
        self.assertEqual(len(batches), 1)
        self.assertSequenceEqual(batches[0].phrases, ("OK", "Cancel", "Open &File...", 'Save changes to "%1"?'))

        batches = self._batch(document, api_call_size=50, batch_scope='context')
        self.assertEqual(len(batches), 2)
        self.assertSequenceEqual(batches[0].phrases, ("OK", "Cancel"))
        self.assertEqual(batches[0].context, "LoginDialog")
        self.assertSequenceEqual(batches[1].phrases, ("OK", "Open &File...", 'Save changes to "%1"?'))
        self.assertEqual(batches[1].context, "MainWindow")

    def test_DuplicatesAcrossBatches(self):
        log_test_name("Duplicates are only removed within the open batch")

        document = BuildDocument({ 'A': [ ("One", ""), ("Two", ""), ("One", "") ] })

        batches = self._batch(document, api_call_size=2)
        phrases = [ batch.phrases for batch in batches ]
        log_input_expected_result("Batches", [("One", "Two")], phrases)
        self.assertSequenceEqual(phrases, [("One", "Two")])

        batches = self._batch(document, api_call_size=1)
        phrases = [ batch.phrases for batch in batches ]
        log_input_expected_result("Batches", [("One",), ("Two",), ("One",)], phrases)
        self.assertSequenceEqual(phrases, [("One",), ("Two",), ("One",)])

    def test_WordsPolicy(self):
        log_test_name("Words policy")

        document = BuildDocument({
            'Words': [
                ("one two three", ""),
                ("four five six seven", ""),
                ("eight nine", ""),
                ("a very long phrase that exceeds the threshold on its own", ""),
                ("last", ""),
            ]
        })

        batches = self._batch(document, api_call_size=6, batch_policy='words')

        sizes = [ len(batch) for batch in batches ]
        word_counts = [ batch.word_count for batch in batches ]

        log_input_expected_result("Batch sizes", [1, 2, 1, 1], sizes)
        self.assertSequenceEqual(sizes, [1, 2, 1, 1])
        self.assertSequenceEqual(word_counts, [3, 6, 11, 1])

        for batch in batches:
            self.assertTrue(batch.phrases)

    def test_NothingToTranslate(self):
        log_test_name("Nothing to translate")

        document = BuildDocument({ 'Done': [ ("Yes", "Ja"), ("No", "Nein") ], 'Empty': [] })
        batches = self._batch(document)

        log_input_expected_result("Batches", 0, len(batches))
        self.assertEqual(len(batches), 0)

    def test_DocumentNotModified(self):
        log_test_name("Batching does not modify the document")

        document = PrepareDocument(login_dialog_data)
        before = PrepareDocument(login_dialog_data)

        self._batch(document, api_call_size=1)

        self.assertEqual(document, before)
        self.assertEqual(document.untranslated_count, login_dialog_data['untranslated_count'])

    def test_InvalidSettings(self):
        log_test_name("Invalid batcher settings")

        test_cases = [
            { 'batch_policy': 'characters' },
            { 'batch_scope': 'file' },
            { 'api_call_size': -1 },
        ]

        for settings in test_cases:
            with self.subTest(settings=settings):
                with self.assertRaises(ValueError):
                    TsBatcher(SettingsType(settings))

if __name__ == '__main__':
    unittest.main()
