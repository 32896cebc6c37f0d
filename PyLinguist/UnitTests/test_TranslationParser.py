import json
import unittest

from PyLinguist.Helpers.Tests import BuildChatReply, log_input_expected_result, log_test_name
from PyLinguist.TranslationParser import TranslationParser

class TranslationParserTests(unittest.TestCase):
    entries = [
        { 'source': 'OK', 'translation': 'Tamam' },
        { 'source': 'Cancel', 'translation': 'İptal' },
    ]

    expected = { 'OK': 'Tamam', 'Cancel': 'İptal' }

    def test_ParseReply(self):
        log_test_name("Parse well formed reply")

        reply = TranslationParser().ParseReply(BuildChatReply(self.entries))

        log_input_expected_result("Translations", self.expected, reply.translations)
        self.assertTrue(reply.succeeded)
        self.assertDictEqual(reply.translations, self.expected)

    def test_FencedReply(self):
        log_test_name("Parse fenced reply")

        reply = TranslationParser().ParseReply(BuildChatReply(self.entries, fenced=True))

        log_input_expected_result("Translations", self.expected, reply.translations)
        self.assertTrue(reply.succeeded)
        self.assertDictEqual(reply.translations, self.expected)

        content = "Here are the translations:\n```\n" + json.dumps(self.entries) + "\n```\nLet me know if you need anything else."
        reply = TranslationParser().ParseReply(BuildChatReply(content))
        self.assertDictEqual(reply.translations, self.expected)

    def test_EmptySourceDropped(self):
        log_test_name("Entries without source are dropped")

        entries = self.entries + [
            { 'source': '', 'translation': 'Boş' },
            { 'translation': 'Kaynak yok' },
            "not an object",
            { 'source': 'Apply', 'translation': None },
        ]

        reply = TranslationParser().ParseReply(BuildChatReply(entries))

        expected = dict(self.expected, Apply="")
        log_input_expected_result("Translations", expected, reply.translations)
        self.assertDictEqual(reply.translations, expected)

    def test_EmptyArray(self):
        log_test_name("Empty array is a successful reply")

        reply = TranslationParser().ParseReply(BuildChatReply([]))
        self.assertTrue(reply.succeeded)
        self.assertEqual(len(reply), 0)

    def test_FailedReplies(self):
        log_test_name("Unusable replies")

        test_cases = [
            ("Empty", b""),
            ("None", None),
            ("Not JSON", b"<html>Bad Gateway</html>"),
            ("No choices", json.dumps({ 'choices': [] }).encode('utf-8')),
            ("No content", json.dumps({ 'choices': [ { 'message': { 'role': 'assistant' } } ] }).encode('utf-8')),
            ("Content not JSON", BuildChatReply("Tamam, İptal")),
            ("Content not an array", BuildChatReply(json.dumps({ 'OK': 'Tamam' }))),
            ("Invalid UTF-8", b"\xff\xfe\x00"),
        ]

        for name, raw in test_cases:
            with self.subTest(name=name):
                reply = TranslationParser().ParseReply(raw)
                log_input_expected_result(name, True, reply.failed)
                self.assertTrue(reply.failed)
                self.assertIsNotNone(reply.error)
                self.assertEqual(len(reply.translations), 0)

if __name__ == '__main__':
    unittest.main()
