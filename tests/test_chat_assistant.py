import unittest

from sample_sop import StubGemini

from sopify.ai.services.chat_assistant import (
    COMPLIANCE_ANSWER,
    DEFAULT_ANSWER,
    INCIDENT_ANSWER,
    KEY_COMPONENTS_ANSWER,
    answer,
    build_chat_prompt,
    fallback_answer,
)


class FallbackTest(unittest.TestCase):
    def test_keyword_topics(self):
        self.assertEqual(fallback_answer("What are the key components of an SOP?"), KEY_COMPONENTS_ANSWER)
        self.assertEqual(fallback_answer("How do I write an effective SOP"), KEY_COMPONENTS_ANSWER)
        self.assertEqual(fallback_answer("We had an EMERGENCY"), INCIDENT_ANSWER)
        self.assertEqual(fallback_answer("Which regulation applies?"), COMPLIANCE_ANSWER)
        self.assertEqual(fallback_answer("hello"), DEFAULT_ANSWER)


class AnswerTest(unittest.TestCase):
    def test_model_reply_returned(self):
        service = StubGemini(reply="Use a runbook.")
        self.assertEqual(answer("How do I restart?", service), "Use a runbook.")
        prompt, kwargs = service.calls[0]
        self.assertIn("Question: How do I restart?", prompt)
        self.assertEqual(kwargs["temperature"], 0.7)
        self.assertEqual(kwargs["top_k"], 40)

    def test_blank_reply_uses_fallback(self):
        self.assertEqual(answer("incident handling tips", StubGemini(reply="   ")), INCIDENT_ANSWER)

    def test_prompt(self):
        self.assertIn("Standard Operating Procedures", build_chat_prompt("x"))


if __name__ == "__main__":
    unittest.main()
