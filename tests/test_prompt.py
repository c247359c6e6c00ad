import unittest

from application.use_cases.build_prompt import (
    NO_SOURCES_NOTE,
    OUT_OF_SCOPE_NOTE,
    SOURCES_HEADER,
    build_generation_request,
    build_prompt,
    format_sources_section,
)
from domain.entities import ContextResult, GenerationOptions


class TestBuildPrompt(unittest.TestCase):
    def test_prompt_embeds_query_and_context(self):
        prompt = build_prompt("Rig 7 drops off the network", "From notes.txt:\ncheck the switch\n\n")

        self.assertIn("User Issue: Rig 7 drops off the network", prompt)
        self.assertIn("Knowledge Base:\nFrom notes.txt:\ncheck the switch", prompt)
        self.assertIn("2. SOLUTION STEPS:", prompt)

    def test_generation_request_carries_model_and_options(self):
        context = ContextResult(text="ctx", sources=["notes.txt"])
        request = build_generation_request("q", context, model="llama3.2:1b", options=GenerationOptions(temperature=0.1))

        self.assertEqual(request.model, "llama3.2:1b")
        self.assertFalse(request.stream)
        self.assertEqual(request.options.temperature, 0.1)
        self.assertIn("ctx", request.prompt)


class TestSourcesSection(unittest.TestCase):
    def test_numbered_sources(self):
        section = format_sources_section(["User Upload: rig.log", "Error Code: E1001"])

        self.assertEqual(section, SOURCES_HEADER + "1. User Upload: rig.log\n2. Error Code: E1001\n")

    def test_empty_sources_notes(self):
        self.assertEqual(format_sources_section([]), SOURCES_HEADER + NO_SOURCES_NOTE)
        self.assertEqual(format_sources_section([], out_of_scope=True), SOURCES_HEADER + OUT_OF_SCOPE_NOTE)


if __name__ == "__main__":
    unittest.main()
