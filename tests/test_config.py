import json
import tempfile
import unittest
from pathlib import Path

from application.services.keywords import DEFAULT_KEYWORDS
from domain.entities import GenerationOptions, GenerationRequest
from infrastructure.config import DEFAULT_MODEL, ContainerConfig, build_default_container, build_extractors
from infrastructure.knowledge.keyword_loader import load_keyword_set


class TestContainerConfig(unittest.TestCase):
    def test_from_env_reads_prefixed_variables(self):
        cfg = ContainerConfig.from_env(
            {
                "TECHCONTEXT_KNOWLEDGE_ROOT": "/srv/kb",
                "TECHCONTEXT_STRUCTURED_DATA": "/srv/kb/data.json",
                "TECHCONTEXT_KEYWORDS_FILE": "/srv/kb/keywords.json",
                "TECHCONTEXT_MODEL": "mistral",
            }
        )

        self.assertEqual(cfg.knowledge_root, "/srv/kb")
        self.assertEqual(cfg.structured_data_path, "/srv/kb/data.json")
        self.assertEqual(cfg.keywords_path, "/srv/kb/keywords.json")
        self.assertEqual(cfg.model, "mistral")

    def test_from_env_defaults(self):
        cfg = ContainerConfig.from_env({})

        self.assertEqual(cfg.knowledge_root, "knowledge")
        self.assertIsNone(cfg.keywords_path)
        self.assertEqual(cfg.model, DEFAULT_MODEL)
        self.assertEqual(cfg.budget.total_chars, 1500)

    def test_container_uses_keyword_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            data = Path(tmp) / "data.json"
            data.write_text("{}", encoding="utf-8")
            keywords = Path(tmp) / "keywords.json"
            keywords.write_text(json.dumps({"domain_keywords": ["Cycler"]}), encoding="utf-8")

            container = build_default_container(
                ContainerConfig(knowledge_root=tmp, structured_data_path=str(data), keywords_path=str(keywords))
            )

        self.assertEqual(container.scorer.keywords.domain_keywords, ("cycler",))
        self.assertEqual(container.scorer.keywords.upload_keywords, DEFAULT_KEYWORDS.upload_keywords)


class TestKeywordLoader(unittest.TestCase):
    def test_unknown_list_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "keywords.json"
            path.write_text(json.dumps({"colours": ["red"]}), encoding="utf-8")

            with self.assertRaises(ValueError):
                load_keyword_set(path)

    def test_markup_keywords_drive_the_html_extractor(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "keywords.json"
            path.write_text(json.dumps({"markup_line_keywords": ["cycler"]}), encoding="utf-8")
            keywords = load_keyword_set(path)

        extractor = build_extractors(keywords)[".html"]
        page = "<p>The cycler needs a firmware update</p>\n<p>There is an error in the report</p>"
        self.assertEqual(extractor.extract(page).text, "The cycler needs a firmware update\n")


class TestGenerationOptions(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(GenerationOptions().as_dict(), {"num_predict": 1000, "temperature": 0.7, "top_p": 0.9})

    def test_unknown_option_is_rejected(self):
        with self.assertRaises(ValueError):
            GenerationOptions.from_mapping({"temperature": 0.2, "top_k": 40})

    def test_out_of_range_values_are_rejected(self):
        with self.assertRaises(ValueError):
            GenerationOptions(temperature=3.0)
        with self.assertRaises(ValueError):
            GenerationOptions(num_predict=0)

    def test_request_payload(self):
        request = GenerationRequest(model="llama3.2:1b", prompt="hi", options=GenerationOptions.from_mapping({"top_p": 0.5}))

        self.assertEqual(
            request.as_payload(),
            {
                "model": "llama3.2:1b",
                "prompt": "hi",
                "stream": False,
                "options": {"num_predict": 1000, "temperature": 0.7, "top_p": 0.5},
            },
        )


if __name__ == "__main__":
    unittest.main()
