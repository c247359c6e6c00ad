import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from application.services.knowledge_store import KnowledgeStore
from application.use_cases.ingest_upload import ingest_upload, ingest_upload_bytes
from domain.errors import UploadError
from infrastructure.config import ContainerConfig
from infrastructure.storage.in_memory_upload_repository import InMemoryUploadRepository


class TestIngestUpload(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)
        self.repository = InMemoryUploadRepository()

    def test_text_upload_is_stored_with_timestamped_id(self):
        path = self.tmp / "log.txt"
        path.write_text("relay chatter at 03:00", encoding="utf-8")

        record = ingest_upload(path, upload_repository=self.repository, now=datetime(2024, 1, 2, 3, 4, 5, 6))

        self.assertEqual(record.id, "upload_20240102030405000006_log.txt")
        self.assertEqual(record.content, "relay chatter at 03:00")
        self.assertEqual(record.describe(), "log.txt (uploaded 03:04:05)")
        self.assertEqual(self.repository.snapshot(), [record])

    def test_unknown_extension_is_read_as_utf8_text(self):
        path = self.tmp / "rig.log"
        path.write_text("watchdog reset", encoding="utf-8")

        record = ingest_upload(path, upload_repository=self.repository)

        self.assertEqual(record.content, "watchdog reset")
        self.assertFalse(record.failed)

    def test_unknown_binary_file_is_rejected(self):
        path = self.tmp / "dump.bin"
        path.write_bytes(b"\xff\xfe\x00\x81")

        with self.assertRaises(UploadError) as ctx:
            ingest_upload(path, upload_repository=self.repository)
        self.assertIn("unsupported file type", str(ctx.exception))
        self.assertEqual(self.repository.snapshot(), [])

    def test_missing_file_raises_upload_error(self):
        with self.assertRaises(UploadError) as ctx:
            ingest_upload(self.tmp / "ghost.txt", upload_repository=self.repository)
        self.assertTrue(str(ctx.exception).startswith("Failed to process uploaded file"))

    def test_broken_known_format_becomes_placeholder(self):
        path = self.tmp / "bad.pdf"
        path.write_bytes(b"not really a pdf")

        record = ingest_upload(path, upload_repository=self.repository)

        self.assertTrue(record.failed)
        self.assertEqual(record.content, "Failed to extract text from uploaded PDF - bad.pdf")

    def test_legacy_doc_upload_asks_for_conversion(self):
        path = self.tmp / "minutes.doc"
        path.write_bytes(b"\xd0\xcf\x11\xe0 binary")

        record = ingest_upload(path, upload_repository=self.repository)

        self.assertTrue(record.failed)
        self.assertEqual(
            record.content,
            "Legacy .doc format not supported - please convert to .docx format: minutes.doc",
        )

    def test_payload_upload_uses_the_name_for_classification(self):
        record = ingest_upload_bytes(
            "flow.drawio",
            b'<mxCell value="Check power supply"/>',
            upload_repository=self.repository,
        )

        self.assertEqual(record.content, "Check power supply\n")
        self.assertEqual(record.path, "flow.drawio")

        with self.assertRaises(UploadError):
            ingest_upload_bytes("dump.bin", b"\xff\xfe", upload_repository=self.repository)


class TestUploadSession(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        tmp = Path(self._tmp.name)
        (tmp / "kb").mkdir()
        data = tmp / "troubleshooting.json"
        data.write_text(json.dumps({"error_codes": [], "common_issues": []}), encoding="utf-8")
        self.upload = tmp / "dump.txt"
        self.upload.write_text("telemetry dump from rig 7", encoding="utf-8")
        self.store = KnowledgeStore.open(
            ContainerConfig(knowledge_root=str(tmp / "kb"), structured_data_path=str(data))
        )

    def test_list_and_clear(self):
        second = self.upload.with_name("notes.txt")
        second.write_text("operator notes", encoding="utf-8")
        self.store.ingest_single(self.upload)
        self.store.ingest_single(second)

        listed = self.store.list_uploads()
        self.assertEqual(len(listed), 2)
        self.assertTrue(listed[0].startswith("dump.txt (uploaded "))
        self.assertTrue(listed[1].startswith("notes.txt (uploaded "))

        self.store.clear_uploads()
        self.assertEqual(self.store.list_uploads(), [])

    def test_cleared_uploads_no_longer_contribute(self):
        self.store.ingest_single(self.upload)
        before = self.store.assemble("rig telemetry dump analysis")
        self.assertIn("User Upload: dump.txt", before.sources)

        self.store.clear_uploads()
        after = self.store.assemble("rig telemetry dump analysis")
        self.assertNotIn("User Upload: dump.txt", after.sources)
        self.assertNotIn("telemetry dump from rig 7", after.text)


if __name__ == "__main__":
    unittest.main()
