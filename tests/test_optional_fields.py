import shutil
import sys
import tempfile
import unittest
from pathlib import Path


SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_ROOT))

from haproxy_dataplane_codegen.optional_fields import (  # noqa: E402
    BACKEND_OPTIONAL_FIELDS,
    fix_backend_model,
    fix_frontend_model,
    patch_text,
)

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class TestPatchText(unittest.TestCase):
    def test_rewrites_field_to_pointer_and_keeps_alignment(self) -> None:
        text = '\tHashType      BackendHashType   `json:"hash_type,omitempty"`\n'
        updated, applied, unmatched = patch_text(text, (("HashType", "BackendHashType"),))
        self.assertEqual(updated, '\tHashType      *BackendHashType   `json:"hash_type,omitempty"`\n')
        self.assertEqual(applied, ["HashType BackendHashType"])
        self.assertEqual(unmatched, [])

    def test_does_not_touch_longer_names(self) -> None:
        text = "\tXForwardfor Forwardfor\n\tForwardfor ForwardforSpec\n"
        updated, applied, unmatched = patch_text(text, (("Forwardfor", "Forwardfor"),))
        self.assertEqual(updated, text)
        self.assertEqual(applied, [])
        self.assertEqual(unmatched, ["Forwardfor Forwardfor"])

    def test_field_must_start_its_line(self) -> None:
        text = (
            "func (o *Frontend) GetForwardfor() Forwardfor {\n"
            "\treturn o.Forwardfor\n"
            "}\n"
            "\tForwardfor Forwardfor `json:\"forwardfor,omitempty\"`\n"
        )
        updated, applied, _ = patch_text(text, (("Forwardfor", "Forwardfor"),))
        self.assertEqual(applied, ["Forwardfor Forwardfor"])
        self.assertIn("GetForwardfor() Forwardfor {", updated)
        self.assertIn("\tForwardfor *Forwardfor `json", updated)
        self.assertEqual(updated.count("*Forwardfor"), 1)

    def test_already_patched_field_is_left_alone(self) -> None:
        text = "\tForwardfor *Forwardfor `json:\"forwardfor,omitempty\"`\n"
        updated, _, unmatched = patch_text(text, (("Forwardfor", "Forwardfor"),))
        self.assertEqual(updated, text)
        self.assertEqual(unmatched, ["Forwardfor Forwardfor"])


class TestPatchFiles(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_fix_backend_model_rewrites_each_field_once(self) -> None:
        path = self.root / "model_backend.go"
        shutil.copy(FIXTURES / "model_backend.go", path)

        result = fix_backend_model(path)

        text = path.read_text(encoding="utf-8")
        self.assertTrue(result.changed)
        self.assertEqual(len(result.applied), len(BACKEND_OPTIONAL_FIELDS))
        self.assertEqual(result.unmatched, ())
        for field_name, type_name in BACKEND_OPTIONAL_FIELDS:
            self.assertEqual(text.count(f"*{type_name} "), 1, msg=field_name)
        self.assertIn("\tBalance       Balance ", text)
        self.assertNotIn("**", text)

    def test_second_pass_is_a_no_op(self) -> None:
        path = self.root / "model_backend.go"
        shutil.copy(FIXTURES / "model_backend.go", path)
        fix_backend_model(path)
        once = path.read_text(encoding="utf-8")

        result = fix_backend_model(path)

        self.assertFalse(result.changed)
        self.assertEqual(len(result.unmatched), len(BACKEND_OPTIONAL_FIELDS))
        self.assertEqual(path.read_text(encoding="utf-8"), once)

    def test_fix_frontend_model(self) -> None:
        path = self.root / "model_frontend.go"
        shutil.copy(FIXTURES / "model_frontend.go", path)

        result = fix_frontend_model(path)

        self.assertEqual(result.applied, ("Forwardfor Forwardfor",))
        self.assertIn("\tForwardfor     *Forwardfor `json:", path.read_text(encoding="utf-8"))

    def test_file_without_patterns_is_unchanged(self) -> None:
        path = self.root / "model_frontend.go"
        original = "package openapi\n\ntype Frontend struct {\n\tName string\n}\n"
        path.write_text(original, encoding="utf-8")

        result = fix_frontend_model(path)

        self.assertFalse(result.changed)
        self.assertEqual(result.unmatched, ("Forwardfor Forwardfor",))
        self.assertEqual(path.read_text(encoding="utf-8"), original)

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            fix_backend_model(self.root / "model_backend.go")


if __name__ == "__main__":
    unittest.main()
