import copy
import json
import tempfile
import unittest
from pathlib import Path

from cgpacalc.core import document as ops
from cgpacalc.core.gpa import calculate_cgpa
from cgpacalc.services.storage import (
    ImportFormatError,
    StorageError,
    export_document,
    export_to_file,
    import_document,
    import_from_file,
    load_into,
)
from cgpacalc.state.app_state import AppState


def _sample_document():
    doc = ops.new_document("10")
    ops.update_subject(doc, 1, 1, "name", "Maths")
    ops.update_subject(doc, 1, 1, "credits", "4")
    ops.update_subject(doc, 1, 1, "grade", "A")
    ops.add_subject(doc, 1)
    ops.update_subject(doc, 1, 2, "credits", "3")
    ops.update_subject(doc, 1, 2, "grade", "B")
    sem = ops.add_semester(doc)
    ops.rename_semester(doc, sem.id, "Spring")
    return doc


class ExportTests(unittest.TestCase):
    def test_export_is_pretty_json(self):
        raw = export_document(_sample_document())
        text = raw.decode("utf-8")
        self.assertTrue(text.startswith('{\n  "semesters": ['))
        data = json.loads(text)
        self.assertEqual(list(data), ["semesters", "gradeSystem"])
        self.assertEqual(data["gradeSystem"], "10")
        self.assertEqual(
            data["semesters"][0]["subjects"][0],
            {"id": 1, "name": "Maths", "credits": "4", "grade": "A"},
        )

    def test_export_keeps_unicode(self):
        doc = ops.new_document("10")
        ops.update_subject(doc, 1, 1, "name", "Mécanique")
        self.assertIn("Mécanique".encode("utf-8"), export_document(doc))

    def test_round_trip(self):
        doc = _sample_document()
        restored = import_document(export_document(doc))
        self.assertEqual(restored, doc)
        self.assertEqual(calculate_cgpa(restored), "7.14")

    def test_export_to_chosen_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            chosen = Path(tmp) / "backup" / "grades.json"
            path = export_to_file(_sample_document(), directory=chosen.parent, filename=chosen.name)
            self.assertEqual(path, chosen)
            self.assertEqual(import_from_file(chosen), _sample_document())

    def test_export_to_unwritable_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("not a directory")
            with self.assertRaises(StorageError):
                export_to_file(_sample_document(), directory=blocker / "sub")

    def test_export_to_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = export_to_file(_sample_document(), directory=Path(tmp) / "out")
            self.assertEqual(path.name, "cgpa_data.json")
            self.assertEqual(import_from_file(path), _sample_document())


class ImportTests(unittest.TestCase):
    def test_malformed_json(self):
        with self.assertRaises(ImportFormatError) as ctx:
            import_document(b"{not json")
        self.assertEqual(str(ctx.exception), "Invalid file format")

    def test_missing_grade_system(self):
        with self.assertRaises(ImportFormatError):
            import_document('{"semesters": [], "foo": 1}')

    def test_missing_semesters(self):
        with self.assertRaises(ImportFormatError):
            import_document('{"gradeSystem": "10"}')

    def test_non_object(self):
        for payload in ("[]", "42", "null", '"text"'):
            with self.assertRaises(ImportFormatError):
                import_document(payload)

    def test_entries_that_are_not_objects(self):
        with self.assertRaises(ImportFormatError):
            import_document('{"semesters": [1, 2], "gradeSystem": "10"}')

    def test_permissive_shape(self):
        payload = {
            "semesters": [
                {"id": 1, "name": "A", "subjects": []},
                {"id": 1, "name": "B", "subjects": [{"id": 1, "credits": 3, "grade": "O"}]},
            ],
            "gradeSystem": "10",
        }
        doc = import_document(json.dumps(payload))
        self.assertEqual([sem.id for sem in doc.semesters], [1, 1])
        self.assertEqual(doc.semesters[0].subjects, [])
        self.assertEqual(doc.semesters[1].subjects[0].name, "")
        self.assertEqual(doc.semesters[1].subjects[0].credits, 3)
        self.assertEqual(calculate_cgpa(doc), "10.00")

    def test_empty_semesters_list_is_accepted(self):
        doc = import_document('{"semesters": [], "gradeSystem": "4"}')
        self.assertEqual(doc.semesters, [])
        self.assertEqual(calculate_cgpa(doc), "0.00")

    def test_strict_mode_checks_schema(self):
        payload = json.dumps({"semesters": [{"id": "x", "subjects": []}], "gradeSystem": "10"})
        self.assertEqual(import_document(payload, strict=False).semesters[0].id, "x")
        with self.assertRaises(ImportFormatError):
            import_document(payload, strict=True)
        with self.assertRaises(ImportFormatError):
            import_document('{"semesters": [], "gradeSystem": "7"}', strict=True)

    def test_strict_mode_accepts_exports(self):
        doc = _sample_document()
        self.assertEqual(import_document(export_document(doc), strict=True), doc)

    def test_unreadable_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ImportFormatError):
                import_from_file(Path(tmp) / "missing.json")


class LoadIntoTests(unittest.TestCase):
    def test_failed_import_leaves_state_unchanged(self):
        state = AppState(document=_sample_document())
        before = copy.deepcopy(state.document)
        with self.assertRaises(ImportFormatError):
            load_into(state, '{"semesters": [], "foo": 1}')
        self.assertEqual(state.document, before)

    def test_successful_import_replaces_document(self):
        state = AppState(document=_sample_document())
        replacement = ops.new_document("4")
        load_into(state, export_document(replacement))
        self.assertEqual(state.document, replacement)
        self.assertEqual(state.document.grade_system, "4")

    def test_new_state_starts_with_one_semester(self):
        state = AppState()
        self.assertEqual(len(state.document.semesters), 1)
        self.assertEqual(state.document.semesters[0].name, "Semester 1")


if __name__ == "__main__":
    unittest.main()
