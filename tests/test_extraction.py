# ========================
# tests/test_extraction.py
# ========================

import unittest
import tempfile
import os
import sys

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.etl.extraction import FileExtractor, SourceUnavailable


class TestFileExtraction(unittest.TestCase):
    """Test the extraction module."""

    def setUp(self):
        self.extractor = FileExtractor()
        self.temp_files = []

    def tearDown(self):
        for path in self.temp_files:
            if os.path.exists(path):
                os.unlink(path)

    def _write_temp_file(self, content: str) -> str:
        with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False, newline='') as f:
            f.write(content)
            self.temp_files.append(f.name)
            return f.name

    def test_extract_splits_each_line_on_commas(self):
        """Each line becomes one record, in file order."""
        path = self._write_temp_file("John,Doe,30,Engineer\nJane,Smith,25,Designer\n")

        records = self.extractor.extract_from_file(path)

        self.assertEqual(records, [
            ('John', 'Doe', '30', 'Engineer'),
            ('Jane', 'Smith', '25', 'Designer'),
        ])

    def test_extract_skips_blank_and_whitespace_lines(self):
        """Blank and whitespace-only lines produce no record at all."""
        path = self._write_temp_file("a,b\n\n  \nc\n")

        records = self.extractor.extract_from_file(path)

        self.assertEqual(records, [('a', 'b'), ('c',)])

    def test_first_line_is_data(self):
        """There is no header detection."""
        path = self._write_temp_file("name,age\nalice,30\n")

        records = self.extractor.extract_from_file(path)

        self.assertEqual(len(records), 2)
        self.assertEqual(records[0], ('name', 'age'))

    def test_extract_empty_file(self):
        """An empty file yields an empty record set."""
        path = self._write_temp_file("")

        self.assertEqual(self.extractor.extract_from_file(path), [])

    def test_fields_are_not_trimmed(self):
        """Extraction keeps field whitespace; normalizing is the transformer's job."""
        path = self._write_temp_file(" a , b \n")

        records = self.extractor.extract_from_file(path)

        self.assertEqual(records, [(' a ', ' b ')])

    def test_windows_line_endings(self):
        path = self._write_temp_file("a,b\r\nc,d\r\n")

        records = self.extractor.extract_from_file(path)

        self.assertEqual(records, [('a', 'b'), ('c', 'd')])

    def test_empty_fields_are_kept(self):
        """Empty fields between or after delimiters still count as fields."""
        records = self.extractor.extract_lines(["a,,c\n", "x,y,\n"])

        self.assertEqual(records, [('a', '', 'c'), ('x', 'y', '')])

    def test_extract_lines_accepts_any_line_source(self):
        records = self.extractor.extract_lines(["one,two", "", "three"])

        self.assertEqual(records, [('one', 'two'), ('three',)])

    def test_repeated_extraction_is_equal_but_independent(self):
        """Extracting the same file twice gives equal, separate record sets."""
        path = self._write_temp_file("a,b\nc,d\n")

        first = self.extractor.extract_from_file(path)
        second = self.extractor.extract_from_file(path)

        self.assertEqual(first, second)
        self.assertIsNot(first, second)

        first.append(('extra',))
        self.assertEqual(len(second), 2)

    def test_missing_file_raises_source_unavailable(self):
        """A missing file raises SourceUnavailable."""
        with self.assertRaises(SourceUnavailable) as ctx:
            self.extractor.extract_from_file("non_existent_file.csv")

        self.assertEqual(ctx.exception.source, "non_existent_file.csv")
        self.assertIn("not found", str(ctx.exception))

    def test_directory_raises_source_unavailable(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(SourceUnavailable):
                self.extractor.extract_from_file(temp_dir)

    def test_undecodable_file_raises_source_unavailable(self):
        with tempfile.NamedTemporaryFile(mode='wb', suffix='.csv', delete=False) as f:
            f.write(b"\xff\xfe\xfa,\x80\n")
            self.temp_files.append(f.name)

        with self.assertRaises(SourceUnavailable):
            self.extractor.extract_from_file(f.name)

    def test_get_record_count(self):
        path = self._write_temp_file("a\n\nb\nc\n")

        self.assertEqual(self.extractor.get_record_count(path), 3)


if __name__ == '__main__':
    unittest.main()
