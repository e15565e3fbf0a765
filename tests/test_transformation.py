# ========================
# tests/test_transformation.py
# ========================

import unittest
import sys
import os

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.etl.transformation import DataTransformer


class TestDataTransformer(unittest.TestCase):

    def setUp(self):
        self.transformer = DataTransformer()

    def test_transform_trims_and_uppercases(self):
        """
        Tests that every field is stripped and upper-cased.
        """
        records = [(' john ', 'doe', ' 30', 'Engineer '), ('Jane', ' smith ')]

        transformed = self.transformer.transform(records)

        self.assertEqual(transformed, [('JOHN', 'DOE', '30', 'ENGINEER'), ('JANE', 'SMITH')])

    def test_transform_preserves_length_and_arity(self):
        records = [('a',), ('b', 'c', 'd'), ('', '', '')]

        transformed = self.transformer.transform(records)

        self.assertEqual(len(transformed), len(records))
        for original, result in zip(records, transformed):
            self.assertEqual(len(original), len(result))

    def test_transform_does_not_mutate_input(self):
        records = [(' a ', 'b')]
        snapshot = list(records)

        transformed = self.transformer.transform(records)

        self.assertEqual(records, snapshot)
        self.assertIsNot(transformed, records)

    def test_trim_and_uppercase_commute(self):
        """
        Stripping before or after upper-casing gives the same field.
        """
        fields = ['  mixed Case  ', '\tTab\t', 'ß', ' ', '']
        transformed = self.transformer.transform([tuple(fields)])[0]

        for original, result in zip(fields, transformed):
            self.assertEqual(result, original.upper().strip())
            self.assertEqual(result, original.strip().upper())

    def test_transform_empty(self):
        self.assertEqual(self.transformer.transform([]), [])

    def test_filter_keeps_records_with_enough_fields(self):
        """
        Tests that filtering keeps order and uses >= against min_fields.
        """
        records = [('a', 'b', 'c'), ('d',), ('e', 'f'), ('g', 'h', 'i', 'j')]

        filtered = self.transformer.filter_by_field_count(records, 2)

        self.assertEqual(filtered, [('a', 'b', 'c'), ('e', 'f'), ('g', 'h', 'i', 'j')])

    def test_filter_never_truncates_fields(self):
        records = [('a', 'b', 'c')]

        filtered = self.transformer.filter_by_field_count(records, 1)

        self.assertEqual(filtered[0], ('a', 'b', 'c'))

    def test_filter_zero_or_negative_keeps_everything(self):
        records = [('a',), ('b', 'c')]

        for min_fields in (0, -1, -100):
            self.assertEqual(
                self.transformer.filter_by_field_count(records, min_fields),
                records,
                f"Failed for min_fields: {min_fields}"
            )

    def test_filter_above_every_arity_drops_everything(self):
        records = [('a',), ('b', 'c')]

        self.assertEqual(self.transformer.filter_by_field_count(records, 3), [])

    def test_filter_does_not_mutate_input(self):
        records = [('a',), ('b', 'c')]

        self.transformer.filter_by_field_count(records, 2)

        self.assertEqual(records, [('a',), ('b', 'c')])

    def test_aggregate_count(self):
        self.assertEqual(self.transformer.aggregate_count([]), 0)
        self.assertEqual(self.transformer.aggregate_count([('a',), ('b',)]), 2)

    def test_none_input_fails_loudly(self):
        with self.assertRaises(TypeError):
            self.transformer.transform(None)
        with self.assertRaises(TypeError):
            self.transformer.filter_by_field_count(None, 1)


if __name__ == '__main__':
    unittest.main()
