import unittest

from name_resolution.core.resolution.filters import DocumentNumberFilter, limit_candidates
from name_resolution.core.resolution.models import CandidateRecord


def _record(name: str, number=None) -> CandidateRecord:
    metadata = {} if number is None else {"document_number": number}
    return CandidateRecord(display_name=name, metadata=metadata)


class TestDocumentNumberFilter(unittest.TestCase):
    def test_registry_defaults(self) -> None:
        keep = DocumentNumberFilter()
        self.assertTrue(keep(_record("Acme", "L19000012345")))
        self.assertTrue(keep(_record("Acme", "l19000012345")))
        self.assertTrue(keep(_record("Acme", "P123456")))
        self.assertFalse(keep(_record("Acme", "P12345")))
        self.assertFalse(keep(_record("Acme", "F19000012345")))
        self.assertFalse(keep(_record("Acme", "")))
        self.assertFalse(keep(_record("Acme")))

    def test_apply_keeps_order(self) -> None:
        records = [
            _record("A", "N00000000001"),
            _record("B", "F00000000002"),
            _record("C", "B00000000003"),
        ]
        kept = DocumentNumberFilter().apply(records)
        self.assertEqual([record.display_name for record in kept], ["A", "C"])

    def test_custom_field_and_prefixes(self) -> None:
        keep = DocumentNumberFilter(prefixes="X", min_length=3, field="filing")
        self.assertTrue(keep(CandidateRecord("Acme", metadata={"filing": "x123"})))
        self.assertFalse(keep(CandidateRecord("Acme", metadata={"filing": "L123"})))
        self.assertFalse(keep(_record("Acme", "X123")))


class TestLimitCandidates(unittest.TestCase):
    def test_limits_in_order(self) -> None:
        records = [_record(name) for name in "ABCDEF"]
        self.assertEqual([r.display_name for r in limit_candidates(records, 2)], ["A", "B"])
        self.assertEqual(len(limit_candidates(records, None)), 6)
        self.assertEqual(len(limit_candidates(records, 10)), 6)
        self.assertEqual(limit_candidates(records, 0), [])


if __name__ == "__main__":
    unittest.main()
