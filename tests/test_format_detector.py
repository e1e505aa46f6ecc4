import unittest

from listing_doctor.format_detector import count_signatures, detect_format
from listing_doctor.catalog import MINISTERIAL_SIGNATURES, VENDOR_SIGNATURES

MINISTERIAL_HEADERS = [
    "Nazwa dewelopera",
    "Forma prawna dewelopera",
    "Nr lokalu lub domu jednorodzinnego nadany przez dewelopera",
    "Cena m 2 powierzchni użytkowej lokalu mieszkalnego / domu jednorodzinnego [zł]",
    "Cena lokalu mieszkalnego lub domu jednorodzinnego będących przedmiotem umowy "
    "stanowiąca iloczyn ceny m2 oraz powierzchni [zł]",
    "Rodzaj nieruchomości: lokal mieszkalny, dom jednorodzinny",
]

VENDOR_HEADERS = [
    "Id nieruchomości",
    "Adres strony internetowej dewelopera",
    "Adres strony internetowej inwestycji",
    "Nr nieruchomości nadany przez dewelopera",
    "Inne świadczenia pieniężne",
    "Data od której obowiązuje cena za m2 nieruchomości",
    "Data od której obowiązuje cena nieruchomości",
]


class SignatureCountTests(unittest.TestCase):
    def test_matching_ignores_case_and_surrounding_space(self):
        headers = ["  NAZWA DEWELOPERA ", "forma prawna dewelopera"]
        self.assertEqual(count_signatures(headers, MINISTERIAL_SIGNATURES), 2)

    def test_containment_works_in_both_directions(self):
        # Header longer than the signature, and header shorter than it.
        headers = ["Id nieruchomości (wewnętrzne)", "Inne świadczenia"]
        self.assertEqual(count_signatures(headers, VENDOR_SIGNATURES), 2)

    def test_empty_headers_never_match(self):
        self.assertEqual(count_signatures(["", "   "], MINISTERIAL_SIGNATURES), 0)


class DetectFormatTests(unittest.TestCase):
    def test_four_ministerial_signatures_classify_as_ministerial(self):
        detection = detect_format(MINISTERIAL_HEADERS[:4] + ["Województwo", "Powiat"])
        self.assertEqual(detection.format, "ministerial")
        self.assertLessEqual(detection.confidence, 95)
        self.assertAlmostEqual(detection.confidence, 4 / 6 * 100)
        self.assertIn("(4/6 official columns found)", detection.details)

    def test_full_ministerial_header_is_capped_at_95(self):
        detection = detect_format(MINISTERIAL_HEADERS)
        self.assertEqual(detection.format, "ministerial")
        self.assertEqual(detection.confidence, 95)

    def test_full_vendor_header_is_capped_at_95(self):
        detection = detect_format(VENDOR_HEADERS)
        self.assertEqual(detection.format, "vendor-export")
        self.assertEqual(detection.confidence, 95)
        self.assertIn("7/7", detection.details)

    def test_three_ministerial_signatures_are_a_weak_signal(self):
        detection = detect_format(MINISTERIAL_HEADERS[:3] + ["Metraż"])
        self.assertEqual(detection.format, "ministerial")
        self.assertEqual(detection.confidence, 50.0)
        self.assertTrue(detection.details.startswith("Likely"))

    def test_weak_vendor_signal(self):
        detection = detect_format(VENDOR_HEADERS[:3])
        self.assertEqual(detection.format, "vendor-export")
        self.assertAlmostEqual(detection.confidence, 3 / 7 * 100)
        self.assertLessEqual(detection.confidence, 75)

    def test_two_of_each_prefers_vendor(self):
        headers = MINISTERIAL_HEADERS[:2] + VENDOR_HEADERS[:2]
        detection = detect_format(headers)
        self.assertEqual(detection.format, "vendor-export")

    def test_custom_gets_at_least_fifty(self):
        detection = detect_format(["Metraż", "Piętro"])
        self.assertEqual(detection.format, "custom")
        self.assertEqual(detection.confidence, 50)

    def test_custom_ratio_above_floor(self):
        headers = [
            "apartment", "area", "metraz", "price", "status", "availability",
            "dostępność", "powierzchnia",
        ]
        detection = detect_format(headers)
        self.assertEqual(detection.format, "custom")
        self.assertGreater(detection.confidence, 50)
        self.assertIn("common field patterns found", detection.details)

    def test_scores_are_reported(self):
        detection = detect_format(VENDOR_HEADERS)
        self.assertEqual(detection.scores["vendor-export"], 7)


if __name__ == "__main__":
    unittest.main()
