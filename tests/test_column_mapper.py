import unittest

from listing_doctor.catalog import FIELD_NAMES
from listing_doctor.column_mapper import (
    closest_matches,
    map_columns,
    match_score,
    normalize_header,
    suggest_columns,
)
from listing_doctor.settings import MATCH_THRESHOLD

BASIC_HEADERS = ["Nr lokalu", "Powierzchnia", "Cena za m2", "Cena całkowita"]


class NormalizeHeaderTests(unittest.TestCase):
    def test_lowercases_and_strips_punctuation(self):
        self.assertEqual(normalize_header("  Cena / m2 "), "cena m2")
        self.assertEqual(normalize_header("Nr. lokalu:"), "nr lokalu")

    def test_keeps_polish_letters(self):
        self.assertEqual(normalize_header("Cena CAŁKOWITA"), "cena całkowita")

    def test_punctuation_only_header_is_empty(self):
        self.assertEqual(normalize_header("--- / ---"), "")


class MatchScoreTests(unittest.TestCase):
    def test_equal_strings(self):
        self.assertEqual(match_score("cena", "cena"), 1.0)

    def test_containment_either_way(self):
        self.assertEqual(match_score("cena", "cena brutto"), 0.9)
        self.assertEqual(match_score("cena brutto", "cena"), 0.9)

    def test_edit_distance_similarity(self):
        self.assertAlmostEqual(match_score("abc", "abd"), 1 - 1 / 3)
        self.assertEqual(match_score("abc", "xyz"), 0.0)


class MapColumnsTests(unittest.TestCase):
    def test_exact_alias_maps_with_full_score(self):
        mapping = map_columns(["Cena za m2"])
        self.assertEqual(mapping.header_for("price_per_m2"), "Cena za m2")
        self.assertEqual(mapping.scores["price_per_m2"], 1.0)
        self.assertEqual(mapping.index_for("price_per_m2"), 0)

    def test_one_header_may_serve_several_fields(self):
        mapping = map_columns(["Cena za m2"])
        # "cena" is an alias of total_price and is contained in the header.
        self.assertEqual(mapping.header_for("total_price"), "Cena za m2")
        self.assertEqual(mapping.scores["total_price"], 0.9)

    def test_basic_headers_map_core_fields(self):
        mapping = map_columns(BASIC_HEADERS)
        self.assertEqual(mapping.header_for("property_number"), "Nr lokalu")
        self.assertEqual(mapping.header_for("area"), "Powierzchnia")
        self.assertEqual(mapping.header_for("price_per_m2"), "Cena za m2")
        self.assertEqual(mapping.header_for("total_price"), "Cena całkowita")
        self.assertGreaterEqual(mapping.mapped_count, 4)

    def test_runner_up_headers_become_alternates(self):
        mapping = map_columns(BASIC_HEADERS)
        self.assertIn("Cena za m2", mapping.alternates["total_price"])
        self.assertNotIn("Cena całkowita", mapping.alternates["total_price"])

    def test_tie_goes_to_earlier_header(self):
        mapping = map_columns(["Nr lokalu", "Numer lokalu"])
        self.assertEqual(mapping.index_for("property_number"), 0)
        self.assertEqual(mapping.alternates["property_number"], ["Numer lokalu"])

    def test_every_kept_score_is_above_threshold(self):
        mapping = map_columns(BASIC_HEADERS + ["Województwo", "Gmina", "Status"])
        self.assertTrue(mapping.scores)
        for score in mapping.scores.values():
            self.assertGreater(score, MATCH_THRESHOLD)

    def test_empty_headers_are_never_mapped(self):
        mapping = map_columns(["", "  ", "Nr lokalu"])
        self.assertEqual(mapping.index_for("property_number"), 2)
        self.assertNotIn(0, mapping.indices.values())
        self.assertNotIn(1, mapping.indices.values())

    def test_unrecognized_headers_map_nothing(self):
        mapping = map_columns(["qqqq", "zzzz"])
        self.assertEqual(mapping.mapped_count, 0)
        self.assertEqual(mapping.confidence, 0.0)
        self.assertEqual(len(mapping.unmapped), len(FIELD_NAMES))
        self.assertIn("Nie znaleziono kolumny dla: property_number", mapping.errors)

    def test_confidence_is_mean_score(self):
        mapping = map_columns(BASIC_HEADERS)
        expected = sum(mapping.scores.values()) / len(mapping.scores)
        self.assertAlmostEqual(mapping.confidence, expected)

    def test_mapping_is_deterministic(self):
        first = map_columns(BASIC_HEADERS)
        second = map_columns(BASIC_HEADERS)
        self.assertEqual(first.columns, second.columns)
        self.assertEqual(first.alternates, second.alternates)


class ClosestMatchTests(unittest.TestCase):
    def test_similar_header_is_suggested_first(self):
        suggestions = closest_matches("gmina", ["Gminy", "Cena"])
        self.assertEqual(suggestions[0], "Gminy")

    def test_limit_keeps_header_order_on_ties(self):
        headers = ["Cena A", "Cena B", "Cena C", "Cena D"]
        self.assertEqual(closest_matches("cena", headers), ["Cena A", "Cena B", "Cena C"])

    def test_duplicate_headers_are_suggested_once(self):
        self.assertEqual(closest_matches("gmina", ["Gminy", "Gminy"]), ["Gminy"])

    def test_nothing_above_threshold(self):
        self.assertEqual(closest_matches("gmina", ["qqqqqqqq"]), [])


class SuggestColumnsTests(unittest.TestCase):
    def test_every_field_has_an_entry(self):
        suggestions = suggest_columns(BASIC_HEADERS)
        self.assertEqual(set(suggestions), set(FIELD_NAMES))
        self.assertEqual(suggestions["price_per_m2"]["current"], "Cena za m2")
        self.assertIsNone(suggestions["gmina"]["current"])
        self.assertIsInstance(suggestions["gmina"]["suggestions"], list)


if __name__ == "__main__":
    unittest.main()
