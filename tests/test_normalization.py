import unittest

from listing_doctor.normalization import (
    clean_cell,
    is_sold_marker,
    parse_floor,
    parse_integer,
    parse_number,
    status_from_text,
)


class ParseNumberTests(unittest.TestCase):
    def test_polish_formatting(self):
        self.assertEqual(parse_number("1 234 567,89 zł"), 1234567.89)
        self.assertEqual(parse_number("52,30"), 52.3)
        self.assertEqual(parse_number("12000"), 12000.0)
        self.assertEqual(parse_number("14 500,50 PLN/m²"), 14500.5)

    def test_non_breaking_space_thousands(self):
        self.assertEqual(parse_number("450\u00a0000"), 450000.0)

    def test_only_first_comma_becomes_decimal_point(self):
        self.assertEqual(parse_number("1,5,7"), 1.5)

    def test_leading_number_only(self):
        self.assertEqual(parse_number("12.000.50"), 12.0)

    def test_negative_values_are_kept(self):
        self.assertEqual(parse_number("-100"), -100.0)

    def test_unparseable_values(self):
        for value in (None, "", "   ", "brak", "X", "#VALUE!", "-", ","):
            with self.subTest(value=value):
                self.assertIsNone(parse_number(value))


class ParseIntegerTests(unittest.TestCase):
    def test_whole_numbers(self):
        self.assertEqual(parse_integer("3"), 3)
        self.assertEqual(parse_integer("2024,0"), 2024)

    def test_fractions_are_rejected(self):
        self.assertIsNone(parse_integer("2,5"))

    def test_floor_words(self):
        for value in ("parter", "Parter", "P", "ground", "Ground Floor", "0"):
            with self.subTest(value=value):
                self.assertEqual(parse_floor(value), 0)
        self.assertEqual(parse_floor("3"), 3)
        self.assertEqual(parse_floor("-1"), -1)
        self.assertIsNone(parse_floor("poddasze"))


class MarkerAndStatusTests(unittest.TestCase):
    def test_sold_markers(self):
        for value in ("X", "x", " X ", "#VALUE!", "#value!"):
            with self.subTest(value=value):
                self.assertTrue(is_sold_marker(value))
        for value in ("", "XX", "0", None, "sprzedane"):
            with self.subTest(value=value):
                self.assertFalse(is_sold_marker(value))

    def test_status_vocabulary(self):
        self.assertEqual(status_from_text("Sprzedane"), "sold")
        self.assertEqual(status_from_text("SOLD"), "sold")
        self.assertEqual(status_from_text("W rezerwacji"), "reserved")
        self.assertEqual(status_from_text("reserved"), "reserved")
        self.assertEqual(status_from_text("Dostępne"), "available")
        self.assertEqual(status_from_text("dostepny"), "available")
        self.assertIsNone(status_from_text("w budowie"))
        self.assertIsNone(status_from_text(""))

    def test_clean_cell(self):
        self.assertEqual(clean_cell("  A1\x00 "), "A1")
        self.assertEqual(clean_cell(None), "")


if __name__ == "__main__":
    unittest.main()
