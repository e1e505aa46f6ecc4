import logging
import unittest

from listing_doctor.extractor import (
    REASON_EMPTY,
    REASON_NO_CRITICAL_DATA,
    REASON_SOLD,
    REASON_TOO_FEW_COLUMNS,
    coerce_value,
    extract_developer_info,
    extract_records,
    infer_status,
)
from listing_doctor.models import FieldMapping, PropertyRecord, RawTable

HEADERS = ("Nr", "Powierzchnia", "Cena m2", "Cena", "Piętro", "Status")


def make_mapping(columns: dict[str, str], headers=HEADERS) -> FieldMapping:
    mapping = FieldMapping()
    for field_name, header in columns.items():
        mapping.columns[field_name] = header
        mapping.indices[field_name] = list(headers).index(header)
        mapping.scores[field_name] = 1.0
    return mapping


STANDARD_MAPPING = {
    "property_number": "Nr",
    "area": "Powierzchnia",
    "price_per_m2": "Cena m2",
    "total_price": "Cena",
    "kondygnacja": "Piętro",
    "status": "Status",
}


def run(rows, columns=None, headers=HEADERS):
    table = RawTable(headers=tuple(headers), rows=tuple(tuple(row) for row in rows))
    mapping = make_mapping(columns or STANDARD_MAPPING, headers)
    return extract_records(table, mapping)


class RowGateTests(unittest.TestCase):
    def test_every_row_lands_in_exactly_one_counter(self):
        rows = [
            ("A1", "50", "12000", "600000", "1", "dostępne"),
            ("", "", "", "", "", ""),
            ("A2", "45"),
            ("A3", "40", "X", "", "", ""),
            ("", "", "", "", "", "brak"),
            ("A4", "", "", "", "", ""),
        ]
        records, stats = run(rows)
        self.assertEqual(stats.total, len(rows))
        self.assertEqual(stats.empty_rows, 1)
        self.assertEqual(stats.too_few_columns, 1)
        self.assertEqual(stats.sold_properties, 1)
        self.assertEqual(stats.invalid_critical_data, 1)
        self.assertEqual(stats.successfully_parsed, 2)
        self.assertEqual(len(records), stats.successfully_parsed)
        self.assertEqual(stats.skipped, 4)
        self.assertEqual(len(stats.details), 4)

    def test_diagnostics_carry_one_based_row_numbers(self):
        rows = [
            ("A1", "50", "12000", "600000", "1", ""),
            ("   ", "", "", "", "", ""),
            ("A2",),
        ]
        records, stats = run(rows)
        self.assertEqual(records[0].row_number, 2)
        empty, short = stats.details
        self.assertEqual((empty.row_number, empty.reason), (3, REASON_EMPTY))
        self.assertEqual((short.row_number, short.reason), (4, REASON_TOO_FEW_COLUMNS))
        self.assertEqual(short.column_count, 1)

    def test_exactly_half_the_columns_is_enough(self):
        records, stats = run([("A1", "50", "12000")])
        self.assertEqual(stats.too_few_columns, 0)
        self.assertEqual(records[0].property_number, "A1")

    def test_sold_markers_in_any_price_column(self):
        for row in (
            ("A1", "50", "X", "600000", "", ""),
            ("A1", "50", "12000", "#VALUE!", "", ""),
            ("A1", "50", "12000", "x", "", ""),
        ):
            with self.subTest(row=row):
                records, stats = run([row])
                self.assertEqual(records, [])
                self.assertEqual(stats.sold_properties, 1)
                self.assertEqual(stats.details[0].reason, REASON_SOLD)

    def test_marker_in_final_price_column(self):
        headers = HEADERS + ("Cena finalna",)
        columns = dict(STANDARD_MAPPING, final_price="Cena finalna")
        records, stats = run([("A1", "50", "12000", "600000", "", "", "X")], columns, headers)
        self.assertEqual(stats.sold_properties, 1)

    def test_marker_outside_price_columns_is_ordinary_text(self):
        records, stats = run([("X", "50", "12000", "600000", "", "")])
        self.assertEqual(stats.sold_properties, 0)
        self.assertEqual(records[0].property_number, "X")

    def test_row_without_critical_data(self):
        records, stats = run([("", "0", "0", "brak", "2", "wolne")])
        self.assertEqual(records, [])
        self.assertEqual(stats.details[0].reason, REASON_NO_CRITICAL_DATA)

    def test_stats_are_fresh_per_call(self):
        _, first = run([("", "", "", "", "", "")])
        _, second = run([("A1", "50", "12000", "600000", "", "")])
        self.assertEqual(first.empty_rows, 1)
        self.assertEqual(second.empty_rows, 0)

    def test_skipped_rows_are_logged_at_debug(self):
        with self.assertLogs("listing_doctor.extractor", level=logging.DEBUG) as captured:
            run([("", "", "", "", "", "")])
        self.assertTrue(any("Skipping row 2" in line for line in captured.output))


class FieldExtractionTests(unittest.TestCase):
    def test_typed_values_and_raw_data(self):
        records, _ = run([("A1", "52,30", "12 000", "627 600", "parter", "Dostępne")])
        record = records[0]
        self.assertEqual(record.area, 52.3)
        self.assertEqual(record.price_per_m2, 12000.0)
        self.assertEqual(record.total_price, 627600.0)
        self.assertEqual(record.kondygnacja, 0)
        self.assertEqual(record.status, "Dostępne")
        self.assertEqual(record.raw_data["Powierzchnia"], "52,30")
        self.assertEqual(set(record.raw_data), set(HEADERS))

    def test_unparseable_numbers_stay_unset(self):
        records, _ = run([("A1", "brak", "?", "600000", "", "")])
        record = records[0]
        self.assertIsNone(record.area)
        self.assertIsNone(record.price_per_m2)
        self.assertEqual(record.total_price, 600000.0)

    def test_unmapped_catalog_fields_go_to_extras(self):
        headers = HEADERS + ("Inwestycja",)
        columns = dict(STANDARD_MAPPING, investment_name="Inwestycja")
        records, _ = run([("A1", "50", "", "", "", "", "Osiedle Zielone")], columns, headers)
        self.assertEqual(records[0].extras["investment_name"], "Osiedle Zielone")
        self.assertEqual(records[0].get("investment_name"), "Osiedle Zielone")

    def test_empty_header_is_left_out_of_raw_data(self):
        headers = ("Nr", "", "Cena")
        columns = {"property_number": "Nr", "total_price": "Cena"}
        records, _ = run([("A1", "notatka", "100")], columns, headers)
        self.assertEqual(records[0].raw_data, {"Nr": "A1", "Cena": "100"})


class StatusInferenceTests(unittest.TestCase):
    def test_explicit_status_is_kept(self):
        records, _ = run([("A1", "50", "12000", "", "", "zarezerwowane")])
        self.assertEqual(records[0].status, "zarezerwowane")

    def test_price_per_m2_implies_available(self):
        records, _ = run([("A1", "50", "12000", "", "", "")])
        self.assertEqual(records[0].status, "available")

    def test_no_price_leaves_status_unset(self):
        records, _ = run([("A1", "50", "", "", "", "")])
        self.assertIsNone(records[0].status)

    def test_availability_text_wins(self):
        record = PropertyRecord(price_per_m2=10000.0, extras={"status_dostepnosci": "Sprzedany"})
        self.assertEqual(infer_status(record), "sold")

    def test_vendor_price_column_marker(self):
        record = PropertyRecord(raw_data={"Cena nieruchomości": "x"})
        self.assertEqual(infer_status(record), "sold")


class CoercionTests(unittest.TestCase):
    def test_coerce_value(self):
        self.assertEqual(coerce_value("area", "48,5"), 48.5)
        self.assertEqual(coerce_value("liczba_pokoi", "3"), 3)
        self.assertIsNone(coerce_value("liczba_pokoi", "2,5"))
        self.assertEqual(coerce_value("kondygnacja", "P"), 0)
        self.assertEqual(coerce_value("ulica", "Długa 5"), "Długa 5")


class DeveloperInfoTests(unittest.TestCase):
    def test_first_non_empty_value_per_field(self):
        headers = ("Deweloper", "NIP", "Nr")
        table = RawTable(
            headers=headers,
            rows=(
                ("", "", "A1"),
                ("Budimex Dom", "", "A2"),
                ("Inna firma", "1234567890", "A3"),
            ),
        )
        mapping = make_mapping(
            {"developer_name": "Deweloper", "nip": "NIP", "property_number": "Nr"},
            headers,
        )
        info = extract_developer_info(table, mapping)
        self.assertEqual(info, {"developer_name": "Budimex Dom", "nip": "1234567890"})

    def test_only_leading_rows_are_scanned(self):
        headers = ("Deweloper",)
        rows = tuple(("",) for _ in range(5)) + (("Późna firma",),)
        table = RawTable(headers=headers, rows=rows)
        mapping = make_mapping({"developer_name": "Deweloper"}, headers)
        self.assertEqual(extract_developer_info(table, mapping), {})


if __name__ == "__main__":
    unittest.main()
