import unittest

from listing_doctor.derived import derive_fields
from listing_doctor.models import PropertyRecord


class DeriveFieldsTests(unittest.TestCase):
    def test_area_from_total_and_price_per_m2(self):
        record = PropertyRecord(total_price=600000.0, price_per_m2=12000.0)
        self.assertEqual(derive_fields(record), ["area"])
        self.assertEqual(record.area, 50.0)

    def test_price_per_m2_from_total_and_area(self):
        record = PropertyRecord(total_price=500000.0, area=45.5)
        self.assertEqual(derive_fields(record), ["price_per_m2"])
        self.assertEqual(record.price_per_m2, 10989.01)

    def test_total_from_price_per_m2_and_area(self):
        record = PropertyRecord(price_per_m2=11999.99, area=52.3)
        self.assertEqual(derive_fields(record), ["total_price"])
        self.assertEqual(record.total_price, round(11999.99 * 52.3, 2))

    def test_existing_values_are_not_overwritten(self):
        record = PropertyRecord(total_price=600000.0, price_per_m2=12000.0, area=48.0)
        self.assertEqual(derive_fields(record), [])
        self.assertEqual(record.area, 48.0)

    def test_zero_divisor_leaves_field_unset(self):
        record = PropertyRecord(total_price=600000.0, price_per_m2=0.0)
        self.assertEqual(derive_fields(record), [])
        self.assertIsNone(record.area)

        record = PropertyRecord(total_price=600000.0, area=0.0)
        derive_fields(record)
        self.assertIsNone(record.price_per_m2)

    def test_negative_area_blocks_total(self):
        record = PropertyRecord(price_per_m2=12000.0, area=-5.0)
        self.assertEqual(derive_fields(record), [])
        self.assertIsNone(record.total_price)

    def test_single_number_derives_nothing(self):
        record = PropertyRecord(total_price=600000.0)
        self.assertEqual(derive_fields(record), [])


if __name__ == "__main__":
    unittest.main()
