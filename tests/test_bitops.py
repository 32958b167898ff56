import unittest

from hashit.bitops import MASK32, add32, rotl32, round_f, round_g, round_h


class TestWordArithmetic(unittest.TestCase):
    def test_add32_wraps(self):
        self.assertEqual(add32(0xFFFFFFFF, 1), 0)
        self.assertEqual(add32(0x80000000, 0x80000000), 0)
        self.assertEqual(add32(0xFFFFFFFF, 0xFFFFFFFF), 0xFFFFFFFE)
        self.assertEqual(add32(2, 3), 5)

    def test_rotl32(self):
        self.assertEqual(rotl32(0x80000000, 1), 0x00000001)
        self.assertEqual(rotl32(0x00000001, 31), 0x80000000)
        self.assertEqual(rotl32(0x12345678, 8), 0x34567812)
        self.assertEqual(rotl32(0x12345678, 4), 0x23456781)

    def test_rotl32_stays_in_range(self):
        for amount in (3, 7, 11, 19, 5, 9, 13, 15):
            self.assertLessEqual(rotl32(0xFFFFFFFF, amount), MASK32)
            self.assertEqual(rotl32(0xFFFFFFFF, amount), 0xFFFFFFFF)


class TestRoundFunctions(unittest.TestCase):
    def test_selection(self):
        # bits of y where x is set, bits of z elsewhere
        self.assertEqual(round_f(0xFFFF0000, 0x12345678, 0x9ABCDEF0), 0x1234DEF0)
        self.assertEqual(round_f(0, 0xFFFFFFFF, 0), 0)
        self.assertEqual(round_f(0, 0, 0xFFFFFFFF), 0xFFFFFFFF)

    def test_majority(self):
        self.assertEqual(round_g(0xFF00FF00, 0xF0F0F0F0, 0x00000000), 0xF000F000)
        self.assertEqual(round_g(0xFFFFFFFF, 0xFFFFFFFF, 0), 0xFFFFFFFF)
        self.assertEqual(round_g(0xFFFFFFFF, 0, 0), 0)

    def test_parity(self):
        self.assertEqual(round_h(0xFF00FF00, 0xF0F0F0F0, 0x0F0F0F0F), 0x00FF00FF)
        self.assertEqual(round_h(1, 1, 1), 1)
        self.assertEqual(round_h(1, 1, 0), 0)

    def test_results_are_32_bit(self):
        for fn in (round_f, round_g, round_h):
            self.assertTrue(0 <= fn(0, 0xFFFFFFFF, 0xFFFFFFFF) <= MASK32)


if __name__ == "__main__":
    unittest.main()
