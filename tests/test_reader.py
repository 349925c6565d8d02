import io
import unittest

from workshop.core.provenance import New, Overflow, Tier, Workbench
from workshop.errors import InputError
from workshop.io.reader import WorkshopInput, parse_capacities, read_input, read_input_text
from workshop.io.report import INPUT_ERROR_TOKEN, format_all, format_provenance


class TestParseCapacities(unittest.TestCase):
    def test_spaces_and_digits(self):
        self.assertEqual(parse_capacities("3  1 1023"), (3, 1, 1023))

    def test_empty_line_means_no_tiers(self):
        self.assertEqual(parse_capacities(""), ())
        self.assertEqual(parse_capacities("   \n"), ())

    def test_rejects_other_characters(self):
        for line in ("1,2", "-1", "1\t2", "a", "1 2x", "+3"):
            with self.assertRaises(InputError, msg=line):
                parse_capacities(line)

    def test_rejects_non_ascii_digits(self):
        with self.assertRaises(InputError):
            parse_capacities("٣")

    def test_capacity_bounds(self):
        with self.assertRaises(InputError):
            parse_capacities("1 0")
        with self.assertRaises(InputError):
            parse_capacities("1024")
        self.assertEqual(parse_capacities("1024", max_capacity=2048), (1024,))

    def test_tier_count_limit(self):
        self.assertEqual(len(parse_capacities(" ".join(["1"] * 64))), 64)
        with self.assertRaises(InputError):
            parse_capacities(" ".join(["1"] * 65))
        with self.assertRaises(InputError):
            parse_capacities("1 1", max_tiers=1)


class TestReadInput(unittest.TestCase):
    def test_reads_full_input(self):
        data = read_input_text("1 2\n3\n10\n-20\n 30 \n")
        self.assertEqual(data, WorkshopInput(capacities=(1, 2), items=(10, -20, 30)))

    def test_accepts_file_like_objects(self):
        data = read_input(io.StringIO("\n1\n5\n"))
        self.assertEqual(data.capacities, ())
        self.assertEqual(data.items, (5,))

    def test_extra_lines_are_ignored(self):
        data = read_input_text("1\n1\n7\n8\ngarbage\n")
        self.assertEqual(data.items, (7,))

    def test_zero_or_negative_count(self):
        for count in ("0", "-2"):
            with self.assertRaises(InputError):
                read_input_text(f"1\n{count}\n1\n")

    def test_bad_tokens(self):
        bad_inputs = [
            "",  # no capacity line
            "1\n",  # no count
            "1\nthree\n",
            "1\n2\n5\n",  # missing item
            "1\n1\n1_000\n",
            "1\n1\n12abc\n",
            "1\n1\n9223372036854775808\n",
            "1\n1\n\n",
        ]
        for text in bad_inputs:
            with self.assertRaises(InputError, msg=repr(text)):
                read_input_text(text)

    def test_int64_edges_are_valid(self):
        data = read_input_text("1\n2\n9223372036854775807\n-9223372036854775808\n")
        self.assertEqual(data.items, (2**63 - 1, -(2**63)))

    def test_input_error_is_a_value_error(self):
        self.assertTrue(issubclass(InputError, ValueError))


class TestReport(unittest.TestCase):
    def test_tokens(self):
        self.assertEqual(format_provenance(Tier(3)), "3")
        self.assertEqual(format_provenance(Overflow), "OUTSIDE")
        self.assertEqual(format_provenance(New), "NEW")
        self.assertEqual(format_all([New, Tier(1), Overflow]), ["NEW", "1", "OUTSIDE"])
        self.assertEqual(INPUT_ERROR_TOKEN, "INPUT_ERROR")

    def test_workbench_is_not_an_outcome(self):
        with self.assertRaises(ValueError):
            format_provenance(Workbench)


if __name__ == "__main__":
    unittest.main()
