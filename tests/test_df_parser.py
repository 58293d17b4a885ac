#!/usr/bin/env python3
""" Parsing of captured df output """

import unittest

from helpers import linux_raw, macos_raw

from fsstat.errors import MalformedRowError
from fsstat.services.df_parser import (
    block_size_of,
    header_layout,
    iter_rows,
    parse_header,
    parse_line,
    parse_rows,
    split_fields,
    split_lines,
)


class TestSplitting(unittest.TestCase):
    def test_split_fields_matches_single_space_split(self):
        for line in (
            "a b c",
            "a   b  c",
            "  /dev/disk1   123 45   /  ",
            "devfs                 391       391         0   100%",
        ):
            with self.subTest(line=line):
                self.assertEqual(split_fields(line), [t for t in line.split(" ") if t != ""])

    def test_split_lines_drops_header_and_blank_lines(self):
        header, body = split_lines("hdr\nrow1\n\n   \nrow2\n")
        self.assertEqual(header, "hdr")
        self.assertEqual(body, ["row1", "row2"])

    def test_split_lines_on_empty_output(self):
        self.assertEqual(split_lines(""), ("", []))


class TestPositionalParsing(unittest.TestCase):
    def test_parse_line_reads_fixed_positions(self):
        row = parse_line("/dev/disk1  20971520  10485760  10485760    50%  0  0  0%  /")
        self.assertEqual(row.name, "/dev/disk1")
        self.assertEqual(row.total_blocks, 20971520)
        self.assertEqual(row.used_blocks, 10485760)
        self.assertEqual(row.avail_blocks, 10485760)
        self.assertEqual(row.capacity, "50%")
        self.assertEqual(row.mountpoint, "/")
        self.assertEqual(row.total_bytes, 10_737_418_240)

    def test_parse_rows_macos_fixture(self):
        rows = parse_rows(macos_raw())
        self.assertEqual([r.name for r in rows], ["/dev/disk1s1", "devfs", "/dev/disk1s4"])
        self.assertEqual([r.mountpoint for r in rows], ["/", "/dev", "/private/var/vm"])
        self.assertTrue(all(r.block_size == 512 for r in rows))

    def test_too_few_fields(self):
        with self.assertRaisesRegex(MalformedRowError, "at least 9"):
            parse_line("/dev/disk1 100 50 50 50% /")

    def test_non_numeric_blocks(self):
        with self.assertRaises(MalformedRowError):
            parse_line("map auto_home 0 0 0 100% 0 0 100% /home")

    def test_negative_blocks(self):
        with self.assertRaisesRegex(MalformedRowError, "not a block count"):
            parse_line("/dev/a -10 5 5 50% 0 0 0% /")

    def test_block_counts_must_be_plain_digits(self):
        for token in ("1_000", "+5", "\u0661\u0662", "12.0"):
            with self.subTest(token=token):
                with self.assertRaisesRegex(MalformedRowError, "not a block count"):
                    parse_line(f"/dev/a {token} 5 5 50% 0 0 0% /")

    def test_malformed_error_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_line("garbage")

    def test_rejects_linux_layout(self):
        with self.assertRaises(MalformedRowError):
            parse_rows(linux_raw())

    def test_iter_rows_yields_good_rows_before_failing(self):
        it = iter_rows("hdr\n/dev/a 10 5 5 50% 0 0 0% /\nshort line\n")
        self.assertEqual(next(it).name, "/dev/a")
        with self.assertRaises(MalformedRowError):
            next(it)


class TestHeaderKeyedParsing(unittest.TestCase):
    def test_parse_header_joins_mounted_on(self):
        cols = parse_header("Filesystem 512-blocks Used Available Capacity iused ifree %iused  Mounted on")
        self.assertEqual(cols[-1], "Mounted on")
        self.assertEqual(len(cols), 9)

    def test_block_size_of(self):
        cases = [
            ("512-blocks", 512),
            ("1K-blocks", 1024),
            ("1024-blocks", 1024),
            ("1M-blocks", 1024**2),
            ("Used", None),
        ]
        for column, expected in cases:
            with self.subTest(column=column):
                self.assertEqual(block_size_of(column), expected)

    def test_header_layout_linux(self):
        layout = header_layout(linux_raw().split("\n")[0])
        self.assertEqual(layout.size_column, "1K-blocks")
        self.assertEqual(layout.block_size, 1024)
        self.assertEqual(layout.avail_column, "Available")
        self.assertEqual(layout.capacity_column, "Use%")
        self.assertEqual(layout.mount_column, "Mounted on")

    def test_header_layout_without_block_column(self):
        with self.assertRaises(MalformedRowError):
            header_layout("Filesystem Size Used Avail Use% Mounted on")

    def test_linux_output(self):
        rows = parse_rows(linux_raw(), portable=True)
        self.assertEqual([r.mountpoint for r in rows], ["/", "/dev/shm", "/media/usb stick"])
        root = rows[0]
        self.assertEqual(root.block_size, 1024)
        self.assertEqual(root.total_bytes, 488280064 * 1024)
        self.assertEqual(root.capacity, "22%")

    def test_macos_output_matches_positional(self):
        raw = macos_raw()
        self.assertEqual(parse_rows(raw, portable=True), parse_rows(raw))

    def test_short_line(self):
        raw = "Filesystem 1K-blocks Used Available Use% Mounted on\n/dev/a 10 5\n"
        with self.assertRaises(MalformedRowError):
            parse_rows(raw, portable=True)

    def test_empty_output(self):
        self.assertEqual(parse_rows("", portable=True), [])


if __name__ == '__main__':
    unittest.main()
