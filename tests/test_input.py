"""Regression tests for raw-key decoding.

Covers ESC timing, paging sequences, and SGR mouse press tokens.
"""

import os
import time
import unittest

from treeviewer.runtime import input as input_mod


def _read(data: bytes, reads: int = 1) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(reads)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyRegressionTests(unittest.TestCase):
    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        key = _read(b"\x1b")[0]
        elapsed = time.monotonic() - started

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(_read(b""), [""])

    def test_arrow_and_paging_sequences(self) -> None:
        self.assertEqual(_read(b"\x1b[A"), ["UP"])
        self.assertEqual(_read(b"\x1b[5~"), ["PAGE_UP"])
        self.assertEqual(_read(b"\x1b[6~"), ["PAGE_DOWN"])
        self.assertEqual(_read(b"\x1b[H"), ["HOME"])
        self.assertEqual(_read(b"\x1bOF"), ["END"])

    def test_control_and_printable_keys(self) -> None:
        self.assertEqual(_read(b"\x03r\r", reads=3), ["CTRL_C", "r", "ENTER"])

    def test_sgr_left_press_reports_position(self) -> None:
        self.assertEqual(_read(b"\x1b[<0;42;7M"), ["MOUSE_LEFT_DOWN:42:7"])

    def test_sgr_release_and_wheel_are_not_clicks(self) -> None:
        self.assertEqual(_read(b"\x1b[<0;42;7m"), ["MOUSE"])
        self.assertEqual(_read(b"\x1b[<64;42;7M"), ["MOUSE"])


if __name__ == "__main__":
    unittest.main()
