"""Tests for raw byte decoding into key tokens.

Feeds bytes through an OS pipe so ``select`` timing behaves like a tty.
"""

from __future__ import annotations

import os
import unittest

from trydir.input import reader
from trydir.input.reader import read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()
        self.addCleanup(self._close)

    def _close(self) -> None:
        for fd in (self.read_fd, self.write_fd):
            try:
                os.close(fd)
            except OSError:
                pass

    def feed(self, data: bytes) -> None:
        os.write(self.write_fd, data)

    def decode(self, data: bytes) -> str:
        self.feed(data)
        return read_key(self.read_fd)

    def test_printable_ascii(self) -> None:
        self.assertEqual(self.decode(b"a"), "a")
        self.assertEqual(self.decode(b" "), " ")
        self.assertEqual(self.decode(b"Y"), "Y")

    def test_utf8_character_is_one_token(self) -> None:
        self.assertEqual(self.decode("é".encode("utf-8")), "é")
        self.assertEqual(self.decode("日".encode("utf-8")), "日")

    def test_control_bytes(self) -> None:
        self.assertEqual(self.decode(b"\r"), "ENTER")
        self.assertEqual(self.decode(b"\n"), "CTRL_J")
        self.assertEqual(self.decode(b"\x7f"), "BACKSPACE")
        self.assertEqual(self.decode(b"\x08"), "BACKSPACE")
        self.assertEqual(self.decode(b"\t"), "TAB")
        self.assertEqual(self.decode(b"\x03"), "CTRL_C")
        self.assertEqual(self.decode(b"\x04"), "CTRL_D")
        self.assertEqual(self.decode(b"\x15"), "CTRL_U")

    def test_arrow_keys_in_csi_and_ss3_forms(self) -> None:
        self.assertEqual(self.decode(b"\x1b[A"), "UP")
        self.assertEqual(self.decode(b"\x1b[B"), "DOWN")
        self.assertEqual(self.decode(b"\x1bOA"), "UP")
        self.assertEqual(self.decode(b"\x1bOB"), "DOWN")
        self.assertEqual(self.decode(b"\x1b[1;5C"), "RIGHT")

    def test_tilde_sequences(self) -> None:
        self.assertEqual(self.decode(b"\x1b[3~"), "DELETE")
        self.assertEqual(self.decode(b"\x1b[1~"), "HOME")
        self.assertEqual(self.decode(b"\x1b[4~"), "END")

    def test_lone_escape_times_out_to_esc(self) -> None:
        self.assertEqual(self.decode(b"\x1b"), "ESC")

    def test_double_escape_yields_two_esc_tokens(self) -> None:
        self.feed(b"\x1b\x1b")
        self.assertEqual(read_key(self.read_fd), "ESC")
        self.assertEqual(read_key(self.read_fd), "ESC")

    def test_alt_combo(self) -> None:
        self.assertEqual(self.decode(b"\x1bx"), "ALT_x")

    def test_unknown_sequence_decodes_to_empty(self) -> None:
        self.assertEqual(self.decode(b"\x1b[99Z"), "")
        self.assertEqual(self.decode(b"z"), "z")

    def test_truncated_utf8_keeps_following_ascii_key(self) -> None:
        self.feed(b"\xc3a")

        self.assertEqual(read_key(self.read_fd), "")
        self.assertEqual(read_key(self.read_fd), "a")

    def test_stray_continuation_and_invalid_lead_bytes_are_dropped(self) -> None:
        self.assertEqual(self.decode(b"\x80"), "")
        self.assertEqual(self.decode(b"\xff"), "")
        self.assertEqual(self.decode(b"b"), "b")

    def test_truncated_utf8_before_escape_sequence(self) -> None:
        self.feed(b"\xe6\x97\x1b[A")

        self.assertEqual(read_key(self.read_fd), "")
        self.assertEqual(read_key(self.read_fd), "UP")

    def test_closed_input_raises_eof(self) -> None:
        os.close(self.write_fd)
        with self.assertRaises(EOFError):
            read_key(self.read_fd)


if __name__ == "__main__":
    unittest.main()
