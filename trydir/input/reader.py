"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, control-letter combos, and multi-byte UTF-8.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_NAMED_CONTROL_BYTES: dict[bytes, str] = {
    b"\t": "TAB",
    b"\n": "CTRL_J",
    b"\r": "ENTER",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}

_CSI_FINAL_KEYS: dict[str, str] = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}

_CSI_TILDE_KEYS: dict[str, str] = {
    "1": "HOME",
    "3": "DELETE",
    "4": "END",
    "7": "HOME",
    "8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF8:
        return 1
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_control(ch: bytes) -> str:
    named = _NAMED_CONTROL_BYTES.get(ch)
    if named is not None:
        return named
    code = ch[0]
    if 1 <= code <= 26:
        return f"CTRL_{chr(ord('A') + code - 1)}"
    return ""


def _decode_utf8(fd: int, lead: bytes) -> str:
    """Assemble one multi-byte character; stray or truncated sequences map to ``""``."""
    expected = _utf8_length(lead[0])
    if expected == 1:
        return ""
    raw = bytearray(lead)
    for _ in range(expected - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            return ""
        if not 0x80 <= nxt[0] <= 0xBF:
            # not a continuation byte: it starts the next key
            _PENDING_BYTES.append(nxt)
            return ""
        raw.extend(nxt)
    return bytes(raw).decode("utf-8", errors="replace")


def _decode_csi(fd: int) -> str:
    """Consume one CSI sequence after ``ESC [``; unknown sequences map to ``""``."""
    params: list[str] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        char = part.decode("ascii", errors="replace")
        if "\x40" <= char <= "\x7e":
            final = char
            break
        params.append(char)
        if len(params) > 16:
            return ""
    if final == "~":
        first_param = "".join(params).split(";", 1)[0]
        return _CSI_TILDE_KEYS.get(first_param, "")
    return _CSI_FINAL_KEYS.get(final, "")


def read_key(fd: int) -> str:
    """Read one key token, blocking until input arrives.

    Returns ``""`` for an unrecognized sequence or malformed UTF-8 and raises
    ``EOFError`` once stdin is closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        ch = os.read(fd, 1)
        if not ch:
            raise EOFError("terminal input closed")

    if ch != b"\x1b":
        code = ch[0]
        if code < 0x20 or code == 0x7F:
            return _decode_control(ch)
        if code < 0x80:
            return ch.decode("ascii")
        return _decode_utf8(fd, ch)

    # Escape, CSI and SS3 sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return "ESC"
    if seq == b"[":
        return _decode_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ALT_O"
        return _CSI_FINAL_KEYS.get(final.decode("ascii", errors="replace"), "")
    if seq[0] < 0x20:
        return ""
    return f"ALT_{seq.decode('utf-8', errors='replace')}"
