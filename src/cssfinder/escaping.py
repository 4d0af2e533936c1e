from __future__ import annotations


def _code_point_escape(char: str) -> str:
    return f"\\{ord(char):x} "


def css_escape(value: str) -> str:
    """Escape ``value`` for use as a CSS identifier (``CSS.escape`` semantics)."""
    escaped: list[str] = []
    length = len(value)
    for index, char in enumerate(value):
        code = ord(char)
        if code == 0:
            escaped.append("\ufffd")
        elif 0x01 <= code <= 0x1F or code == 0x7F:
            escaped.append(_code_point_escape(char))
        elif index == 0 and char.isdigit() and char.isascii():
            escaped.append(_code_point_escape(char))
        elif index == 1 and char.isdigit() and char.isascii() and value[0] == "-":
            escaped.append(_code_point_escape(char))
        elif index == 0 and char == "-" and length == 1:
            escaped.append("\\-")
        elif code >= 0x80 or char in ("-", "_") or (char.isascii() and char.isalnum()):
            escaped.append(char)
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)
