"""Quote-aware splitting of user supplied extra agent arguments."""

from __future__ import annotations

_QUOTES = ("'", '"')


def split_extra_args(text: str | None) -> list[str]:
    """Split ``text`` on whitespace, keeping quoted spans together.

    Single and double quotes group their contents into one argument and are
    removed. A quote without a matching closer is kept as a literal character.
    """
    if not text:
        return []

    args: list[str] = []
    current: list[str] = []
    has_token = False
    index = 0
    length = len(text)

    while index < length:
        char = text[index]
        if char in _QUOTES:
            closing = text.find(char, index + 1)
            if closing != -1:
                current.append(text[index + 1 : closing])
                has_token = True
                index = closing + 1
                continue
            current.append(char)
            has_token = True
        elif char.isspace():
            if has_token:
                args.append("".join(current))
                current = []
                has_token = False
        else:
            current.append(char)
            has_token = True
        index += 1

    if has_token:
        args.append("".join(current))
    return args
