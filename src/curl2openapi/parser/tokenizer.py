"""Shell-like tokenizer for cURL command strings.

Only single and double quoting are understood. Backslash escapes,
variable expansion and command substitution are left untouched.
"""

QUOTES = ("'", '"')


class TokenizeError(ValueError):
    """Raised when a command cannot be split into tokens."""


def tokenize(command: str) -> list[str]:
    """Split a command string into tokens, keeping quoted runs together.

    Quote characters are dropped; a quoted run and the unquoted text
    directly next to it form a single token, as in a POSIX shell.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote_char = ""
    in_token = False

    for char in command:
        if quote_char:
            if char == quote_char:
                quote_char = ""
            else:
                current.append(char)
        elif char in QUOTES:
            quote_char = char
            in_token = True
        elif char.isspace():
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(char)
            in_token = True

    if quote_char:
        raise TokenizeError(f"Unterminated {quote_char} quote in command")

    if in_token:
        tokens.append("".join(current))

    return tokens
