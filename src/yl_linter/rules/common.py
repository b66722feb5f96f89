"""Small line helpers shared by the built-in rules"""


def is_empty_line(line: str) -> bool:
    return not line.strip()


def count_leading_whitespace(line: str) -> int:
    return len(line) - len(line.lstrip())


def is_comment_only_line(line: str) -> bool:
    stripped = line.lstrip()
    return not stripped or stripped.startswith("#")


def trailing_whitespace_start(line: str) -> int | None:
    """0-based index where trailing whitespace begins, or None"""
    stripped = line.rstrip()
    if len(stripped) == len(line):
        return None
    return len(stripped)


def count_run(chars: str, start: int, step: int, char: str = " ") -> int:
    """Count consecutive `char` from `start` moving by `step` (+1 or -1)"""
    count = 0
    index = start
    while 0 <= index < len(chars) and chars[index] == char:
        count += 1
        index += step
    return count


def key_value_split(line: str) -> tuple[str, str, int] | None:
    """Split `key: value` on the first colon; returns (key, value, colon_index)"""
    pos = line.find(":")
    if pos == -1:
        return None
    return line[:pos].strip(), line[pos + 1 :].strip(), pos
