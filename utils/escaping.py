ESCAPE = '\\'

SEPARATOR_OPTION = ','
SEPARATOR_KEY_VALUE = '='
GROUPS = '()'


def split_escaped(value: str | None, separator: str, grouped: bool = False) -> list[str]:
    """ Split value at every separator that is not preceded by a backslash.

    The escaping backslash is removed, the escaped separator stays in the field. A backslash
    followed by anything else is kept as it is. Trailing empty fields are dropped.
    With grouped=True separators inside parentheses do not split, so (0.1,0.9)-PRESENCE stays one field.
    An escaped parenthesis keeps its backslash and does not open or close a group.
    """

    if not value:
        return []

    fields: list[str] = []
    current: list[str] = []
    escaped = False
    depth = 0

    for char in value:
        if escaped:
            if char == separator:
                current.append(char)
                escaped = False
                continue

            # the pending backslash was a literal one
            current.append(ESCAPE)
            if grouped and char in GROUPS:
                current.append(char)
                escaped = False
                continue

            if char == ESCAPE:
                continue

            escaped = False

        if char == ESCAPE:
            escaped = True
        elif char == separator and depth == 0:
            fields.append(''.join(current))
            current = []
        else:
            if grouped and char == '(':
                depth += 1
            elif grouped and char == ')' and depth > 0:
                depth -= 1

            current.append(char)

    if escaped:
        current.append(ESCAPE)

    fields.append(''.join(current))

    while fields and fields[-1] == '':
        fields.pop()

    return fields


def escape(value: str | None, separator: str) -> str:
    """ Put a backslash in front of every occurrence of the separator """

    if not value:
        return ''

    return value.replace(separator, ESCAPE + separator)


def unescape(value: str | None, separator: str) -> str:
    if not value:
        return ''

    return value.replace(ESCAPE + separator, separator)


def join_escaped(values: list[str], separator: str) -> str:
    return separator.join(escape(value, separator) for value in values)


def escape_groups(value: str) -> str:
    """ Escape parentheses so a grouped split does not count them """

    for char in GROUPS:
        value = value.replace(char, ESCAPE + char)

    return value


def unescape_groups(value: str) -> str:
    for char in GROUPS:
        value = value.replace(ESCAPE + char, char)

    return value
