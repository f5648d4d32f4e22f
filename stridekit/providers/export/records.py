"""Quote-aware record splitting for activity export files.

Activity exports put free-text descriptions in quoted cells that may span
several lines, so a plain line split (or a naive ``str.split(",")``) breaks
records apart. This scanner walks the text once, tracking whether it is
inside a quoted field.
"""


def split_records(text: str) -> list[list[str]]:
    """Split raw export text into records of trimmed field values.

    A ``"`` toggles the in-quotes flag and is not kept. Outside quotes a
    ``,`` ends a field and ``\\n``, ``\\r\\n`` or a lone ``\\r`` ends a
    record. Records with fewer than two fields are dropped, which takes care
    of blank lines and trailing newlines.
    """
    records: list[list[str]] = []
    record: list[str] = []
    field: list[str] = []
    in_quotes = False

    def end_record() -> None:
        record.append("".join(field).strip())
        if len(record) > 1:
            records.append(list(record))
        record.clear()
        field.clear()

    length = len(text)
    i = 0
    while i < length:
        char = text[i]
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            record.append("".join(field).strip())
            field.clear()
        elif char in "\r\n" and not in_quotes:
            # \r\n counts once
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
            end_record()
        else:
            field.append(char)
        i += 1

    if record or field:
        end_record()

    return records
