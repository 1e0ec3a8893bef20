# =============================================================================
# core/posts_csv.py  —  Posts CSV Decoder
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the raw CSV export stored in the blob store into an ordered list
#   of PostRecord mappings.
#
# THE FORMAT (as exported upstream):
#   - rows separated by "\n", fields separated by ","
#   - first line is the header; its tokens become the field names
#   - NO quoting: a comma inside a post body is just another separator
#
# KNOWN LIMITATION — embedded commas:
#   The default decoder splits every line on "," without honouring quotes,
#   so a post body containing a comma shifts every later field on that row
#   one position to the right (the tail of the body lands in URL, and so on).
#   Existing consumers rely on this exact column alignment, so it is the
#   default.  Pass quoted=True to parse each line with RFC-4180 quoting.
#
# DECODING NEVER FAILS:
#   Short rows are padded with "", blank lines are skipped, and an empty
#   blob yields a header of one empty field name and zero records.
# =============================================================================

import csv

from core.models import PostRecord

DELIMITER = ","


def _split_line(line: str, quoted: bool) -> list[str]:
    if not quoted:
        return line.split(DELIMITER)
    # csv.reader on a single line; an unterminated quote swallows the rest
    # of the line.  Lines csv rejects (a bare \r outside quotes) split naively.
    try:
        return next(csv.reader([line], delimiter=DELIMITER, strict=False), [])
    except csv.Error:
        return line.split(DELIMITER)


def parse_header(blob: str, *, quoted: bool = False) -> list[str]:
    """Return the header field names (the first line of the blob)."""
    return _split_line(blob.split("\n", 1)[0], quoted)


def decode_posts(blob: str, *, quoted: bool = False) -> list[PostRecord]:
    """Decode a posts CSV blob into records, in source row order.

    Args:
        blob: The full CSV text, header line first.
        quoted: Honour double-quoted fields.  Off by default; see the
            module notes on embedded commas.

    Returns:
        One PostRecord per non-blank line after the header.
    """
    lines = blob.split("\n")
    header = _split_line(lines[0], quoted)

    return [
        PostRecord(header, _split_line(line, quoted))
        for line in lines[1:]
        if line.strip()
    ]
