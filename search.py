from collections import namedtuple

# More visible rows than this and the table scrolls.
SCROLL_THRESHOLD = 7

VisibleRow = namedtuple("VisibleRow", ["display_index", "position", "record"])


def _matches(record, query):
    return query in str(record.get("name", "")).lower() or query in str(record.get("studentId", "")).lower()


def visible_rows(collection, search_term):
    """Rows matching ``search_term`` on name or studentId, numbered from 1.

    ``display_index`` counts matched rows only; ``position`` is the record's
    place in the collection.
    """
    query = (search_term or "").strip().lower()
    rows = []
    for position, record in enumerate(collection):
        if query and not _matches(record, query):
            continue
        rows.append(VisibleRow(len(rows) + 1, position, record))
    return rows


def visible_count(collection, search_term):
    return len(visible_rows(collection, search_term))


def is_scrollable(count, threshold=SCROLL_THRESHOLD):
    return count > threshold
