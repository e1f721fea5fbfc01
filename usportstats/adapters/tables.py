"""HTML table helpers shared by the adapters."""
from bs4 import BeautifulSoup, Tag

from usportstats.coerce import clean_text


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, 'lxml')


def cell_text(node: Tag | None, selector: str | None = None) -> str | None:
    """Whitespace-collapsed text of node (or of its first match for selector)."""
    if node is None:
        return None
    if selector:
        node = node.select_one(selector)
        if node is None:
            return None
    return clean_text(node.get_text(' ', strip=True))


def read_table(table: Tag) -> tuple[list[str], list[tuple[list[str | None], Tag]]]:
    """
    Split a table into header labels and body rows.

    Headers come from <thead>, or from the first row when it holds only <th>.
    Each body row is returned with its <tr> so callers can inspect classes.
    """
    rows = table.find_all('tr')
    header_row = None
    thead = table.find('thead')
    if thead is not None:
        header_row = thead.find('tr')
    elif rows and not rows[0].find('td'):
        header_row = rows[0]

    headers = []
    if header_row is not None:
        headers = [cell_text(th) or '' for th in header_row.find_all(['th', 'td'])]

    body = []
    for tr in rows:
        if tr is header_row or (thead is not None and tr.find_parent('thead') is thead):
            continue
        cells = [cell_text(c) for c in tr.find_all(['th', 'td'])]
        if not any(cells):
            continue
        body.append((cells, tr))
    return headers, body


def table_records(table: Tag, header_map: dict[str, str] | None = None) -> list[dict]:
    """Rows as dicts keyed by (mapped) header label."""
    headers, body = read_table(table)
    keys = [(header_map or {}).get(h, h) for h in headers]
    return [dict(zip(keys, cells)) for cells, _tr in body]
