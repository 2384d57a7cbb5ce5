"""PlacementExtractor — placement fields from the portal results page.

The portal renders one two-column table: a label cell and a value cell per
row. Labels are matched by substring against an ordered table so minor label
drift upstream (extra colons, suffixes) keeps working.

Matching rules:
  - Every label substring that occurs in a row's label assigns that row's value.
  - When several rows match the same field, the last one wins.
  - Rows that match nothing are ignored.

Parsing follows the HTML5 tree-building rules (BeautifulSoup + html5lib), so
open cells are closed and a missing <tbody> is synthesised. Broken markup, a
missing table or no matching rows all yield an empty PlacementRecord, never an
error.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from placement_bot.models.schemas import PlacementRecord
from placement_bot.utils import get_logger

logger = get_logger("portal.extractor")

# (label substring, PlacementRecord field), checked in order for every row.
LABEL_FIELDS: tuple[tuple[str, str], ...] = (
    ("Admission Number", "admission_number"),
    ("ID No.", "id_number"),
    ("Full Name", "full_name"),
    ("Program", "program"),
    ("Section", "section"),
    ("Campus Assigned", "campus"),
    ("Dormitory", "dormitory"),
    ("Cafeteria", "cafeteria"),
)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(value: str) -> str:
    """Collapse every whitespace run to a single space."""
    return _WHITESPACE_RE.sub(" ", value)


def _cell_text(cells: list[Tag], index: int) -> str:
    if index >= len(cells):
        return ""
    return cells[index].get_text().strip()


class PlacementExtractor:
    """Maps the results table onto a :class:`PlacementRecord`."""

    def __init__(self, label_fields: tuple[tuple[str, str], ...] = LABEL_FIELDS) -> None:
        self.label_fields = label_fields

    def _rows(self, soup: BeautifulSoup) -> list[Tag]:
        """Rows in the body of the first table on the page."""
        table = soup.find("table")
        if table is None:
            return []
        # html5lib always builds <tbody>; only this table's own body counts.
        body = table.find("tbody", recursive=False)
        return (body if body is not None else table).find_all("tr", recursive=False)

    def extract(self, html: str) -> PlacementRecord:
        soup = BeautifulSoup(html, "html5lib")
        values: dict[str, str] = {}

        for row in self._rows(soup):
            cells = row.find_all("td", recursive=False)
            label = _cell_text(cells, 0)
            value = _cell_text(cells, 1)

            for needle, field_name in self.label_fields:
                if needle not in label:
                    continue
                if field_name == "dormitory":
                    values[field_name] = normalize_whitespace(value)
                else:
                    values[field_name] = value

        record = PlacementRecord(**values)
        logger.debug("placement_extracted", fields=sorted(values), found=record.found)
        return record
