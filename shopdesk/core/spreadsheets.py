# shopdesk/core/spreadsheets.py

import logging
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)


class SpreadsheetError(Exception):
    pass


def read_first_sheet(source) -> list[dict]:
    """Rows of the first worksheet as dicts keyed by the header row.

    `source` is a path or a binary file object. Fully empty rows are skipped
    and short rows are padded with None.
    """
    try:
        workbook = load_workbook(source, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
        raise SpreadsheetError(f"Unable to read spreadsheet: {exc}") from exc

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)

        header = next(rows, None)
        if header is None:
            return []

        columns = [
            str(name).strip() if name is not None else f"column_{index}"
            for index, name in enumerate(header)
        ]

        records = []
        for values in rows:
            if values is None or all(value is None for value in values):
                continue
            values = list(values) + [None] * (len(columns) - len(values))
            records.append(dict(zip(columns, values)))

        logger.info(f"Read {len(records)} rows from sheet '{sheet.title}'")
        return records

    finally:
        workbook.close()
