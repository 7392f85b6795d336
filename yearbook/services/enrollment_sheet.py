"""Read a batch roster (enrollment numbers) from an uploaded Excel workbook."""

from io import BytesIO
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from yearbook.core.errors import BadRequestError

ENROLLMENT_COLUMNS = ("enrollmentNumber", "enrollment_number")


def _cell_text(value: object) -> str:
    # Numeric rosters come back as int/float; 2021001.0 must read as "2021001"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def read_enrollment_numbers(content: bytes) -> list[str]:
    """
    Return the enrollment numbers of the first worksheet in row order.

    The first row is the header and must name an enrollmentNumber or
    enrollment_number column; every following non-empty row must fill it.
    """
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError, ValueError, OSError) as e:
        raise BadRequestError(f"Error reading Excel file: {e!s}") from e

    try:
        if not workbook.sheetnames:
            raise BadRequestError("Excel file is empty or has no sheets")
        rows = workbook[workbook.sheetnames[0]].iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            raise BadRequestError("The first sheet is empty")

        names = [_cell_text(h) if h is not None else "" for h in header]
        column = next((names.index(c) for c in ENROLLMENT_COLUMNS if c in names), None)
        if column is None:
            raise BadRequestError(
                "Excel file must contain 'enrollmentNumber' or 'enrollment_number' column"
            )

        numbers: list[str] = []
        for row in rows:
            if row is None or all(v is None or _cell_text(v) == "" for v in row):
                continue
            value = row[column] if column < len(row) else None
            if value is None or _cell_text(value) == "":
                raise BadRequestError(
                    "Excel file must contain 'enrollmentNumber' or 'enrollment_number' column"
                )
            numbers.append(_cell_text(value))
    finally:
        workbook.close()

    if not numbers:
        raise BadRequestError("No data found in the Excel file")
    return numbers
