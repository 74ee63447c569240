"""Row parser: shape a header-plus-rows table into records.

A field specification is an ordered sequence of ``Field(label, key, transform)``.
Its order defines both the expected header order and the positional mapping of
raw columns to output keys::

    fields = [Field("Github handle", "github_handle"), Field("Valid from", "valid_from")]
    parse_rows(fields, [["Github handle", "Valid from"], ["ann", "2019-05-01"], ["", ""]])
    # -> [{"github_handle": "ann", "valid_from": "2019-05-01"}]
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Sequence

from ..errors import SchemaMismatch

END_OF_TABLE = ""


def identity(value: Any) -> Any:
    """Return the value unchanged. Used as the default field transform."""
    return value


class Field(NamedTuple):
    """One column of a field specification."""

    label: str
    key: str
    transform: Callable[[Any], Any] = identity


def _as_fields(fields: Sequence[Field | tuple]) -> list[Field]:
    return [f if isinstance(f, Field) else Field(*f) for f in fields]


def check_header(fields: Sequence[Field | tuple], header: Sequence[Any]) -> None:
    """Raise ``SchemaMismatch`` on the first header cell that differs from its label.

    Only the first ``len(fields)`` cells are compared; extra columns are ignored.
    """
    for i, field in enumerate(_as_fields(fields)):
        found = header[i] if i < len(header) else None
        if found != field.label:
            raise SchemaMismatch(i, field.label, found)


def parse_rows(
    fields: Sequence[Field | tuple],
    rows: Sequence[Sequence[Any]],
) -> list[dict[str, Any]]:
    """Parse ``rows`` (row 0 is the header) into one record per data row.

    Parsing stops, without consuming it, at the first row whose first cell is
    the empty string. Missing trailing cells of a ragged row read as ``""``.

    Raises:
        SchemaMismatch: When the header does not match the field labels.
    """
    columns = _as_fields(fields)
    if not columns:
        return []
    check_header(columns, rows[0] if rows else [])

    records: list[dict[str, Any]] = []
    for row in rows[1:]:
        if not row or row[0] == END_OF_TABLE:
            break
        records.append(
            {
                field.key: field.transform(row[j] if j < len(row) else END_OF_TABLE)
                for j, field in enumerate(columns)
            }
        )
    return records
