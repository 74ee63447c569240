"""Tests for the row parser."""

import pytest

from sheet_powertools.errors import SchemaMismatch
from sheet_powertools.validation.parse import Field, check_header, parse_rows


@pytest.fixture
def handle_fields():
    return [
        Field("Github handle", "github_handle"),
        Field("IANA time zone", "iana_time_zone"),
        Field("Valid from", "valid_from"),
        Field("Valid to", "valid_to"),
    ]


@pytest.fixture
def handle_rows():
    return [
        ["Github handle", "IANA time zone", "Valid from", "Valid to"],
        ["ann", "Asia/Tokyo", "2019-05-01", "2019-05-30"],
        ["bob", "Asia/Hong_Kong", "2019-04-22", "2019-05-30"],
        ["", "", "", ""],
    ]


class TestParseRows:
    def test_produces_expected_records(self, handle_fields, handle_rows):
        assert parse_rows(handle_fields, handle_rows) == [
            {
                "github_handle": "ann",
                "iana_time_zone": "Asia/Tokyo",
                "valid_from": "2019-05-01",
                "valid_to": "2019-05-30",
            },
            {
                "github_handle": "bob",
                "iana_time_zone": "Asia/Hong_Kong",
                "valid_from": "2019-04-22",
                "valid_to": "2019-05-30",
            },
        ]

    def test_identity_records_match_raw_cells(self, handle_fields, handle_rows):
        records = parse_rows(handle_fields, handle_rows)
        keys = [f.key for f in handle_fields]
        for record, raw in zip(records, handle_rows[1:]):
            assert list(record) == keys
            assert list(record.values()) == raw

    def test_transform_applied_per_field(self):
        fields = [Field("Name", "name", str.upper), Field("Age", "age", int)]
        rows = [["Name", "Age"], ["ann", "41"]]
        assert parse_rows(fields, rows) == [{"name": "ANN", "age": 41}]

    def test_plain_tuples_accepted(self):
        rows = [["Name", "Age"], ["ann", 41]]
        assert parse_rows([("Name", "name"), ("Age", "age")], rows) == [{"name": "ann", "age": 41}]

    def test_extra_columns_ignored(self):
        rows = [["Name", "Notes"], ["ann", "ignored"]]
        assert parse_rows([Field("Name", "name")], rows) == [{"name": "ann"}]

    def test_ragged_row_reads_missing_cells_as_empty(self):
        fields = [Field("Name", "name"), Field("Age", "age")]
        assert parse_rows(fields, [["Name", "Age"], ["ann"]]) == [{"name": "ann", "age": ""}]

    def test_header_only(self, handle_fields, handle_rows):
        assert parse_rows(handle_fields, handle_rows[:1]) == []


class TestEndOfTable:
    def test_stops_at_first_empty_first_cell(self):
        fields = [Field("Name", "name"), Field("Age", "age")]
        rows = [
            ["Name", "Age"],
            ["ann", 41],
            ["", "still data?"],
            ["bob", 37],
        ]
        assert parse_rows(fields, rows) == [{"name": "ann", "age": 41}]

    def test_whitespace_first_cell_is_not_a_sentinel(self):
        fields = [Field("Name", "name")]
        rows = [["Name"], [" "], ["bob"]]
        assert parse_rows(fields, rows) == [{"name": " "}, {"name": "bob"}]

    def test_empty_row_stops(self):
        fields = [Field("Name", "name")]
        assert parse_rows(fields, [["Name"], [], ["bob"]]) == []


class TestHeaderCheck:
    def test_mismatch_reports_expected_and_found(self, handle_fields, handle_rows):
        handle_rows[0][2] = "Valid since"
        with pytest.raises(SchemaMismatch) as excinfo:
            parse_rows(handle_fields, handle_rows)

        assert excinfo.value.position == 2
        assert excinfo.value.expected == "Valid from"
        assert excinfo.value.found == "Valid since"
        assert "'Valid from'" in str(excinfo.value)
        assert "'Valid since'" in str(excinfo.value)

    def test_match_is_exact(self):
        with pytest.raises(SchemaMismatch):
            check_header([Field("Name", "name")], ["name"])

    def test_short_header_reports_none(self):
        with pytest.raises(SchemaMismatch) as excinfo:
            check_header([Field("Name", "name"), Field("Age", "age")], ["Name"])
        assert excinfo.value.found is None

    def test_empty_table_raises(self):
        with pytest.raises(SchemaMismatch):
            parse_rows([Field("Name", "name")], [])
