"""
Tests for helper functions in lib modules.
Pure functions that can be tested without mocking Google Sheets.
"""
import re
from datetime import datetime, timezone

import pytest
from unittest.mock import patch

from lib.common import normalize, to_number_or_none, ok, ng
from lib.errors import ErrorCode, unexpected_failure
from lib.id_rules import short_id, unique_short_id, looks_numeric, format_timestamp, extract_ids_from_values
from lib.input_parser import strip_quotes, coerce_str, coerce_number
from lib.records import RequestRecord, PurchaseRecord, ProductEntry, cell, is_blank


class TestStripQuotes:
    """Tests for strip_quotes function"""

    def test_removes_double_quotes(self):
        assert strip_quotes('"hello"') == "hello"

    def test_removes_single_quotes(self):
        assert strip_quotes("'hello'") == "hello"

    def test_strips_whitespace(self):
        assert strip_quotes("  hello  ") == "hello"

    def test_single_quote_char_unchanged(self):
        assert strip_quotes('"') == '"'


class TestCoerceStr:
    """Tests for coerce_str function"""

    def test_string_input(self):
        assert coerce_str("id123") == "id123"

    def test_int_input(self):
        assert coerce_str(1024) == "1024"

    def test_bool_rejected(self):
        assert coerce_str(True) is None

    def test_dict_with_second_key(self):
        assert coerce_str({"idSolicitud": "abc"}, ("request_id", "idSolicitud")) == "abc"

    def test_none_input(self):
        assert coerce_str(None) is None


class TestCoerceNumber:
    """Tests for coerce_number function"""

    def test_numeric_string(self):
        assert coerce_number("4") == 4

    def test_decimal_string(self):
        assert coerce_number("2.5") == 2.5

    def test_decimal_comma(self):
        assert coerce_number("2,5") == 2.5

    def test_grouped_thousands(self):
        assert coerce_number("1,000") == 1000
        assert coerce_number("12,345.5") == 12345.5

    def test_quoted_number(self):
        assert coerce_number('"7"') == 7

    def test_garbage(self):
        assert coerce_number("abc") is None

    def test_nan_rejected(self):
        assert coerce_number("nan") is None

    def test_dict_keys(self):
        assert coerce_number({"cantidad": "3"}, ("quantity", "cantidad")) == 3


class TestNormalize:
    """Tests for normalize function"""

    def test_lowercase_and_strip(self):
        assert normalize("  Ferretería SUR ") == "ferretería sur"

    def test_none(self):
        assert normalize(None) == ""


class TestToNumberOrNone:
    """Tests for to_number_or_none function"""

    def test_whole_float_becomes_int(self):
        assert to_number_or_none(6.0) == 6
        assert isinstance(to_number_or_none("6.0"), int)

    def test_grouped_string_is_not_guessed(self):
        assert to_number_or_none("1,000") is None
        assert to_number_or_none("2,5") is None

    def test_empty(self):
        assert to_number_or_none("") is None
        assert to_number_or_none("   ") is None


class TestEnvelope:
    """Tests for ok/ng response helpers"""

    def test_ok(self):
        assert ok("x.op", {"a": 1}) == {"status": "success", "op": "x.op", "data": {"a": 1}}

    def test_ok_without_data(self):
        assert ok("x.op")["data"] == {}

    def test_ng_with_enum_code(self):
        r = ng("x.op", ErrorCode.NOT_FOUND, "missing")
        assert r == {"status": "error", "op": "x.op", "code": "NOT_FOUND", "message": "missing"}

    def test_ng_extra(self):
        r = ng("x.op", "BAD_REQUEST", "bad", {"field": "cantidad"})
        assert r["field"] == "cantidad"

    def test_unexpected_failure_helper(self):
        assert unexpected_failure("x", "boom")["code"] == "UNEXPECTED_FAILURE"


class TestIdRules:
    """Tests for ID and timestamp generation"""

    def test_short_id_shape(self):
        assert re.fullmatch(r"[0-9a-f]{8}", short_id())

    def test_unique_short_id_skips_existing(self):
        with patch("lib.id_rules.short_id", side_effect=["aaaa0000", "bbbb1111"]):
            assert unique_short_id({"aaaa0000"}) == "bbbb1111"

    def test_unique_short_id_skips_numeric_looking(self):
        with patch("lib.id_rules.short_id", side_effect=["01234567", "1e234567", "ab12cd34"]):
            assert unique_short_id(set()) == "ab12cd34"

    def test_looks_numeric(self):
        assert looks_numeric("01234567")
        assert looks_numeric("1e234567")
        assert not looks_numeric("3f9a1c2e")

    def test_unique_short_id_gives_up(self):
        with patch("lib.id_rules.short_id", return_value="aaaa0000"):
            with pytest.raises(RuntimeError):
                unique_short_id({"aaaa0000"}, attempts=3)

    def test_format_timestamp(self):
        now = datetime(2026, 10, 19, 8, 5, 3, tzinfo=timezone.utc)
        assert format_timestamp(now, "UTC") == "19/10/2026 08:05:03"

    def test_format_timestamp_converts_zone(self):
        now = datetime(2026, 10, 19, 8, 0, 0, tzinfo=timezone.utc)
        assert format_timestamp(now, "America/Lima") == "19/10/2026 03:00:00"

    def test_extract_ids(self):
        values = [["a", "x1"], ["b", ""], ["c"], ["d", " x2 "]]
        assert extract_ids_from_values(values, 1) == {"x1", "x2"}


class TestRecords:
    """Tests for positional row decoding"""

    def test_cell_short_row(self):
        assert cell(["a"], 3, "n/a") == "n/a"

    def test_is_blank(self):
        assert is_blank(["", "  ", ""])
        assert not is_blank(["", "x"])

    def test_request_record_round_trip_order(self):
        rec = RequestRecord.from_row(["SKU1", "10", "01/10/2026", "alice", "solicitado", " id123 "], 2)
        assert rec.quantity == 10
        assert rec.id == "id123"
        assert rec.row == 2
        assert rec.to_row() == ["SKU1", 10, "01/10/2026", "alice", "solicitado", "id123"]

    def test_request_record_pending(self):
        assert RequestRecord.from_row(["A", "1", "", "u", "solicitado", "x"]).is_pending
        assert not RequestRecord.from_row(["A", "0", "", "u", "Completado", "x"]).is_pending

    def test_request_record_bad_quantity_is_zero(self):
        assert RequestRecord.from_row(["A", "", "", "u", "solicitado", "x"]).quantity == 0

    def test_purchase_record_columns(self):
        row = ["15/09/2026", "", "", "P-1", "Tornillo", "", "", "", "", "", "0.35", "Sur"]
        p = PurchaseRecord.from_row(row)
        assert (p.code, p.name, p.cost, p.provider, p.date) == ("P-1", "Tornillo", 0.35, "Sur", "15/09/2026")

    def test_purchase_record_keeps_unparsable_cost(self):
        row = ["", "", "", "P-1", "X", "", "", "", "", "", "S/ 1", "Sur"]
        assert PurchaseRecord.from_row(row).cost == "S/ 1"

    def test_product_entry_dict(self):
        entry = ProductEntry(code="P-1", name="X", cost=1, date="d")
        assert entry.to_dict() == {"codigo": "P-1", "nombre": "X", "costo": 1, "fecha": "d"}
