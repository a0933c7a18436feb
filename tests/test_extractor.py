"""Tests for the schema extractor."""

import dataclasses

import pytest

from nats_scaffold.codegen.core.errors import ParseError
from nats_scaffold.codegen.core.extractor import (
    extract,
    extract_file,
    normalize_schema_text,
)
from nats_scaffold.codegen.core.schema import RpcDecl


MIXED_PROTO = """\
package mixed;

service Mixed {
  rpc Good(A) returns (B) {}
  rpc Streamy(stream A) returns (B) {}
  rpc Bodied(A) returns (B) {
    option deprecated = true;
  }
  rpc Last(C) returns (D) {}
}
"""


class TestExtractServices:
    """Services and RPCs are captured in source order, verbatim."""

    def test_calc(self, calc_proto):
        model = extract(calc_proto)
        assert model.package_name == "Calc"
        assert [s.name for s in model.services] == ["Calc"]
        assert model.services[0].rpcs == (
            RpcDecl("Add", "AddRequest", "CalcResponse"),
            RpcDecl("Average", "AverageRequest", "CalcResponse"),
        )
        assert model.diagnostics == ()

    def test_multiple_services_in_order(self, multi_proto):
        model = extract(multi_proto)
        assert model.package_name == "shop"
        assert [s.name for s in model.services] == ["Orders", "Inventory"]
        assert [r.name for r in model.services[0].rpcs] == ["Place", "Cancel"]
        assert model.services[1].rpcs == (RpcDecl("Lookup", "SkuQuery", "StockLevel"),)
        assert model.rpc_count == 3

    def test_package_defaults_to_first_service(self):
        text = "service Billing {\n  rpc Charge(ChargeRequest) returns (ChargeReply) {}\n}\n"
        model = extract(text)
        assert model.package_name == "Billing"

    def test_qualified_types_kept_verbatim(self):
        text = (
            "package x;\n"
            "service Health {\n"
            "  rpc Check(google.protobuf.Empty) returns (x.v1.Status) {}\n"
            "}\n"
        )
        rpc = extract(text).services[0].rpcs[0]
        assert rpc.in_type == "google.protobuf.Empty"
        assert rpc.out_type == "x.v1.Status"

    def test_crlf_line_endings(self, calc_proto):
        model = extract(calc_proto.replace("\n", "\r\n"))
        assert [r.name for r in model.services[0].rpcs] == ["Add", "Average"]

    def test_commented_service_is_ignored(self, calc_proto):
        text = "// service Legacy {\n" + calc_proto
        model = extract(text)
        assert [s.name for s in model.services] == ["Calc"]

    def test_lookup_helpers(self, multi_proto):
        model = extract(multi_proto)
        assert model.service("Inventory").rpc("Lookup").out_type == "StockLevel"
        assert model.service("Missing") is None
        assert [r.name for r in model.all_rpcs()] == ["Place", "Cancel", "Lookup"]

    def test_model_is_immutable(self, calc_proto):
        model = extract(calc_proto)
        with pytest.raises(dataclasses.FrozenInstanceError):
            model.package_name = "Other"
        with pytest.raises(dataclasses.FrozenInstanceError):
            model.services[0].rpcs[0].name = "Sub"


class TestExtractErrors:
    """Failures raise ParseError with enough context to find the block."""

    def test_no_services(self):
        with pytest.raises(ParseError, match="no service declarations"):
            extract('syntax = "proto3";\n\nmessage Foo {\n  string a = 1;\n}\n')

    def test_service_without_recognized_rpcs(self):
        text = (
            "package p;\n"
            "\n"
            "service Empty {\n"
            "  rpc Watch(stream A) returns (B) {}\n"
            "}\n"
        )
        with pytest.raises(ParseError) as excinfo:
            extract(text)
        assert excinfo.value.line == 3
        assert "Empty" in str(excinfo.value)

    def test_unterminated_service(self):
        text = "service Calc {\n  rpc Add(A) returns (B) {}\n  }\n"
        with pytest.raises(ParseError, match="not terminated"):
            extract(text)

    def test_service_running_into_the_next(self):
        text = (
            "package shop;\n"
            "\n"
            "service Orders {\n"
            "  rpc Place(PlaceOrder) returns (OrderReceipt) {}\n"
            "\n"
            "}\n"
            "\n"
            "service Inventory {\n"
            "  rpc Lookup(SkuQuery) returns (StockLevel) {}\n"
            "}\n"
        )
        with pytest.raises(ParseError) as excinfo:
            extract(text)

        message = str(excinfo.value)
        assert excinfo.value.line == 3
        assert "'Orders' (line 3)" in message
        assert "'Inventory' (line 8)" in message

    def test_extract_file_names_the_file(self, write_schema):
        path = write_schema("message Only {}\n", name="broken.proto")
        with pytest.raises(ParseError) as excinfo:
            extract_file(path)
        assert excinfo.value.source == str(path)
        assert str(excinfo.value).startswith(str(path))


class TestSkippedLines:
    """RPC-like lines that don't match the recognized shape are reported."""

    def test_diagnostics_for_skipped_rpcs(self):
        model = extract(MIXED_PROTO)
        assert [r.name for r in model.services[0].rpcs] == ["Good", "Last"]

        lines = {d.line: d for d in model.diagnostics}
        assert set(lines) == {5, 6}
        assert "streaming" in lines[5].message
        assert "non-empty body" in lines[6].message
        assert lines[6].text.startswith("rpc Bodied")

    def test_normalize_keeps_line_count(self):
        text = "a // comment\r\nb\r\nc"
        assert normalize_schema_text(text) == "a\nb\nc"
