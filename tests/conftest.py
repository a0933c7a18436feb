"""Shared fixtures for nats-scaffold tests.

Schemas are written into pytest's ``tmp_path`` so every test gets its own
schema file and output directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from nats_scaffold.codegen.core.config import GeneratorConfig


CALC_PROTO = """\
syntax = "proto3";

package Calc;

service Calc {
  rpc Add(AddRequest) returns (CalcResponse) {}
  rpc Average(AverageRequest) returns (CalcResponse) {}
}

message AddRequest {
  repeated double values = 1;
}

message AverageRequest {
  repeated double values = 1;
}

message CalcResponse {
  double result = 1;
}
"""

MULTI_SERVICE_PROTO = """\
syntax = "proto3";

package shop;

service Orders {
  rpc Place(PlaceOrder) returns (OrderReceipt) {}
  rpc Cancel(CancelOrder) returns (OrderReceipt) {}
}

service Inventory {
  rpc Lookup(SkuQuery) returns (StockLevel) {}
}
"""


@pytest.fixture
def calc_proto() -> str:
    return CALC_PROTO


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Write schema text to a file under tmp_path and return its path."""

    def _write(text: str = CALC_PROTO, name: str = "calc.proto") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Output directory path (not created)."""
    return tmp_path / "generated"


@pytest.fixture
def make_config(write_schema, out_dir) -> Callable[..., GeneratorConfig]:
    """Build a GeneratorConfig for the calc schema, with overrides."""

    def _make(**overrides) -> GeneratorConfig:
        values = {
            "schema_path": str(write_schema()),
            "output_dir": str(out_dir),
        }
        values.update(overrides)
        return GeneratorConfig(**values)

    return _make


@pytest.fixture
def multi_proto() -> str:
    return MULTI_SERVICE_PROTO
