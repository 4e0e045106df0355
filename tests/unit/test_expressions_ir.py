"""Tests for the expression AST models."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from importlib.metadata import PackageNotFoundError
from pathlib import Path

import pytest
from pydantic import ValidationError

import numeval
from numeval import _version
from numeval.core.ir.expressions import (
    BinOp,
    Function,
    Number,
    Op,
    UnaryMinus,
    dump_expr,
    format_number,
    load_expr,
)


class TestRendering:
    """Nodes render to a canonical parenthesized form."""

    @pytest.mark.parametrize(
        "value,expected",
        [(2.0, "2"), (3.2, "3.2"), (0.5, "0.5"), (47.94, "47.94"), (100.0, "100")],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_binop(self) -> None:
        expr = BinOp(lhs=Number(value=2), op=Op.POWER, rhs=Number(value=0.5))
        assert str(expr) == "(2^0.5)"

    def test_unary_minus(self) -> None:
        assert str(UnaryMinus(operand=Number(value=1))) == "-(1)"

    def test_function(self) -> None:
        assert str(Function(name="f", args=[Number(value=1), Number(value=2)])) == "f(1, 2)"
        assert str(Function(name="pi")) == "pi()"

    def test_op_values_are_symbols(self) -> None:
        assert [op.value for op in Op] == ["+", "-", "*", "/", "%", "^"]


class TestImmutability:
    """Parsed trees cannot be edited in place."""

    def test_frozen_number(self) -> None:
        number = Number(value=1)
        with pytest.raises(ValidationError):
            number.value = 2.0  # type: ignore[misc]

    def test_frozen_binop(self) -> None:
        expr = numeval.parse_expr("1+2")
        with pytest.raises(ValidationError):
            expr.op = Op.SUBTRACT  # type: ignore[misc]

    def test_hashable_leaf(self) -> None:
        assert hash(Number(value=1)) == hash(Number(value=1.0))


class TestSerialization:
    """Expressions survive a JSON dump and load."""

    def test_round_trip(self) -> None:
        expr = numeval.parse_expr("7 + max(2, -min(47.94, trunc(22.54)))^2")
        assert load_expr(dump_expr(expr)) == expr

    def test_kind_tags(self) -> None:
        data = json.loads(dump_expr(numeval.parse_expr("-f(1)")))
        assert data["kind"] == "unary_minus"
        assert data["operand"]["kind"] == "function"
        assert data["operand"]["args"][0] == {"kind": "number", "value": 1.0}

    def test_op_serialized_as_symbol(self) -> None:
        data = json.loads(dump_expr(numeval.parse_expr("1 % 2")))
        assert data["op"] == "%"

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            load_expr('{"kind": "variable", "name": "x"}')


class TestPackageSurface:
    """Top-level package exposes the parse entry point."""

    def test_parse_expr(self) -> None:
        assert str(numeval.parse_expr("2 + 5")) == "(2+5)"

    def test_version(self) -> None:
        assert isinstance(numeval.__version__, str)

    def test_version_without_checkout_or_install(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        def _not_installed(name: str) -> str:
            raise PackageNotFoundError(name)

        monkeypatch.setattr(_version, "_PYPROJECT", tmp_path / "pyproject.toml")
        monkeypatch.setattr(_version, "_metadata_version", _not_installed)
        assert _version.get_version() == "0.0.0"

    def test_version_from_pyproject(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "numeval"\nversion = "9.8.7"\n')
        monkeypatch.setattr(_version, "_PYPROJECT", pyproject)
        assert _version.get_version() == "9.8.7"

    def test_concurrent_parsing(self) -> None:
        sources = [f"{i} + max({i}, {i} ^ 2)" for i in range(50)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(numeval.parse_expr, sources))
        assert results == [numeval.parse_expr(s) for s in sources]
