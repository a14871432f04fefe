"""Tests for the check registry."""

from __future__ import annotations

import pytest

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import CheckRegistry, CheckSpec, Stage, load_checks


def _noop(ctx: ValidationContext) -> None:
    pass


def test_register():
    reg = CheckRegistry()
    reg.register(CheckSpec(id="V0.01", stage=Stage.SAMPLING, fn=_noop))
    assert reg.count == 1
    assert [s.id for s in reg.resolve_order()] == ["V0.01"]


def test_duplicate_registration_rejected():
    reg = CheckRegistry()
    reg.register(CheckSpec(id="V0.01", stage=Stage.SAMPLING, fn=_noop))
    with pytest.raises(ValueError):
        reg.register(CheckSpec(id="V0.01", stage=Stage.SAMPLING, fn=_noop))


def test_resolve_order_with_deps():
    reg = CheckRegistry()
    reg.register(CheckSpec(id="V2.01", stage=Stage.AREAS, fn=_noop, dependencies=["V0.01"]))
    reg.register(CheckSpec(id="V0.01", stage=Stage.SAMPLING, fn=_noop))
    ids = [s.id for s in reg.resolve_order()]
    assert ids == ["V0.01", "V2.01"]


def test_resolve_order_breaks_ties_by_id():
    reg = CheckRegistry()
    for cid in ("V1.03", "V1.01", "V1.02"):
        reg.register(CheckSpec(id=cid, stage=Stage.STRUCTURE, fn=_noop))
    assert [s.id for s in reg.resolve_order()] == ["V1.01", "V1.02", "V1.03"]


def test_resolve_order_detects_cycles():
    reg = CheckRegistry()
    reg.register(CheckSpec(id="A", stage=Stage.SAMPLING, fn=_noop, dependencies=["B"]))
    reg.register(CheckSpec(id="B", stage=Stage.SAMPLING, fn=_noop, dependencies=["A"]))
    with pytest.raises(ValueError):
        reg.resolve_order()


def test_all_checks_registered_in_order():
    reg = load_checks()
    ids = [s.id for s in reg.resolve_order()]
    assert reg.count == 11
    assert ids[0] == "V0.01"
    assert ids.index("V1.01") < ids.index("V3.01")
    assert ids.index("V2.01") < ids.index("V2.02") < ids.index("V3.01")
    assert ids.index("V4.02") < ids.index("V4.03")
    assert set(ids[-4:]) == {"V4.01", "V4.02", "V4.03", "V4.04"}
