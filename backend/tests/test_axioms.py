import dataclasses

import pytest

from axioms import (
    AXIOMS_BY_ID,
    SFH_AXIOMS,
    get_axiom,
    get_axioms_by_category,
    get_critical_axioms,
)
from repair_templates import (
    REPAIR_TEMPLATES,
    attempt_auto_repair,
    get_repair_template,
    get_repair_templates,
)
from schemas import ViolatedAxiom


def test_table_has_37_unique_axioms_in_order():
    ids = [a.id for a in SFH_AXIOMS]
    assert len(ids) == 37
    assert ids == [f"A{n:02d}" for n in range(1, 38)]
    assert len(AXIOMS_BY_ID) == 37


def test_critical_axioms():
    assert [a.id for a in get_critical_axioms()] == [
        "A01", "A05", "A07", "A11", "A13", "A21", "A27", "A34", "A35",
    ]


@pytest.mark.parametrize(
    "category,first,last,count",
    [
        ("ontology", "A01", "A10", 10),
        ("dynamics", "A11", "A20", 10),
        ("agency", "A21", "A27", 7),
        ("fractal", "A28", "A34", 7),
        ("empirical", "A35", "A37", 3),
    ],
)
def test_categories(category, first, last, count):
    axioms = get_axioms_by_category(category)
    assert len(axioms) == count
    assert axioms[0].id == first
    assert axioms[-1].id == last


def test_every_axiom_has_patterns_and_text():
    for axiom in SFH_AXIOMS:
        assert axiom.violation_patterns
        assert axiom.description
        assert axiom.explanation
        assert axiom.mathematical_basis


def test_lookup_and_immutability():
    a13 = get_axiom("A13")
    assert a13.severity == "critical"
    assert "just stop being anxious" in a13.violation_patterns
    assert get_axiom("A99") is None

    with pytest.raises(dataclasses.FrozenInstanceError):
        a13.severity = "warning"
    with pytest.raises(TypeError):
        AXIOMS_BY_ID["A99"] = a13


def test_repair_templates_lookup():
    assert len(REPAIR_TEMPLATES) == 6
    template = get_repair_template("A11")
    assert template.id == "A11_repair_01"
    assert template.success_rate == pytest.approx(0.99)
    assert get_repair_templates("A27")[0].id == "A27_repair_01"
    assert get_repair_template("A02") is None
    assert get_repair_templates("A02") == []


def _violation(axiom_id: str) -> ViolatedAxiom:
    axiom = get_axiom(axiom_id)
    return ViolatedAxiom(
        axiom_id=axiom_id,
        description=axiom.description,
        severity=axiom.severity,
        violation_details="test",
    )


def test_auto_repair_appends_notes_for_a13_and_a27():
    repaired = attempt_auto_repair("Base.", [_violation("A13"), _violation("A27")])

    assert repaired.startswith("Base.\n\n[Note: This response has been adjusted")
    assert "θ-resonance building" in repaired
    assert repaired.endswith("permanent additions to your qualic structure.]")


def test_auto_repair_leaves_other_violations_alone():
    assert attempt_auto_repair("Base.", [_violation("A01")]) == "Base."
    assert attempt_auto_repair("Base.", []) == "Base."
