import pytest

from common.contrast_engine.engine import classify, contrast, contrast_with
from common.contrast_engine.loader import load_document
from common.contrast_engine.models import Channel, Outcome


def test_empty_rules_trimmed_inputs_match(fixed_now):
    res = contrast("  ABC123  ", "ABC123", (), (), now=fixed_now)
    assert res.outcome == Outcome.MATCH
    assert res.identifier == "ABC123"
    assert res.reference == "ABC123"
    assert res.generated_at == fixed_now
    assert res.is_match


def test_fallback_value_mismatches_reference(make_rules):
    sn_rules = make_rules(r"SN:(\w+)")
    paper_rules = make_rules(r"P/N\s+(\w+)", channel=Channel.REFERENCE)
    res = contrast("no marker here", "P/N XYZ99", sn_rules, paper_rules)
    assert res.identifier == "no marker here"
    assert res.reference == "XYZ99"
    assert res.outcome == Outcome.MISMATCH


def test_rules_are_bound_to_their_own_channel(make_document):
    sn_rules, paper_rules = load_document(
        make_document(sn_rules={"sn": r"SN:(\w+)"}, paper_rules={"lbl": r"LBL#(\w+)"})
    )
    res = contrast("SN:AB12 rev2", "LBL#AB12", sn_rules, paper_rules)
    assert res.identifier == "AB12"
    assert res.reference == "AB12"
    assert res.outcome == Outcome.MATCH
    assert res.reference_extraction.rule_label == "lbl"
    assert res.identifier_extraction.rule_label == "sn"


def test_missing_rules_yield_incomplete(make_rules):
    res = contrast("SN:AB12", "AB12", make_rules(r"SN:(\w+)"), None)
    assert res.outcome == Outcome.INCOMPLETE
    assert res.identifier == "AB12"
    assert res.reference is None
    assert res.reference_extraction is None


def test_contrast_with_unloaded_ruleset_is_incomplete():
    res = contrast_with(None, "A", "A")
    assert res.outcome == Outcome.INCOMPLETE
    assert res.identifier is None
    assert res.reference is None


def test_contrast_with_ruleset(make_document):
    ruleset = load_document(make_document(sn_rules={"sn": r"SN:(\w+)"}))
    assert contrast_with(ruleset, "SN:Q1", " Q1 ").outcome == Outcome.MATCH
    assert contrast_with(ruleset, "SN:Q1", "Q2").outcome == Outcome.MISMATCH


def test_comparison_is_case_sensitive():
    assert contrast("abc", "ABC", (), ()).outcome == Outcome.MISMATCH


@pytest.mark.parametrize(
    "identifier,reference,expected",
    [
        ("A", "A", Outcome.MATCH),
        ("A", "B", Outcome.MISMATCH),
        ("", "", Outcome.MATCH),
        (None, "A", Outcome.INCOMPLETE),
        ("A", None, Outcome.INCOMPLETE),
        (None, None, Outcome.INCOMPLETE),
    ],
)
def test_classify(identifier, reference, expected):
    assert classify(identifier, reference) == expected


@pytest.mark.parametrize(
    "sn,paper",
    [
        ("SN:AB12 x", "LBL#AB12"),
        ("SN:AB12 x", "LBL#ZZ99"),
        ("nothing", "nothing"),
        ("SN:AB12", "plain AB12"),
    ],
)
def test_outcome_is_symmetric_when_channels_swap(make_rules, sn, paper):
    sn_rules = make_rules(r"SN:(\w+)")
    paper_rules = make_rules(r"LBL#(\w+)", channel=Channel.REFERENCE)
    forward = contrast(sn, paper, sn_rules, paper_rules)
    swapped = contrast(paper, sn, paper_rules, sn_rules)
    assert forward.outcome == swapped.outcome
    assert (forward.identifier, forward.reference) == (swapped.reference, swapped.identifier)


def test_result_serializes(fixed_now):
    res = contrast("A", "B", (), (), now=fixed_now)
    dumped = res.model_dump(mode="json")
    assert dumped["outcome"] == "MISMATCH"
    assert dumped["identifier_extraction"]["source"] == "PASSTHROUGH"
