import random

import pytest

from rules.generator import compile_rule, generate_rule, valid_times_for
from rules.manual import describe_rule, legend_rows
from rules.tree import (
    EXTRA_CANDIDATES,
    RULE_TREE,
    Combine,
    Obj,
    Subject,
    Verb,
    fold,
)
from rules.verify import check_times, verify_all_rules


def test_units_divisible_by_additional_digit():
    rule = compile_rule(Subject.UNITS_DIGIT, Verb.IS_DIVISIBLE_BY, Obj.ADDITIONAL_DIGIT, 3)

    assert rule.is_valid(13)
    assert not rule.is_valid(14)
    assert rule.preferred_digits == (1, 0, 9, 6)
    assert rule.signature() == "10:96"
    assert rule.description == "The units digit is divisible by 3"
    assert sorted(rule.valid_times)[:5] == [0, 3, 6, 9, 10]


def test_repeated_literal_drops_additional_digit():
    rule = compile_rule(Subject.EITHER_DIGIT, Verb.IS, Obj.DIGIT_1_OR_7, 7)

    assert rule.additional_digit is None
    assert rule.signature() == "01:2#"
    assert rule.is_valid(71)
    assert rule.is_valid(17)
    assert not rule.is_valid(23)


def test_additional_digit_extends_literal_object():
    rule = compile_rule(Subject.EITHER_DIGIT, Verb.IS, Obj.DIGIT_1_OR_7, 4)

    assert rule.is_valid(40)
    assert rule.signature() == "01:20"
    assert rule.description == "Either digit is 1 or 7 or 4"


def test_display_contains_zero_is_not_padded():
    assert valid_times_for(Subject.DISPLAY, Verb.CONTAINS, Obj.DIGIT_0) == [
        0, 10, 20, 30, 40, 50, 60, 70, 80, 90,
    ]


def test_padded_display_contains_leading_zero():
    valid = valid_times_for(Subject.DISPLAY, Verb.CONTAINS_PADDED, Obj.DIGIT_0)
    assert valid == list(range(0, 11)) + [20, 30, 40, 50, 60, 70, 80, 90]


def test_every_digit_the_same():
    valid = valid_times_for(Subject.EVERY_DIGIT_SAME, Verb.ARE_THE_SAME, Obj.THE_SAME)
    assert valid == [0, 11, 22, 33, 44, 55, 66, 77, 88, 99]


def test_neither_digit_is_the_opposite_of_either_digit():
    either = set(valid_times_for(Subject.EITHER_DIGIT, Verb.IS, Obj.DIGIT_4_OR_6))
    neither = set(valid_times_for(Subject.NEITHER_DIGIT, Verb.IS, Obj.DIGIT_4_OR_6))
    assert either.isdisjoint(neither)
    assert either | neither == set(range(100))


def test_rule_without_valid_time_accepts_everything():
    rule = compile_rule(Subject.UNITS_DIGIT, Verb.IS_GREATER_THAN, Obj.ADDITIONAL_DIGIT, 9)
    assert rule.valid_times == frozenset(range(100))


@pytest.mark.parametrize(
    ("combine", "results", "expected"),
    [
        (Combine.ANY, [], False),
        (Combine.ALL, [], True),
        (Combine.NONE, [], True),
        (Combine.ANY, [False, True], True),
        (Combine.ALL, [False, True], False),
        (Combine.NONE, [False, True], False),
    ],
)
def test_fold(combine, results, expected):
    assert fold(combine, results) is expected


def _tree_paths():
    """Map each subject/verb/object path to the digits its leaves allow."""
    paths = {}
    for s in RULE_TREE:
        for v in s.verbs:
            for o in v.objects:
                paths.setdefault((s.kind, v.kind, o.kind), set()).update(EXTRA_CANDIDATES[o.extra])
    return paths


def test_generated_rules_come_from_the_tree():
    paths = _tree_paths()
    for seed in range(200):
        rule = generate_rule(random.Random(seed))
        allowed = paths[(rule.subject, rule.verb, rule.obj)]

        assert rule.valid_times
        assert len(rule.preferred_digits) == 4
        assert all(d is not None for d in rule.preferred_digits[:3])
        if rule.additional_digit is not None:
            assert rule.additional_digit in allowed
            assert rule.preferred_digits[3] is not None
        else:
            assert rule.preferred_digits[3] is None


def test_generation_is_deterministic_for_a_seed():
    assert generate_rule(random.Random(42)) == generate_rule(random.Random(42))


def test_describe_rule_with_additional_digit_only():
    text = describe_rule(Subject.DIGITS_SUM, Verb.IS_LESS_THAN, Obj.ADDITIONAL_DIGIT, 5)
    assert text == "The digits sum is less than 5"


def test_legend_covers_every_digit():
    rows = legend_rows()
    assert [row[0] for row in rows] == list(range(10))
    assert rows[9] == (9, "the display read backwards", "is 1 away from", "<extra>", 6)
    assert sorted(row[4] for row in rows) == list(range(10))


def test_check_times_flags_unplayable_lists():
    assert check_times([]) == ["has no valid times"]
    assert check_times([5, 30]) == []
    assert any("min release" in p for p in check_times([25, 30]))
    assert any("max release" in p for p in check_times([1, 2, 3]))
    assert any("all times" in p for p in check_times(list(range(100))))


def test_verify_all_rules_walks_every_combination():
    report = verify_all_rules()
    expected = sum(
        len(EXTRA_CANDIDATES[o.extra])
        for s in RULE_TREE
        for v in s.verbs
        for o in v.objects
    )
    assert report.combinations == expected
    assert report.mean_valid_count > 0
    assert all(isinstance(issue, str) for issue in report.issues)
