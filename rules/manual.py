"""
rules/manual.py — Human-readable rule text for Flower Button.

Turns rule kinds into the sentences printed in the manual, and builds the
digit legend the player uses to decode the sapped bomb timer. Used by the
session log and by the manual strip in renderer/ui.py.
"""

from __future__ import annotations

from rules.tree import (
    ADDITIONAL_DIGIT_DISPLAY,
    OBJECT_DIGITS,
    SUBJECT_DIGITS,
    VERB_DIGITS,
    Obj,
    Subject,
    Verb,
)

SUBJECT_PHRASES: dict[Subject, str] = {
    Subject.UNITS_DIGIT:       "the units digit",
    Subject.TENS_DIGIT:        "the tens digit",
    Subject.EVERY_DIGIT:       "every digit",
    Subject.EVERY_DIGIT_SAME:  "every digit",
    Subject.EITHER_DIGIT:      "either digit",
    Subject.NEITHER_DIGIT:     "neither digit",
    Subject.DIGITS_PRODUCT:    "the digits product",
    Subject.DIGITS_DIFFERENCE: "the digits difference",
    Subject.DIGITS_SUM:        "the digits sum",
    Subject.DISPLAY:           "the display",
    Subject.DISPLAY_BACKWARDS: "the display read backwards",
}

VERB_PHRASES: dict[Verb, str] = {
    Verb.IS:                      "is",
    Verb.IS_NOT:                  "is not",
    Verb.CONTAINS:                "contains",
    Verb.DOES_NOT_CONTAIN:        "does not contain",
    Verb.IS_DIVISIBLE_BY:         "is divisible by",
    Verb.IS_LESS_THAN:            "is less than",
    Verb.IS_GREATER_THAN:         "is greater than",
    Verb.BEGINS_WITH:             "begins with",
    Verb.ENDS_WITH:               "ends with",
    Verb.IS_ONE_AWAY_FROM:        "is 1 away from",
    Verb.CONTAINS_PADDED:         "contains",
    Verb.DOES_NOT_CONTAIN_PADDED: "does not contain",
    Verb.BEGINS_WITH_PADDED:      "begins with",
    Verb.ARE_THE_SAME:            "is",
}

OBJECT_PHRASES: dict[Obj, str] = {
    Obj.DIGIT_0:          "0",
    Obj.DIGIT_1_OR_7:     "1 or 7",
    Obj.DIGIT_2_OR_8:     "2 or 8",
    Obj.DIGIT_4_OR_6:     "4 or 6",
    Obj.THE_SAME:         "the same",
    Obj.PRIME:            "prime",
    Obj.UNITS_DIGIT:      "the units digit",
    Obj.EITHER_DIGIT:     "either digit",
    Obj.TENS_DIGIT:       "the tens digit",
    Obj.ADDITIONAL_DIGIT: "",
}


def describe_rule(
    subject: Subject,
    verb: Verb,
    obj: Obj,
    additional_digit: int | None = None,
) -> str:
    """Return the rule as a manual sentence.

    Examples:
        "The units digit is divisible by 3"
        "Neither digit is 1 or 7 or 4"
    """
    if obj is Obj.ADDITIONAL_DIGIT:
        target = "" if additional_digit is None else str(additional_digit)
    elif additional_digit is not None:
        target = f"{OBJECT_PHRASES[obj]} or {additional_digit}"
    else:
        target = OBJECT_PHRASES[obj]

    sentence = " ".join(
        part for part in (SUBJECT_PHRASES[subject], VERB_PHRASES[verb], target) if part
    )
    return sentence[0].upper() + sentence[1:]


def _phrase_for_digit(digits: dict, phrases: dict, digit: int) -> str:
    # Several kinds can share a display digit; they share a phrase too
    for kind, value in digits.items():
        if value == digit:
            return phrases[kind]
    return "?"


def legend_rows() -> list[tuple[int, str, str, str, int]]:
    """Return the manual's decoding table, one row per display digit.

    Returns:
        (digit, subject phrase, verb phrase, object phrase, additional digit)
        tuples for digits 0-9. The object phrase for the additional-only
        object is rendered as "<extra>".
    """
    extra_for_display = {shown: actual for actual, shown in ADDITIONAL_DIGIT_DISPLAY.items()}
    rows = []
    for digit in range(10):
        obj_phrase = _phrase_for_digit(OBJECT_DIGITS, OBJECT_PHRASES, digit) or "<extra>"
        rows.append((
            digit,
            _phrase_for_digit(SUBJECT_DIGITS, SUBJECT_PHRASES, digit),
            _phrase_for_digit(VERB_DIGITS, VERB_PHRASES, digit),
            obj_phrase,
            extra_for_display[digit],
        ))
    return rows
