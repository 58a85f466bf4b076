"""
rules/tree.py — The release rule tree for Flower Button.

A release rule reads like a sentence from the manual:

    <subject>  <verb>  <object> [or <additional digit>]
    "The units digit  is divisible by  3"

Every part of the sentence is a closed enum. Behaviour is attached to the
kinds through lookup tables keyed by the enum member, never through
subclassing:

    SUBJECT_VALUES / SUBJECT_COMBINERS   time -> values, how to fold them
    VERB_PREDICATES / VERB_COMBINERS     (subject, object) -> bool, fold
    OBJECT_VALUES                        time -> literal or derived values
    EXTRA_CANDIDATES                     digits an additional-digit slot allows

RULE_TREE is the immutable catalogue of permitted Subject -> Verb -> Object
paths. A node listed twice under the same parent is picked twice as often;
the duplicates are intentional weighting.

The display digits (SUBJECT_DIGITS, VERB_DIGITS, OBJECT_DIGITS,
ADDITIONAL_DIGIT_DISPLAY) are the secret signature shown to the player
through the sapped bomb timer. They follow the numbering of the manual and
must never change.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Callable, Iterable


# ── Kinds ─────────────────────────────────────────────────────────────────────

class Subject(Enum):
    """What part of the countdown number the rule talks about."""
    UNITS_DIGIT        = auto()
    TENS_DIGIT         = auto()
    EVERY_DIGIT        = auto()
    EVERY_DIGIT_SAME   = auto()   # "every digit is the same"
    EITHER_DIGIT       = auto()
    NEITHER_DIGIT      = auto()
    DIGITS_PRODUCT     = auto()
    DIGITS_DIFFERENCE  = auto()
    DIGITS_SUM         = auto()
    DISPLAY            = auto()
    DISPLAY_BACKWARDS  = auto()


class Verb(Enum):
    """How the subject is compared against the object."""
    IS                      = auto()
    IS_NOT                  = auto()
    CONTAINS                = auto()
    DOES_NOT_CONTAIN        = auto()
    IS_DIVISIBLE_BY         = auto()
    IS_LESS_THAN            = auto()
    IS_GREATER_THAN         = auto()
    BEGINS_WITH             = auto()
    ENDS_WITH               = auto()
    IS_ONE_AWAY_FROM        = auto()
    # The display subjects are read as two characters, so 05 begins with 0
    CONTAINS_PADDED         = auto()
    DOES_NOT_CONTAIN_PADDED = auto()
    BEGINS_WITH_PADDED      = auto()
    # Only used under EVERY_DIGIT_SAME, the subject already holds the verdict
    ARE_THE_SAME            = auto()


class Obj(Enum):
    """What the subject is compared against."""
    DIGIT_0          = auto()
    DIGIT_1_OR_7     = auto()
    DIGIT_2_OR_8     = auto()
    DIGIT_4_OR_6     = auto()
    THE_SAME         = auto()
    PRIME            = auto()
    UNITS_DIGIT      = auto()
    EITHER_DIGIT     = auto()
    TENS_DIGIT       = auto()
    ADDITIONAL_DIGIT = auto()


class Extra(Enum):
    """Requirement on the additional digit an object may carry."""
    NONE                = auto()
    ANY                 = auto()
    ZERO                = auto()
    ONE                 = auto()
    TWO_OR_GREATER      = auto()
    TWO_OR_THREE        = auto()
    THREE_OR_LESS       = auto()
    SEVEN_OR_EIGHT      = auto()
    THREE_THROUGH_SEVEN = auto()
    NOT_ZERO            = auto()
    NOT_NINE            = auto()


class Combine(Enum):
    """Boolean fold applied across a sequence of comparisons."""
    ANY  = auto()
    ALL  = auto()
    NONE = auto()


# ── Display digits (signature) ────────────────────────────────────────────────

SUBJECT_DIGITS: dict[Subject, int] = {
    Subject.UNITS_DIGIT:       1,
    Subject.TENS_DIGIT:        6,
    Subject.EVERY_DIGIT:       2,
    Subject.EVERY_DIGIT_SAME:  2,
    Subject.EITHER_DIGIT:      0,
    Subject.NEITHER_DIGIT:     3,
    Subject.DIGITS_PRODUCT:    5,
    Subject.DIGITS_DIFFERENCE: 7,
    Subject.DIGITS_SUM:        8,
    Subject.DISPLAY:           4,
    Subject.DISPLAY_BACKWARDS: 9,
}

VERB_DIGITS: dict[Verb, int] = {
    Verb.IS:                      1,
    Verb.IS_NOT:                  5,
    Verb.CONTAINS:                4,
    Verb.DOES_NOT_CONTAIN:        7,
    Verb.IS_DIVISIBLE_BY:         0,
    Verb.IS_LESS_THAN:            3,
    Verb.IS_GREATER_THAN:         8,
    Verb.BEGINS_WITH:             6,
    Verb.ENDS_WITH:               2,
    Verb.IS_ONE_AWAY_FROM:        9,
    Verb.CONTAINS_PADDED:         4,
    Verb.DOES_NOT_CONTAIN_PADDED: 7,
    Verb.BEGINS_WITH_PADDED:      6,
    Verb.ARE_THE_SAME:            1,
}

OBJECT_DIGITS: dict[Obj, int] = {
    Obj.DIGIT_0:          0,
    Obj.DIGIT_1_OR_7:     2,
    Obj.DIGIT_2_OR_8:     4,
    Obj.DIGIT_4_OR_6:     6,
    Obj.THE_SAME:         5,
    Obj.PRIME:            1,
    Obj.UNITS_DIGIT:      3,
    Obj.EITHER_DIGIT:     7,
    Obj.TENS_DIGIT:       8,
    Obj.ADDITIONAL_DIGIT: 9,
}

# additional digit -> digit shown in the fourth signature slot
ADDITIONAL_DIGIT_DISPLAY: dict[int, int] = {
    4: 0,
    5: 1,
    2: 2,
    8: 3,
    1: 4,
    0: 5,
    3: 6,
    9: 7,
    7: 8,
    6: 9,
}


# ── Behaviour tables ──────────────────────────────────────────────────────────

def _units(time: int) -> int:
    return time % 10


def _tens(time: int) -> int:
    return time // 10


SUBJECT_VALUES: dict[Subject, Callable[[int], tuple[int, ...]]] = {
    Subject.UNITS_DIGIT:       lambda t: (_units(t),),
    Subject.TENS_DIGIT:        lambda t: (_tens(t),),
    Subject.EVERY_DIGIT:       lambda t: (_units(t), _tens(t)),
    # 1 when both digits match, 0 otherwise; ARE_THE_SAME reads the flag
    Subject.EVERY_DIGIT_SAME:  lambda t: (1 if _units(t) == _tens(t) else 0,),
    Subject.EITHER_DIGIT:      lambda t: (_units(t), _tens(t)),
    Subject.NEITHER_DIGIT:     lambda t: (_units(t), _tens(t)),
    Subject.DIGITS_PRODUCT:    lambda t: (_units(t) * _tens(t),),
    Subject.DIGITS_DIFFERENCE: lambda t: (abs(_units(t) - _tens(t)),),
    Subject.DIGITS_SUM:        lambda t: (_units(t) + _tens(t),),
    Subject.DISPLAY:           lambda t: (t,),
    Subject.DISPLAY_BACKWARDS: lambda t: (_units(t) * 10 + _tens(t),),
}

SUBJECT_COMBINERS: dict[Subject, Combine] = {
    Subject.UNITS_DIGIT:       Combine.ANY,
    Subject.TENS_DIGIT:        Combine.ANY,
    Subject.EVERY_DIGIT:       Combine.ALL,
    Subject.EVERY_DIGIT_SAME:  Combine.ANY,
    Subject.EITHER_DIGIT:      Combine.ANY,
    Subject.NEITHER_DIGIT:     Combine.NONE,
    Subject.DIGITS_PRODUCT:    Combine.ANY,
    Subject.DIGITS_DIFFERENCE: Combine.ANY,
    Subject.DIGITS_SUM:        Combine.ANY,
    Subject.DISPLAY:           Combine.ANY,
    Subject.DISPLAY_BACKWARDS: Combine.ANY,
}


def _contains(sub: int, obj: int) -> bool:
    """Digit containment between numbers in 00..99 (no leading zero)."""
    if sub < 10:
        # a single digit cannot contain two
        return obj < 10 and sub == obj
    if obj >= 10:
        return sub == obj
    return sub % 10 == obj or sub // 10 == obj


def _contains_padded(sub: int, obj: int) -> bool:
    # 0X always contains its leading zero
    if sub < 10 and obj == 0:
        return True
    return _contains(sub, obj)


def _begins_with(sub: int, obj: int) -> bool:
    if obj < 10 and sub >= 10:
        return sub // 10 == obj
    return sub == obj


def _begins_with_padded(sub: int, obj: int) -> bool:
    if obj < 10:
        return sub // 10 == obj
    return sub == obj


def _ends_with(sub: int, obj: int) -> bool:
    if obj < 10 and sub >= 10:
        return sub % 10 == obj
    return sub == obj


VERB_PREDICATES: dict[Verb, Callable[[int, int], bool]] = {
    Verb.IS:                      lambda s, o: s == o,
    Verb.IS_NOT:                  lambda s, o: s == o,
    Verb.CONTAINS:                _contains,
    Verb.DOES_NOT_CONTAIN:        _contains,
    Verb.IS_DIVISIBLE_BY:         lambda s, o: o != 0 and s % o == 0,
    Verb.IS_LESS_THAN:            lambda s, o: s < o,
    Verb.IS_GREATER_THAN:         lambda s, o: s > o,
    Verb.BEGINS_WITH:             _begins_with,
    Verb.ENDS_WITH:               _ends_with,
    Verb.IS_ONE_AWAY_FROM:        lambda s, o: s + 1 == o or s - 1 == o,
    Verb.CONTAINS_PADDED:         _contains_padded,
    Verb.DOES_NOT_CONTAIN_PADDED: _contains_padded,
    Verb.BEGINS_WITH_PADDED:      _begins_with_padded,
    Verb.ARE_THE_SAME:            lambda s, _o: s == 1,
}

# Negated verbs reuse the positive predicate and fold with NONE
VERB_COMBINERS: dict[Verb, Combine] = {
    Verb.IS:                      Combine.ANY,
    Verb.IS_NOT:                  Combine.NONE,
    Verb.CONTAINS:                Combine.ANY,
    Verb.DOES_NOT_CONTAIN:        Combine.NONE,
    Verb.IS_DIVISIBLE_BY:         Combine.ANY,
    Verb.IS_LESS_THAN:            Combine.ANY,
    Verb.IS_GREATER_THAN:         Combine.ANY,
    Verb.BEGINS_WITH:             Combine.ANY,
    Verb.ENDS_WITH:               Combine.ANY,
    Verb.IS_ONE_AWAY_FROM:        Combine.ANY,
    Verb.CONTAINS_PADDED:         Combine.ANY,
    Verb.DOES_NOT_CONTAIN_PADDED: Combine.NONE,
    Verb.BEGINS_WITH_PADDED:      Combine.ANY,
    Verb.ARE_THE_SAME:            Combine.ANY,
}

PRIMES_BELOW_100: tuple[int, ...] = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29,
    31, 37, 41, 43, 47, 53, 59, 61, 67,
    71, 73, 79, 83, 89, 97,
)

OBJECT_VALUES: dict[Obj, Callable[[int], tuple[int, ...]]] = {
    Obj.DIGIT_0:          lambda _t: (0,),
    Obj.DIGIT_1_OR_7:     lambda _t: (1, 7),
    Obj.DIGIT_2_OR_8:     lambda _t: (2, 8),
    Obj.DIGIT_4_OR_6:     lambda _t: (4, 6),
    # one literal so the ARE_THE_SAME predicate runs once
    Obj.THE_SAME:         lambda _t: (0,),
    Obj.PRIME:            lambda _t: PRIMES_BELOW_100,
    Obj.UNITS_DIGIT:      lambda t: (_units(t),),
    Obj.EITHER_DIGIT:     lambda t: (_units(t), _tens(t)),
    Obj.TENS_DIGIT:       lambda t: (_tens(t),),
    Obj.ADDITIONAL_DIGIT: lambda _t: (),
}

# Literal digits an additional digit must not repeat
OBJECT_LITERAL_DIGITS: dict[Obj, frozenset[int]] = {
    Obj.DIGIT_0:      frozenset({0}),
    Obj.DIGIT_1_OR_7: frozenset({1, 7}),
    Obj.DIGIT_2_OR_8: frozenset({2, 8}),
    Obj.DIGIT_4_OR_6: frozenset({4, 6}),
}

EXTRA_CANDIDATES: dict[Extra, tuple[int | None, ...]] = {
    Extra.NONE:                (None,),
    Extra.ANY:                 tuple(range(0, 10)),
    Extra.ZERO:                (0,),
    Extra.ONE:                 (1,),
    Extra.TWO_OR_GREATER:      tuple(range(2, 10)),
    Extra.TWO_OR_THREE:        (2, 3),
    Extra.THREE_OR_LESS:       tuple(range(0, 4)),
    Extra.SEVEN_OR_EIGHT:      (7, 8),
    Extra.THREE_THROUGH_SEVEN: tuple(range(3, 8)),
    Extra.NOT_ZERO:            tuple(range(1, 10)),
    Extra.NOT_NINE:            tuple(range(0, 9)),
}


def fold(combine: Combine, results: Iterable[bool]) -> bool:
    """Apply a Combine fold to a sequence of booleans.

    Empty input follows the usual conventions: ANY is False, ALL and
    NONE are True.
    """
    if combine is Combine.ANY:
        return any(results)
    if combine is Combine.ALL:
        return all(results)
    return not any(results)


# ── Tree nodes ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ObjectNode:
    """Leaf of the rule tree.

    Attributes:
        kind:  Which value source the object uses.
        extra: Requirement for an additional literal digit, Extra.NONE
               when the object never carries one.
    """
    kind:  Obj
    extra: Extra = Extra.NONE

    def with_extra(self, extra: Extra = Extra.ANY) -> ObjectNode:
        """Return a copy of this node that also accepts an additional digit."""
        return replace(self, extra=extra)


@dataclass(frozen=True)
class VerbNode:
    kind:    Verb
    objects: tuple[ObjectNode, ...]


@dataclass(frozen=True)
class SubjectNode:
    kind:  Subject
    verbs: tuple[VerbNode, ...]


def _verb(kind: Verb, *objects: ObjectNode) -> VerbNode:
    return VerbNode(kind, tuple(objects))


def _subject(kind: Subject, *verbs: VerbNode) -> SubjectNode:
    return SubjectNode(kind, tuple(verbs))


# ── Common objects ────────────────────────────────────────────────────────────

D0     = ObjectNode(Obj.DIGIT_0)
D17    = ObjectNode(Obj.DIGIT_1_OR_7)
D28    = ObjectNode(Obj.DIGIT_2_OR_8)
D46    = ObjectNode(Obj.DIGIT_4_OR_6)
PRIME  = ObjectNode(Obj.PRIME)
UNITS  = ObjectNode(Obj.UNITS_DIGIT)
TENS   = ObjectNode(Obj.TENS_DIGIT)
EITHER = ObjectNode(Obj.EITHER_DIGIT)
SAME   = ObjectNode(Obj.THE_SAME)

ADD_ANY            = ObjectNode(Obj.ADDITIONAL_DIGIT, Extra.ANY)
ADD_ONE            = ObjectNode(Obj.ADDITIONAL_DIGIT, Extra.ONE)
ADD_TWO_OR_THREE   = ObjectNode(Obj.ADDITIONAL_DIGIT, Extra.TWO_OR_THREE)
ADD_THREE_OR_LESS  = ObjectNode(Obj.ADDITIONAL_DIGIT, Extra.THREE_OR_LESS)
ADD_SEVEN_OR_EIGHT = ObjectNode(Obj.ADDITIONAL_DIGIT, Extra.SEVEN_OR_EIGHT)
ADD_THREE_TO_SEVEN = ObjectNode(Obj.ADDITIONAL_DIGIT, Extra.THREE_THROUGH_SEVEN)
ADD_NOT_ZERO       = ObjectNode(Obj.ADDITIONAL_DIGIT, Extra.NOT_ZERO)
ADD_NOT_NINE       = ObjectNode(Obj.ADDITIONAL_DIGIT, Extra.NOT_NINE)


# ── Rule tree ─────────────────────────────────────────────────────────────────
# Subject order follows the manual. Duplicated leaves are weighting.

RULE_TREE: tuple[SubjectNode, ...] = (

    _subject(
        Subject.UNITS_DIGIT,
        _verb(Verb.IS,
              D0, D17, D28, D46, PRIME, TENS,
              D0.with_extra(), ADD_ANY),
        _verb(Verb.IS_NOT,
              PRIME,
              PRIME.with_extra(Extra.ZERO),
              D0.with_extra(Extra.NOT_ZERO),
              D17.with_extra(), D28.with_extra(), D46.with_extra()),
        _verb(Verb.IS_ONE_AWAY_FROM,
              D17, D28, D46, PRIME, ADD_THREE_TO_SEVEN, ADD_ANY,
              TENS, TENS),
        _verb(Verb.IS_DIVISIBLE_BY,
              ADD_TWO_OR_THREE, TENS),
        _verb(Verb.IS_LESS_THAN,
              ADD_NOT_ZERO, ADD_THREE_TO_SEVEN,
              TENS, TENS),
        _verb(Verb.IS_GREATER_THAN,
              ADD_SEVEN_OR_EIGHT, ADD_NOT_NINE, ADD_THREE_TO_SEVEN,
              TENS, TENS, TENS),
    ),

    _subject(
        Subject.TENS_DIGIT,
        _verb(Verb.IS,
              D17.with_extra(Extra.TWO_OR_GREATER),
              PRIME,
              PRIME.with_extra(Extra.ZERO),
              UNITS,
              UNITS.with_extra(Extra.ONE)),
        _verb(Verb.IS_NOT,
              PRIME,
              PRIME.with_extra(Extra.ZERO),
              D0.with_extra(Extra.TWO_OR_GREATER),
              D17.with_extra(Extra.TWO_OR_GREATER),
              D28.with_extra(),
              D46.with_extra(Extra.TWO_OR_THREE),
              UNITS.with_extra(Extra.TWO_OR_GREATER),
              UNITS.with_extra(Extra.TWO_OR_GREATER)),
        _verb(Verb.IS_ONE_AWAY_FROM,
              D17, D28, PRIME,
              UNITS, UNITS),
        _verb(Verb.IS_LESS_THAN,
              ADD_THREE_TO_SEVEN, UNITS),
        _verb(Verb.IS_GREATER_THAN,
              D0, UNITS),
    ),

    _subject(
        Subject.EVERY_DIGIT,
        _verb(Verb.IS,
              PRIME.with_extra(Extra.ZERO),
              PRIME.with_extra(Extra.ONE),
              D28.with_extra(Extra.ZERO),
              D28.with_extra(Extra.ONE)),
        _verb(Verb.IS_NOT,
              PRIME.with_extra(),
              D17.with_extra(Extra.NOT_ZERO),
              D28.with_extra(Extra.NOT_ZERO),
              D46.with_extra(Extra.NOT_ZERO)),
        _verb(Verb.IS_ONE_AWAY_FROM,
              D17, D28, D46.with_extra(Extra.ZERO), PRIME),
        _verb(Verb.IS_DIVISIBLE_BY,
              ADD_TWO_OR_THREE),
        _verb(Verb.IS_LESS_THAN,
              ADD_THREE_TO_SEVEN),
        _verb(Verb.IS_GREATER_THAN,
              D0),
    ),

    _subject(
        Subject.EVERY_DIGIT_SAME,
        _verb(Verb.ARE_THE_SAME, SAME),
    ),

    _subject(
        Subject.EITHER_DIGIT,
        _verb(Verb.IS,
              D0, D17, D28, D46, ADD_THREE_TO_SEVEN,
              ADD_ANY, ADD_ANY, ADD_ANY, ADD_ANY),
        _verb(Verb.IS_NOT,
              PRIME.with_extra(Extra.ZERO),
              D17.with_extra(), D28.with_extra(), D46.with_extra()),
        _verb(Verb.IS_ONE_AWAY_FROM,
              D17, D28, D46,
              ADD_ANY, ADD_ANY),
        _verb(Verb.IS_DIVISIBLE_BY,
              ADD_TWO_OR_THREE),
        _verb(Verb.IS_LESS_THAN,
              ADD_TWO_OR_THREE),
        _verb(Verb.IS_GREATER_THAN,
              ADD_SEVEN_OR_EIGHT),
    ),

    _subject(
        Subject.NEITHER_DIGIT,
        _verb(Verb.IS,
              PRIME,
              D0.with_extra(Extra.THREE_THROUGH_SEVEN),
              D17.with_extra(Extra.TWO_OR_GREATER),
              D28.with_extra(Extra.NOT_ZERO),
              D46.with_extra(Extra.SEVEN_OR_EIGHT)),
        _verb(Verb.IS_ONE_AWAY_FROM,
              D17, D28, D46, ADD_THREE_TO_SEVEN),
        _verb(Verb.IS_DIVISIBLE_BY,
              ADD_TWO_OR_THREE),
        _verb(Verb.IS_GREATER_THAN,
              ADD_THREE_TO_SEVEN),
    ),

    _subject(
        Subject.DIGITS_PRODUCT,
        _verb(Verb.IS,
              D0, EITHER, UNITS, TENS),
        _verb(Verb.IS_NOT,
              D0),
        _verb(Verb.CONTAINS,
              PRIME, D0, D17.with_extra(Extra.TWO_OR_THREE), D28, D46),
        _verb(Verb.DOES_NOT_CONTAIN,
              PRIME, D0,
              D0.with_extra(Extra.ANY),
              D17.with_extra(Extra.ANY),
              D28.with_extra(Extra.ANY),
              D46.with_extra(Extra.ANY),
              ADD_ANY),
        _verb(Verb.IS_GREATER_THAN,
              ADD_SEVEN_OR_EIGHT),
        _verb(Verb.IS_LESS_THAN,
              ADD_NOT_ZERO),
        _verb(Verb.BEGINS_WITH,
              ADD_ONE),
        _verb(Verb.ENDS_WITH,
              D46.with_extra(Extra.NOT_ZERO),
              D28.with_extra(Extra.NOT_ZERO)),
    ),

    # Differences in 00..79: 0 x8, 1 x15, 2 x14, 3 x12, 4 x10, 5 x8, 6 x6,
    # 7 x4, 8 x2, 9 x1
    _subject(
        Subject.DIGITS_DIFFERENCE,
        _verb(Verb.IS,
              D0, D17, D46, PRIME, EITHER, ADD_THREE_OR_LESS),
        _verb(Verb.IS_NOT,
              D17.with_extra(Extra.ZERO),
              D46.with_extra(Extra.THREE_OR_LESS),
              PRIME),
        _verb(Verb.IS_DIVISIBLE_BY,
              D28, ADD_TWO_OR_THREE),
        _verb(Verb.IS_GREATER_THAN,
              UNITS, TENS,
              ADD_TWO_OR_THREE, ADD_TWO_OR_THREE),
        _verb(Verb.IS_LESS_THAN,
              UNITS,
              ADD_TWO_OR_THREE, ADD_TWO_OR_THREE),
    ),

    _subject(
        Subject.DIGITS_SUM,
        _verb(Verb.IS,
              PRIME, EITHER, D46, D28, ADD_SEVEN_OR_EIGHT),
        _verb(Verb.IS_NOT,
              PRIME.with_extra(Extra.ZERO),
              D17.with_extra(), D28.with_extra(), D46.with_extra()),
        _verb(Verb.IS_ONE_AWAY_FROM,
              D28, D46, ADD_TWO_OR_THREE, ADD_SEVEN_OR_EIGHT, ADD_THREE_TO_SEVEN),
        _verb(Verb.CONTAINS,
              D0.with_extra(Extra.ONE), D17, ADD_ONE),
        _verb(Verb.DOES_NOT_CONTAIN,
              PRIME,
              D17.with_extra(Extra.ANY),
              D28.with_extra(Extra.ANY),
              D46.with_extra(Extra.ANY),
              D28.with_extra(Extra.ONE),
              D46.with_extra(Extra.ONE)),
        _verb(Verb.IS_DIVISIBLE_BY,
              D46, ADD_TWO_OR_THREE),
        _verb(Verb.IS_GREATER_THAN,
              ADD_SEVEN_OR_EIGHT),
        _verb(Verb.IS_LESS_THAN,
              ADD_THREE_TO_SEVEN),
        _verb(Verb.BEGINS_WITH,
              D17, ADD_ONE),
        _verb(Verb.ENDS_WITH,
              D0, D17, D46, D28),
    ),

    _subject(
        Subject.DISPLAY,
        _verb(Verb.IS,
              PRIME, PRIME.with_extra(Extra.ZERO)),
        _verb(Verb.IS_NOT,
              PRIME, PRIME.with_extra(Extra.ZERO)),
        _verb(Verb.IS_ONE_AWAY_FROM,
              PRIME),
        _verb(Verb.CONTAINS_PADDED,
              D0, D17, D28, D46, ADD_THREE_TO_SEVEN,
              ADD_ANY, ADD_ANY, ADD_ANY, ADD_ANY),
        _verb(Verb.DOES_NOT_CONTAIN_PADDED,
              PRIME.with_extra(),
              D17.with_extra(Extra.NOT_ZERO),
              D28.with_extra(),
              D46.with_extra()),
        _verb(Verb.IS_DIVISIBLE_BY,
              D46, ADD_THREE_TO_SEVEN, TENS),
        _verb(Verb.BEGINS_WITH_PADDED,
              PRIME,
              PRIME.with_extra(Extra.ZERO),
              D17.with_extra(Extra.ANY),
              D28.with_extra(Extra.ONE),
              UNITS,
              UNITS.with_extra(Extra.ONE)),
        _verb(Verb.ENDS_WITH,
              PRIME, D0.with_extra(), D0, D17, D28, D46, TENS, ADD_ANY),
    ),

    _subject(
        Subject.DISPLAY_BACKWARDS,
        _verb(Verb.IS,
              PRIME, PRIME.with_extra(Extra.ZERO)),
        _verb(Verb.IS_NOT,
              PRIME, PRIME.with_extra(Extra.ZERO)),
        _verb(Verb.IS_ONE_AWAY_FROM,
              PRIME),
        _verb(Verb.CONTAINS_PADDED,
              D0, D17, D28, D46, ADD_THREE_TO_SEVEN,
              ADD_ANY, ADD_ANY, ADD_ANY, ADD_ANY),
        _verb(Verb.DOES_NOT_CONTAIN_PADDED,
              PRIME.with_extra(),
              D17.with_extra(Extra.NOT_ZERO),
              D28.with_extra(),
              D46.with_extra()),
        _verb(Verb.IS_DIVISIBLE_BY,
              D46, ADD_THREE_TO_SEVEN, UNITS),
        _verb(Verb.ENDS_WITH,
              PRIME,
              PRIME.with_extra(Extra.ZERO),
              D17.with_extra(Extra.ANY),
              D28.with_extra(Extra.ONE),
              UNITS,
              UNITS.with_extra(Extra.ONE)),
        _verb(Verb.BEGINS_WITH_PADDED,
              PRIME, D0.with_extra(), D0, D17, D28, D46, TENS, ADD_ANY),
    ),
)
