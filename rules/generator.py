"""
rules/generator.py — Random release rule generation for Flower Button.

The generator is the only place that walks RULE_TREE at runtime. One call
to generate_rule() happens per button hold and produces a GeneratedRule:

    1. Uniform pick. A subject, one of its verbs, one of that verb's
       objects. Duplicated leaves weight the pick.
    2. Extra digit. Drawn from the object's additional-digit requirement,
       then dropped if it repeats one of the object's literal digits
       ("is 1 or 7 or 7" is not a rule).
    3. Valid times. Every time in 00..99 the compiled predicate accepts.
       An empty set falls back to the full range so a data mistake can
       never softlock the module.
    4. Signature. The four display digits the sapped bomb timer leaks.

session.py calls generate_rule(rng) on the transition into WINDING_UP and
holds the result until the attempt is reset.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Callable

from rules.tree import (
    ADDITIONAL_DIGIT_DISPLAY,
    EXTRA_CANDIDATES,
    OBJECT_DIGITS,
    OBJECT_LITERAL_DIGITS,
    OBJECT_VALUES,
    RULE_TREE,
    SUBJECT_COMBINERS,
    SUBJECT_DIGITS,
    SUBJECT_VALUES,
    VERB_COMBINERS,
    VERB_DIGITS,
    VERB_PREDICATES,
    Extra,
    Obj,
    Subject,
    Verb,
    fold,
)
from rules.manual import describe_rule

logger = logging.getLogger(__name__)

ALL_TIMES: tuple[int, ...] = tuple(range(0, 100))


@dataclass(frozen=True)
class GeneratedRule:
    """Immutable result of one rule generation.

    Attributes:
        preferred_digits: Four signature slots, minutes first. The last
                          slot is None when the rule has no additional digit.
        valid_times:      Every countdown number (00..99) that solves the module.
        subject:          Chosen subject kind.
        verb:             Chosen verb kind.
        obj:              Chosen object kind.
        additional_digit: The extra literal digit, or None.
        description:      The rule as a sentence, for the log.
    """
    preferred_digits: tuple[int | None, ...]
    valid_times:      frozenset[int]
    subject:          Subject
    verb:             Verb
    obj:              Obj
    additional_digit: int | None = None
    description:      str = ""

    def is_valid(self, release_time: int) -> bool:
        """Return True if releasing at release_time solves the module."""
        return release_time in self.valid_times

    def signature(self, unset: str = "#") -> str:
        """Return the preferred digits formatted as a timer readout, e.g. "16:0#"."""
        chars = [unset if d is None else str(d) for d in self.preferred_digits]
        return "".join(chars[:2]) + ":" + "".join(chars[2:])


def compile_predicate(
    subject: Subject,
    verb: Verb,
    obj: Obj,
    additional_digit: int | None = None,
) -> Callable[[int], bool]:
    """Compose a subject, verb and object into a single time predicate.

    For a time t the subject values and object values are extracted, the
    additional digit is appended to the object values, the verb predicate
    runs over the cross product, results are folded object-wise with the
    verb's combiner and subject-wise with the subject's combiner.

    Args:
        subject:          Subject kind.
        verb:             Verb kind.
        obj:              Object kind.
        additional_digit: Optional literal digit appended to the objects.

    Returns:
        A callable taking a time in 00..99 and returning True if it is valid.
    """
    extract_subjects = SUBJECT_VALUES[subject]
    extract_objects  = OBJECT_VALUES[obj]
    predicate        = VERB_PREDICATES[verb]
    verb_combine     = VERB_COMBINERS[verb]
    subject_combine  = SUBJECT_COMBINERS[subject]

    def is_valid(time: int) -> bool:
        objects = extract_objects(time)
        if additional_digit is not None:
            objects = objects + (additional_digit,)
        return fold(
            subject_combine,
            (fold(verb_combine, (predicate(sub, o) for o in objects))
             for sub in extract_subjects(time)),
        )

    return is_valid


def valid_times_for(
    subject: Subject,
    verb: Verb,
    obj: Obj,
    additional_digit: int | None = None,
    times: tuple[int, ...] = ALL_TIMES,
) -> list[int]:
    """Return the sorted times among `times` accepted by the rule."""
    is_valid = compile_predicate(subject, verb, obj, additional_digit)
    return [t for t in times if is_valid(t)]


def resolve_additional_digit(obj: Obj, digit: int | None) -> int | None:
    """Drop an additional digit that repeats one of the object's literals."""
    if digit is not None and digit in OBJECT_LITERAL_DIGITS.get(obj, frozenset()):
        return None
    return digit


def draw_additional_digit(extra: Extra, rng: random.Random) -> int | None:
    """Draw a digit allowed by an additional-digit requirement.

    Returns:
        A digit 0-9, or None for Extra.NONE.
    """
    return rng.choice(EXTRA_CANDIDATES[extra])


def signature_digits(
    subject: Subject,
    verb: Verb,
    obj: Obj,
    additional_digit: int | None,
) -> tuple[int | None, ...]:
    """Map a rule onto its four display digits."""
    return (
        SUBJECT_DIGITS[subject],
        VERB_DIGITS[verb],
        OBJECT_DIGITS[obj],
        None if additional_digit is None else ADDITIONAL_DIGIT_DISPLAY[additional_digit],
    )


def compile_rule(
    subject: Subject,
    verb: Verb,
    obj: Obj,
    additional_digit: int | None = None,
) -> GeneratedRule:
    """Build a GeneratedRule for an explicit subject/verb/object choice.

    The additional digit is passed through resolve_additional_digit(), so
    a redundant digit is dropped exactly as it is during generation.

    Returns:
        The compiled rule. valid_times is never empty.
    """
    additional_digit = resolve_additional_digit(obj, additional_digit)
    valid = valid_times_for(subject, verb, obj, additional_digit)

    if not valid:
        logger.warning(
            "Rule %s/%s/%s (%s) accepts no time; every time is valid instead",
            subject.name, verb.name, obj.name, additional_digit,
        )
        valid = list(ALL_TIMES)

    return GeneratedRule(
        preferred_digits=signature_digits(subject, verb, obj, additional_digit),
        valid_times=frozenset(valid),
        subject=subject,
        verb=verb,
        obj=obj,
        additional_digit=additional_digit,
        description=describe_rule(subject, verb, obj, additional_digit),
    )


def generate_rule(rng: random.Random | None = None) -> GeneratedRule:
    """Pick a random rule from RULE_TREE and compile it.

    Args:
        rng: Random source. Defaults to the module-level random generator.

    Returns:
        A freshly compiled GeneratedRule.
    """
    rng = rng or random.Random()

    subject_node = rng.choice(RULE_TREE)
    verb_node    = rng.choice(subject_node.verbs)
    object_node  = rng.choice(verb_node.objects)
    additional   = draw_additional_digit(object_node.extra, rng)

    return compile_rule(subject_node.kind, verb_node.kind, object_node.kind, additional)
