import logging

from core.module_log import ModuleLogger, count_current, count_next, count_reset


def test_instances_are_numbered_per_name():
    count_reset("Test Module")
    count_reset("Other Module")

    assert ModuleLogger("Test Module").tag == "[Test Module #1]"
    assert ModuleLogger("Test Module").tag == "[Test Module #2]"
    assert ModuleLogger("Other Module").tag == "[Other Module #1]"
    assert count_current("Test Module") == 2


def test_counter_helpers():
    count_reset("Counted")
    assert count_current("Counted") == 0
    assert count_next("Counted") == 1
    assert count_next("Counted") == 2
    count_reset("Counted")
    assert count_current("Counted") == 0


def test_explicit_index_does_not_count():
    count_reset("Fixed")
    assert ModuleLogger("Fixed", index=7).tag == "[Fixed #7]"
    assert ModuleLogger("Fixed", index=False).tag == "[Fixed]"
    assert count_current("Fixed") == 0


def test_messages_are_prefixed(caplog):
    caplog.set_level(logging.INFO)
    log = ModuleLogger("Tagged", index=3, logger=logging.getLogger("tests.module_log"))

    log.info("Button released with %02d.", 5)
    log.line()

    assert caplog.messages[0] == "[Tagged #3] Button released with 05."
    assert caplog.messages[1].startswith("[Tagged #3] ═")
