from __future__ import annotations

import pytest

from transit.core.commands import Command, CommandResult
from transit.core.dispatcher import CommandDispatcher
from transit.core.registry import DEFAULT_COMMANDS
from transit.runtime.session import EngineSession


def _fresh_session(**kwargs) -> EngineSession:
    return EngineSession(seed=1, **kwargs)


def _owner_of(alias: str) -> Command:
    # last registration wins
    owner = None
    for command in DEFAULT_COMMANDS:
        if alias in command.keys():
            owner = command
    return owner


def test_every_alias_resolves_like_its_canonical_name():
    dispatcher = CommandDispatcher(DEFAULT_COMMANDS)
    for command in DEFAULT_COMMANDS:
        for alias in command.aliases:
            owner = _owner_of(alias)
            for spelling in (alias, alias.upper(), f"  {alias.title()}  "):
                assert dispatcher.resolve(spelling) is owner
            if owner is command:
                assert dispatcher.resolve(alias).handler is dispatcher.resolve(command.name).handler


def test_shared_alias_goes_to_later_registration():
    dispatcher = CommandDispatcher(DEFAULT_COMMANDS)
    assert dispatcher.resolve("examine").name == "inspect"
    assert dispatcher.resolve("l").name == "look"


def test_registry_is_read_only():
    dispatcher = CommandDispatcher(DEFAULT_COMMANDS)
    with pytest.raises(TypeError):
        dispatcher.registry["zap"] = DEFAULT_COMMANDS[0]


def test_parse_is_case_and_whitespace_insensitive():
    session = _fresh_session()
    a = session.dispatcher.parse("status", session.context)
    b = session.dispatcher.parse("   STAT   ", session.context)
    assert a.success and b.success
    assert a.message == b.message


def test_empty_input_runs_nothing():
    session = _fresh_session()
    before = session.snapshot()
    for text in ("", "   ", "\t"):
        result = session.dispatcher.parse(text, session.context)
        assert result.success is False
        assert "help" in result.message
    assert session.snapshot() == before


def test_unknown_verb_is_named_with_suggestion():
    session = _fresh_session()
    result = session.dispatcher.parse("helpp", session.context)
    assert result.success is False
    assert "'helpp'" in result.message
    assert "Did you mean: help?" in result.message

    result = session.dispatcher.parse("xyzzy", session.context)
    assert "'xyzzy'" in result.message
    assert "Did you mean" not in result.message


def test_handler_fault_becomes_failure_result():
    def explode(args, ctx):
        raise RuntimeError("boom")

    def wrong_type(args, ctx):
        return "not a result"

    session = _fresh_session()
    dispatcher = CommandDispatcher([Command("boom", explode), Command("odd", wrong_type)])
    result = dispatcher.parse("boom now", session.context)
    assert isinstance(result, CommandResult)
    assert result.success is False
    assert "boom" in result.message
    assert dispatcher.parse("odd", session.context).success is False


def test_handler_receives_remaining_tokens():
    seen = []

    def record(args, ctx):
        seen.append(args)
        return CommandResult.ok("ok")

    session = _fresh_session()
    dispatcher = CommandDispatcher([Command("echo", record, ("say",))])
    dispatcher.parse("  SAY Hello   World ", session.context)
    assert seen == [["hello", "world"]]
