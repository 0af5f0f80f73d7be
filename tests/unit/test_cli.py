"""Tests for the command line front end."""

import pytest

from boxconfig.cli import main, parse_bool
from boxconfig.controller import SUCCESS_MESSAGE
from boxconfig.exceptions import GraphQLError, ServerError


def test_parse_bool() -> None:
    assert parse_bool("Yes") is True
    assert parse_bool(" 0 ") is False
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_show_prints_sections_and_masks_secrets(store, capsys) -> None:
    assert main(["show"], store=store) == 0
    out = capsys.readouterr().out
    assert "[General]" in out
    assert "[Email]" in out
    assert "default_user_roles = READ, VOTE, EDIT" in out
    assert "require_invite = yes" in out
    assert "email_password = ***cret" in out
    assert "hunter2-secret" not in out


def test_show_secrets(store, capsys) -> None:
    assert main(["show", "--section", "email", "--show-secrets"], store=store) == 0
    out = capsys.readouterr().out
    assert "email_password = hunter2-secret" in out
    assert "[General]" not in out


def test_show_unknown_section(store, capsys) -> None:
    assert main(["show", "--section", "nowhere"], store=store) == 2
    assert "Unknown section" in capsys.readouterr().err


def test_set_submits_full_record(store, capsys) -> None:
    code = main(
        ["set", "email_port=587", "require_invite=no", "default_user_roles=READ,,EDIT, "],
        store=store,
    )
    assert code == 0
    assert SUCCESS_MESSAGE in capsys.readouterr().out
    sent = store.update_config.await_args.args[0]
    assert sent.email_port == 587
    assert sent.require_invite is False
    assert sent.default_user_roles == ["READ", "EDIT"]
    assert sent.title == "Stash-Box"


def test_set_invalid_integer_makes_no_call(store, capsys) -> None:
    assert main(["set", "email_port=abc"], store=store) == 1
    assert "email_port" in capsys.readouterr().err
    store.update_config.assert_not_called()


def test_set_unknown_field(store, capsys) -> None:
    assert main(["set", "emial_port=25"], store=store) == 2
    assert "Unknown configuration field" in capsys.readouterr().err
    store.update_config.assert_not_called()


def test_set_bad_boolean(store, capsys) -> None:
    assert main(["set", "require_invite=maybe"], store=store) == 2
    store.update_config.assert_not_called()


def test_set_remote_failure(store, capsys) -> None:
    store.update_error = GraphQLError([{"message": "duplicate key"}])
    assert main(["set", "title=Box"], store=store) == 1
    assert "Error: duplicate key" in capsys.readouterr().err


def test_load_failure_exit_code(store, capsys) -> None:
    store.load_error = ServerError("backend down", status_code=503)
    assert main(["show"], store=store) == 1
    assert "backend down" in capsys.readouterr().err
    store.update_config.assert_not_called()
