"""Tests for command verbs and parameter builders."""

import pytest

from hyprland_ipc.protocol.commands import (
    QUERY_COMMANDS,
    Command,
    build_request,
    build_set_cursor,
    build_switch_xkb_layout,
)


def test_command_enum_values():
    """Verbs match the hyprctl command names."""
    assert Command.DISPATCH == "dispatch"
    assert Command.ACTIVE_WINDOW == "activewindow"
    assert Command.CONFIG_ERRORS == "configerrors"
    assert Command.CURSOR_POS == "cursorpos"
    assert Command.SET_CURSOR == "setcursor"
    assert Command.SWITCH_XKB_LAYOUT == "switchxkblayout"


def test_action_commands_are_not_queries():
    for command in (Command.DISPATCH, Command.KEYWORD, Command.KILL,
                    Command.RELOAD, Command.SET_CURSOR, Command.SPLASH):
        assert command not in QUERY_COMMANDS


def test_build_request():
    request = build_request(Command.DISPATCH, "exec kitty")
    assert request.name == "dispatch"
    assert request.params == ("exec kitty",)
    assert request.frames() == [b"dispatch exec kitty"]


def test_build_set_cursor():
    request = build_set_cursor("Adwaita", 32)
    assert request.frames() == [b"setcursor Adwaita 32"]


def test_set_cursor_invalid():
    with pytest.raises(ValueError):
        build_set_cursor("", 32)
    with pytest.raises(ValueError):
        build_set_cursor("Adwaita", 0)


def test_build_switch_xkb_layout():
    assert build_switch_xkb_layout("at-keyboard", "next").params == ("at-keyboard next",)
    assert build_switch_xkb_layout("all", 2).params == ("all 2",)


def test_switch_xkb_layout_invalid():
    with pytest.raises(ValueError):
        build_switch_xkb_layout("", "next")
    with pytest.raises(ValueError):
        build_switch_xkb_layout("all", "sideways")
    with pytest.raises(ValueError):
        build_switch_xkb_layout("all", -1)
