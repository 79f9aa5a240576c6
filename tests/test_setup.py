"""
Tests for session creation and the static catalog.
"""

import random

import pytest

from ratopoly.exceptions import BoardNotFoundError, ValidationError
from ratopoly.game import GameConfig, Phase, create_game
from ratopoly.game.board import create_standard_boards, find_property, get_board, get_space_at
from ratopoly.game.cards import DEFAULT_DECK, shuffle_cards
from ratopoly.game.events import EventType
from ratopoly.game.spaces import BoardPosition, SpaceType


def test_create_game_places_everyone_on_surface_start(two_player_game):
    """Every participant starts alive on surface:0 with the starting balance."""
    game = two_player_game

    assert [p.player_id for p in game.players] == ["player-1", "player-2"]
    assert [p.name for p in game.players] == ["Alice", "Bob"]
    for player in game.players:
        assert player.rubbies == 300
        assert player.indulgences == 0
        assert player.alive
        assert str(player.position) == "surface:0"
        assert not player.owned_properties

    assert game.phase == Phase.PRE_MOVE
    assert game.current_player.player_id == "player-1"
    assert game.jackpot == 0
    assert game.turn_number == 0
    assert len(game.deck) == len(DEFAULT_DECK)
    assert game.discard == ()
    assert not game.is_over


def test_create_game_logs_session_start(two_player_game):
    assert len(two_player_game.log) == 1
    assert two_player_game.log[0].event_type == EventType.GAME_START
    assert two_player_game.log_messages() == ("Game session created.",)


def test_create_game_requires_two_names():
    with pytest.raises(ValidationError):
        create_game(["Alice"])
    with pytest.raises(ValidationError):
        create_game([])


def test_create_game_rejects_blank_names():
    with pytest.raises(ValidationError):
        create_game(["Alice", "   "])


def test_create_game_strips_names():
    game = create_game(["  Alice ", "Bob"])
    assert game.players[0].name == "Alice"


def test_custom_config_sets_starting_balance():
    game = create_game(["A", "B"], GameConfig(starting_rubbies=500))
    assert all(p.rubbies == 500 for p in game.players)


def test_standard_catalog_layout():
    """Surface has 10 spaces, subsurface 5, hell 2; teleports point across boards."""
    boards = create_standard_boards()
    surface = get_board(boards, "surface")
    subsurface = get_board(boards, "subsurface")
    hell = get_board(boards, "hell")

    assert (len(surface), len(subsurface), len(hell)) == (10, 5, 2)
    assert surface.spaces[0].space_type == SpaceType.GO
    assert surface.spaces[6].send_to == BoardPosition("hell", 0)
    assert surface.spaces[9].send_to == BoardPosition("subsurface", 0)
    assert subsurface.spaces[4].send_to == BoardPosition("surface", 0)
    assert find_property(boards, "property-b").property.get_rent() == 90


def test_get_space_wraps_index():
    boards = create_standard_boards()
    assert get_space_at(boards, BoardPosition("surface", 13)).name == "Trash Palace"


def test_unknown_board_is_fatal():
    with pytest.raises(BoardNotFoundError) as excinfo:
        get_board(create_standard_boards(), "attic")
    assert excinfo.value.board_id == "attic"


def test_unknown_property_raises_key_error():
    with pytest.raises(KeyError):
        find_property(create_standard_boards(), "nowhere")


def test_escape_thresholds_clamp_to_last():
    config = GameConfig()
    assert [config.required_escape_roll(n) for n in (1, 2, 3, 4, 9)] == [6, 5, 4, 4, 4]


def test_shuffle_cards_is_seeded_and_does_not_mutate():
    first = shuffle_cards(DEFAULT_DECK, random.Random(3))
    second = shuffle_cards(DEFAULT_DECK, random.Random(3))
    assert first == second
    assert sorted(c.card_id for c in first) == sorted(c.card_id for c in DEFAULT_DECK)
    assert DEFAULT_DECK[0].card_id == "indulgence-1"


def test_move_card_targets_the_subsewer_gate():
    move = next(card for card in DEFAULT_DECK if card.kind.value == "move")
    assert move.move_to == BoardPosition("subsurface", 0)
    assert get_space_at(create_standard_boards(), move.move_to).space_type == SpaceType.BLANK
