"""Shared test fixtures for Ratopoly tests."""

import pytest

from ratopoly.game import create_game
from ratopoly.game.cards import Card, CardKind


@pytest.fixture
def two_player_game():
    """Fresh two-rat game, Alice to act."""
    return create_game(["Alice", "Bob"])


@pytest.fixture
def three_player_game():
    """Fresh three-rat game, Alice to act."""
    return create_game(["Alice", "Bob", "Carol"])


@pytest.fixture
def penalty_card():
    return Card("penalty-x", CardKind.PENALTY, "Pay 150 rubbies.", rubby_delta=-150)
