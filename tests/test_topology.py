import pytest

from kalah.game import Outcome, Player, opponent_store, opposite_pit, own_pits, own_store, pit_owner


def test_own_pits_and_stores():
    assert list(own_pits(Player.PLAYER1)) == [0, 1, 2, 3, 4, 5]
    assert list(own_pits(Player.PLAYER2)) == [7, 8, 9, 10, 11, 12]
    assert own_store(Player.PLAYER1) == 6
    assert own_store(Player.PLAYER2) == 13
    assert opponent_store(Player.PLAYER1) == 13
    assert opponent_store(Player.PLAYER2) == 6


def test_opposite_pit_is_a_bijection_across_sides():
    for player in Player:
        facing = {opposite_pit(i) for i in own_pits(player)}
        assert facing == set(own_pits(player.opponent))
    assert opposite_pit(0) == 12
    assert opposite_pit(5) == 7
    for i in range(14):
        if i not in (6, 13):
            assert opposite_pit(opposite_pit(i)) == i


@pytest.mark.parametrize("index", [6, 13, -1, 14])
def test_opposite_pit_undefined_for_stores(index):
    with pytest.raises(ValueError):
        opposite_pit(index)


def test_pit_owner():
    assert pit_owner(3) is Player.PLAYER1
    assert pit_owner(9) is Player.PLAYER2
    assert pit_owner(6) is None
    assert pit_owner(13) is None


def test_player_and_outcome():
    assert Player.PLAYER1.opponent is Player.PLAYER2
    assert Player.PLAYER2.opponent is Player.PLAYER1
    assert Outcome.for_player(Player.PLAYER2) is Outcome.PLAYER2
    assert Player("player1") is Player.PLAYER1
