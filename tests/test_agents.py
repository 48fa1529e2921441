import pytest

from ai.maxn_ai import MaxNAI
from ai.mcts_ai import MCTSAI, MCTSConfig
from ai.moves import legal_moves
from ai.paranoid_ai import ParanoidAI
from ai.random_ai import RandomAI
from engine.board import Board
from scripted_game import mv

SEARCH_DEPTHS = [1, 2, 3]


def depth_agents():
    for depth in SEARCH_DEPTHS:
        yield pytest.param(MaxNAI(depth=depth, seed=0), id=f"maxn-{depth}")
        yield pytest.param(ParanoidAI(depth=depth, seed=0), id=f"paranoid-{depth}")
        yield pytest.param(ParanoidAI(depth=depth, seed=0, pruning=False), id=f"paranoid-full-{depth}")


def all_agents():
    yield from depth_agents()
    yield pytest.param(MCTSAI(MCTSConfig(time_limit_ms=10_000.0, max_iterations=30), seed=0), id="mcts")


@pytest.mark.parametrize("agent", list(all_agents()))
def test_takes_an_immediate_king_capture(agent, king_capture_board):
    assert agent.select_move(king_capture_board) == mv("BA1", "BA3")


@pytest.mark.parametrize("agent", list(all_agents()))
def test_plays_the_only_winning_move(agent, win_tree):
    assert agent.select_move(win_tree.board()) == mv("BA1", "BA2")


@pytest.mark.parametrize("agent", list(depth_agents()))
def test_avoids_a_move_that_hands_the_game_to_an_opponent(agent, loss_tree):
    assert agent.select_move(loss_tree.board()) == mv("BB1", "BB2")


@pytest.mark.parametrize(
    "agent",
    [
        pytest.param(MaxNAI(depth=1, seed=0), id="maxn"),
        pytest.param(ParanoidAI(depth=1, seed=0), id="paranoid"),
        pytest.param(MCTSAI(MCTSConfig(time_limit_ms=10_000.0, max_iterations=5), seed=0), id="mcts"),
        pytest.param(RandomAI(seed=0), id="random"),
    ],
)
def test_opening_move_is_legal_and_board_is_untouched(agent):
    board = Board(draw_no_progress_limit=10)

    move = agent.select_move(board)

    assert move in legal_moves(board)
    assert board.move_count == 0
    assert str(agent) == agent.name
