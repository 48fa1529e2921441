import pytest

from engine.pieces import Colour, PieceType
from positions import board_with
from scripted_game import BLUE, GREEN, RED, GameTree

EDGE_SQUARES = [("BA1", "BA2"), ("BB1", "BB2"), ("BC1", "BC2"), ("BD1", "BD2")]


def link_nth(tree: GameTree, parent: str, index: int, child: str):
    start, end = EDGE_SQUARES[index]
    return tree.link(parent, start, end, child)


@pytest.fixture
def fork_tree() -> GameTree:
    """Blue picks one of three branches; only the first always wins for blue."""
    tree = GameTree()
    tree.add("root", BLUE)
    outcomes = {
        "n0": [dict(winner=BLUE), dict(winner=BLUE)],
        "n1": [dict(winner=GREEN), dict(winner=RED)],
        "n2": [dict(draw=True), dict(winner=GREEN)],
    }
    for idx, (branch, leaves) in enumerate(outcomes.items()):
        tree.add(branch, GREEN)
        link_nth(tree, "root", idx, branch)
        for leaf_idx, outcome in enumerate(leaves):
            leaf = f"{branch}_{leaf_idx}"
            tree.add(leaf, RED, **outcome)
            link_nth(tree, branch, leaf_idx, leaf)
    return tree


@pytest.fixture
def loss_tree() -> GameTree:
    """First root move loses at once; the second leads to a quiet line."""
    tree = GameTree()
    tree.add("root", BLUE)
    tree.add("lose", GREEN, winner=GREEN)
    tree.add("ok", GREEN, scores=(1, 1, 1))
    tree.add("ok2", RED, scores=(1, 1, 1))
    tree.add("ok3", BLUE, scores=(2, 1, 1))
    link_nth(tree, "root", 0, "lose")
    link_nth(tree, "root", 1, "ok")
    link_nth(tree, "ok", 0, "ok2")
    link_nth(tree, "ok2", 0, "ok3")
    return tree


def one_ply_tree(leaf_scores) -> GameTree:
    tree = GameTree()
    tree.add("root", BLUE)
    for idx, scores in enumerate(leaf_scores):
        leaf = f"leaf{idx}"
        tree.add(leaf, GREEN, scores=scores)
        link_nth(tree, "root", idx, leaf)
    return tree


@pytest.fixture
def tie_tree() -> GameTree:
    """Blue's scores after each move are 1, 4, 4."""
    return one_ply_tree([(1, 0, 0), (4, 0, 0), (4, 0, 0)])


@pytest.fixture
def split_tree() -> GameTree:
    """Blue's best move is the first; green, to move next, prefers the second."""
    return one_ply_tree([(5, 0, 0), (1, 3, 0), (0, 3, 0)])


@pytest.fixture
def win_tree() -> GameTree:
    """Blue's only move wins immediately."""
    tree = GameTree()
    tree.add("root", BLUE)
    tree.add("win", GREEN, winner=BLUE)
    link_nth(tree, "root", 0, "win")
    return tree


@pytest.fixture
def coalition_tree() -> GameTree:
    """Three-ply tree with blue's score at the leaves.

    Full minimax values: a -> min(min(3, 5), min(6, 9)) = 3, b -> min(min(1, 2), min(0, -1)) = -1.
    """
    tree = GameTree()
    tree.add("root", BLUE)
    leaf_scores = {"aa": (3, 5), "ab": (6, 9), "ba": (1, 2), "bb": (0, -1)}
    for idx, branch in enumerate(("a", "b")):
        tree.add(branch, GREEN)
        link_nth(tree, "root", idx, branch)
        for sub_idx, suffix in enumerate(("a", "b")):
            node = branch + suffix
            tree.add(node, RED)
            link_nth(tree, branch, sub_idx, node)
            for leaf_idx, score in enumerate(leaf_scores[node]):
                leaf = f"{node}{leaf_idx}"
                tree.add(leaf, BLUE, scores=(score, 0, 0))
                link_nth(tree, node, leaf_idx, leaf)
    return tree


@pytest.fixture
def king_capture_board():
    """Blue rook on BA1 can take the green king on BA3."""
    return board_with(
        {
            "BA1": (Colour.BLUE, PieceType.ROOK),
            "BE1": (Colour.BLUE, PieceType.KING),
            "BA3": (Colour.GREEN, PieceType.KING),
            "GE1": (Colour.GREEN, PieceType.QUEEN),
            "RE1": (Colour.RED, PieceType.KING),
        }
    )
