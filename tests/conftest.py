"""
Shared pytest fixtures
"""
import pytest

from learntree.modules.tree.models import NodeStatus, TreeNode

NOW = 1_700_000_000_000
DAY = 86_400_000


@pytest.fixture
def now():
    """Fixed wall-clock time in epoch millis"""
    return NOW


@pytest.fixture
def sample_tree():
    """Small tree: two folders, one nested branch"""
    return TreeNode(
        id="root",
        name="My Knowledge",
        children=[
            TreeNode(
                id="js",
                name="JavaScript",
                children=[
                    TreeNode(id="vars", name="Variables"),
                    TreeNode(
                        id="funcs",
                        name="Functions",
                        children=[TreeNode(id="closures", name="Closures")],
                    ),
                ],
            ),
            TreeNode(
                id="css",
                name="CSS",
                status=NodeStatus.VISITED,
                children=[TreeNode(id="flex", name="Flexbox")],
            ),
        ],
    )


@pytest.fixture
def deep_tree():
    """A chain four levels below the root"""
    return TreeNode(
        id="root",
        name="My Knowledge",
        children=[
            TreeNode(
                id="a",
                name="A",
                children=[
                    TreeNode(
                        id="b",
                        name="B",
                        children=[
                            TreeNode(
                                id="c",
                                name="C",
                                children=[TreeNode(id="d", name="D")],
                            )
                        ],
                    )
                ],
            )
        ],
    )
