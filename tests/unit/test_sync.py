"""
Tests for card generation and tree-to-cards synchronization
"""
import pytest

from learntree.modules.cards.generator import (
    calculate_difficulty,
    create_card,
    generate_cards_from_tree,
)
from learntree.modules.cards.models import BRANCH_QUESTION, Card, Difficulty, QuestionType
from learntree.modules.cards.sync import customize_card, reset_customization, synchronize
from learntree.modules.review.scheduler import review_card
from learntree.modules.tree.edits import add_node, delete_node, move_node, update_node
from learntree.modules.tree.models import NodeStatus, TreeNode
from learntree.modules.tree.utils import node_ids


def _with_children(name, count):
    return TreeNode(
        id=name.lower(),
        name=name,
        children=[TreeNode(id=f"{name.lower()}-{i}", name=f"Child {i}") for i in range(count)],
    )


class TestDifficulty:
    """Tests for difficulty classification"""

    def test_top_level_leaf_is_beginner(self):
        assert calculate_difficulty(TreeNode(id="x", name="Basics"), []) == Difficulty.BEGINNER

    @pytest.mark.parametrize(
        "depth,expected",
        [
            (1, Difficulty.INTERMEDIATE),
            (2, Difficulty.INTERMEDIATE),
            (3, Difficulty.ADVANCED),
            (5, Difficulty.ADVANCED),
        ],
    )
    def test_depth_escalation(self, depth, expected):
        node = TreeNode(id="x", name="Basics")
        assert calculate_difficulty(node, ["p"] * depth) == expected

    @pytest.mark.parametrize(
        "children,expected",
        [
            (2, Difficulty.BEGINNER),
            (3, Difficulty.INTERMEDIATE),
            (5, Difficulty.INTERMEDIATE),
            (6, Difficulty.ADVANCED),
        ],
    )
    def test_fan_out_escalation(self, children, expected):
        assert calculate_difficulty(_with_children("Topic", children), []) == expected

    def test_fan_out_overrides_shallow_depth(self):
        assert calculate_difficulty(_with_children("Topic", 6), ["p"]) == Difficulty.ADVANCED

    def test_technical_vocabulary_bumps_beginner(self):
        node = TreeNode(id="x", name="Sorting ALGORITHMS")
        assert calculate_difficulty(node, []) == Difficulty.INTERMEDIATE

    def test_technical_vocabulary_never_lowers(self):
        node = TreeNode(id="x", name="System Architecture")
        assert calculate_difficulty(node, ["a", "b", "c"]) == Difficulty.ADVANCED


class TestCardGeneration:
    """Tests for fresh card synthesis"""

    def test_top_level_card(self, sample_tree, now):
        card = create_card(sample_tree.children[0], [], now)
        assert card.id == "js"
        assert card.question == BRANCH_QUESTION
        assert card.question_type == QuestionType.BRANCH_IDENTIFICATION
        assert card.answer == "JavaScript belongs to Root."
        assert card.folder == "JavaScript"
        assert card.depth == 0
        assert card.path == ["JavaScript"]
        assert card.full_path == "JavaScript"
        assert card.learning_context.child_count == 2
        assert card.learning_context.is_branch is True
        assert card.learning_context.is_leaf is False

    def test_nested_card(self, sample_tree, now):
        cards = {c.id: c for c in generate_cards_from_tree(sample_tree, now)}
        closures = cards["closures"]
        assert closures.answer == "Closures belongs to Functions."
        assert closures.folder == "JavaScript"
        assert closures.depth == 2
        assert closures.path == ["JavaScript", "Functions", "Closures"]
        assert closures.full_path == "JavaScript → Functions → Closures"
        assert closures.difficulty == Difficulty.INTERMEDIATE
        assert closures.learning_context.hierarchy == 2
        assert closures.learning_context.is_leaf is True

    def test_fresh_defaults(self, sample_tree, now):
        card = create_card(sample_tree.children[1], [], now)
        assert card.reviews == 0
        assert card.interval == 1
        assert card.ease_factor == 2.5
        assert card.due_date == now
        assert card.last_reviewed is None
        assert card.is_customized is False
        # mastery status starts from the node's status
        assert card.status == NodeStatus.VISITED

    def test_traversal_order_and_root_excluded(self, sample_tree, now):
        ids = [c.id for c in generate_cards_from_tree(sample_tree, now)]
        assert ids == ["js", "vars", "funcs", "closures", "css", "flex"]

    def test_camel_case_serialization(self, sample_tree, now):
        dumped = create_card(sample_tree.children[0], [], now).model_dump(by_alias=True, mode="json")
        assert dumped["easeFactor"] == 2.5
        assert dumped["dueDate"] == now
        assert dumped["questionType"] == "branch-identification"
        assert dumped["learningContext"]["childCount"] == 2


class TestSynchronize:
    """Tests for the tree-to-cards merge"""

    def test_card_set_equals_node_set(self, sample_tree, now):
        stray = Card(id="ghost", question="Q", answer="A")
        cards = synchronize(sample_tree, {"ghost": stray}, now)
        assert set(cards) == node_ids(sample_tree)

    def test_empty_tree_yields_no_cards(self, now):
        assert synchronize(TreeNode(id="root", name="Root"), {}, now) == {}

    def test_idempotent_on_stable_tree(self, sample_tree, now):
        first = synchronize(sample_tree, {}, now)
        second = synchronize(sample_tree, first, now + 60_000)
        assert second == first

    def test_inputs_are_not_mutated(self, sample_tree, now):
        existing = synchronize(sample_tree, {}, now)
        snapshot = {k: v.model_copy(deep=True) for k, v in existing.items()}
        synchronize(delete_node(sample_tree, "js"), existing, now)
        assert existing == snapshot

    def test_new_node_gets_defaults(self, sample_tree, now):
        cards = synchronize(sample_tree, {}, now)
        tree = add_node(sample_tree, "css", TreeNode(id="grid", name="Grid"))
        cards = synchronize(tree, cards, now + 1000)
        grid = cards["grid"]
        assert (grid.reviews, grid.interval, grid.ease_factor, grid.is_customized) == (0, 1, 2.5, False)
        assert grid.due_date == now + 1000

    def test_progress_preserved_across_rename_and_move(self, sample_tree, now):
        cards = synchronize(sample_tree, {}, now)
        reviewed = review_card(review_card(cards["closures"], 4, now), 4, now + 1)
        cards = {**cards, "closures": reviewed}

        tree = update_node(sample_tree, "closures", name="Lexical Closures")
        tree = move_node(tree, "closures", "css")
        synced = synchronize(tree, cards, now + 99)

        card = synced["closures"]
        assert card.progress() == reviewed.progress()
        assert card.status == reviewed.status
        # derived fields follow the new position
        assert card.answer == "Lexical Closures belongs to CSS."
        assert card.folder == "CSS"
        assert card.full_path == "CSS → Lexical Closures"

    def test_customized_text_survives(self, sample_tree, now):
        cards = synchronize(sample_tree, {}, now)
        cards["vars"] = customize_card(cards["vars"], question="Q", answer="A")

        tree = update_node(sample_tree, "vars", name="Bindings")
        tree = move_node(tree, "vars", "css")
        synced = synchronize(tree, cards, now)

        assert synced["vars"].question == "Q"
        assert synced["vars"].answer == "A"
        assert synced["vars"].is_customized is True
        assert synced["vars"].folder == "CSS"

    def test_reset_customization_regenerates_text(self, sample_tree, now):
        cards = synchronize(sample_tree, {}, now)
        cards["vars"] = reset_customization(customize_card(cards["vars"], question="Q", answer="A"))
        synced = synchronize(sample_tree, cards, now)
        assert synced["vars"].question == BRANCH_QUESTION
        assert synced["vars"].answer == "Variables belongs to JavaScript."

    def test_orphans_pruned(self, sample_tree, now):
        cards = synchronize(sample_tree, {}, now)
        synced = synchronize(delete_node(sample_tree, "funcs"), cards, now)
        assert "funcs" not in synced
        assert "closures" not in synced
        assert set(synced) == {"js", "vars", "css", "flex"}

    def test_existing_mastery_status_kept(self, sample_tree, now):
        cards = synchronize(sample_tree, {}, now)
        cards["flex"] = cards["flex"].model_copy(update={"status": NodeStatus.LEARNT})
        synced = synchronize(sample_tree, cards, now)
        assert synced["flex"].status == NodeStatus.LEARNT

    def test_legacy_card_fills_derived_fields(self, sample_tree, now):
        legacy = Card.model_validate(
            {"id": "vars", "question": "old", "answer": "old", "reviews": 4, "interval": 9, "dueDate": 5}
        )
        synced = synchronize(sample_tree, {"vars": legacy}, now)
        card = synced["vars"]
        assert card.question == BRANCH_QUESTION
        assert card.folder == "JavaScript"
        assert (card.reviews, card.interval, card.due_date) == (4, 9, 5)
        assert card.is_customized is False
