"""
Tests for the SM-2 variant scheduler and mastery status transitions
"""
import pytest

from learntree.modules.cards.models import Card
from learntree.modules.review.scheduler import (
    MAXIMUM_INTERVAL,
    MS_PER_DAY,
    Quality,
    advance_status,
    next_ease_factor,
    review_card,
    schedule_next,
)
from learntree.modules.tree.models import NodeStatus


def make_card(**overrides):
    fields = {"id": "c1", "question": "Q", "answer": "A", "due_date": 0}
    fields.update(overrides)
    return Card(**fields)


class TestScheduleNext:
    """Tests for interval and ease factor updates"""

    def test_fail_resets_progress(self, now):
        card = make_card(reviews=5, interval=20, ease_factor=2.0)
        out = schedule_next(card, Quality.AGAIN, now)
        assert out.reviews == 0
        assert out.interval == 1
        assert out.ease_factor == 2.0

    def test_hard_counts_as_fail(self, now):
        out = schedule_next(make_card(reviews=3, interval=6, ease_factor=2.2), Quality.HARD, now)
        assert (out.reviews, out.interval, out.ease_factor) == (0, 1, 2.2)

    def test_first_success_uses_initial_interval(self, now):
        out = schedule_next(make_card(reviews=0, interval=1, ease_factor=2.5), 4, now)
        assert out.reviews == 1
        assert out.interval == 1
        assert out.ease_factor == pytest.approx(2.5)

    def test_second_success_uses_minimum_interval(self, now):
        out = schedule_next(make_card(reviews=1, interval=1, ease_factor=2.5), 3, now)
        assert out.reviews == 2
        assert out.interval == 1
        assert out.ease_factor == pytest.approx(2.36)

    def test_later_success_multiplies_interval(self, now):
        out = schedule_next(make_card(reviews=2, interval=6, ease_factor=2.5), 4, now)
        assert out.reviews == 3
        assert out.interval == 15

    def test_interval_rounds_half_up(self, now):
        out = schedule_next(make_card(reviews=2, interval=1, ease_factor=2.5), 4, now)
        assert out.interval == 3

    def test_interval_is_not_capped(self, now):
        out = schedule_next(make_card(reviews=12, interval=300, ease_factor=2.5), 4, now)
        assert out.interval == 750
        assert out.interval > MAXIMUM_INTERVAL

    def test_due_date_and_last_reviewed(self, now):
        out = schedule_next(make_card(reviews=2, interval=4, ease_factor=2.0), 4, now)
        assert out.last_reviewed == now
        assert out.due_date == now + 8 * MS_PER_DAY

    def test_fail_due_date_is_one_day(self, now):
        out = schedule_next(make_card(reviews=4, interval=30), 0, now)
        assert out.due_date == now + MS_PER_DAY

    @pytest.mark.parametrize("quality", [-3, 0, 1, 2, 3, 4, 5, 7])
    def test_ease_floor(self, quality, now):
        card = make_card(reviews=4, interval=10, ease_factor=1.3)
        for _ in range(5):
            card = schedule_next(card, quality, now)
            assert card.ease_factor >= 1.3

    def test_next_ease_factor_formula(self):
        assert next_ease_factor(2.5, 5) == pytest.approx(2.6)
        assert next_ease_factor(2.5, 4) == pytest.approx(2.5)
        assert next_ease_factor(1.35, 3) == pytest.approx(1.3)

    def test_input_card_untouched(self, now):
        card = make_card(reviews=2, interval=4)
        schedule_next(card, 4, now)
        assert (card.reviews, card.interval, card.last_reviewed) == (2, 4, None)


class TestAdvanceStatus:
    """Tests for the mastery state machine"""

    def test_first_review_marks_visited(self):
        out = advance_status(make_card(reviews=1), 4)
        assert out.status == NodeStatus.VISITED

    def test_visited_to_learning(self):
        out = advance_status(make_card(reviews=3, status=NodeStatus.VISITED), 3)
        assert out.status == NodeStatus.LEARNING

    def test_learning_to_learnt(self):
        card = make_card(reviews=10, interval=30, status=NodeStatus.LEARNING)
        assert advance_status(card, 3).status == NodeStatus.LEARNT

    def test_learning_needs_long_interval(self):
        card = make_card(reviews=12, interval=29, status=NodeStatus.LEARNING)
        assert advance_status(card, 4).status == NodeStatus.LEARNING

    def test_learnt_stays_learnt_on_success(self):
        card = make_card(reviews=15, interval=90, status=NodeStatus.LEARNT)
        assert advance_status(card, 4).status == NodeStatus.LEARNT

    def test_learnt_regresses_on_failure(self):
        card = make_card(reviews=5, status=NodeStatus.LEARNT)
        assert advance_status(card, 0).status == NodeStatus.LEARNING

    def test_learning_regresses_to_visited(self):
        card = make_card(reviews=2, status=NodeStatus.LEARNING)
        assert advance_status(card, 1).status == NodeStatus.VISITED

    @pytest.mark.parametrize("status", [NodeStatus.NO_STATUS, NodeStatus.VISITED])
    def test_regression_floor(self, status):
        card = make_card(reviews=5, status=status)
        assert advance_status(card, 0).status == status

    def test_quality_two_does_not_regress(self):
        card = make_card(reviews=5, status=NodeStatus.LEARNT)
        assert advance_status(card, 2).status == NodeStatus.LEARNT

    def test_only_status_changes(self):
        card = make_card(reviews=1, interval=7, ease_factor=2.1)
        out = advance_status(card, 4)
        assert out.model_dump(exclude={"status"}) == card.model_dump(exclude={"status"})


class TestReviewCard:
    """Tests for the combined review flow"""

    def test_status_progression(self, now):
        card = make_card()
        statuses = []
        for i in range(5):
            card = review_card(card, 4, now + i)
            statuses.append(card.status)
        assert statuses[0] == NodeStatus.VISITED
        assert statuses[1] == NodeStatus.VISITED
        assert statuses[2] == NodeStatus.LEARNING
        assert statuses[4] == NodeStatus.LEARNING
        assert card.reviews == 5

    def test_reaches_learnt(self, now):
        card = make_card(reviews=9, interval=20, ease_factor=2.5, status=NodeStatus.LEARNING)
        out = review_card(card, 4, now)
        assert out.reviews == 10
        assert out.interval == 50
        assert out.status == NodeStatus.LEARNT

    def test_failure_uses_post_update_counters(self, now):
        """A failed rating resets reviews before status rules run"""
        card = make_card(reviews=5, interval=40, status=NodeStatus.LEARNT)
        out = review_card(card, 0, now)
        assert out.reviews == 0
        assert out.status == NodeStatus.LEARNT
