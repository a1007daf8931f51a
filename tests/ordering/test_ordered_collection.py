# tests/ordering/test_ordered_collection.py
from datetime import datetime, timedelta
from types import SimpleNamespace

import random

import pytest

from taskboard.ordering import OrderedCollectionManager, Pin, Recompact, SwapMove
from taskboard.services.exceptions import (
    AlreadyPinnedError, CannotDisplacePinnedStepError, CannotMovePinnedStepError, ItemNotFoundError,
    NoOtherStepsError, OrderingError, SingleItemCollectionError, TargetPositionNotFoundError
)

# ===================================================================
#  Fixture 설정
# ===================================================================

def make_steps(*names, finished=None):
    """이름 순서대로 1..N 위치를 가진 스텝 목록을 만듭니다."""
    return [
        SimpleNamespace(id=name, position=index, finish_step=(name == finished), updated_at=None)
        for index, name in enumerate(names, start=1)
    ]


def positions(items):
    return {item.id: item.position for item in items}


def assert_dense(items):
    assert sorted(item.position for item in items) == list(range(1, len(items) + 1))


@pytest.fixture
def steps() -> OrderedCollectionManager:
    """완료 스텝(finish_step)을 지원하는 스텝 컬렉션 관리자."""
    return OrderedCollectionManager(label="step", parent="board", pinned_attribute="finish_step")


@pytest.fixture
def roles() -> OrderedCollectionManager:
    return OrderedCollectionManager(label="role", parent="project")

# ===================================================================
#  append 테스트
# ===================================================================
class TestAppend:
    def test_new_item_goes_to_count_plus_one(self, steps):
        items = make_steps("A", "B")
        new = SimpleNamespace(id="C", position=None, finish_step=False)

        result = steps.append(items, new)

        assert new.position == 3
        assert [item.id for item in result] == ["A", "B", "C"]

    def test_finish_step_stays_last_after_append(self, steps):
        """완료 스텝이 있으면 새 스텝이 그 앞에 들어가는지 테스트합니다."""
        items = make_steps("A", "Done", finished="Done")
        new = SimpleNamespace(id="B", position=None, finish_step=False)

        result = steps.append(items, new)

        assert positions(result) == {"A": 1, "B": 2, "Done": 3}

    def test_second_pinned_item_is_rejected(self, steps):
        items = make_steps("A", "Done", finished="Done")
        new = SimpleNamespace(id="Other", position=None, finish_step=True)

        with pytest.raises(AlreadyPinnedError):
            steps.append(items, new)

# ===================================================================
#  swap_move 테스트
# ===================================================================
class TestSwapMove:
    def test_swap_exchanges_two_positions(self, steps):
        items = make_steps("A", "B", "C", "D")

        source, target = steps.swap_move(items, "A", 3)

        assert (source.id, target.id) == ("A", "C")
        assert positions(items) == {"A": 3, "B": 2, "C": 1, "D": 4}

    def test_swap_round_trip_restores_positions(self, steps):
        """같은 두 항목을 다시 맞바꾸면 원래 위치로 돌아오는지 테스트합니다."""
        items = make_steps("A", "B", "C", "D")
        original = positions(items)

        steps.swap_move(items, "B", 4)
        steps.swap_move(items, "B", original["B"])

        assert positions(items) == original

    def test_move_to_own_position_is_noop(self, steps):
        items = make_steps("A", "B")

        source, target = steps.swap_move(items, "B", 2)

        assert source is target
        assert positions(items) == {"A": 1, "B": 2}

    def test_single_item_collection(self, steps):
        with pytest.raises(SingleItemCollectionError) as exc_info:
            steps.swap_move(make_steps("A"), "A", 1)
        assert str(exc_info.value) == "The board has no other steps to move positions."

    def test_unknown_source(self, steps):
        with pytest.raises(ItemNotFoundError):
            steps.swap_move(make_steps("A", "B"), "Z", 1)

    def test_target_position_not_found(self, steps):
        with pytest.raises(TargetPositionNotFoundError):
            steps.swap_move(make_steps("A", "B"), "A", 5)

    def test_cannot_move_finish_step(self, steps):
        items = make_steps("A", "B", "Done", finished="Done")

        with pytest.raises(CannotMovePinnedStepError):
            steps.swap_move(items, "Done", 1)

    def test_cannot_displace_finish_step(self, steps):
        """완료 스텝의 자리로 다른 스텝을 옮길 수 없는지 테스트합니다."""
        items = make_steps("A", "B", "Done", finished="Done")

        with pytest.raises(CannotDisplacePinnedStepError):
            steps.swap_move(items, "A", 3)
        assert positions(items) == {"A": 1, "B": 2, "Done": 3}

# ===================================================================
#  recompact 테스트
# ===================================================================
class TestRecompact:
    def test_fills_gaps(self, roles):
        items = make_steps("A", "B", "C")
        items[1].position = 5
        items[2].position = 9

        result = roles.recompact(items)

        assert [item.id for item in result] == ["A", "B", "C"]
        assert_dense(result)

    def test_tie_is_won_by_most_recently_updated(self, roles):
        """같은 위치라면 가장 최근에 수정된 항목이 앞에 오는지 테스트합니다."""
        now = datetime(2024, 1, 1)
        items = make_steps("A", "B", "C")
        items[0].updated_at = now
        items[2].position = 1
        items[2].updated_at = now + timedelta(seconds=1)

        result = roles.recompact(items)

        assert [item.id for item in result] == ["C", "A", "B"]
        assert_dense(result)

    def test_preferred_item_wins_tie_over_newer_sibling(self, roles):
        """위치를 지정한 항목은 더 최근에 수정된 형제보다 앞에 오는지 테스트합니다."""
        items = make_steps("A", "B", "C")
        items[0].updated_at = datetime(2030, 1, 1)
        items[2].position = 1

        result = roles.recompact(items, preferred=items[2])

        assert [item.id for item in result] == ["C", "A", "B"]
        assert_dense(result)

    def test_pinned_item_is_kept_last(self, steps):
        items = make_steps("Done", "A", "B", finished="Done")

        result = steps.recompact(items)

        assert result[-1].id == "Done"
        assert result[-1].position == 3

# ===================================================================
#  pin 테스트
# ===================================================================
class TestPin:
    def test_first_pin_on_last_item_does_not_move(self, steps):
        items = make_steps("A", "B", "C")

        target, previous = steps.pin(items, "C")

        assert previous is None
        assert target.position == 3 and target.finish_step is True

    def test_repin_swaps_with_previous(self, steps):
        """[A@1, B@2, C@3]에서 C를 고정한 뒤 A를 고정하면 A와 C가 자리를 바꾸는지 테스트합니다."""
        # === Arrange (테스트 준비) ===
        items = make_steps("A", "B", "C")
        steps.pin(items, "C")

        # === Act (실제 테스트 대상 실행) ===
        target, previous = steps.pin(items, "A")

        # === Assert (결과 검증) ===
        a, b, c = items
        assert target is a and previous is c
        assert (a.position, a.finish_step) == (3, True)
        assert (c.position, c.finish_step) == (1, False)
        assert b.position == 2

    def test_first_pin_swaps_with_last_item(self, steps):
        items = make_steps("A", "B", "C", "D")

        steps.pin(items, "A")

        assert positions(items) == {"A": 4, "B": 2, "C": 3, "D": 1}

    def test_first_pin_recompacts_sparse_positions(self, steps):
        items = make_steps("A", "B", "C")
        items[2].position = 7

        steps.pin(items, "A")

        assert_dense(items)
        assert items[0].position == 3

    def test_single_step_cannot_be_pinned(self, steps):
        with pytest.raises(NoOtherStepsError):
            steps.pin(make_steps("A"), "A")

    def test_unknown_step(self, steps):
        with pytest.raises(ItemNotFoundError):
            steps.pin(make_steps("A", "B"), "Z")

    def test_already_pinned(self, steps):
        with pytest.raises(AlreadyPinnedError):
            steps.pin(make_steps("A", "B", finished="B"), "B")

    def test_collection_without_pinning(self, roles):
        with pytest.raises(TypeError):
            roles.pin(make_steps("A", "B"), "A")

# ===================================================================
#  불변식 테스트
# ===================================================================
class TestInvariants:
    def test_positions_stay_dense_and_single_pinned(self, steps):
        """연산을 연달아 적용해도 위치가 1..N이고 완료 스텝이 하나이며 마지막인지 테스트합니다."""
        items = make_steps("A", "B", "C", "D")
        operations = [
            SwapMove("A", 2),
            Pin("B"),
            SwapMove("C", 1),
            Pin("D"),
            Recompact(),
            SwapMove("B", 3),
            Pin("A"),
        ]

        for operation in operations:
            items = steps.reorder(items, operation)
            assert_dense(items)
            pinned = [item for item in items if item.finish_step]
            if isinstance(operation, Pin):
                assert len(pinned) == 1
                assert pinned[0].position == len(items)

        assert [item.id for item in items][-1] == "A"

    def test_append_keeps_invariants(self, steps):
        items = make_steps("A", "B")
        steps.pin(items, "A")

        items = steps.append(items, SimpleNamespace(id="C", position=None, finish_step=False))

        assert_dense(items)
        assert items[-1].id == "A"

    @pytest.mark.parametrize("seed", range(25))
    def test_random_operation_sequences(self, steps, seed):
        """임의의 연산 순서에서도 위치가 1..N이고 완료 스텝이 최대 하나이며 마지막인지 테스트합니다."""
        rng = random.Random(seed)
        items = make_steps(*[f"S{i}" for i in range(rng.randint(1, 6))])

        for index in range(40):
            choice = rng.choice(["swap", "pin", "recompact", "append"])
            before = positions(items)
            try:
                if choice == "append":
                    new = SimpleNamespace(id=f"N{index}", position=None, finish_step=False, updated_at=None)
                    items = steps.append(items, new)
                elif choice == "swap":
                    target = rng.choice(items)
                    items = steps.reorder(items, SwapMove(target.id, rng.randint(1, len(items) + 1)))
                elif choice == "pin":
                    items = steps.reorder(items, Pin(rng.choice(items).id))
                else:
                    items = steps.reorder(items, Recompact())
            except OrderingError:
                # 거부된 연산은 아무것도 바꾸지 않습니다.
                assert positions(items) == before

            assert_dense(items)
            pinned = [item for item in items if item.finish_step]
            assert len(pinned) <= 1
            if pinned:
                assert pinned[0].position == len(items)
