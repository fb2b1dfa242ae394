import pytest

from waddle.resolve import MissingMigrationsError, up_versions

MAX = 2**63 - 1


@pytest.mark.parametrize("allow_missing", [False, True])
class TestCommon:
    def test_nothing_to_apply_none(self, allow_missing):
        assert up_versions(None, None, MAX, allow_missing) == []

    def test_nothing_to_apply_empty(self, allow_missing):
        assert up_versions([], [], MAX, allow_missing) == []

    def test_nothing_new(self, allow_missing):
        assert up_versions([1, 2, 3], [1, 2, 3], MAX, allow_missing) == []

    def test_all_new(self, allow_missing):
        assert up_versions([1, 2, 3], [], MAX, allow_missing) == [1, 2, 3]

    def test_squashed_no_new(self, allow_missing):
        assert up_versions([3], [3], MAX, allow_missing) == []

    def test_squashed_one_new(self, allow_missing):
        assert up_versions([3, 4], [3], MAX, allow_missing) == [4]

    def test_some_new_with_target(self, allow_missing):
        assert up_versions([1, 2, 3, 4, 5], [1, 2], 4, allow_missing) == [3, 4]

    def test_some_new_with_zero_target(self, allow_missing):
        assert up_versions([1, 2, 3, 4, 5], [1, 2], 0, allow_missing) == []

    def test_target_below_missing(self, allow_missing):
        assert up_versions([1, 2, 3], [1, 3], 1, allow_missing) == []


def test_one_missing_error():
    with pytest.raises(MissingMigrationsError) as exc:
        up_versions([1, 2, 3, 4], [1, 3], MAX, False)
    assert str(exc.value) == (
        "detected 1 missing (out-of-order) migration lower than database version (3): version 2"
    )


def test_multiple_missing_error():
    with pytest.raises(MissingMigrationsError) as exc:
        up_versions([1, 2, 3, 4, 5], [2, 4, 5], MAX, False)
    assert str(exc.value) == (
        "detected 2 missing (out-of-order) migrations lower than database version (5): versions 1,3"
    )
    assert exc.value.missing == [1, 3]


@pytest.mark.parametrize(
    "fsys,db,target,message",
    [
        (
            [1, 2, 3],
            [1, 3],
            2,
            "detected 1 missing (out-of-order) migration lower than database version (3), "
            "with target version (2): version 2",
        ),
        (
            [1, 2, 3],
            [1, 3],
            3,
            "detected 1 missing (out-of-order) migration lower than database version (3), "
            "with target version (3): version 2",
        ),
        (
            [1, 2, 3, 4, 5, 6],
            [1, 3, 4, 6],
            4,
            "detected 1 missing (out-of-order) migration lower than database version (6), "
            "with target version (4): version 2",
        ),
        (
            [1, 2, 3, 4, 5, 6],
            [1, 3, 4, 6],
            6,
            "detected 2 missing (out-of-order) migrations lower than database version (6), "
            "with target version (6): versions 2,5",
        ),
    ],
)
def test_target_lower_than_max_errors(fsys, db, target, message):
    with pytest.raises(MissingMigrationsError) as exc:
        up_versions(fsys, db, target, False)
    assert str(exc.value) == message


def test_allow_missing_one():
    assert up_versions([1, 2, 3], [1, 3], MAX, True) == [2]


def test_allow_missing_multiple_and_new():
    assert up_versions([1, 2, 3, 4, 5], [2, 4], MAX, True) == [1, 3, 5]


@pytest.mark.parametrize(
    "fsys,db,target,expected",
    [
        ([1, 2, 3], [1, 3], 2, [2]),
        ([1, 2, 3], [1, 3], 3, [2]),
        ([1, 2, 3, 4, 5, 6], [1, 3, 4, 6], 4, [2]),
        ([1, 2, 3, 4, 5, 6], [1, 3, 4, 6], 6, [2, 5]),
    ],
)
def test_allow_missing_target_lower_than_max(fsys, db, target, expected):
    assert up_versions(fsys, db, target, True) == expected


def test_result_sorted_ascending():
    assert up_versions([5, 3, 4, 2, 1], [], MAX, False) == [1, 2, 3, 4, 5]


def test_input_not_mutated():
    fsys = [3, 1, 2]
    up_versions(fsys, [], MAX, False)
    assert fsys == [3, 1, 2]


def test_error_is_value_error():
    with pytest.raises(ValueError):
        up_versions([1, 2, 3], [1, 3], MAX, False)