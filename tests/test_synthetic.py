import pytest

from prefmodel.data import generate_users


def test_generate_users_shape_and_ranges():
    users = generate_users(50, 10, 4, seed=0)

    assert [user.id for user in users] == [str(idx) for idx in range(50)]
    for user in users:
        prefs = user.get_preferences_as_array()
        assert 1 <= len(prefs) <= 4
        assert len({pref.item.id for pref in prefs}) == len(prefs)
        assert all(0.0 <= pref.value < 1.0 for pref in prefs)
        assert all(pref.user is user for pref in prefs)


def test_generate_users_is_reproducible():
    first = generate_users(20, 10, 5, seed=9)
    second = generate_users(20, 10, 5, seed=9)

    def flatten(users):
        return [(u.id, p.item.id, p.value) for u in users for p in u.preferences]

    assert flatten(first) == flatten(second)


def test_generate_users_caps_preferences_at_item_count():
    users = generate_users(30, 2, 10, seed=1)
    assert all(len(user.preferences) <= 2 for user in users)


@pytest.mark.parametrize(
    "args",
    [(-1, 10, 5), (10, 0, 5), (10, 10, 0)],
)
def test_generate_users_validation(args):
    with pytest.raises(ValueError):
        generate_users(*args)
