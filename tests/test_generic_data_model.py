import pytest

from prefmodel.data import generate_users
from prefmodel.errors import InvalidArgumentError, NotFoundError, UnsupportedOperationError
from prefmodel.model import (
    NO_PREFERENCES,
    DataModel,
    GenericDataModel,
    Item,
    Refreshable,
    make_user,
)


@pytest.fixture
def worked_example():
    a, b = Item("A"), Item("B")
    return GenericDataModel(
        [
            make_user("u2", [(a, 2.0), (b, 3.0)]),
            make_user("u1", [(a, 1.0)]),
        ]
    )


def test_worked_example(worked_example):
    model = worked_example

    assert [item.id for item in model.get_items()] == ["A", "B"]
    prefs_a = model.get_preferences_for_item_as_array("A")
    assert [(pref.user.id, pref.value) for pref in prefs_a] == [("u1", 1.0), ("u2", 2.0)]
    prefs_b = list(model.get_preferences_for_item("B"))
    assert [(pref.user.id, pref.value) for pref in prefs_b] == [("u2", 3.0)]
    with pytest.raises(NotFoundError):
        model.get_user("u3")


def test_lookups_and_counts(worked_example):
    model = worked_example

    assert model.get_user("u1").id == "u1"
    assert model.get_item("B") == Item("B")
    assert model.get_num_users() == 2
    assert model.get_num_items() == 2
    assert [user.id for user in model.get_users()] == ["u1", "u2"]
    with pytest.raises(NotFoundError):
        model.get_item("C")
    # NotFoundError is still a KeyError for callers that only know builtins.
    with pytest.raises(KeyError):
        model.get_item("C")


def test_listings_are_restartable(worked_example):
    users = worked_example.get_users()
    prefs = worked_example.get_preferences_for_item("A")

    assert list(users) == list(users)
    assert list(prefs) == list(prefs)
    assert len(prefs) == 2


def test_unknown_item_preferences_are_empty_and_shared(worked_example):
    model = worked_example

    first = model.get_preferences_for_item_as_array("missing")
    second = model.get_preferences_for_item_as_array("other-missing")
    assert first is second is NO_PREFERENCES
    assert list(model.get_preferences_for_item("missing")) == []


def test_per_item_order_is_stable(worked_example):
    model = worked_example
    first_call = model.get_preferences_for_item_as_array("A")
    for _ in range(5):
        assert model.get_preferences_for_item_as_array("A") is first_call
        assert list(model.get_preferences_for_item("A")) == list(first_call)


@pytest.mark.parametrize(
    "call",
    [
        lambda model: model.set_preference("u1", "A", 5.0),
        lambda model: model.set_preference("nobody", "nothing", 0.0),
        lambda model: model.remove_preference("u1", "A"),
        lambda model: model.remove_preference(None, None),
    ],
)
def test_mutation_is_rejected(worked_example, call):
    with pytest.raises(UnsupportedOperationError):
        call(worked_example)
    assert worked_example.get_user("u1").get_preference_for("A").value == 1.0


def test_attributes_cannot_be_reassigned(worked_example):
    with pytest.raises(UnsupportedOperationError):
        worked_example._indices = None
    with pytest.raises(UnsupportedOperationError):
        del worked_example._indices


def test_refresh_is_a_no_op(worked_example):
    before = worked_example.get_preferences_for_item_as_array("A")
    worked_example.refresh()
    assert worked_example.get_preferences_for_item_as_array("A") is before


def test_satisfies_read_contract(worked_example):
    assert isinstance(worked_example, DataModel)
    assert isinstance(worked_example, Refreshable)
    assert repr(worked_example) == "GenericDataModel(users=2, items=2)"


def test_index_consistency_on_random_data():
    model = GenericDataModel(generate_users(200, 50, 10, seed=3))

    from_users = {
        id(pref) for user in model.get_users() for pref in user.get_preferences_as_array()
    }
    from_items = [
        id(pref)
        for item in model.get_items()
        for pref in model.get_preferences_for_item_as_array(item.id)
    ]
    assert len(from_items) == len(set(from_items))
    assert set(from_items) == from_users

    for item in model.get_items():
        owners = [pref.user.id for pref in model.get_preferences_for_item(item.id)]
        assert owners == sorted(owners)
        assert len(owners) == len(set(owners))


def test_listings_sorted_without_duplicates_even_with_repeated_ids():
    a = Item("A")
    users = [make_user(user_id, [(a, 1.0)]) for user_id in ["b", "a", "c", "a", "b"]]

    model = GenericDataModel(users)

    ids = [user.id for user in model.get_users()]
    assert ids == ["a", "b", "c"]
    assert model.get_user("a") is users[3]
    assert [pref.user for pref in model.get_preferences_for_item("A")] == [
        users[3],
        users[4],
        users[2],
    ]


def test_copy_from_another_model(worked_example):
    copy = GenericDataModel.from_data_model(worked_example)

    assert copy is not worked_example
    assert [user.id for user in copy.get_users()] == ["u1", "u2"]
    assert copy.get_user("u2") is worked_example.get_user("u2")
    assert copy.get_preferences_for_item_as_array("A") == worked_example.get_preferences_for_item_as_array("A")


def test_copy_from_none_is_rejected():
    with pytest.raises(InvalidArgumentError):
        GenericDataModel.from_data_model(None)
    with pytest.raises(ValueError):
        GenericDataModel(None)


def test_empty_model():
    model = GenericDataModel([])

    assert model.get_num_users() == 0
    assert model.get_num_items() == 0
    assert list(model.get_users()) == []
    assert model.get_preferences_for_item_as_array("A") is NO_PREFERENCES
