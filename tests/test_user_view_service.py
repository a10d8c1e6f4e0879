# File: /tests/test_user_view_service.py | Version: 1.0 | Title: User view service against a real session
import pytest

from testdesk.core.constants import InternalUserView, SearchMode, UserViewType
from testdesk.core.exceptions import UserViewExistError, UserViewOwnerError
from testdesk.core.i18n import Translator
from testdesk.models import UserView, UserViewCondition
from testdesk.schemas.user_view import (
    CombineCondition,
    UserViewAddRequest,
    UserViewUpdateRequest,
)
from testdesk.services import user_view_service as svc

SCOPE = "project-view-test"
OWNER = "view-owner"
OTHER = "view-other"
FC = UserViewType.FUNCTIONAL_CASE


def _add(db, name, *, user_id=OWNER, view_type=FC, conditions=None):
    request = UserViewAddRequest(scope_id=SCOPE, name=name, conditions=conditions)
    return svc.add_view(db, request, view_type, user_id)


def test_next_pos_starts_at_step_and_grows(db_session):
    assert svc.get_next_pos(db_session, SCOPE, OWNER, FC) == svc.POS_STEP
    # Asking twice without inserting does not advance
    assert svc.get_next_pos(db_session, SCOPE, OWNER, FC) == svc.POS_STEP

    first = _add(db_session, "first")
    assert first.pos == 5000
    assert svc.get_next_pos(db_session, SCOPE, OWNER, FC) == 10000

    # Positions are per (scope, user, view type)
    assert svc.get_next_pos(db_session, SCOPE, OTHER, FC) == 5000
    assert svc.get_next_pos(db_session, SCOPE, OWNER, UserViewType.BUG) == 5000


def test_add_stores_encoded_conditions(db_session):
    dto = _add(
        db_session,
        "with conditions",
        conditions=[
            CombineCondition(name="priority", operator="in", value=["P0", "P1"]),
            CombineCondition(name="num", operator="gt", value=3),
        ],
    )
    assert dto.user_id == OWNER and dto.internal is False
    assert [c.value for c in dto.conditions] == [["P0", "P1"], 3]

    rows = db_session.query(UserViewCondition).filter_by(user_view_id=dto.id).all()
    assert {(r.name, r.value_type) for r in rows} == {("priority", "ARRAY"), ("num", "INT")}


def test_add_rejects_duplicate_name_in_same_scope(db_session):
    _add(db_session, "dup")
    with pytest.raises(UserViewExistError):
        _add(db_session, "dup")
    # Same name is fine for another user or another view type
    _add(db_session, "dup", user_id=OTHER)
    _add(db_session, "dup", view_type=UserViewType.BUG)


def test_update_name_uniqueness(db_session):
    a = _add(db_session, "a")
    _add(db_session, "b")

    # Keeping its own name is allowed
    same = svc.update_view(db_session, UserViewUpdateRequest(id=a.id, name="a"), FC, OWNER)
    assert same.name == "a"

    with pytest.raises(UserViewExistError):
        svc.update_view(db_session, UserViewUpdateRequest(id=a.id, name="b"), FC, OWNER)

    # Blank name means no rename
    kept = svc.update_view(db_session, UserViewUpdateRequest(id=a.id, name="  "), FC, OWNER)
    assert kept.name == "a"


def test_update_conditions_replace_keep_and_clear(db_session):
    view = _add(db_session, "conds", conditions=[CombineCondition(name="status", operator="eq", value="open")])

    replaced = svc.update_view(
        db_session,
        UserViewUpdateRequest(id=view.id, conditions=[CombineCondition(name="num", operator="lt", value=1.5)]),
        FC,
        OWNER,
    )
    assert [(c.name, c.value) for c in replaced.conditions] == [("num", 1.5)]
    assert db_session.query(UserViewCondition).filter_by(user_view_id=view.id).count() == 1

    kept = svc.update_view(
        db_session, UserViewUpdateRequest(id=view.id, search_mode=SearchMode.OR), FC, OWNER
    )
    assert kept.search_mode == "OR"
    assert [(c.name, c.value) for c in kept.conditions] == [("num", 1.5)]

    cleared = svc.update_view(db_session, UserViewUpdateRequest(id=view.id, conditions=[]), FC, OWNER)
    assert cleared.conditions == []
    assert db_session.query(UserViewCondition).filter_by(user_view_id=view.id).count() == 0


def test_only_owner_may_touch_a_view(db_session):
    view = _add(db_session, "mine")
    translator = Translator("en_US")

    with pytest.raises(UserViewOwnerError):
        svc.get_view(db_session, view.id, FC, OTHER, translator)
    with pytest.raises(UserViewOwnerError):
        svc.update_view(db_session, UserViewUpdateRequest(id=view.id, name="x"), FC, OTHER)
    with pytest.raises(UserViewOwnerError):
        svc.delete_view(db_session, view.id, OTHER)

    # Unknown ids fail the same way
    with pytest.raises(UserViewOwnerError):
        svc.get_view(db_session, "no-such-view", FC, OWNER, translator)
    with pytest.raises(UserViewOwnerError):
        svc.delete_view(db_session, "no-such-view", OWNER)


def test_delete_removes_conditions(db_session):
    view = _add(db_session, "gone", conditions=[CombineCondition(name="a", operator="eq", value="b")])
    svc.delete_view(db_session, view.id, OWNER)
    assert db_session.get(UserView, view.id) is None
    assert db_session.query(UserViewCondition).filter_by(user_view_id=view.id).count() == 0


def test_get_internal_view(db_session):
    dto = svc.get_view(db_session, "all_data", FC, OWNER, Translator("zh_CN"))
    assert dto.internal is True
    assert dto.id == "all_data"
    assert dto.name == "全部数据"
    assert dto.pos == InternalUserView.ALL_DATA.value
    assert dto.conditions == []


def test_grouped_and_flat_lists(db_session):
    translator = Translator("en_US")
    first = _add(db_session, "first")
    second = _add(db_session, "second")
    _add(db_session, "not mine", user_id=OTHER)

    grouped = svc.grouped_list(db_session, SCOPE, FC, OWNER, translator)
    assert [v.id for v in grouped.custom_views] == [second.id, first.id]
    assert [v.id for v in grouped.internal_views] == ["all_data", "my_follow", "my_create"]
    assert all(v.internal for v in grouped.internal_views)

    flat = svc.list_views(db_session, SCOPE, FC, OWNER, translator)
    assert [v.id for v in flat] == [second.id, first.id, "all_data", "my_follow", "my_create"]


def test_internal_views_depend_on_view_type(db_session):
    translator = Translator("en_US")
    bug = svc.grouped_list(db_session, SCOPE, UserViewType.BUG, OWNER, translator)
    assert "my_assign" in [v.id for v in bug.internal_views]
    plan = svc.grouped_list(db_session, SCOPE, UserViewType.TEST_PLAN, OWNER, translator)
    assert [v.name for v in plan.internal_views][-1] == "Archived"


def test_unique_constraint_backs_up_add_check(db_session, monkeypatch):
    _add(db_session, "raced")
    # Simulate two adds that both passed the pre-check
    monkeypatch.setattr(svc, "check_add_exist", lambda *a, **k: None)
    with pytest.raises(UserViewExistError):
        _add(db_session, "raced")
    assert db_session.query(UserView).filter_by(name="raced", user_id=OWNER).count() == 1
    # The session is usable again after the rollback
    assert _add(db_session, "after race").pos == 10000


def test_unique_constraint_backs_up_update_check(db_session, monkeypatch):
    a = _add(db_session, "left")
    _add(db_session, "right")
    monkeypatch.setattr(svc, "check_update_exist", lambda *a, **k: None)
    with pytest.raises(UserViewExistError):
        svc.update_view(db_session, UserViewUpdateRequest(id=a.id, name="right"), FC, OWNER)
    assert db_session.get(UserView, a.id).name == "left"


def test_failed_add_leaves_nothing_behind(db_session, monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("condition insert failed")

    monkeypatch.setattr(svc, "_add_conditions", _boom)
    with pytest.raises(RuntimeError):
        _add(db_session, "half", conditions=[CombineCondition(name="a", operator="eq", value="b")])
    assert db_session.query(UserView).filter_by(name="half").count() == 0
    assert db_session.query(UserViewCondition).count() == 0


def test_failed_update_keeps_old_conditions(db_session, monkeypatch):
    view = _add(db_session, "stable", conditions=[CombineCondition(name="a", operator="eq", value="b")])

    def _boom(*args, **kwargs):
        raise RuntimeError("condition insert failed")

    monkeypatch.setattr(svc, "_add_conditions", _boom)
    with pytest.raises(RuntimeError):
        svc.update_view(
            db_session,
            UserViewUpdateRequest(id=view.id, name="renamed", conditions=[]),
            FC,
            OWNER,
        )
    assert db_session.get(UserView, view.id).name == "stable"
    rows = db_session.query(UserViewCondition).filter_by(user_view_id=view.id).all()
    assert [(r.name, r.value) for r in rows] == [("a", "b")]


def test_failed_delete_keeps_the_view(db_session, monkeypatch):
    view = _add(db_session, "kept", conditions=[CombineCondition(name="a", operator="eq", value="b")])

    def _boom(*args, **kwargs):
        raise RuntimeError("delete failed")

    monkeypatch.setattr(svc.crud_view, "delete_view", _boom)
    with pytest.raises(RuntimeError):
        svc.delete_view(db_session, view.id, OWNER)
    assert db_session.get(UserView, view.id) is not None
    assert db_session.query(UserViewCondition).filter_by(user_view_id=view.id).count() == 1


def test_add_update_and_get_return_the_same_conditions(db_session):
    translator = Translator("en_US")
    conditions = [
        CombineCondition(name="flag", operator="eq", value=True),
        CombineCondition(name="range", operator="between", value={"start": 1, "end": 2}),
        CombineCondition(name="ids", operator="in", value=["x", 2]),
    ]

    def by_name(dto):
        return sorted(dto.conditions, key=lambda c: c.name)

    added = _add(db_session, "same shape", conditions=conditions)
    fetched = svc.get_view(db_session, added.id, FC, OWNER, translator)
    assert by_name(added) == by_name(fetched)
    assert [c.value for c in by_name(fetched)] == ["true", ["x", 2], '{"start": 1, "end": 2}']

    updated = svc.update_view(
        db_session, UserViewUpdateRequest(id=added.id, conditions=conditions), FC, OWNER
    )
    assert by_name(updated) == by_name(fetched)
