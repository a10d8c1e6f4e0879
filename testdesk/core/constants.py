# File: /testdesk/core/constants.py | Version: 1.0 | Title: Closed enums for user views and notice message tasks
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional


# ---------------------------
# User views
# ---------------------------


class ConditionValueType(str, Enum):
    STRING = "STRING"
    INT = "INT"
    FLOAT = "FLOAT"
    ARRAY = "ARRAY"


class SearchMode(str, Enum):
    AND = "AND"
    OR = "OR"


class InternalUserView(Enum):
    """
    Built-in views. Never stored; the value is the fixed display position and
    the lower-cased member name doubles as the reserved view id.
    """

    ALL_DATA = 1
    MY_FOLLOW = 2
    MY_CREATE = 3
    MY_ASSIGN = 4
    MY_REVIEW = 5
    ARCHIVED = 6

    @property
    def view_id(self) -> str:
        return self.name.lower()

    @property
    def message_key(self) -> str:
        return "user_view." + self.view_id

    @classmethod
    def match(cls, view_id: Optional[str]) -> Optional["InternalUserView"]:
        if not view_id:
            return None
        for member in cls:
            if member.name.lower() == view_id.strip().lower():
                return member
        return None


class UserViewType(str, Enum):
    FUNCTIONAL_CASE = "FUNCTIONAL_CASE"
    BUG = "BUG"
    CASE_REVIEW = "CASE_REVIEW"
    API_DEFINITION = "API_DEFINITION"
    API_CASE = "API_CASE"
    API_SCENARIO = "API_SCENARIO"
    TEST_PLAN = "TEST_PLAN"

    @property
    def internal_views(self) -> List[InternalUserView]:
        return list(_INTERNAL_VIEWS[self])


_COMMON = (InternalUserView.ALL_DATA, InternalUserView.MY_FOLLOW, InternalUserView.MY_CREATE)

_INTERNAL_VIEWS: Dict[UserViewType, tuple] = {
    UserViewType.FUNCTIONAL_CASE: _COMMON,
    UserViewType.BUG: _COMMON + (InternalUserView.MY_ASSIGN,),
    UserViewType.CASE_REVIEW: _COMMON + (InternalUserView.MY_REVIEW,),
    UserViewType.API_DEFINITION: _COMMON,
    UserViewType.API_CASE: _COMMON,
    UserViewType.API_SCENARIO: _COMMON,
    UserViewType.TEST_PLAN: _COMMON + (InternalUserView.ARCHIVED,),
}


# ---------------------------
# Notice / message tasks
# ---------------------------


class TaskType(str, Enum):
    API_DEFINITION_TASK = "API_DEFINITION_TASK"
    API_SCENARIO_TASK = "API_SCENARIO_TASK"
    API_REPORT_TASK = "API_REPORT_TASK"
    FUNCTIONAL_CASE_TASK = "FUNCTIONAL_CASE_TASK"
    CASE_REVIEW_TASK = "CASE_REVIEW_TASK"
    BUG_TASK = "BUG_TASK"
    TEST_PLAN_TASK = "TEST_PLAN_TASK"
    SCHEDULE_TASK = "SCHEDULE_TASK"


class Event(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    EXECUTE_SUCCESSFUL = "EXECUTE_SUCCESSFUL"
    EXECUTE_FAILED = "EXECUTE_FAILED"
    COMMENT = "COMMENT"
    AT = "AT"
    REVIEW_PASSED = "REVIEW_PASSED"
    REVIEW_FAIL = "REVIEW_FAIL"


class RelatedUser(str, Enum):
    """Receiver placeholders resolved against the triggering resource at send time."""

    CREATOR = "CREATOR"
    FOLLOW_PEOPLE = "FOLLOW_PEOPLE"
    OPERATOR = "OPERATOR"

    @classmethod
    def values(cls) -> set:
        return {m.value for m in cls}


class RobotPlatform(str, Enum):
    IN_SITE = "IN_SITE"
    MAIL = "MAIL"
    WE_COM = "WE_COM"
    DING_TALK = "DING_TALK"
    LARK = "LARK"
    CUSTOM = "CUSTOM"
