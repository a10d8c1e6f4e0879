# ruff: noqa: E402
# File: /tests/conftest.py
import pathlib
import sys
from dataclasses import dataclass
from typing import Dict

# Make repo root importable as "testdesk"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from testdesk.db import Base
from testdesk.main import app
from testdesk.models import Project, ProjectMember, ProjectRobot, User
from testdesk.security import create_access_token

TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# pysqlite defers BEGIN on its own; emit it ourselves so SAVEPOINTs nest inside
# the per-test transaction and a service-level rollback stays inside the test
@event.listens_for(engine, "connect")
def _sqlite_no_implicit_begin(dbapi_connection, _record):
    dbapi_connection.isolation_level = None


@event.listens_for(engine, "begin")
def _sqlite_begin(conn):
    conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session", autouse=True)
def _create_schema():
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    connection = engine.connect()
    trans = connection.begin()
    try:
        session = TestingSessionLocal(bind=connection, join_transaction_mode="create_savepoint")
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def client(db_session):
    from testdesk.db.session import get_db  # late import to avoid circulars

    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------
# Seed data
# ---------------------------


def make_user(db: Session, user_id: str, *, deleted: bool = False, hashed_password: str = "x") -> User:
    user = User(
        id=user_id,
        email=f"{user_id}@example.com",
        name=user_id,
        hashed_password=hashed_password,
        deleted=deleted,
    )
    db.add(user)
    db.flush()
    return user


def auth_headers(user_id: str) -> Dict[str, str]:
    token = create_access_token({"sub": user_id})
    return {"Authorization": f"Bearer {token}"}


@dataclass
class NoticeData:
    project_id: str = "project-message-test"
    other_project_id: str = "project-message-test-1"
    empty_project_id: str = "project-message-test-2"
    missing_project_id: str = "project-message-test-3"
    in_site_robot_id: str = "test_message_robot1"
    lark_robot_id: str = "test_message_robot2"
    other_in_site_robot_id: str = "test_message_robot3"
    other_lark_robot_id: str = "test_message_robot4"
    admin_id: str = "project-message-admin"
    deleted_user_id: str = "project-message-user-del"


@pytest.fixture()
def notice_data(db_session) -> NoticeData:
    """
    Three projects. `project_id` and `other_project_id` each have an in-site
    robot and a Lark robot; users 1..8 are members of both; the deleted user
    is a member too.
    """
    data = NoticeData()
    for pid in (data.project_id, data.other_project_id, data.empty_project_id):
        db_session.add(Project(id=pid, name=pid, organization_id="org-1"))
    db_session.flush()

    db_session.add_all(
        [
            ProjectRobot(id=data.in_site_robot_id, project_id=data.other_project_id, name="in-site", platform="IN_SITE"),
            ProjectRobot(id=data.lark_robot_id, project_id=data.other_project_id, name="lark", platform="LARK"),
            ProjectRobot(id=data.other_in_site_robot_id, project_id=data.project_id, name="in-site", platform="IN_SITE"),
            ProjectRobot(id=data.other_lark_robot_id, project_id=data.project_id, name="lark", platform="LARK"),
            ProjectRobot(id="test_message_robot5", project_id=data.empty_project_id, name="in-site", platform="IN_SITE"),
        ]
    )

    user_ids = [data.admin_id] + [f"project-message-user-{i}" for i in range(1, 9)]
    for uid in user_ids:
        make_user(db_session, uid)
    make_user(db_session, data.deleted_user_id, deleted=True)

    for pid in (data.project_id, data.other_project_id):
        for uid in user_ids + [data.deleted_user_id]:
            db_session.add(ProjectMember(project_id=pid, user_id=uid))
    db_session.flush()
    return data


@pytest.fixture()
def user_factory(db_session):
    def _make(user_id: str, **kwargs) -> User:
        return make_user(db_session, user_id, **kwargs)

    return _make


@pytest.fixture()
def headers_for():
    return auth_headers
