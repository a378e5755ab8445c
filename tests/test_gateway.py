"""Tests for features/resources/services.py (ResourceGateway) against in-memory SQLite."""

import sqlite3
from datetime import datetime, timedelta

import pytest
from sqlalchemy import event
from sqlmodel import Session, select

from waman.core.errors import NotFoundError, TransientStorageError, UnknownResourceKind, ValidationError
from waman.db.models.contacts import Contact
from waman.db.models.partners import Partner
from waman.db.models.projects import Project
from waman.db.retry import RetryExecutor
from waman.db.session import ConnectionPool, build_engine, init_db
from waman.features.resources.services import ResourceGateway, parse_record_id


class ExplodingExecutor:
    """Executor that fails the test if any storage call is attempted."""

    def execute(self, operation, max_attempts=None):
        raise AssertionError("storage must not be called")


# =============================================================================
# parse_record_id
# =============================================================================


class TestParseRecordId:
    @pytest.mark.parametrize("value, expected", [(5, 5), ("12", 12), (" 7 ", 7)])
    def test_numeric(self, value, expected):
        assert parse_record_id(value, "update") == expected

    @pytest.mark.parametrize("value", [None, "", "  ", 0, "0"])
    def test_missing(self, value):
        with pytest.raises(ValidationError, match="ID is required for delete"):
            parse_record_id(value, "delete")

    @pytest.mark.parametrize("value", ["abc", "1.5", True])
    def test_not_numeric(self, value):
        with pytest.raises(ValidationError, match="ID must be numeric"):
            parse_record_id(value, "update")


# =============================================================================
# Validation before storage
# =============================================================================


class TestValidationBeforeStorage:
    def test_update_without_id_never_touches_storage(self, session):
        gateway = ResourceGateway(session, ExplodingExecutor())

        with pytest.raises(ValidationError, match="ID is required for update"):
            gateway.update("partner", None, {"name": "X"})

    def test_zero_id_never_touches_storage(self, session):
        gateway = ResourceGateway(session, ExplodingExecutor())

        with pytest.raises(ValidationError, match="ID is required for update"):
            gateway.update("partner", 0, {"name": "X"})

    def test_delete_without_id_never_touches_storage(self, session):
        gateway = ResourceGateway(session, ExplodingExecutor())

        with pytest.raises(ValidationError, match="ID is required for delete"):
            gateway.delete("project", "")

    @pytest.mark.parametrize("operation", ["list", "create"])
    def test_unknown_kind(self, session, operation):
        gateway = ResourceGateway(session, ExplodingExecutor())

        with pytest.raises(UnknownResourceKind):
            if operation == "list":
                gateway.list("user")
            else:
                gateway.create("user", {"name": "x"})


# =============================================================================
# CRUD round trips
# =============================================================================


class TestPartnerLifecycle:
    def test_create_list_update_delete(self, gateway, session, partner_payload):
        created = gateway.create("partner", partner_payload)

        assert isinstance(created["id"], int)
        assert created["active"] is True
        assert created["partnerOrder"] == 0
        assert "logo" not in created
        assert "createdAt" in created

        row = session.get(Partner, created["id"])
        assert row.order == 0
        assert row.logo is None

        listed = gateway.list("partner")
        assert [p["id"] for p in listed] == [created["id"]]

        updated = gateway.update("partner", created["id"], {"name": "ONEE - Branche Eau"})
        assert updated["name"] == "ONEE - Branche Eau"
        assert updated["category"] == "Institutionnel"

        gateway.delete("partner", created["id"])
        assert gateway.list("partner") == []

    def test_update_does_not_reset_flags(self, gateway):
        created = gateway.create("partner", {"name": "A", "category": "B", "active": False, "partnerOrder": 4})

        updated = gateway.update("partner", created["id"], {"name": "A2"})

        assert updated["active"] is False
        assert updated["partnerOrder"] == 4

    def test_update_ignores_id_and_created_at_in_patch(self, gateway, session):
        created = gateway.create("partner", {"name": "A", "category": "B"})
        before = session.get(Partner, created["id"]).created_at

        gateway.update(
            "partner",
            created["id"],
            {"id": 999, "createdAt": "2000-01-01T00:00:00", "category": "C"},
        )

        row = session.get(Partner, created["id"])
        assert row.category == "C"
        assert row.created_at == before
        assert session.get(Partner, 999) is None

    def test_update_refreshes_updated_at(self, gateway, session):
        created = gateway.create("partner", {"name": "A", "category": "B"})
        row = session.get(Partner, created["id"])
        row.updated_at = datetime(2000, 1, 1)
        session.add(row)
        session.commit()

        gateway.update("partner", created["id"], {"name": "A2"})

        session.refresh(row)
        assert row.updated_at > datetime(2000, 1, 1)

    def test_partners_are_listed_by_display_order(self, gateway):
        for name, order in (("C", 3), ("A", 1), ("B", 2)):
            gateway.create("partner", {"name": name, "category": "x", "partnerOrder": order})

        assert [p["name"] for p in gateway.list("partner")] == ["A", "B", "C"]


class TestProject:
    def test_create_keeps_achievements_and_defaults_featured(self, gateway, session, project_payload):
        created = gateway.create("project", project_payload)

        assert created["achievements"] == ["a", "b"]
        assert created["featured"] is False
        assert created["titleFr"] == "Station d'épuration"

        row = session.get(Project, created["id"])
        assert row.title_fr == "Station d'épuration"
        assert row.achievements == ["a", "b"]

    def test_create_update_list(self, gateway, project_payload):
        created = gateway.create("project", project_payload)

        gateway.update("project", created["id"], {"status": "completed"})
        listed = gateway.list("project")

        assert len(listed) == 1
        [project] = listed
        assert project["id"] == created["id"]
        assert project["status"] == "completed"
        assert project["titleFr"] == "Station d'épuration"
        assert project["achievements"] == ["a", "b"]

    def test_missing_required_field_fails_in_storage(self, gateway, project_payload):
        payload = dict(project_payload)
        del payload["client"]

        with pytest.raises(Exception) as exc_info:
            gateway.create("project", payload)

        assert not isinstance(exc_info.value, ValidationError)


class TestContactOrderingAndCap:
    def test_newest_first(self, gateway, session):
        base = datetime(2024, 1, 1)
        for i in range(3):
            session.add(Contact(name=f"c{i}", email="e@x.ma", message="m", created_at=base + timedelta(days=i)))
        session.commit()

        names = [c["name"] for c in gateway.list("contact")]

        assert names == ["c2", "c1", "c0"]

    def test_contacts_capped_at_200(self, gateway, session):
        for i in range(205):
            session.add(Contact(name=f"c{i}", email="e@x.ma", message="m"))
        session.commit()

        listed = gateway.list("contact")

        assert len(listed) == 200
        assert all(c["status"] == "nouveau" for c in listed)

    def test_blog_posts_capped_at_50(self, gateway):
        for i in range(52):
            gateway.create("blog_post", {"titleFr": f"Article {i}", "content": "...", "category": "news"})

        assert len(gateway.list("blog_post")) == 50

    def test_empty_list(self, gateway):
        assert gateway.list("contact") == []


# =============================================================================
# Failures
# =============================================================================


class TestFailures:
    def test_delete_unknown_id_leaves_store_untouched(self, gateway, session):
        gateway.create("partner", {"name": "A", "category": "B"})
        count_before = len(session.exec(select(Partner)).all())

        with pytest.raises(NotFoundError):
            gateway.delete("partner", 9999)

        assert len(session.exec(select(Partner)).all()) == count_before

    def test_update_unknown_id(self, gateway):
        with pytest.raises(NotFoundError):
            gateway.update("partner", 9999, {"name": "ghost"})

    def test_transient_list_failure_is_retried(self, session, sleeps):
        calls = {"n": 0}
        executor = RetryExecutor(lambda: None, sleep=sleeps.append)
        gateway = ResourceGateway(session, executor)
        original = gateway._repository

        def flaky_repository(descriptor):
            repo = original(descriptor)
            find_many = repo.find_many

            def find_many_once_broken(**kwargs):
                calls["n"] += 1
                if calls["n"] == 1:
                    raise TransientStorageError("server closed the connection unexpectedly")
                return find_many(**kwargs)

            repo.find_many = find_many_once_broken
            return repo

        gateway._repository = flaky_repository

        assert gateway.list("partner") == []
        assert calls["n"] == 2
        assert sleeps == pytest.approx([0.1])


# =============================================================================
# Retry on write paths (dropped connection)
# =============================================================================


class DropConnectionOnce:
    """
    Fails the next statement matching `verb` on `table` the way pysqlite does
    on a dead connection, so SQLAlchemy invalidates it mid-transaction.
    """

    def __init__(self, engine):
        self.target = None
        event.listen(engine, "do_execute", self)

    def arm(self, verb: str, table: str) -> None:
        self.target = (verb.upper(), table.upper())

    def __call__(self, cursor, statement, parameters, context):
        if self.target is not None:
            verb, table = self.target
            sql = statement.lstrip().upper()
            if sql.startswith(verb) and table in sql:
                self.target = None
                raise sqlite3.ProgrammingError("Cannot operate on a closed database.")
        return False


@pytest.fixture
def file_engine(tmp_path):
    """File-backed database: an invalidated connection is replaced without losing the data."""
    engine = build_engine(f"sqlite:///{tmp_path / 'retry.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def dropper(file_engine):
    return DropConnectionOnce(file_engine)


@pytest.fixture
def retrying_gateway(file_engine, sleeps):
    executor = RetryExecutor(ConnectionPool(file_engine).reset_connection, sleep=sleeps.append)
    with Session(file_engine) as s:
        yield ResourceGateway(s, executor)


def _insert_partner(engine, name="A") -> int:
    with Session(engine) as s:
        row = Partner(name=name, category="B")
        s.add(row)
        s.commit()
        return row.id


def _partners(engine):
    with Session(engine) as s:
        return s.exec(select(Partner)).all()


class TestWriteRetries:
    def test_create_recovers_from_dropped_insert(self, file_engine, dropper, retrying_gateway, sleeps):
        dropper.arm("INSERT", "partners")

        created = retrying_gateway.create("partner", {"name": "A", "category": "B"})

        assert created["name"] == "A"
        assert [p.id for p in _partners(file_engine)] == [created["id"]]
        assert sleeps == pytest.approx([0.1])

    def test_update_recovers_from_dropped_lookup(self, file_engine, dropper, retrying_gateway, sleeps):
        id_ = _insert_partner(file_engine)
        dropper.arm("SELECT", "partners")

        updated = retrying_gateway.update("partner", id_, {"name": "A2"})

        assert updated["name"] == "A2"
        assert [p.name for p in _partners(file_engine)] == ["A2"]
        assert sleeps == pytest.approx([0.1])

    def test_update_recovers_from_dropped_write(self, file_engine, dropper, retrying_gateway, sleeps):
        id_ = _insert_partner(file_engine)
        dropper.arm("UPDATE", "partners")

        retrying_gateway.update("partner", id_, {"name": "A2"})

        assert [p.name for p in _partners(file_engine)] == ["A2"]
        assert sleeps == pytest.approx([0.1])

    def test_delete_recovers_from_dropped_lookup(self, file_engine, dropper, retrying_gateway, sleeps):
        id_ = _insert_partner(file_engine)
        dropper.arm("SELECT", "partners")

        retrying_gateway.delete("partner", id_)

        assert _partners(file_engine) == []
        assert sleeps == pytest.approx([0.1])

    def test_delete_recovers_from_dropped_write(self, file_engine, dropper, retrying_gateway, sleeps):
        id_ = _insert_partner(file_engine)
        dropper.arm("DELETE", "partners")

        retrying_gateway.delete("partner", id_)

        assert _partners(file_engine) == []
        assert sleeps == pytest.approx([0.1])

    def test_not_found_after_lookup_is_not_retried(self, retrying_gateway, sleeps):
        with pytest.raises(NotFoundError):
            retrying_gateway.update("partner", 9999, {"name": "ghost"})

        assert sleeps == []
