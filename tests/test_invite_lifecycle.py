"""
Tests for invite issuing, the invite state machine and selection recording
"""

import pytest
from datetime import datetime
from sqlalchemy import create_engine, event as sa_event
from sqlalchemy.orm import sessionmaker

from app.core.db import Base
from app.core.errors import AlreadyUsed, EventMissing, InvalidSelection, NotFound, TokenAllocationFailed
from app.models import Event, Invite, Selection
from app.schemas.event import EventCreate, MenuUpdate
from app.schemas.menu import Menu
from app.services import token_service
from app.services.event_service import EventService
from app.services.invite_service import InviteStateMachine
from app.services.selection_service import SelectionRecorder
from app.services.token_service import TokenIssuer

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_lifecycle.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def friday(db_session):
    """A cottagecore date night with the theme's default menu"""
    return EventService.create_event(db_session, EventCreate(title="Friday", theme_id="cottagecore-classic"))

def assert_used_iff_selected(invite_id):
    """used_at is set exactly when a selection row exists"""
    db = TestingSessionLocal()
    try:
        invite = db.query(Invite).filter(Invite.id == invite_id).first()
        selections = db.query(Selection).filter(Selection.invite_id == invite_id).count()
        assert selections in (0, 1)
        assert (invite.used_at is not None) == (selections == 1)
        return invite, selections
    finally:
        db.close()

# -------- Token issuer --------

def test_issue_creates_pending_invite(db_session, friday):
    invite = TokenIssuer.issue(db_session, friday.id, "sam@example.com")

    assert invite.event_id == friday.id
    assert invite.recipient_email == "sam@example.com"
    assert invite.used_at is None
    assert invite.is_used == False
    assert invite.id != invite.token
    assert len(invite.token) == 22
    assert all(c.isalnum() or c in "-_" for c in invite.token)

def test_issue_gives_distinct_tokens(db_session, friday):
    tokens = {TokenIssuer.issue(db_session, friday.id).token for _ in range(20)}
    assert len(tokens) == 20

def test_issue_for_unknown_event(db_session):
    with pytest.raises(NotFound):
        TokenIssuer.issue(db_session, "nope")

def test_issue_regenerates_on_collision(db_session, friday, monkeypatch):
    first = TokenIssuer.issue(db_session, friday.id)
    tokens = iter([first.token, "fresh-token-000000000A"])
    monkeypatch.setattr(token_service, "generate_token", lambda: next(tokens))

    second = TokenIssuer.issue(db_session, friday.id)

    assert second.token == "fresh-token-000000000A"
    assert TokenIssuer.resolve(db_session, first.token).id == first.id

def test_issue_gives_up_when_every_token_collides(db_session, friday, monkeypatch):
    first = TokenIssuer.issue(db_session, friday.id)
    monkeypatch.setattr(token_service, "generate_token", lambda: first.token)

    with pytest.raises(TokenAllocationFailed):
        TokenIssuer.issue(db_session, friday.id)
    assert db_session.query(Invite).count() == 1

def test_resolve(db_session, friday):
    invite = TokenIssuer.issue(db_session, friday.id)
    assert TokenIssuer.resolve(db_session, invite.token).id == invite.id

    with pytest.raises(NotFound):
        TokenIssuer.resolve(db_session, "not-a-token")
    with pytest.raises(NotFound):
        TokenIssuer.resolve(db_session, invite.token.upper() + "x")

def test_invite_url(monkeypatch):
    monkeypatch.setattr(token_service.settings, "BASE_URL", "https://cottage.example/")
    assert token_service.invite_url("abc") == "https://cottage.example/invite/abc"

# -------- State machine --------

def test_check_usable_pending(db_session, friday):
    invite = TokenIssuer.issue(db_session, friday.id)
    event = InviteStateMachine.check_usable(db_session, invite)
    assert event.id == friday.id
    assert event.menu.is_complete()

def test_check_usable_after_use(db_session, friday):
    invite = TokenIssuer.issue(db_session, friday.id)
    SelectionRecorder.record(db_session, invite, "Pasta night", "Board games", "Romantic")

    with pytest.raises(AlreadyUsed):
        InviteStateMachine.check_usable(db_session, invite)
    # the read-only view still resolves the event
    assert InviteStateMachine.resolve_event(db_session, invite).id == friday.id

def test_dangling_invite_reports_event_missing(db_session):
    orphan = Invite(id="orphan", event_id="gone", token="orphan-token", used_at=None)
    db_session.add(orphan)
    db_session.commit()

    with pytest.raises(EventMissing):
        InviteStateMachine.check_usable(db_session, orphan)
    with pytest.raises(EventMissing):
        SelectionRecorder.record(db_session, orphan, "Pasta night", "Board games", "Romantic")
    assert_used_iff_selected("orphan")

# -------- Selection recorder --------

def test_record_marks_invite_used(db_session, friday):
    invite = TokenIssuer.issue(db_session, friday.id, "sam@example.com")

    selection = SelectionRecorder.record(
        db_session, invite, "Pasta night", "Board games", "Romantic", notes="Candles please"
    )

    assert selection.invite_id == invite.id
    assert selection.dinner_choice == "Pasta night"
    assert selection.notes == "Candles please"
    stored, count = assert_used_iff_selected(invite.id)
    assert count == 1
    assert stored.used_at is not None

def test_record_twice_is_already_used(db_session, friday):
    invite = TokenIssuer.issue(db_session, friday.id)
    SelectionRecorder.record(db_session, invite, "Pasta night", "Board games", "Romantic")

    with pytest.raises(AlreadyUsed):
        SelectionRecorder.record(db_session, invite, "Soup + fresh bread", "Cozy movie", "Playful")

    _, count = assert_used_iff_selected(invite.id)
    assert count == 1
    assert db_session.query(Selection).one().dinner_choice == "Pasta night"

def test_record_rechecks_stale_invite(db_session, friday):
    """A caller holding an old pending copy still gets AlreadyUsed"""
    invite = TokenIssuer.issue(db_session, friday.id)
    other = TestingSessionLocal()
    try:
        stale = other.query(Invite).filter(Invite.id == invite.id).first()
        assert stale.used_at is None

        SelectionRecorder.record(db_session, invite, "Pasta night", "Board games", "Romantic")

        with pytest.raises(AlreadyUsed):
            SelectionRecorder.record(other, stale, "Pasta night", "Board games", "Romantic")
    finally:
        other.close()
    assert_used_iff_selected(invite.id)

def test_invalid_selection_leaves_invite_pending(db_session, friday):
    invite = TokenIssuer.issue(db_session, friday.id)

    with pytest.raises(InvalidSelection) as exc_info:
        SelectionRecorder.record(db_session, invite, "Pasta night", "Skydiving", "Romantic")

    assert exc_info.value.fields == ["activity"]
    stored, count = assert_used_iff_selected(invite.id)
    assert count == 0
    assert stored.used_at is None

def test_concurrent_submission_loses_on_unique_constraint(db_session, friday):
    """The second writer is told AlreadyUsed, not a storage error"""
    invite = TokenIssuer.issue(db_session, friday.id)
    rival = TestingSessionLocal()
    raced = []

    # The rival commits after our re-check passed but before our insert lands
    @sa_event.listens_for(db_session, "before_flush")
    def rival_commits_first(session, flush_context, instances):
        if not raced:
            raced.append(True)
            rival_invite = rival.query(Invite).filter(Invite.id == invite.id).first()
            SelectionRecorder.record(rival, rival_invite, "Soup + fresh bread", "Cozy movie", "Playful")

    try:
        with pytest.raises(AlreadyUsed):
            SelectionRecorder.record(db_session, invite, "Pasta night", "Board games", "Romantic")
    finally:
        sa_event.remove(db_session, "before_flush", rival_commits_first)
        rival.close()

    assert raced == [True]
    stored, count = assert_used_iff_selected(invite.id)
    assert count == 1
    check = TestingSessionLocal()
    try:
        assert check.query(Selection).filter(Selection.invite_id == invite.id).one().dinner_choice == "Soup + fresh bread"
    finally:
        check.close()

def test_conditional_update_guards_used_at(db_session, friday):
    """If used_at was set without a selection row, nothing is committed"""
    invite = TokenIssuer.issue(db_session, friday.id)
    rival = TestingSessionLocal()
    raced = []

    @sa_event.listens_for(db_session, "before_flush")
    def rival_marks_used(session, flush_context, instances):
        if not raced:
            raced.append(True)
            row = rival.query(Invite).filter(Invite.id == invite.id).first()
            row.used_at = datetime(2024, 1, 1)
            rival.commit()

    try:
        with pytest.raises(AlreadyUsed):
            SelectionRecorder.record(db_session, invite, "Pasta night", "Board games", "Romantic")
    finally:
        sa_event.remove(db_session, "before_flush", rival_marks_used)
        rival.close()

    check = TestingSessionLocal()
    try:
        assert check.query(Selection).filter(Selection.invite_id == invite.id).count() == 0
    finally:
        check.close()

def test_menu_edit_applies_to_issued_invites(db_session):
    event = EventService.create_event(db_session, EventCreate(
        title="Friday",
        theme_id="cottagecore-classic",
        menu=Menu(dinner=["Soup", "Pasta"], activity=["Board games"], mood=["Romantic"]),
    ))
    first = TokenIssuer.issue(db_session, event.id)
    second = TokenIssuer.issue(db_session, event.id)

    EventService.update_menu(db_session, event.id, MenuUpdate(
        menu=Menu(dinner=["Soup", "Tacos"], activity=["Board games"], mood=["Romantic"]),
    ))

    with pytest.raises(InvalidSelection):
        SelectionRecorder.record(db_session, first, "Pasta", "Board games", "Romantic")
    assert_used_iff_selected(first.id)

    selection = SelectionRecorder.record(db_session, second, "Tacos", "Board games", "Romantic")
    assert selection.dinner_choice == "Tacos"

def test_menu_edited_in_another_session_is_seen(db_session):
    event = EventService.create_event(db_session, EventCreate(
        title="Friday",
        theme_id="cottagecore-classic",
        menu=Menu(dinner=["Soup", "Pasta"], activity=["Board games"], mood=["Romantic"]),
    ))
    invite = TokenIssuer.issue(db_session, event.id)
    assert InviteStateMachine.check_usable(db_session, invite).menu.dinner == ["Soup", "Pasta"]

    admin = TestingSessionLocal()
    try:
        EventService.update_menu(admin, event.id, MenuUpdate(
            menu=Menu(dinner=["Soup", "Tacos"], activity=["Board games"], mood=["Romantic"]),
        ))
    finally:
        admin.close()

    with pytest.raises(InvalidSelection):
        SelectionRecorder.record(db_session, invite, "Pasta", "Board games", "Romantic")
    SelectionRecorder.record(db_session, invite, "Tacos", "Board games", "Romantic")

# -------- Event administration --------

def test_create_event_uses_theme_defaults(db_session, friday):
    assert friday.menu.dinner[1] == "Pasta night"
    assert friday.blurb.startswith("Warm bread")
    assert friday.date is None

def test_create_event_rejects_bad_input(db_session):
    from app.core.errors import ValidationFailed

    with pytest.raises(ValidationFailed):
        EventService.create_event(db_session, EventCreate(title="  ", theme_id="cottagecore-classic"))
    with pytest.raises(ValidationFailed):
        EventService.create_event(db_session, EventCreate(title="Friday", theme_id="space-disco"))
    with pytest.raises(ValidationFailed):
        EventService.create_event(db_session, EventCreate(
            title="Friday", theme_id="cottagecore-classic", menu=Menu(dinner=["Soup"]),
        ))
    assert db_session.query(Event).count() == 0

def test_update_menu_requires_every_group(db_session, friday):
    from app.core.errors import ValidationFailed

    with pytest.raises(ValidationFailed):
        EventService.update_menu(db_session, friday.id, MenuUpdate(
            menu=Menu(dinner=["Soup"], activity=[], mood=["Romantic"]),
        ))
    db_session.expire_all()
    assert EventService.get_event(db_session, friday.id).menu.activity[0] == "Bake something sweet"

def test_list_events_counts_invites(db_session, friday):
    TokenIssuer.issue(db_session, friday.id)
    TokenIssuer.issue(db_session, friday.id)
    EventService.create_event(db_session, EventCreate(title="Saturday", theme_id="cottagecore-classic"))

    summaries = {s.title: s for s in EventService.list_events(db_session)}
    assert summaries["Friday"].invite_count == 2
    assert summaries["Friday"].theme_name == "Cottagecore Classic"
    assert summaries["Saturday"].invite_count == 0

def test_delete_event_cascades(db_session, friday):
    used = TokenIssuer.issue(db_session, friday.id)
    TokenIssuer.issue(db_session, friday.id)
    SelectionRecorder.record(db_session, used, "Pasta night", "Board games", "Romantic")
    keep = EventService.create_event(db_session, EventCreate(title="Saturday", theme_id="cottagecore-classic"))
    kept_invite = TokenIssuer.issue(db_session, keep.id)

    EventService.delete_event(db_session, friday.id)

    assert db_session.query(Event).count() == 1
    assert [i.id for i in db_session.query(Invite).all()] == [kept_invite.id]
    assert db_session.query(Selection).count() == 0
    with pytest.raises(NotFound):
        EventService.delete_event(db_session, friday.id)
