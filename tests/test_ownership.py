"""Tests for owner-scoped loading at the store level"""

import pytest
from datetime import date
from uuid import uuid4

from lexcase.models import AuthProvider, Case, Document, Note, Speech, User
from lexcase.services.ownership import find_owned, get_owned, get_owned_case, list_owned
from lexcase.utils.errors import NotFound


async def _user(session, name):
    user = User(
        id=str(uuid4()),
        name=name,
        email=f"{name.lower()}@x.com",
        password_hash="x",
        auth_provider=AuthProvider.LOCAL,
        avatar="",
    )
    session.add(user)
    await session.commit()
    return user


async def _case(session, owner, number):
    case = Case(
        id=str(uuid4()),
        lawyer_id=owner.id,
        case_number=number,
        case_title="State v. Doe",
        client_name="John Doe",
        court_name="District Court",
        case_type="Criminal",
        filing_date=date(2024, 3, 1),
    )
    session.add(case)
    await session.commit()
    return case


@pytest.mark.asyncio
async def test_case_loads_only_for_owner(database):
    async with database.session() as session:
        amy = await _user(session, "Amy")
        bob = await _user(session, "Bob")
        case = await _case(session, amy, "C-1")

        assert (await get_owned_case(session, case.id, amy)).id == case.id
        assert await find_owned(session, Case, case.id, bob) is None

        with pytest.raises(NotFound, match="Case not found"):
            await get_owned_case(session, case.id, bob)


@pytest.mark.asyncio
@pytest.mark.parametrize("model", [Note, Speech])
async def test_entries_follow_parent_case(database, model):
    """Test that a note or speech is owned through its case, not its author"""
    async with database.session() as session:
        amy = await _user(session, "Amy")
        bob = await _user(session, "Bob")
        case = await _case(session, amy, "C-1")

        # Written by Bob but attached to Amy's case
        entry = model(id=str(uuid4()), case_id=case.id, title="T", content="C", created_by=bob.id)
        session.add(entry)
        await session.commit()

        assert (await get_owned(session, model, entry.id, amy)).id == entry.id
        with pytest.raises(NotFound):
            await get_owned(session, model, entry.id, bob, "Entry not found")


@pytest.mark.asyncio
async def test_orphans_belong_to_nobody(database):
    """Test that records whose case no longer exists are unreachable"""
    async with database.session() as session:
        amy = await _user(session, "Amy")
        note = Note(id=str(uuid4()), case_id="deleted-case", title="T", content="C", created_by=amy.id)
        session.add(note)
        await session.commit()

        assert await find_owned(session, Note, note.id, amy) is None
        assert await list_owned(session, Note, amy) == []


@pytest.mark.asyncio
async def test_list_owned_scopes_and_filters(database):
    async with database.session() as session:
        amy = await _user(session, "Amy")
        bob = await _user(session, "Bob")
        amy_case = await _case(session, amy, "C-1")
        bob_case = await _case(session, bob, "C-2")

        for case, owner in ((amy_case, amy), (bob_case, bob)):
            session.add(Document(
                id=str(uuid4()),
                case_id=case.id,
                file_name="brief.pdf",
                file_path=f"/tmp/{case.id}.pdf",
                file_url=f"/uploads/{case.id}.pdf",
                file_size=1,
                uploaded_by=owner.id,
            ))
        await session.commit()

        documents = await list_owned(session, Document, amy)
        assert [d.case_id for d in documents] == [amy_case.id]

        assert await list_owned(session, Document, amy, Document.case_id == bob_case.id) == []
        assert [c.id for c in await list_owned(session, Case, bob)] == [bob_case.id]
