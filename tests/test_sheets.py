import json

import pytest

from plotpad.charts import ChartKind
from plotpad.exceptions import SheetNotFoundError, SheetLockedError, SheetUnlockError
from plotpad.models import Sheet
from plotpad.vault import UnlockFailure

CSV = "a,b\n1,2\n3,4\n5,6"


async def locked_sheet(service, password="pw"):
    sheet = await service.create("Secret")
    await service.update_content(sheet.id, CSV)
    return await service.lock(sheet.id, password)


@pytest.mark.asyncio
async def test_create_assigns_ids_and_default_names(sheet_service):
    first = await sheet_service.create()
    second = await sheet_service.create("  Budget  ")
    assert (first.id, first.name) == (1, "Untitled 1")
    assert (second.id, second.name) == (2, "Budget")
    assert first.content == ""
    assert not first.is_encrypted


@pytest.mark.asyncio
async def test_get_missing_sheet(sheet_service):
    with pytest.raises(SheetNotFoundError):
        await sheet_service.get(99)


@pytest.mark.asyncio
async def test_rename_returns_new_value(sheet_service):
    sheet = await sheet_service.create("Old")
    renamed = await sheet_service.rename(sheet.id, "New")
    assert renamed.name == "New"
    assert sheet.name == "Old"
    assert (await sheet_service.get(sheet.id)).name == "New"
    with pytest.raises(ValueError):
        await sheet_service.rename(sheet.id, "   ")


@pytest.mark.asyncio
async def test_tags_allow_duplicates_and_remove_first(sheet_service):
    sheet = await sheet_service.create()
    for tag in ("q1", "finance", "q1"):
        sheet = await sheet_service.add_tag(sheet.id, tag)
    assert sheet.tags == ("q1", "finance", "q1")
    sheet = await sheet_service.remove_tag(sheet.id, "q1")
    assert sheet.tags == ("finance", "q1")
    assert (await sheet_service.remove_tag(sheet.id, "absent")).tags == ("finance", "q1")
    with pytest.raises(ValueError):
        await sheet_service.add_tag(sheet.id, "")


@pytest.mark.asyncio
async def test_search_matches_name_or_tag_ignoring_case(sheet_service):
    budget = await sheet_service.create("Budget 2024")
    notes = await sheet_service.create("Notes")
    await sheet_service.add_tag(notes.id, "Finance")
    assert [s.id for s in await sheet_service.search("budget")] == [budget.id]
    assert [s.id for s in await sheet_service.search("FIN")] == [notes.id]
    assert len(await sheet_service.search("")) == 2
    assert await sheet_service.search("zzz") == []


@pytest.mark.asyncio
async def test_locked_sheet_rejects_content_edits(sheet_service):
    sheet = await locked_sheet(sheet_service)
    with pytest.raises(SheetLockedError):
        await sheet_service.update_content(sheet.id, "x,y\n1,2")


@pytest.mark.asyncio
async def test_lock_and_unlock(sheet_service, secret_store):
    sheet = await locked_sheet(sheet_service)
    stored = await sheet_service.get(sheet.id)
    assert stored.is_encrypted
    assert stored.content != CSV
    assert secret_store.keys() == [stored.vault_ref]

    result = await sheet_service.unlock(sheet.id, "pw")
    assert result.content == CSV
    # Unlocking never changes what is stored
    assert (await sheet_service.get(sheet.id)) == stored

    wrong = await sheet_service.unlock(sheet.id, "nope")
    assert wrong.failure == UnlockFailure.WRONG_PASSWORD_OR_CORRUPT


@pytest.mark.asyncio
async def test_lock_twice_is_a_no_op(sheet_service, secret_store):
    sheet = await locked_sheet(sheet_service)
    again = await sheet_service.lock(sheet.id, "other")
    assert again == sheet
    assert secret_store.keys() == [sheet.vault_ref]


@pytest.mark.asyncio
async def test_lock_requires_password(sheet_service):
    sheet = await sheet_service.create()
    with pytest.raises(ValueError):
        await sheet_service.lock(sheet.id, "")


@pytest.mark.asyncio
async def test_relock_rotates_record_and_password(sheet_service, secret_store):
    sheet = await locked_sheet(sheet_service, "old")
    relocked = await sheet_service.relock(sheet.id, "old", new_password="new")
    assert relocked.vault_ref != sheet.vault_ref
    assert secret_store.keys() == [relocked.vault_ref]
    assert (await sheet_service.unlock(sheet.id, "new")).content == CSV
    assert not (await sheet_service.unlock(sheet.id, "old")).ok


@pytest.mark.asyncio
async def test_relock_with_new_content(sheet_service):
    sheet = await locked_sheet(sheet_service)
    await sheet_service.relock(sheet.id, "pw", content="x,y\n9,9")
    assert (await sheet_service.unlock(sheet.id, "pw")).content == "x,y\n9,9"


@pytest.mark.asyncio
async def test_relock_with_wrong_password(sheet_service, secret_store):
    sheet = await locked_sheet(sheet_service)
    with pytest.raises(SheetUnlockError) as exc_info:
        await sheet_service.relock(sheet.id, "wrong", new_password="new")
    assert exc_info.value.failure == UnlockFailure.WRONG_PASSWORD_OR_CORRUPT
    assert (await sheet_service.get(sheet.id)) == sheet
    assert secret_store.keys() == [sheet.vault_ref]


@pytest.mark.asyncio
async def test_delete_releases_vault_record(sheet_service, secret_store):
    sheet = await locked_sheet(sheet_service)
    await sheet_service.delete(sheet.id)
    assert secret_store.keys() == []
    assert await sheet_service.list_sheets() == []
    with pytest.raises(SheetNotFoundError):
        await sheet_service.delete(sheet.id)


@pytest.mark.asyncio
async def test_generate_charts_for_plain_sheet(sheet_service, mock_text_service):
    sheet = await sheet_service.create()
    await sheet_service.update_content(sheet.id, CSV)
    mock_text_service.complete.return_value = json.dumps([{"kind": "scatter", "x": "a", "y": "b"}])
    spec, = await sheet_service.generate_charts(sheet.id)
    assert spec.kind == ChartKind.SCATTER


@pytest.mark.asyncio
async def test_generate_charts_for_locked_sheet(sheet_service):
    sheet = await locked_sheet(sheet_service)
    with pytest.raises(ValueError):
        await sheet_service.generate_charts(sheet.id)
    with pytest.raises(SheetUnlockError):
        await sheet_service.generate_charts(sheet.id, "wrong")
    spec, = await sheet_service.generate_charts(sheet.id, "pw")
    assert spec.kind == ChartKind.HISTOGRAM
    assert spec.title == "a distribution"


@pytest.mark.asyncio
async def test_listeners_receive_full_list(sheet_service):
    snapshots = []
    unsubscribe = sheet_service.subscribe(snapshots.append)
    await sheet_service.create("One")
    await sheet_service.create("Two")
    unsubscribe()
    await sheet_service.create("Three")
    assert [[s.name for s in snapshot] for snapshot in snapshots] == [["One"], ["One", "Two"]]


def test_sheet_values_are_immutable():
    sheet = Sheet(id=1, name="A")
    with pytest.raises(AttributeError):
        sheet.name = "B"
    assert sheet.with_tag("t").tags == ("t",)
    assert sheet.tags == ()


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "  \n "])
async def test_relock_rejects_blank_content(sheet_service, secret_store, content):
    sheet = await locked_sheet(sheet_service)
    with pytest.raises(ValueError):
        await sheet_service.relock(sheet.id, "pw", content=content)
    stored = await sheet_service.get(sheet.id)
    assert stored == sheet
    assert stored.is_encrypted
    assert secret_store.keys() == [sheet.vault_ref]
