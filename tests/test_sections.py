import pytest

from streamshelf.core.errors import Conflict, NotFound, ValidationError
from streamshelf.models import SectionItem
from tests.conftest import OTHER_OWNER_ID, OWNER_ID


def _snapshot(items):
    return {item.id: (item.order, item.is_featured, item.updated_at) for item in items}


def test_create_section_orders_after_current_max(sections):
    first = sections.create_section(OWNER_ID, "Trending", "trending")
    second = sections.create_section(OWNER_ID, "For You", "for_you", "Picked for you")

    assert first.order == 1
    assert second.order == 2
    assert first.is_active is True

    listed = sections.list_sections(OWNER_ID)
    assert [s.slug for s in listed] == ["trending", "for_you"]
    assert listed[-1].order == 1 + listed[0].order


def test_create_section_rejects_duplicate_slug_per_owner(sections):
    sections.create_section(OWNER_ID, "Trending", "trending")

    with pytest.raises(Conflict) as exc:
        sections.create_section(OWNER_ID, "Trending again", "trending")
    assert exc.value.reason == "slug"

    other = sections.create_section(OTHER_OWNER_ID, "Trending", "trending")
    assert other.order == 1


def test_create_section_requires_title_and_slug(sections):
    with pytest.raises(ValidationError):
        sections.create_section(OWNER_ID, "", "trending")
    with pytest.raises(ValidationError):
        sections.create_section(OWNER_ID, "Trending", "   ")


def test_add_item_appends_after_max_order(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    v1, v2 = make_video("one"), make_video("two")

    first = sections.add_item(section.id, OWNER_ID, v1.id)
    second = sections.add_item(section.id, OWNER_ID, v2.id, is_featured=True)

    assert first.order == 1
    assert second.order == 2
    assert second.is_featured is True
    assert second.video.title == "two"


def test_add_item_failure_modes_are_checked_in_order(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    video = make_video()
    foreign_video = make_video("theirs", owner_id=OTHER_OWNER_ID)

    with pytest.raises(NotFound) as exc:
        sections.add_item("missing-section", OWNER_ID, "missing-video")
    assert exc.value.resource == "section"

    with pytest.raises(NotFound) as exc:
        sections.add_item(section.id, OWNER_ID, "missing-video")
    assert exc.value.resource == "video"

    with pytest.raises(NotFound) as exc:
        sections.add_item(section.id, OWNER_ID, foreign_video.id)
    assert exc.value.resource == "video"

    with pytest.raises(NotFound) as exc:
        sections.add_item(section.id, OTHER_OWNER_ID, foreign_video.id)
    assert exc.value.resource == "section"

    sections.add_item(section.id, OWNER_ID, video.id)
    assert len(sections.list_items(section.id)) == 1


def test_add_same_video_twice_conflicts_and_keeps_count(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    video = make_video()
    sections.add_item(section.id, OWNER_ID, video.id)

    with pytest.raises(Conflict) as exc:
        sections.add_item(section.id, OWNER_ID, video.id)

    assert exc.value.reason == "duplicate"
    assert sections.items.count_by_section(section.id) == 1


def test_reorder_assigns_zero_based_positions(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id)
    b = sections.add_item(section.id, OWNER_ID, make_video("B").id)
    c = sections.add_item(section.id, OWNER_ID, make_video("C").id)

    result = sections.reorder_items(section.id, OWNER_ID, [{"id": b.id}, {"id": a.id}, {"id": c.id}])

    assert [item.id for item in result] == [b.id, a.id, c.id]
    assert [item.order for item in result] == [0, 1, 2]

    listed = sections.list_sections(OWNER_ID)[0].items
    assert [(item.video.title, item.order) for item in listed] == [("B", 0), ("A", 1), ("C", 2)]


def test_reorder_sets_featured_flags_verbatim(sections, make_video):
    section = sections.create_section(OWNER_ID, "Featured", "featured")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id, is_featured=True)
    b = sections.add_item(section.id, OWNER_ID, make_video("B").id)

    result = sections.reorder_items(
        section.id, OWNER_ID, [{"id": a.id}, {"id": b.id, "is_featured": True}]
    )

    assert [(item.id, item.is_featured) for item in result] == [(a.id, False), (b.id, True)]


def test_reorder_leaves_omitted_items_untouched(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id)
    b = sections.add_item(section.id, OWNER_ID, make_video("B").id)
    c = sections.add_item(section.id, OWNER_ID, make_video("C").id, is_featured=True)

    sections.reorder_items(section.id, OWNER_ID, [{"id": b.id}, {"id": a.id}])

    by_id = {item.id: item for item in sections.list_items(section.id)}
    assert by_id[b.id].order == 0
    assert by_id[a.id].order == 1
    assert (by_id[c.id].order, by_id[c.id].is_featured) == (3, True)


def test_reorder_with_foreign_item_changes_nothing(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    other = sections.create_section(OWNER_ID, "For You", "for_you")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id)
    b = sections.add_item(section.id, OWNER_ID, make_video("B").id)
    stranger = sections.add_item(other.id, OWNER_ID, make_video("X").id)
    before = _snapshot(sections.list_items(section.id))

    with pytest.raises(NotFound) as exc:
        sections.reorder_items(section.id, OWNER_ID, [{"id": b.id}, {"id": stranger.id}, {"id": a.id}])

    assert exc.value.resource == "item"
    assert _snapshot(sections.list_items(section.id)) == before


def test_reorder_rejects_bad_payloads(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id)

    with pytest.raises(ValidationError):
        sections.reorder_items(section.id, OWNER_ID, {"id": a.id})
    with pytest.raises(ValidationError):
        sections.reorder_items(section.id, OWNER_ID, [{"id": a.id}, {"id": a.id}])
    with pytest.raises(ValidationError):
        sections.reorder_items(section.id, OWNER_ID, [{"is_featured": True}])
    with pytest.raises(NotFound):
        sections.reorder_items("missing", OWNER_ID, [])


def test_toggle_featured_flips_only_the_named_item(sections, make_video):
    section = sections.create_section(OWNER_ID, "Featured", "featured")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id)
    b = sections.add_item(section.id, OWNER_ID, make_video("B").id, is_featured=True)
    c = sections.add_item(section.id, OWNER_ID, make_video("C").id)
    sections.remove_item(a.id, section.id, OWNER_ID)
    before = _snapshot(sections.list_items(section.id))

    result = sections.toggle_featured(section.id, OWNER_ID, c.id)
    after = _snapshot(result)

    assert after[c.id][:2] == (before[c.id][0], True)
    assert after[b.id] == before[b.id]
    # order gap left by the removal survives a toggle
    assert [item.order for item in result] == [2, 3]


def test_toggle_featured_allows_multiple_featured_items(sections, make_video):
    section = sections.create_section(OWNER_ID, "Featured", "featured")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id, is_featured=True)
    b = sections.add_item(section.id, OWNER_ID, make_video("B").id)

    result = sections.toggle_featured(section.id, OWNER_ID, b.id)
    assert all(item.is_featured for item in result)

    result = sections.toggle_featured(section.id, OWNER_ID, a.id)
    assert [(item.id, item.is_featured) for item in result] == [(a.id, False), (b.id, True)]

    with pytest.raises(NotFound) as exc:
        sections.toggle_featured(section.id, OWNER_ID, "missing-item")
    assert exc.value.resource == "item"


def test_remove_item_keeps_gaps_and_is_idempotent(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id)
    b = sections.add_item(section.id, OWNER_ID, make_video("B").id)
    c = sections.add_item(section.id, OWNER_ID, make_video("C").id)

    assert sections.remove_item(b.id, section.id, OWNER_ID) is True
    assert sections.remove_item(b.id, section.id, OWNER_ID) is False

    assert [(item.id, item.order) for item in sections.list_items(section.id)] == [(a.id, 1), (c.id, 3)]

    with pytest.raises(NotFound) as exc:
        sections.remove_item(a.id, section.id, OTHER_OWNER_ID)
    assert exc.value.resource == "section"


def test_trending_scenario(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    v1, v2 = make_video("V1"), make_video("V2")

    item1 = sections.add_item(section.id, OWNER_ID, v1.id)
    item2 = sections.add_item(section.id, OWNER_ID, v2.id)
    assert (item1.order, item2.order) == (1, 2)

    sections.reorder_items(section.id, OWNER_ID, [{"id": item2.id}, {"id": item1.id}])

    listed = sections.list_sections(OWNER_ID)
    assert [item.video.id for item in listed[0].items] == [v2.id, v1.id]


def test_add_after_reorder_continues_from_max(sections, make_video):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    a = sections.add_item(section.id, OWNER_ID, make_video("A").id)
    b = sections.add_item(section.id, OWNER_ID, make_video("B").id)
    sections.reorder_items(section.id, OWNER_ID, [{"id": b.id}, {"id": a.id}])

    c = sections.add_item(section.id, OWNER_ID, make_video("C").id)
    assert c.order == 2


def test_update_section_changes_only_given_fields(sections):
    section = sections.create_section(OWNER_ID, "Trending", "trending", "Hot now")

    updated = sections.update_section(section.id, OWNER_ID, is_active=False)

    assert updated.is_active is False
    assert (updated.title, updated.slug, updated.order, updated.description) == ("Trending", "trending", 1, "Hot now")


def test_update_section_null_clears_description(sections):
    section = sections.create_section(OWNER_ID, "Trending", "trending", "old")

    updated = sections.update_section(section.id, OWNER_ID, description=None)

    assert (updated.title, updated.description, updated.is_active) == ("Trending", None, True)

    with pytest.raises(ValidationError):
        sections.update_section(section.id, OWNER_ID, title=None)
    with pytest.raises(ValidationError):
        sections.update_section(section.id, OWNER_ID, is_active=None)


def test_delete_section_removes_its_items(sections, make_video, db):
    section = sections.create_section(OWNER_ID, "Trending", "trending")
    sections.add_item(section.id, OWNER_ID, make_video("A").id)
    sections.add_item(section.id, OWNER_ID, make_video("B").id)

    assert sections.delete_section(section.id, OWNER_ID) == 2
    assert db.query(SectionItem).count() == 0
    assert sections.list_sections(OWNER_ID) == []


def test_seed_default_sections_is_idempotent(sections):
    sections.create_section(OWNER_ID, "Trending", "trending")

    created = sections.seed_default_sections(OWNER_ID)
    assert [s.slug for s in created] == ["featured", "for_you", "community_popular"]
    assert sections.seed_default_sections(OWNER_ID) == []

    listed = sections.list_sections(OWNER_ID)
    assert [s.order for s in listed] == [1, 2, 3, 4]
