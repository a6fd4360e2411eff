import pytest

from careers.domain.blocks import HeroBlock
from careers.domain.editor import PageEditor
from careers.domain.invariants.exceptions import InvariantViolation, PersistenceError


def hero(block_id, heading="Join us"):
    return {"id": block_id, "type": "hero", "heading": heading, "subheading": "Now hiring"}


@pytest.fixture
def store():
    saved = []
    return saved


@pytest.fixture
def editor(store):
    return PageEditor([hero("a"), hero("b"), hero("c")], save_fn=store.append)


def ids(editor):
    return [b.id for b in editor.blocks]


def test_add_block_appends_fresh_block(editor):
    block = editor.add_block("values_grid")

    assert editor.blocks[-1] is block
    assert len(block.items) == 3
    assert editor.dirty


def test_add_unknown_type_raises(editor):
    with pytest.raises(InvariantViolation):
        editor.add_block("carousel")
    assert not editor.dirty


def test_move_swaps_neighbours(editor):
    assert editor.move_block(0, "down") is True
    assert ids(editor) == ["b", "a", "c"]

    assert editor.move_block(2, "up") is True
    assert ids(editor) == ["b", "c", "a"]


def test_move_at_boundary_is_noop(editor):
    assert editor.move_block(0, "up") is False
    assert editor.move_block(2, "down") is False
    assert ids(editor) == ["a", "b", "c"]
    assert not editor.dirty


def test_move_rejects_bad_direction(editor):
    with pytest.raises(InvariantViolation):
        editor.move_block(0, "left")


def test_remove_keeps_relative_order(editor):
    removed = editor.remove_block(1)

    assert removed.id == "b"
    assert ids(editor) == ["a", "c"]


@pytest.mark.parametrize("index", [-1, 3])
def test_out_of_range_index_raises(editor, index):
    with pytest.raises(InvariantViolation):
        editor.remove_block(index)


def test_update_replaces_block(editor):
    editor.update_block(1, hero("b", heading="Changed"))

    assert editor.blocks[1] == HeroBlock(id="b", heading="Changed", subheading="Now hiring")


def test_update_cannot_change_id_or_type(editor):
    with pytest.raises(InvariantViolation):
        editor.update_block(0, hero("zzz"))

    with pytest.raises(InvariantViolation):
        editor.update_block(0, {"id": "a", "type": "features", "heading": "x"})


def test_unknown_blocks_are_kept_but_not_editable():
    editor = PageEditor([{"id": "u", "type": "carousel", "slides": []}])

    with pytest.raises(InvariantViolation):
        editor.update_block(0, {"id": "u", "type": "carousel"})
    assert editor.to_document()["config"] == [{"id": "u", "type": "carousel", "slides": []}]


def test_errors_are_prefixed_and_never_block_edits(editor):
    editor.update_block(2, hero("c", heading=""))
    editor.update_settings(brand_color="#12")

    assert [e.field for e in editor.errors()] == ["brand_color", "config.2.heading"]


def test_update_settings_rejects_unknown_fields(editor):
    with pytest.raises(InvariantViolation):
        editor.update_settings(font="Comic Sans")


def test_save_hands_normalized_document_to_store(editor, store):
    editor.add_block("values_grid")
    editor.save()

    assert not editor.dirty
    document = store[-1]
    assert document["brand_color"] == "#3b82f6"
    assert document["config"][-1]["items"] == [{"title": "", "text": "", "image_url": ""}] * 3


def test_failed_save_keeps_document_dirty():
    def failing(document):
        raise PersistenceError("Failed to save draft")

    editor = PageEditor([hero("a")], save_fn=failing)
    editor.remove_block(0)

    with pytest.raises(PersistenceError):
        editor.save()

    assert editor.dirty
    assert editor.blocks == []


def test_edit_during_save_stays_dirty():
    def store(document):
        # an edit lands while the write is in flight
        editor.update_settings(brand_color="#000000")

    editor = PageEditor([hero("a")], save_fn=store)
    editor.update_settings(brand_color="#ffffff")
    editor.save()

    assert editor.dirty


def test_save_without_store_raises():
    with pytest.raises(InvariantViolation):
        PageEditor().save()


def test_autosave_after_edit(timers, store):
    editor = PageEditor(save_fn=store.append, autosave_delay=1.0, timer_factory=timers)

    editor.add_block("hero")
    editor.add_block("features")
    assert len(timers.created) == 2

    timers.created[-1].fire()

    assert len(store) == 1
    assert [b["type"] for b in store[0]["config"]] == ["hero", "features"]
    assert not editor.dirty


def test_publish_flushes_pending_autosave_first(timers):
    calls = []
    editor = PageEditor(
        save_fn=lambda document: calls.append(("save", len(document["config"]))),
        publish_fn=lambda: calls.append(("publish",)),
        autosave_delay=1.0,
        timer_factory=timers,
    )

    editor.add_block("hero")
    editor.publish()

    assert calls == [("save", 1), ("publish",)]
    assert timers.created[0].cancelled


def test_publish_when_clean_skips_save(store):
    published = []
    editor = PageEditor([hero("a")], save_fn=store.append, publish_fn=lambda: published.append(1))

    editor.publish()

    assert store == []
    assert published == [1]


def test_from_document_reads_settings():
    editor = PageEditor.from_document({
        "brand_color": "rebeccapurple",
        "logo_url": None,
        "config": '[{"id": "a", "type": "hero"}]',
    })

    assert editor.brand_color == "rebeccapurple"
    assert editor.logo_url == ""
    assert ids(editor) == ["a"]
