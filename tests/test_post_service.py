import pytest

from app.core.exceptions import ResourceNotFoundError, UnauthorizedAccessError
from app.models.post import PostMedia, PostReaction, ReactionType
from app.schemas.post import PostCreate, PostUpdate
from app.services import post_service
from app.services.storage_service import storage_service
from tests.conftest import make_event, make_user


def stage(storage_root, name, content=b"image"):
    temp_dir = storage_root / "temp"
    temp_dir.mkdir(parents=True, exist_ok=True)
    (temp_dir / name).write_bytes(content)
    return name


def test_create_post_moves_staged_media(db, storage_root, approved_event, volunteer):
    stage(storage_root, "abc123.jpg")

    post = post_service.create_post(
        db,
        event_id=approved_event.id,
        post_in=PostCreate(content="We did it!", media=["abc123.jpg"]),
        user=volunteer,
    )

    expected = f"/uploads/{approved_event.id}/{post.id}/abc123.jpg"
    assert post.media_urls == [expected]
    assert post.author_name == "Volunteer Tester"

    media = db.query(PostMedia).one()
    assert media.path == expected
    assert media.resource_id == "abc123"
    assert not (storage_root / "temp" / "abc123.jpg").exists()
    assert (storage_root / "uploads" / str(approved_event.id) / str(post.id) / "abc123.jpg").exists()


def test_create_post_with_unknown_media_rolls_back(db, approved_event, volunteer):
    with pytest.raises(ResourceNotFoundError):
        post_service.create_post(
            db,
            event_id=approved_event.id,
            post_in=PostCreate(content="Missing", media=["nothere.png"]),
            user=volunteer,
        )

    assert post_service.list_posts(db, event_id=approved_event.id, user=volunteer) == []


def test_blank_content_is_rejected():
    with pytest.raises(ValueError):
        PostCreate(content="  ")


def test_cannot_post_on_hidden_event(db, owner, volunteer):
    draft = make_event(db, owner)

    with pytest.raises(ResourceNotFoundError):
        post_service.create_post(db, event_id=draft.id, post_in=PostCreate(content="hi"), user=volunteer)


def test_wall_is_newest_first(db, approved_event, volunteer):
    for text in ("first", "second", "third"):
        post_service.create_post(db, event_id=approved_event.id, post_in=PostCreate(content=text), user=volunteer)

    posts = post_service.list_posts(db, event_id=approved_event.id, user=volunteer)

    assert [p.content for p in posts] == ["third", "second", "first"]


def test_update_replaces_content_and_appends_media(db, storage_root, approved_event, volunteer, owner):
    stage(storage_root, "one.png")
    post = post_service.create_post(
        db, event_id=approved_event.id, post_in=PostCreate(content="v1", media=["one.png"]), user=volunteer
    )

    with pytest.raises(UnauthorizedAccessError):
        post_service.update_post(db, post_id=post.id, post_in=PostUpdate(content="hijack"), user=owner)

    stage(storage_root, "two.png")
    updated = post_service.update_post(
        db, post_id=post.id, post_in=PostUpdate(content="v2", media=["two.png"]), user=volunteer
    )

    assert updated.content == "v2"
    assert [url.rsplit("/", 1)[1] for url in updated.media_urls] == ["one.png", "two.png"]


def test_event_owner_can_delete_post_and_files(db, storage_root, approved_event, volunteer, owner):
    stage(storage_root, "pic.png")
    post = post_service.create_post(
        db, event_id=approved_event.id, post_in=PostCreate(content="bye", media=["pic.png"]), user=volunteer
    )
    post_service.react(db, post_id=post.id, reaction_type=ReactionType.LIKE, user=owner)

    post_service.delete_post(db, post_id=post.id, user=owner)

    assert db.query(PostMedia).count() == 0
    assert db.query(PostReaction).count() == 0
    assert not (storage_root / "uploads" / str(approved_event.id) / str(post.id)).exists()
    with pytest.raises(ResourceNotFoundError):
        post_service.get_post(db, post_id=post.id, user=owner)


def test_stranger_cannot_delete_post(db, approved_event, volunteer):
    stranger = make_user(db, "stranger")
    post = post_service.create_post(db, event_id=approved_event.id, post_in=PostCreate(content="mine"), user=volunteer)

    with pytest.raises(UnauthorizedAccessError):
        post_service.delete_post(db, post_id=post.id, user=stranger)


def test_reactions_are_one_per_user(db, approved_event, volunteer, owner):
    post = post_service.create_post(db, event_id=approved_event.id, post_in=PostCreate(content="react"), user=volunteer)

    post_service.react(db, post_id=post.id, reaction_type=ReactionType.LIKE, user=owner)
    post_service.react(db, post_id=post.id, reaction_type=ReactionType.LIKE, user=owner)
    assert db.query(PostReaction).count() == 1

    post_service.react(db, post_id=post.id, reaction_type=ReactionType.LOVE, user=owner)
    post_service.react(db, post_id=post.id, reaction_type=ReactionType.LOVE, user=volunteer)
    assert post_service.get_post(db, post_id=post.id, user=owner).reaction_counts == {"LOVE": 2}
    assert post_service.get_reaction(db, post_id=post.id, user=owner).type == ReactionType.LOVE

    post_service.react(db, post_id=post.id, reaction_type=ReactionType.NONE, user=owner)
    post_service.react(db, post_id=post.id, reaction_type=ReactionType.NONE, user=owner)
    assert post_service.get_reaction(db, post_id=post.id, user=owner).type == ReactionType.NONE

    post_service.delete_reaction(db, post_id=post.id, user=volunteer)
    assert db.query(PostReaction).count() == 0


def test_save_temp_then_post_scenario(db, approved_event, volunteer):
    temp_id = storage_service.save_temp(b"bytes", "photo.jpg")

    post = post_service.create_post(
        db, event_id=approved_event.id, post_in=PostCreate(content="scenario", media=[temp_id]), user=volunteer
    )

    assert post.media_urls == [f"/uploads/{approved_event.id}/{post.id}/{temp_id}"]
