import pytest

from app.core.config import settings
from app.core.exceptions import BadRequestError, ResourceNotFoundError
from app.services.storage_service import storage_service


def test_init_creates_layout(storage_root):
    storage_service.init()

    for folder in ("public", "uploads", "temp"):
        assert (storage_root / folder).is_dir()


def test_save_temp_keeps_extension(storage_root):
    name = storage_service.save_temp(b"jpeg-bytes", "holiday.JPG")

    assert name.endswith(".JPG")
    assert len(name.split(".")[0]) == 32
    assert (storage_root / "temp" / name).read_bytes() == b"jpeg-bytes"


def test_save_temp_rejects_empty_and_oversized(monkeypatch):
    with pytest.raises(BadRequestError):
        storage_service.save_temp(b"", "empty.png")

    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_MB", 0)
    with pytest.raises(BadRequestError):
        storage_service.save_temp(b"x", "tiny.png")


def test_move_to_permanent(storage_root):
    (storage_root / "temp").mkdir(parents=True)
    (storage_root / "temp" / "abc123.jpg").write_bytes(b"img")

    path = storage_service.move_to_permanent("abc123.jpg", 7, 42)

    assert path == "/uploads/7/42/abc123.jpg"
    assert (storage_root / "uploads" / "7" / "42" / "abc123.jpg").read_bytes() == b"img"
    assert not (storage_root / "temp" / "abc123.jpg").exists()


@pytest.mark.parametrize("name", ["../secret.txt", "a/b.png", ".hidden"])
def test_move_rejects_path_tricks(name):
    with pytest.raises(BadRequestError):
        storage_service.move_to_permanent(name, 1, 1)


def test_move_requires_extension_and_existing_file():
    with pytest.raises(ResourceNotFoundError):
        storage_service.move_to_permanent("noextension", 1, 1)
    with pytest.raises(ResourceNotFoundError):
        storage_service.move_to_permanent("missing.png", 1, 1)


def test_remove_files_is_best_effort(storage_root):
    post_dir = storage_root / "uploads" / "3" / "9"
    post_dir.mkdir(parents=True)
    (post_dir / "a.png").write_bytes(b"1")

    storage_service.remove_post_files(3, 9)
    assert not post_dir.exists()

    storage_service.remove_event_files(3)
    storage_service.remove_event_files(3)
    assert not (storage_root / "uploads" / "3").exists()


@pytest.mark.parametrize(
    "filename",
    ["x." + "a" * 300, "page.html", "script.js", "noextension", "weird.p-g", "archive.tar.gz"],
)
def test_save_temp_rejects_unsupported_extensions(storage_root, filename):
    with pytest.raises(BadRequestError):
        storage_service.save_temp(b"data", filename)

    assert not (storage_root / "temp").exists() or list((storage_root / "temp").iterdir()) == []


def test_move_matches_the_exact_temp_name(storage_root):
    (storage_root / "temp").mkdir(parents=True)
    (storage_root / "temp" / "abc123.jpg").write_bytes(b"img")

    with pytest.raises(BadRequestError):
        storage_service.move_to_permanent("abc123.j", 1, 1)
    with pytest.raises(ResourceNotFoundError):
        storage_service.move_to_permanent("abc.jpg", 1, 1)

    assert (storage_root / "temp" / "abc123.jpg").exists()


def test_move_rejects_staged_html(storage_root):
    (storage_root / "temp").mkdir(parents=True)
    (storage_root / "temp" / "abc123.html").write_bytes(b"<script></script>")

    with pytest.raises(BadRequestError):
        storage_service.move_to_permanent("abc123.html", 1, 1)
