import os

import pytest

from core.media import (
    MIME_TYPES,
    extension_for_mime,
    get_mime_type,
    resolve_output_path,
    with_extension,
)


@pytest.mark.parametrize("ext,mime", sorted(MIME_TYPES.items()))
def test_every_table_extension_maps_to_its_mime(ext, mime):
    assert get_mime_type(f"/data/sample{ext}") == mime


def test_table_is_the_fixed_set():
    assert MIME_TYPES == {
        ".jpg": "image/jpeg", ".jpeg": "image/jpeg", ".png": "image/png",
        ".gif": "image/gif", ".webp": "image/webp", ".mp4": "video/mp4",
        ".mpeg": "video/mpeg", ".mov": "video/mov", ".avi": "video/avi",
        ".webm": "video/webm", ".mp3": "audio/mp3", ".wav": "audio/wav",
        ".aac": "audio/aac",
    }


@pytest.mark.parametrize("path", ["/data/file.xyz", "/data/noext", "/data/archive.tar.gz", ""])
def test_unknown_extensions_fall_back_to_octet_stream(path):
    assert get_mime_type(path) == "application/octet-stream"


def test_extension_lookup_is_case_insensitive():
    assert get_mime_type("/data/PHOTO.JPG") == "image/jpeg"
    assert get_mime_type("/data/clip.Mp4") == "video/mp4"


def test_extension_for_mime():
    assert extension_for_mime("image/png") == "png"
    assert extension_for_mime("image/jpeg") == "jpeg"
    assert extension_for_mime("garbage") == "png"
    assert extension_for_mime("") == "png"


def test_with_extension_never_doubles_up():
    assert with_extension("sunset", "png") == "sunset.png"
    assert with_extension("sunset.png", "png") == "sunset.png"
    assert with_extension("sunset.jpeg", "png") == "sunset.jpeg.png"


def test_resolve_output_path_stays_under_output_dir():
    assert resolve_output_path("/out", "plan.md") == os.path.join("/out", "plan.md")
    assert resolve_output_path("/out", "/plan.md") == os.path.join("/out", "plan.md")
