import random

import httpx
import platformdirs
import pytest
import respx

from lowfi.downloader import Progress, _Shared
from lowfi.errors import TrackError, TrackErrorKind
from lowfi.tracklist import TrackList, load, load_all

CHILLHOP = "https://stream.chillhop.com/mp3/"


@pytest.fixture
def data(tmp_path, monkeypatch):
    directory = tmp_path / "data"
    directory.mkdir()
    monkeypatch.setattr(platformdirs, "user_data_path", lambda *args, **kwargs: directory)
    return directory


def test_base_works():
    lst = TrackList.from_text("test", "http://base/\ntrack1\ntrack2")
    assert lst.header() == "http://base/"


def test_random_path_parses_custom_display():
    lst = TrackList.from_text("t", "http://x/\npath!Display")
    assert lst.random_path(random.Random()) == ("path", "Display")


def test_random_path_no_display():
    lst = TrackList.from_text("t", "http://x/\ntrackA")
    assert lst.random_path(random.Random()) == ("trackA", None)


def test_new_trims_lines():
    lst = TrackList.from_text("name", "base\na  \nb ")
    assert lst.header() == "base"
    assert lst.lines[1] == "a"
    assert lst.lines[2] == "b"


def test_custom_display_with_exclamation():
    lst = TrackList.from_text("t", "http://base/\nfile.mp3!My Custom Name")
    assert lst.random_path(random.Random()) == ("file.mp3", "My Custom Name")


def test_single_track():
    lst = TrackList.from_text("name", "base\nonly_track.mp3")
    path, _ = lst.random_path(random.Random())
    assert path == "only_track.mp3"


def test_random_path_never_picks_header():
    lst = TrackList.from_text("n", "base\na\nb\nc")
    rng = random.Random(3)
    picks = {lst.random_path(rng)[0] for _ in range(100)}
    assert picks <= {"a", "b", "c"}


def test_random_path_without_tracks_fails():
    lst = TrackList.from_text("n", "base")
    with pytest.raises(ValueError):
        lst.random_path(random.Random())


@pytest.mark.asyncio
async def test_download_random_track():
    lst = TrackList.from_text("name", f"{CHILLHOP}\n9476!Apple Juice")
    payload = b"\x00" * 4096
    store = _Shared()
    with respx.mock:
        respx.get(f"{CHILLHOP}9476").mock(return_value=httpx.Response(200, content=payload))
        async with httpx.AsyncClient() as client:
            track = await lst.random(client, Progress(store), random.Random())
    assert track.display == "Apple Juice"
    assert track.path == "https://stream.chillhop.com/mp3/9476"
    assert track.data == payload
    assert Progress(store).get() == 1.0


@pytest.mark.asyncio
async def test_download_absolute_url_ignores_header():
    lst = TrackList.from_text("name", "http://ignored/\nx")
    url = "http://example.com/song.mp3"
    with respx.mock:
        respx.get(url).mock(return_value=httpx.Response(200, content=b"abc"))
        async with httpx.AsyncClient() as client:
            data, path = await lst.download(url, client)
    assert (data, path) == (b"abc", url)


@pytest.mark.asyncio
async def test_download_timeout_is_reported():
    lst = TrackList.from_text("name", "http://example.com/\nsong.mp3")
    with respx.mock:
        respx.get("http://example.com/song.mp3").mock(side_effect=httpx.ReadTimeout)
        async with httpx.AsyncClient() as client:
            with pytest.raises(TrackError) as err:
                await lst.download("song.mp3", client)
    assert err.value.kind is TrackErrorKind.REQUEST
    assert err.value.track == "song.mp3"
    assert err.value.timeout()


@pytest.mark.asyncio
async def test_download_connection_error_is_not_timeout():
    lst = TrackList.from_text("name", "http://example.com/\nsong.mp3")
    with respx.mock:
        respx.get("http://example.com/song.mp3").mock(side_effect=httpx.ConnectError)
        async with httpx.AsyncClient() as client:
            with pytest.raises(TrackError) as err:
                await lst.download("song.mp3", client)
    assert err.value.kind is TrackErrorKind.REQUEST
    assert not err.value.timeout()


@pytest.mark.asyncio
async def test_download_local_file(tmp_path):
    song = tmp_path / "local.mp3"
    song.write_bytes(b"local data")
    lst = TrackList.from_text("name", "file://" + str(tmp_path) + "/\nlocal.mp3")
    async with httpx.AsyncClient() as client:
        data, path = await lst.download("local.mp3", client)
    assert data == b"local data"
    assert path == "file://" + str(tmp_path) + "/local.mp3"


@pytest.mark.asyncio
async def test_download_missing_local_file(tmp_path):
    lst = TrackList.from_text("name", "file://" + str(tmp_path) + "/\nnone.mp3")
    async with httpx.AsyncClient() as client:
        with pytest.raises(TrackError) as err:
            await lst.download("none.mp3", client)
    assert err.value.kind is TrackErrorKind.FILE


@pytest.mark.asyncio
async def test_load_from_data_dir_strips_noheader(data):
    (data / "mylist.txt").write_text("noheader\nhttp://a/b.mp3\n", encoding="utf-8")
    lst = await load("mylist")
    assert lst.name == "mylist"
    assert lst.lines == ["", "http://a/b.mp3"]
    assert lst.path == str(data / "mylist.txt")


@pytest.mark.asyncio
async def test_load_from_path(data, tmp_path):
    other = tmp_path / "custom.txt"
    other.write_text("http://base/\none\ntwo\n", encoding="utf-8")
    lst = await load(str(other))
    assert lst.name == "custom"
    assert lst.lines == ["http://base/", "one", "two"]


@pytest.mark.asyncio
async def test_load_missing(data):
    with pytest.raises(TrackError) as err:
        await load("does-not-exist")
    assert err.value.kind is TrackErrorKind.FILE


@pytest.mark.asyncio
async def test_load_all_skips_reserved_files(data):
    (data / "alpha.txt").write_text("http://a/\nx", encoding="utf-8")
    (data / "beta.txt").write_text("http://b/\ny", encoding="utf-8")
    (data / "volume.txt").write_text("100", encoding="utf-8")
    (data / "bookmarks.txt").write_text("noheader\n", encoding="utf-8")
    (data / "notes.md").write_text("ignored", encoding="utf-8")
    lists = await load_all()
    assert [lst.name for lst in lists] == ["alpha", "beta"]
    assert lists[0].header() == "http://a/"