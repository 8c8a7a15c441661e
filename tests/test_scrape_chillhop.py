import json

import pytest

from lowfi.scrape_chillhop import ChillhopTrack, parse_release, release_links
from lowfi.scrapers import ScrapeError


def page(tracks):
    return f"<html><body><textarea>{json.dumps({'tracks': tracks})}</textarea></body></html>"


def test_parse_release_reverses_tracks():
    content = page([
        {"title": "One", "fileId": "10", "artists": "A"},
        {"title": "Two", "fileId": "20", "artists": "B"},
    ])
    release = parse_release(content, "/r", 7)
    assert [t.file_id for t in release.tracks] == [20, 10]
    assert (release.path, release.index) == ("/r", 7)


def test_parse_release_rejects_bad_id():
    with pytest.raises(ScrapeError):
        parse_release(page([{"title": "x", "fileId": "abc", "artists": "A"}]), "/r", 0)


def test_parse_release_needs_textarea():
    with pytest.raises(ScrapeError, match="textarea"):
        parse_release("<html></html>", "/r", 0)


def test_clean_decodes_entities():
    track = ChillhopTrack(title="Rock &amp; Roll", file_id=1, artists="A &amp; B")
    track.clean()
    assert (track.title, track.artists) == ("Rock & Roll", "A & B")


def test_release_links_skip_compilations():
    content = (
        '<div class="table-body">'
        '<a href="/a"><label>Album</label></a>'
        '<a href="/b"><label>Compilation</label></a>'
        '<a href="/c"><label>EP</label></a>'
        "</div>"
    )
    assert release_links(content, 2) == [("/a", 24), ("/c", 26)]