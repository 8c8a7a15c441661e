import httpx
import pytest
import respx

from lowfi.scrape_archive import extract_links, scan, scrape

BASE = "https://lofigirl.com/wp-content/uploads"


def listing(*hrefs):
    links = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body><pre>{links}</pre></body></html>"


def test_extract_links_skips_parent():
    assert extract_links(listing("../", "a/", "b.mp3")) == ["a/", "b.mp3"]


@pytest.mark.asyncio
async def test_scan_and_scrape(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    with respx.mock:
        respx.get(f"{BASE}/").mock(
            return_value=httpx.Response(
                200, text=listing("../", "r1/", "w", "x", "y", "z")
            )
        )
        respx.get(f"{BASE}/r1").mock(
            return_value=httpx.Response(200, text=listing("../", "s.mp3", "c.jpg"))
        )
        assert await scan() == ["r1/s.mp3"]
        await scrape()
    assert capsys.readouterr().out.splitlines()[-1] == "r1/s.mp3"


@pytest.mark.asyncio
async def test_scan_rejects_short_listing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with respx.mock:
        respx.get(f"{BASE}/").mock(return_value=httpx.Response(200, text=listing("../", "a/")))
        with pytest.raises(ValueError):
            await scan()