# tests/test_resource_checker.py

import httpx
import pytest
from httpx import Response

from seoscan.scoring.resource_checker import (
    check_auxiliary_resources, check_robots_txt, check_sitemap, probe, robots_mentions_sitemap,
)

ORIGIN = "https://site.test"


@pytest.mark.asyncio
async def test_robots_found_on_2xx(client, router):
    router.get(f"{ORIGIN}/robots.txt").mock(return_value=Response(200, text="User-agent: *"))
    assert await check_robots_txt(client, ORIGIN) is True


@pytest.mark.asyncio
async def test_robots_missing_on_404(client, router):
    router.get(f"{ORIGIN}/robots.txt").mock(return_value=Response(404))
    assert await check_robots_txt(client, ORIGIN) is False


@pytest.mark.asyncio
async def test_robots_network_error_is_false(client, router):
    router.get(f"{ORIGIN}/robots.txt").mock(side_effect=httpx.ConnectError("refused"))
    result = await probe(client, f"{ORIGIN}/robots.txt")
    assert result.found is False
    assert result.status is None
    assert "ConnectError" in result.error
    assert await check_robots_txt(client, ORIGIN) is False


@pytest.mark.asyncio
async def test_sitemap_first_success_stops_probing(client, router):
    xml = router.get(f"{ORIGIN}/sitemap.xml").mock(return_value=Response(404))
    index = router.get(f"{ORIGIN}/sitemap_index.xml").mock(return_value=Response(200, text="<sitemapindex/>"))
    txt = router.get(f"{ORIGIN}/sitemap.txt").mock(return_value=Response(200))

    assert await check_sitemap(client, ORIGIN, has_robots_txt=False) is True
    assert xml.called and index.called
    assert not txt.called


@pytest.mark.asyncio
async def test_sitemap_falls_back_to_robots_directive(client, router):
    for path in ("/sitemap.xml", "/sitemap_index.xml", "/sitemap.txt"):
        router.get(f"{ORIGIN}{path}").mock(return_value=Response(404))
    robots = router.get(f"{ORIGIN}/robots.txt").mock(
        return_value=Response(200, text="User-agent: *\nSITEMAP: https://site.test/maps/all.xml\n")
    )
    assert await check_sitemap(client, ORIGIN, has_robots_txt=True) is True
    assert robots.call_count == 1


@pytest.mark.asyncio
async def test_sitemap_robots_not_consulted_when_absent(client, router):
    for path in ("/sitemap.xml", "/sitemap_index.xml", "/sitemap.txt"):
        router.get(f"{ORIGIN}{path}").mock(return_value=Response(404))
    robots = router.get(f"{ORIGIN}/robots.txt").mock(return_value=Response(200, text="Sitemap: x"))
    assert await check_sitemap(client, ORIGIN, has_robots_txt=False) is False
    assert not robots.called


@pytest.mark.asyncio
async def test_sitemap_network_error_anywhere_is_false(client, router):
    router.get(f"{ORIGIN}/sitemap.xml").mock(side_effect=httpx.ReadTimeout("slow"))
    later = router.get(f"{ORIGIN}/sitemap_index.xml").mock(return_value=Response(200))
    assert await check_sitemap(client, ORIGIN, has_robots_txt=True) is False
    assert not later.called


@pytest.mark.asyncio
async def test_aux_resources_combined(client, router):
    router.get(f"{ORIGIN}/robots.txt").mock(return_value=Response(200, text="Sitemap: /s.xml"))
    router.get(f"{ORIGIN}/sitemap.xml").mock(return_value=Response(404))
    router.get(f"{ORIGIN}/sitemap_index.xml").mock(return_value=Response(404))
    router.get(f"{ORIGIN}/sitemap.txt").mock(return_value=Response(404))
    assert await check_auxiliary_resources(client, ORIGIN) == (True, True)


def test_robots_mentions_sitemap_scans_whole_body():
    html = "<html><body><pre>User-agent: *\nSitemap: https://a.test/s.xml</pre></body></html>"
    assert robots_mentions_sitemap(html) is True
    # Direktivet uden for <pre>/<body> tæller også
    assert robots_mentions_sitemap("<html><head><title>Sitemap: x</title></head><body><pre>User-agent: *</pre></body></html>") is True
    assert robots_mentions_sitemap("User-agent: *\nDisallow: /") is False
    assert robots_mentions_sitemap("") is False


@pytest.mark.asyncio
async def test_sitemap_directive_in_html_head_of_robots(client, router):
    for path in ("/sitemap.xml", "/sitemap_index.xml", "/sitemap.txt"):
        router.get(f"{ORIGIN}{path}").mock(return_value=Response(404))
    body = "<html><head><title>Sitemap: https://site.test/s.xml</title></head><body><pre>User-agent: *</pre></body></html>"
    router.get(f"{ORIGIN}/robots.txt").mock(return_value=Response(200, text=body))
    assert await check_sitemap(client, ORIGIN, has_robots_txt=True) is True
