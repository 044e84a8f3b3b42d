from datetime import date

import lxml.html
import pytest
import requests
import responses

from tubemeta.model import Provider
from tubemeta.scraper import (
    Scraper,
    is_special_number,
    new_default_scraper,
    parse_date,
    parse_id_to_number,
    parse_int,
    parse_runtime,
    parse_score,
    parse_texts,
    random_user_agent,
    replace_space_all,
)

BASE = "https://www.mgstage.com/"


def test_scraper_is_provider():
    scraper = Scraper("MGS", BASE, 1000)
    assert isinstance(scraper, Provider)
    assert scraper.name == "MGS"
    assert scraper.priority == 1000
    assert scraper.url == BASE


def test_invalid_base_url():
    with pytest.raises(ValueError):
        Scraper("x", "not a url", 1)


def test_normalize_ids_as_is():
    scraper = Scraper("MGS", BASE, 1000)
    assert scraper.normalize_movie_id("abp-331") == "abp-331"
    assert scraper.normalize_actor_id("107") == "107"


def test_set_request_timeout():
    scraper = Scraper("MGS", BASE, 1000)
    scraper.set_request_timeout(10)
    assert scraper.timeout == 10


def test_default_scraper_user_agent():
    scraper = new_default_scraper("MGS", BASE, 1000)
    assert scraper.session.headers["User-Agent"] == scraper.session.headers["User-Agent"].strip()
    assert scraper.session.headers["User-Agent"].startswith("Mozilla/5.0")
    assert random_user_agent().startswith("Mozilla/5.0")


def test_fetch_tree_and_cookies():
    scraper = Scraper("MGS", BASE, 1000, cookies={"adc": "1"}, user_agent="agent")
    url = BASE + "page"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body="<html><body><h1>Hello</h1></body></html>")
        tree = scraper.fetch_tree(url)
        request = rsps.calls[0].request
    assert tree.xpath("//h1/text()") == ["Hello"]
    assert tree.getroottree().docinfo.URL == url
    assert request.headers["Cookie"] == "adc=1"
    assert request.headers["User-Agent"] == "agent"


def test_cookies_disabled():
    scraper = Scraper("MGS", BASE, 1000, cookies={"adc": "1"}, use_cookies=False)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE, body="ok")
        response = scraper.fetch(BASE)
        request = rsps.calls[0].request
    assert response.text == "ok"
    assert "Cookie" not in request.headers


def test_fetch_raises_on_error_status():
    scraper = Scraper("MGS", BASE, 1000)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE, status=404)
        with pytest.raises(requests.HTTPError):
            scraper.fetch(BASE)


def test_fetch_without_redirects_keeps_response():
    scraper = Scraper("JavBus", BASE, 1000, follow_redirects=False)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE, status=302, headers={"Location": BASE + "other"})
        response = scraper.fetch(BASE)
    assert response.status_code == 302
    assert response.headers["Location"] == BASE + "other"


def test_fetch_post_data():
    scraper = Scraper("JAV321", BASE, 1000)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "search", body="done")
        scraper.fetch(BASE + "search", method="POST", data={"sn": "SSIS-033"})
        body = rsps.calls[0].request.body
    assert body == "sn=SSIS-033"


def test_exists():
    scraper = Scraper("MGS", BASE, 1000)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.HEAD, BASE + "a.jpg", status=200)
        rsps.add(responses.HEAD, BASE + "b.jpg", status=404)
        assert scraper.exists(BASE + "a.jpg")
        assert not scraper.exists(BASE + "b.jpg")


def test_parse_date():
    assert parse_date("2021-03-04") == date(2021, 3, 4)
    assert parse_date(" 2021/03/04 ") == date(2021, 3, 4)
    assert parse_date("2021年3月4日") == date(2021, 3, 4)
    assert parse_date("") is None
    assert parse_date("unknown") is None


def test_parse_runtime():
    assert parse_runtime("120分") == 120
    assert parse_runtime("") == 0


def test_parse_score_and_int():
    assert parse_score("4.5") == 4.5
    assert parse_score("n/a") == 0.0
    assert parse_int("170cm") == 170
    assert parse_int("") == 0


def test_parse_texts():
    node = lxml.html.fromstring("<td><a> A </a>\n<a>B</a> </td>")
    assert parse_texts(node) == ["A", "B"]
    assert parse_texts(None) == []


def test_replace_space_all_and_number():
    assert replace_space_all("A B\u3000C") == "ABC"
    assert parse_id_to_number("mdx-0267") == "MDX-0267"


def test_is_special_number():
    assert is_special_number("heyzo-2818")
    assert is_special_number("091522_959")
    assert not is_special_number("SSIS-033")
    assert not is_special_number("ABP-331")