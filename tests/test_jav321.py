from datetime import date

import pytest
import requests
import responses

from tubemeta.providers.jav321 import JAV321, MOVIE_URL, NAME, SEARCH_URL


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def _page(number: str, video_host: str = "cc3001.r18.com") -> str:
    return f"""<html><head><title>JAV321</title></head><body>
<div class="nav">navigation</div>
<div class="container">
  <div class="row">
    <div class="col-md-7">
      <div class="panel-heading"><h3>Sample Title</h3></div>
      <div class="panel-body">
        <div class="row">
          <div class="col-md-3"><img src="/images/thumb.jpg"></div>
          <div class="col-md-9">
            <b>出演者</b>: <a href="/star/100">Actress B</a><br>
            <b>メーカー</b>: <a href="/company/1">Maker Co</a><br>
            <b>ジャンル</b>: <a href="/genre/1">Genre One</a> <a href="/genre/2">Genre Two</a><br>
            <b>品番</b>: {number}<br>
            <b>配信開始日</b>: 2022-06-01<br>
            <b>収録時間</b>: 60 minutes<br>
            <b>シリーズ</b>: <a href="/series/9">Series X</a><br>
            <b>平均評価</b>: <img data-original="/img/45.gif"><br>
          </div>
        </div>
        <div class="row"><div class="col-md-12">  A short summary.  </div></div>
        <video><source src="https://{video_host}/litevideo/sample.mp4"></source></video>
      </div>
    </div>
  </div>
  <div class="col-xs-12 col-md-12"><p><a href="#"><img class="img-responsive" src="/images/cover.jpg"></a></p></div>
  <div class="col-xs-12 col-md-12"><p><a href="#"><img class="img-responsive" src="/images/p1.jpg"></a></p></div>
  <div class="thumbnail"><a href="/star/100">Actress A</a></div>
</div>
</body></html>"""


@pytest.mark.parametrize(
    "movie_id",
    [
        "heyzo2818",
        "300maan-791",
        "sivr00215",
        "ebod00916",
        "118abp00559",
        "nima00011",
        "pred00402",
    ],
)
def test_get_movie_info_by_id(mocked, movie_id):
    mocked.add(responses.GET, MOVIE_URL.format(movie_id), body=_page(movie_id))
    info = JAV321().get_movie_info_by_id(movie_id)
    assert info.valid()
    assert info.id == movie_id
    assert info.number == movie_id.upper()
    assert info.provider == NAME


def test_movie_fields(mocked):
    url = MOVIE_URL.format("heyzo2818")
    mocked.add(responses.GET, url, body=_page("heyzo2818"))
    info = JAV321().get_movie_info_by_url(url)
    assert info.title == "Sample Title"
    assert info.summary == "A short summary."
    assert info.thumb_url == "https://www.jav321.com/images/thumb.jpg"
    assert info.cover_url == "https://www.jav321.com/images/cover.jpg"
    assert info.preview_images == ["https://www.jav321.com/images/p1.jpg"]
    assert info.actors == ["Actress A"]
    assert info.maker == "Maker Co"
    assert info.series == "Series X"
    assert info.genres == ["Genre One", "Genre Two"]
    assert info.release_date == date(2022, 6, 1)
    assert info.runtime == 60
    assert info.score == pytest.approx(4.5)
    assert info.preview_video_url == "https://cc3001.dmm.co.jp/litevideo/sample.mp4"


def test_preview_video_aws_host_rewritten(mocked):
    url = MOVIE_URL.format("abc")
    mocked.add(responses.GET, url, body=_page("abc", "awscc3001.r18.com"))
    info = JAV321().get_movie_info_by_url(url)
    assert info.preview_video_url == "https://cc3001.dmm.co.jp/litevideo/sample.mp4"


def test_get_movie_info_http_error(mocked):
    mocked.add(responses.GET, MOVIE_URL.format("missing"), status=404)
    with pytest.raises(requests.HTTPError):
        JAV321().get_movie_info_by_id("missing")


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.jav321.com/video/heyzo2818", "heyzo2818"),
        ("https://www.jav321.com/video/abc/", "abc"),
        ("", "."),
    ],
)
def test_parse_movie_id_from_url(url, expected):
    assert JAV321().parse_movie_id_from_url(url) == expected


@pytest.mark.parametrize(
    "keyword, expected",
    [
        ("SSIS-033", "SSIS-033"),
        ("midv-005", "MIDV-005"),
        ("heyzo-2818", "HEYZO-2818"),
        ("n1633", "N1633"),
        ("123456-789", ""),
    ],
)
def test_normalize_movie_keyword(keyword, expected):
    assert JAV321().normalize_movie_keyword(keyword) == expected


def test_set_request_timeout_is_forced():
    provider = JAV321()
    provider.set_request_timeout(3)
    assert provider.timeout == 10.0


@pytest.mark.parametrize(
    "keyword, movie_id",
    [("SSIS-033", "ssis00033"), ("MIDV-005", "midv00005")],
)
def test_search_movie(mocked, keyword, movie_id):
    mocked.add(
        responses.POST,
        SEARCH_URL,
        status=302,
        headers={"Location": f"/video/{movie_id}"},
    )
    mocked.add(responses.GET, MOVIE_URL.format(movie_id), body=_page(keyword))
    provider = JAV321()
    results = provider.search_movie(provider.normalize_movie_keyword(keyword))
    assert len(results) == 1
    assert all(result.valid() for result in results)
    assert results[0].id == movie_id
    assert results[0].number == keyword
    assert "sn=" + keyword in mocked.calls[0].request.body


def test_search_movie_without_redirect_finds_nothing(mocked):
    mocked.add(responses.POST, SEARCH_URL, status=200, body="<html></html>")
    assert JAV321().search_movie("UNKNOWN-001") == []