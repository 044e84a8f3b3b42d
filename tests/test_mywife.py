import pytest
import requests
import responses

from tubemeta.providers.mywife import MyWife


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _page(movie_id: str) -> str:
    return f"""<html><head><title> 舞ワイフ {movie_id} </title></head><body>
<div class="modelsamplephototop"><strong>intro</strong>
<span class="text_overflow"> Summary text </span>
<video id="video" src="/video/{movie_id}.mp4" poster="/img/{movie_id}/topview.jpg"></video>
</div>
<div class="modelsamplephoto">
<div class="modelsample_photowaku"><img src="/img/{movie_id}/1.jpg"></div>
<div class="modelsample_photowaku"><img src=""></div>
</div></body></html>"""


@pytest.mark.parametrize("movie_id", ["1252", "1341", "1542", "1882", "1888"])
def test_get_movie_info_by_id(mocked, movie_id):
    mocked.get(
        f"https://mywife.cc/teigaku/model/no/{movie_id}",
        body=_page(movie_id),
        content_type="text/html",
    )
    mocked.head(f"https://mywife.cc/img/{movie_id}/thumb.jpg", status=200)
    info = MyWife().get_movie_info_by_id(movie_id)
    assert info.valid()
    assert info.id == movie_id
    assert info.number == f"MYWIFE-{movie_id}"
    assert info.title == f"舞ワイフ {movie_id}"
    assert info.summary == "Summary text"
    assert info.maker == "舞ワイフ"
    assert info.cover_url == f"https://mywife.cc/img/{movie_id}/topview.jpg"
    assert info.thumb_url == f"https://mywife.cc/img/{movie_id}/thumb.jpg"
    assert info.big_thumb_url == info.thumb_url
    assert info.preview_video_url == f"https://mywife.cc/video/{movie_id}.mp4"
    assert info.preview_images == [f"https://mywife.cc/img/{movie_id}/1.jpg"]


def test_missing_thumb_leaves_thumb_empty(mocked):
    mocked.get(
        "https://mywife.cc/teigaku/model/no/1252",
        body=_page("1252"),
        content_type="text/html",
    )
    mocked.head("https://mywife.cc/img/1252/thumb.jpg", status=404)
    info = MyWife().get_movie_info_by_id("1252")
    assert info.thumb_url == ""
    assert info.cover_url == "https://mywife.cc/img/1252/topview.jpg"


def test_http_error(mocked):
    mocked.get("https://mywife.cc/teigaku/model/no/9", status=500)
    with pytest.raises(requests.HTTPError):
        MyWife().get_movie_info_by_id("9")


def test_normalize_movie_id():
    provider = MyWife()
    assert provider.normalize_movie_id("mywife-1252") == "1252"
    assert provider.normalize_movie_id("MYWIFE_1341") == "1341"
    assert provider.normalize_movie_id("1542") == "1542"
    assert provider.normalize_movie_id("abc") == ""


def test_parse_movie_id_from_url():
    provider = MyWife()
    assert provider.parse_movie_id_from_url("https://mywife.cc/teigaku/model/no/1882") == "1882"