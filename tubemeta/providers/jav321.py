"""Movie metadata from JAV321."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urljoin, urlparse

from tubemeta.model import MovieInfo, MovieSearchResult
from tubemeta.scraper import (
    Scraper,
    is_special_number,
    parse_date,
    parse_runtime,
    parse_score,
    random_user_agent,
)

NAME = "JAV321"
PRIORITY = 1000 - 6

BASE_URL = "https://www.jav321.com/"
MOVIE_URL = "https://www.jav321.com/video/{}"
SEARCH_URL = "https://www.jav321.com/search"

_KEYWORD_RE = re.compile(r"^([a-z]{1,4}\d{2,4}|heyzo[-_].+)$", re.IGNORECASE)
_SCORE_GIF_RE = re.compile(r"(\d+)\.gif")


def _path_base(path: str) -> str:
    if not path:
        return "."
    path = path.rstrip("/")
    if not path:
        return "/"
    return path.rsplit("/", 1)[-1]


def _text(node: Any) -> str:
    return str(node) if isinstance(node, str) else node.text_content()


def _data(node: Any) -> str:
    return str(node) if isinstance(node, str) else str(node.tag)


class JAV321(Scraper):
    """Movie provider backed by jav321.com."""

    def __init__(self) -> None:
        super().__init__(NAME, BASE_URL, PRIORITY, user_agent=random_user_agent())

    def set_request_timeout(self, timeout: float | None) -> None:
        """Ignore the given timeout; this site always gets 10 seconds."""
        super().set_request_timeout(10.0)

    def get_movie_info_by_id(self, movie_id: str) -> MovieInfo:
        return self.get_movie_info_by_url(MOVIE_URL.format(movie_id))

    def parse_movie_id_from_url(self, raw_url: str) -> str:
        return _path_base(urlparse(raw_url).path)

    def get_movie_info_by_url(self, raw_url: str) -> MovieInfo:
        info = MovieInfo(
            id=self.parse_movie_id_from_url(raw_url),
            provider=self.name,
            homepage=raw_url,
        )
        tree = self.fetch_tree(info.homepage)
        base = tree.base_url or info.homepage

        def absolute(link: str) -> str:
            return urljoin(base, link)

        for node in tree.xpath("/html/body/div[2]/div[1]/div[1]/div[1]/h3/text()"):
            info.title = _text(node).strip()
        for node in tree.xpath("//div[@class='panel-heading']/h3/text()"):
            if not info.title:
                info.title = _text(node).strip()

        for node in tree.xpath("/html/body/div[2]/div[1]/div[1]/div[2]/div[3]/div/text()"):
            if not info.summary:
                info.summary = _text(node).strip()
        for node in tree.xpath(
            '//div[@class="panel-body"]/div[@class="row"]/div[@class="col-md-12"]/text()'
        ):
            if not info.summary and (summary := _text(node).strip()):
                info.summary = summary

        for img in tree.xpath(
            '//div[@class="panel-body"]/div[@class="row"]/div[@class="col-md-3"]/img'
        ):
            if src := img.get("src", ""):
                info.thumb_url = absolute(src)

        for img in tree.xpath(
            '//div[@class="col-xs-12 col-md-12"]/p/a/img[@class="img-responsive"]'
        ):
            if src := img.get("src", ""):
                src = absolute(src)
                if not info.cover_url:
                    info.cover_url = src  # the first image is the cover
                else:
                    info.preview_images.append(src)

        for link in tree.xpath('//div[@class="thumbnail"]/a[contains(@href,"/star/")]'):
            text = _text(link)
            if text.strip():
                info.actors.append(text)

        for node in tree.xpath('//b[contains(text(),"品番")]/following-sibling::node()[1]'):
            info.number = _data(node).lstrip(":").strip().upper()

        for node in tree.xpath('//b[contains(text(),"配信開始日")]/following-sibling::node()[1]'):
            info.release_date = parse_date(_data(node).lstrip(":"))

        for node in tree.xpath('//b[contains(text(),"収録時間")]/following-sibling::node()[1]'):
            info.runtime = parse_runtime(_data(node).lstrip(":"))

        for link in tree.xpath(
            "//b[contains(text(),\"シリーズ\")]/following-sibling::a[starts-with(@href,'/series')]"
        ):
            info.series = _text(link).strip()

        for link in tree.xpath(
            '//b[contains(text(),"メーカー")]/following-sibling::a[starts-with(@href,"/company")]'
        ):
            info.maker = _text(link).strip()

        for link in tree.xpath(
            '//b[contains(text(),"ジャンル")]/following-sibling::a[starts-with(@href,"/genre")]'
        ):
            info.genres.append(_text(link).strip())

        for link in tree.xpath(
            '//b[contains(text(),"出演者")]/following-sibling::a[starts-with(@href,"/star")]'
        ):
            if not info.actors:
                info.actors.append(_text(link).strip())

        for node in tree.xpath('//b[contains(text(),"出演者")]/following-sibling::node()[1]'):
            if isinstance(node, str) and not info.actors:
                if actor := node.lstrip(":").strip():
                    info.actors.append(actor)

        for node in tree.xpath(
            '//b[contains(text(),"平均評価")]/following-sibling::img/@data-original'
        ):
            if match := _SCORE_GIF_RE.search(_text(node)):
                info.score = parse_score(match.group(1)) / 10

        for node in tree.xpath('//b[contains(text(),"平均評価")]/following-sibling::node()[1]'):
            if isinstance(node, str) and info.score == 0:
                info.score = parse_score(node.lstrip(":"))

        for node in tree.xpath('//div[@class="panel-body"]//video/source/@src'):
            if src := _text(node).strip():
                src = src.replace("awscc3001.r18.com", "cc3001.dmm.co.jp")
                src = src.replace("cc3001.r18.com", "cc3001.dmm.co.jp")
                info.preview_video_url = absolute(src)

        return info

    def normalize_movie_keyword(self, keyword: str) -> str:
        if is_special_number(keyword) and not _KEYWORD_RE.match(keyword):
            return ""  # special contents are not listed here
        return keyword.upper()

    def search_movie(self, keyword: str) -> list[MovieSearchResult]:
        """Search by number; the site answers a hit with a redirect to the movie."""
        response = self.session.post(
            SEARCH_URL,
            data={"sn": keyword},
            timeout=self.timeout,
            allow_redirects=False,
        )
        location = urljoin(SEARCH_URL, response.headers.get("Location", ""))
        if not urlparse(location).path.startswith("/video"):
            return []
        return [self.get_movie_info_by_url(location).to_search_result()]