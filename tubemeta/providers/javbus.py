"""Movie metadata from JavBus."""

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
    random_user_agent,
)

NAME = "JavBus"
PRIORITY = 1000 - 5

BASE_URL = "https://www.javbus.com/"
MOVIE_URL = "https://www.javbus.com/ja/{}"
SEARCH_URL = "https://www.javbus.com/ja/search/{}"
SEARCH_UNCENSORED_URL = "https://www.javbus.com/ja/uncensored/search/{}"

_KEYWORD_RE = re.compile(r"^([\d\-_]{4,}|[a-z]{1,4}\d{2,4}|heyzo[-_].+)$", re.IGNORECASE)
_COVER_RE = re.compile(r"/cover/([a-z\d]+)(?:_b)?\.(jpg|png)", re.IGNORECASE)
_THUMB_RE = re.compile(r"/thumbs?/([a-z\d]+)(?:_b)?\.(jpg|png)", re.IGNORECASE)


def _path_base(path: str) -> str:
    if not path:
        return "."
    path = path.rstrip("/")
    if not path:
        return "/"
    return path.rsplit("/", 1)[-1]


def _node_text(node: Any) -> str:
    return str(node) if isinstance(node, str) else node.text_content()


def _child_text(node: Any, path: str) -> str:
    matches = node.xpath(path)
    return _node_text(matches[0]).strip() if matches else ""


def _child_attr(node: Any, path: str, attr: str) -> str:
    for match in node.xpath(path):
        if not isinstance(match, str):
            return match.get(attr, "")
    return ""


class JavBus(Scraper):
    """Movie provider backed by javbus.com."""

    def __init__(self) -> None:
        super().__init__(
            NAME,
            BASE_URL,
            PRIORITY,
            user_agent=random_user_agent(),
            follow_redirects=False,
            cookies={"existmag": "all"},
        )

    def normalize_movie_id(self, movie_id: str) -> str:
        return movie_id.upper()

    def get_movie_info_by_id(self, movie_id: str) -> MovieInfo:
        return self.get_movie_info_by_url(MOVIE_URL.format(movie_id))

    def parse_movie_id_from_url(self, raw_url: str) -> str:
        return self.normalize_movie_id(_path_base(urlparse(raw_url).path))

    def get_movie_info_by_url(self, raw_url: str) -> MovieInfo:
        info = MovieInfo(
            id=self.parse_movie_id_from_url(raw_url),
            provider=self.name,
            homepage=raw_url,
        )
        tree = self.fetch_tree(info.homepage)
        base = tree.base_url or info.homepage

        for img in tree.xpath('//a[@class="bigImage"]/img'):
            info.title = img.get("title", "")
            info.cover_url = urljoin(base, img.get("src", ""))

        for para in tree.xpath('//div[@class="col-md-3 info"]/p'):
            label = _child_text(para, ".//span")
            fields = para.text_content().split()
            if label == "品番:":
                info.number = _child_text(para, ".//span[2]")
            elif label == "発売日:":
                if fields:
                    info.release_date = parse_date(fields[-1])
            elif label == "収録時間:":
                if fields:
                    info.runtime = parse_runtime(fields[-1])
            elif label == "監督:":
                info.director = _child_text(para, ".//a")
            elif label == "メーカー:":
                info.maker = _child_text(para, ".//a")
            elif label == "レーベル:":
                info.label = _child_text(para, ".//a")
            elif label == "シリーズ:":
                info.series = _child_text(para, ".//a")

        for span in tree.xpath('//span[@class="genre"]'):
            if tag := _child_text(span, ".//label/a"):
                info.genres.append(tag)

        for link in tree.xpath('//*[@id="sample-waterfall"]/a'):
            info.preview_images.append(urljoin(base, link.get("href", "")))

        for star in tree.xpath('//div[@class="star-name"]'):
            info.actors.append(_child_attr(star, ".//a", "title"))

        if _COVER_RE.search(info.cover_url):
            candidates = (
                _COVER_RE.sub(r"/thumb/\1.\2", info.cover_url),
                _COVER_RE.sub(r"/thumbs/\1.\2", info.cover_url),
            )
            for candidate in candidates:
                if self.exists(candidate):
                    info.thumb_url = candidate

        return info

    def normalize_movie_keyword(self, keyword: str) -> str:
        if is_special_number(keyword) and not _KEYWORD_RE.match(keyword):
            return ""  # special contents are not listed here
        return keyword.upper()

    def search_movie(self, keyword: str) -> list[MovieSearchResult]:
        results: list[MovieSearchResult] = []
        for search_url in (SEARCH_URL.format(keyword), SEARCH_UNCENSORED_URL.format(keyword)):
            tree = self.fetch_tree(search_url)
            base = tree.base_url or search_url
            for box in tree.xpath('//a[@class="movie-box"]'):
                thumb = urljoin(base, _child_attr(box, ".//div[1]/img", "src"))
                cover = ""
                if _THUMB_RE.search(thumb):
                    cover = _THUMB_RE.sub(r"/cover/\1_b.\2", thumb)  # a guess
                homepage = urljoin(base, box.get("href", ""))
                results.append(
                    MovieSearchResult(
                        id=self.parse_movie_id_from_url(homepage),
                        number=_child_text(box, ".//div[2]/span/date[1]"),
                        title=_child_text(box, ".//div[2]/span").split("\n", 1)[0],
                        provider=self.name,
                        homepage=homepage,
                        thumb_url=thumb,
                        cover_url=cover,
                        release_date=parse_date(_child_text(box, ".//div[2]/span/date[2]")),
                    )
                )
        return results