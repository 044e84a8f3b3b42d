"""Movie metadata from XXX-AV."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urljoin, urlparse

from tubemeta.model import MovieInfo
from tubemeta.scraper import (
    Scraper,
    parse_date,
    parse_runtime,
    parse_texts,
    random_user_agent,
)

NAME = "XXX-AV"
PRIORITY = 1000

BASE_URL = "https://www.xxx-av.com/"
MOVIE_URL = "https://www.xxx-av.com/mov/movie/{}/"

_ID_RE = re.compile(r"^(?:xxx[-_]av[-_])?(\d+)$", re.IGNORECASE)


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


def _first(node: Any, path: str) -> Any:
    matches = node.xpath(path)
    return matches[0] if matches else None


class TripleX(Scraper):
    """Movie provider backed by xxx-av.com."""

    def __init__(self) -> None:
        super().__init__(
            NAME,
            BASE_URL,
            PRIORITY,
            user_agent=random_user_agent(),
            cookies={"acc_accept_lang": "japanese"},
        )

    def normalize_movie_id(self, movie_id: str) -> str:
        if match := _ID_RE.match(movie_id):
            return match.group(1)
        return ""

    def get_movie_info_by_id(self, movie_id: str) -> MovieInfo:
        return self.get_movie_info_by_url(MOVIE_URL.format(movie_id))

    def parse_movie_id_from_url(self, raw_url: str) -> str:
        return _path_base(urlparse(raw_url).path)

    def get_movie_info_by_url(self, raw_url: str) -> MovieInfo:
        movie_id = self.parse_movie_id_from_url(raw_url)
        info = MovieInfo(
            id=movie_id,
            number=f"XXX-AV-{movie_id}",
            provider=self.name,
            homepage=raw_url,
            maker="トリプルエックス",
        )
        tree = self.fetch_tree(info.homepage)
        base = tree.base_url or info.homepage

        for node in tree.xpath('//div[@class="main_contents"]/h2'):
            info.title = node.text_content().strip()

        for node in tree.xpath('//div[@class="main_contents"]//p[@class="mov_com"]'):
            info.summary = node.text_content().strip()

        for img in tree.xpath('//*[@id="streaming_player"]/img'):
            info.cover_url = urljoin(base, img.get("src", ""))
            info.thumb_url = info.cover_url  # same as cover

        for item in tree.xpath(
            '//div[@class="main_contents"]//div[@class="movie_sample_img "]/ul/li'
        ):
            info.preview_images.append(urljoin(base, _child_attr(item, ".//a", "href")))

        for block in tree.xpath('//div[@class="main_contents"]//dl[@class="info_dl clearfix"]'):
            label = _child_text(block, ".//dt")
            if label == "公開日:":
                info.release_date = parse_date(_child_text(block, ".//dd"))
            elif label == "女優名:":
                info.actors.extend(parse_texts(_first(block, ".//dd")))
            elif label == "再生時間:":
                info.runtime = parse_runtime(_child_text(block, ".//dd"))
            elif label == "カテゴリ名:":
                info.label = _child_text(block, ".//dd")
            elif label == "キーワード:":
                info.genres.extend(parse_texts(_first(block, ".//dd")))

        return info