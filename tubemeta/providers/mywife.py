"""Movie metadata from MyWife."""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlparse

from tubemeta.model import MovieInfo
from tubemeta.scraper import Scraper, random_user_agent

NAME = "MYWIFE"
PRIORITY = 1000

BASE_URL = "https://mywife.cc/"
MOVIE_URL = "https://mywife.cc/teigaku/model/no/{}"

_ID_RE = re.compile(r"^(?:mywife[-_])?(\d+)$", re.IGNORECASE)


def _path_base(path: str) -> str:
    if not path:
        return "."
    path = path.rstrip("/")
    if not path:
        return "/"
    return path.rsplit("/", 1)[-1]


class MyWife(Scraper):
    """Movie provider backed by mywife.cc."""

    def __init__(self) -> None:
        super().__init__(NAME, BASE_URL, PRIORITY, user_agent=random_user_agent())

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
            number=f"MYWIFE-{movie_id}",
            provider=self.name,
            homepage=raw_url,
            maker="舞ワイフ",
        )
        tree = self.fetch_tree(info.homepage)
        base = tree.base_url or info.homepage

        for node in tree.xpath("/html/head/title"):
            info.title = node.text_content().strip()

        for node in tree.xpath(
            '//div[@class="modelsamplephototop"]/span[@class="text_overflow"]'
        ):
            info.summary = node.text_content().strip()

        for video in tree.xpath('//div[@class="modelsamplephototop"]/video[@id="video"]'):
            if src := video.get("src", ""):
                info.preview_video_url = urljoin(base, src)
            if poster := video.get("poster", ""):
                info.cover_url = urljoin(base, poster)

        for box in tree.xpath(
            '//div[@class="modelsamplephoto"]/div[@class="modelsample_photowaku"]'
        ):
            images = box.xpath("./img")
            if images and (src := images[0].get("src", "")):
                info.preview_images.append(urljoin(base, src))

        if info.cover_url:
            candidate = info.cover_url.replace("topview.jpg", "thumb.jpg")
            if self.exists(candidate):
                info.thumb_url = candidate
                info.big_thumb_url = candidate  # the thumb is of good quality

        return info