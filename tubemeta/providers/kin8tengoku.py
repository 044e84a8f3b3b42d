"""Movie metadata from Kin8tengoku."""

from __future__ import annotations

import json
import posixpath
import re
import time
from typing import Any
from urllib.parse import urlencode, urljoin, urlparse

import requests

from tubemeta.model import MovieInfo
from tubemeta.scraper import (
    Scraper,
    parse_date,
    parse_runtime,
    parse_texts,
    random_user_agent,
)

NAME = "KIN8"
PRIORITY = 1000

BASE_URL = "https://www.kin8tengoku.com/"
MOVIE_URL = "https://www.kin8tengoku.com/moviepages/{}/index.html"
REVIEW_URL = "https://m-template.heyzo.com/snstb/api/review?{}"

_ID_RE = re.compile(r"^(?:kin8[-_])?(\d+)$", re.IGNORECASE)
_IMG_URL_RE = re.compile(r"imgurl\s*=\s*'(.+?)';")
_SAMPLE_LIMIT_RE = re.compile(r"samplelimit\s*=\s*(\d+);")
_VIDEO_URL_RE = re.compile(r"videourl\s*=\s*'(.+?)'")
_JSONP_RE = re.compile(r"\w+\((.+?)\);", re.DOTALL)


def _path_base(path: str) -> str:
    if not path:
        return "."
    path = path.rstrip("/")
    if not path:
        return "/"
    return path.rsplit("/", 1)[-1]


def _child_text(node: Any, path: str) -> str:
    matches = node.xpath(path)
    if not matches:
        return ""
    first = matches[0]
    return (str(first) if isinstance(first, str) else first.text_content()).strip()


def _first(node: Any, path: str) -> Any:
    matches = node.xpath(path)
    return matches[0] if matches else None


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


class KIN8(Scraper):
    """Movie provider backed by kin8tengoku.com."""

    def __init__(self) -> None:
        super().__init__(NAME, BASE_URL, PRIORITY, user_agent=random_user_agent())

    def normalize_movie_id(self, movie_id: str) -> str:
        if match := _ID_RE.match(movie_id):
            return match.group(1)
        return ""

    def get_movie_info_by_id(self, movie_id: str) -> MovieInfo:
        return self.get_movie_info_by_url(MOVIE_URL.format(movie_id.rjust(4, "0")))

    def parse_movie_id_from_url(self, raw_url: str) -> str:
        return _path_base(posixpath.dirname(urlparse(raw_url).path))

    def get_movie_info_by_url(self, raw_url: str) -> MovieInfo:
        movie_id = self.parse_movie_id_from_url(raw_url)
        info = MovieInfo(
            id=movie_id,
            number=f"KIN8-{movie_id}",
            provider=self.name,
            homepage=raw_url,
            maker="金髪天國",
        )
        tree = self.fetch_tree(info.homepage)
        base = tree.base_url or info.homepage

        for node in tree.xpath(
            '//*[@id="sub_main"]/p[@class="sub_title" or @class="sub_title_vip"]'
        ):
            info.title = node.text_content().strip()
        for meta in tree.xpath('//meta[@name="keywords"]'):
            if not info.title:
                info.title = meta.get("content", "").strip()

        for node in tree.xpath('//*[@id="comment"]'):
            info.summary = node.text_content().strip()

        for row in tree.xpath('//*[@id="detail_box" or @id="detail_box_vip"]//tr'):
            label = _child_text(row, './/td[@class="movie_table_td"]')
            value_path = './/td[@class="movie_table_td2"]'
            if label == "モデル":
                info.actors.extend(parse_texts(_first(row, value_path)))
            elif label == "カテゴリー":
                info.genres.extend(parse_texts(_first(row, value_path)))
            elif label == "再生時間":
                info.runtime = parse_runtime(_child_text(row, value_path))
            elif label == "更新日":
                info.release_date = parse_date(_child_text(row, value_path))

        for script in tree.xpath('//*[@id="movie"]/script'):
            if not info.cover_url:
                self._apply_script(info, script.text_content(), base)

        for link in tree.xpath('//*[@id="gallery" or @id="gallery_vip"]/div/a'):
            if href := link.get("href", ""):
                info.preview_images.append(urljoin(base, href))

        for node in tree.xpath('//*[@id="review_list"]'):
            score = self._fetch_review_score(
                node.get("data-d2p_site_id", ""), node.get("data-movie_seq", "")
            )
            if score is not None:
                info.score = score

        return info

    @staticmethod
    def _apply_script(info: MovieInfo, text: str, base: str) -> None:
        if match := _IMG_URL_RE.search(text):
            info.cover_url = urljoin(base, match.group(1))
            info.thumb_url = info.cover_url  # the cover doubles as thumb
        if not (match := _SAMPLE_LIMIT_RE.search(text)):
            return
        sample_limit = _to_int(match.group(1))
        video_id = _to_int(info.id)
        if sample_limit <= 0 or video_id <= 0:
            return
        videos = _VIDEO_URL_RE.findall(text)
        if len(videos) == 1:
            info.preview_video_url = urljoin(base, videos[0])
        elif len(videos) == 2:
            chosen = videos[0] if video_id >= sample_limit else videos[1]
            info.preview_video_url = urljoin(base, chosen)

    def _fetch_review_score(self, site_id: str, movie_seq: str) -> float | None:
        """Average user rating from the review service, or None if unavailable."""
        timestamp = str(int(time.time() * 1000))
        query = urlencode(
            sorted(
                {
                    "callback": f"jQuery_{timestamp}",
                    "site_id": site_id,
                    "movie_seq": movie_seq,
                    "json": "1",
                    "_": timestamp,
                }.items()
            )
        )
        try:
            response = self.session.get(REVIEW_URL.format(query), timeout=self.timeout)
        except requests.RequestException:
            return None
        if not (match := _JSONP_RE.search(response.text)):
            return None
        try:
            reviews = json.loads(match.group(1))
            ratings = [float(review.get("user_rating", 0)) for review in reviews]
        except (ValueError, TypeError, AttributeError):
            return None
        if not ratings:
            return None
        return sum(ratings) / len(ratings)