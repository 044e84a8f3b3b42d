"""Movie metadata from PRESTIGE."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import parse_qs, quote_plus, urljoin, urlparse

from tubemeta.model import MovieInfo, MovieSearchResult
from tubemeta.scraper import (
    Scraper,
    is_special_number,
    parse_date,
    parse_runtime,
    parse_texts,
    random_user_agent,
    replace_space_all,
)

NAME = "PRESTIGE"
PRIORITY = 1000 - 1

BASE_URL = "https://www.prestige-av.com/"
MOVIE_URL = "https://www.prestige-av.com/goods/goods_detail.php?sku={}"
SEARCH_URL = (
    "https://www.prestige-av.com/goods/goods_list.php"
    "?mode=free&mid=&word={}&count=100&sort=near"
)

_IMAGE_RE = re.compile(r"/p[f|b]_[a-z\d]+?_", re.IGNORECASE)


def _node_text(node: Any) -> str:
    return str(node) if isinstance(node, str) else node.text_content()


def _child_text(node: Any, path: str) -> str:
    matches = node.xpath(path)
    return _node_text(matches[0]).strip() if matches else ""


def _child_texts(node: Any, path: str) -> list[str]:
    return [_node_text(match).strip() for match in node.xpath(path)]


def _child_attr(node: Any, path: str, attr: str) -> str:
    for match in node.xpath(path):
        if not isinstance(match, str):
            return match.get(attr, "")
    return ""


def _last_direct_text(node: Any) -> str:
    """Stripped content of the last text node directly under the element."""
    title = ""
    for piece in node.xpath("text()"):
        title = str(piece).strip()
    return title


def trim_title(text: str) -> str:
    """Keep the part after the last tab, stripped."""
    return text.split("\t")[-1].strip()


def image_src(src: str, thumb: bool) -> str:
    """Rewrite an image URL to its thumb or cover variant."""
    if _IMAGE_RE.search(src):
        return _IMAGE_RE.sub("/pf_p_" if thumb else "/pb_e_", src)
    return src


class Prestige(Scraper):
    """Movie provider backed by prestige-av.com."""

    def __init__(self) -> None:
        super().__init__(
            NAME,
            BASE_URL,
            PRIORITY,
            user_agent=random_user_agent(),
            cookies={"coc": "1", "age_auth": "1"},
        )

    def normalize_movie_id(self, movie_id: str) -> str:
        # SKUs are case-insensitive; upper case keeps them aligned.
        return movie_id.upper()

    def get_movie_info_by_id(self, movie_id: str) -> MovieInfo:
        return self.get_movie_info_by_url(MOVIE_URL.format(quote_plus(movie_id)))

    def parse_movie_id_from_url(self, raw_url: str) -> str:
        query = parse_qs(urlparse(raw_url).query, keep_blank_values=True)
        return self.normalize_movie_id(query.get("sku", [""])[0])

    def get_movie_info_by_url(self, raw_url: str) -> MovieInfo:
        info = MovieInfo(
            id=self.parse_movie_id_from_url(raw_url),
            provider=self.name,
            homepage=raw_url,
        )
        tree = self.fetch_tree(info.homepage)
        base = tree.base_url or info.homepage

        for heading in tree.xpath('//div[@class="product_title_layout_01"]/h1'):
            info.title = _last_direct_text(heading)
            if not info.title:
                info.title = trim_title(heading.text_content())

        for para in tree.xpath('//div[@class="product_description_layout_01"]/p'):
            info.summary = para.text_content().strip()

        for link in tree.xpath(
            '//div[@class="product_detail_layout_01"]//a[@class="sample_image"]'
        ):
            info.cover_url = urljoin(base, link.get("href", ""))
            info.thumb_url = urljoin(base, _child_attr(link, ".//img", "src"))

        for source in tree.xpath('//*[@id="modal-main"]/video/source'):
            info.preview_video_url = urljoin(base, source.get("src", ""))

        for item in tree.xpath('//ul[@class="contents"]/li'):
            if href := _child_attr(item, ".//a", "href"):
                info.preview_images.append(urljoin(base, href))

        for dd in tree.xpath("//dt[text()='出演：']/following-sibling::dd[1]"):
            for actor in parse_texts(dd):
                for part in actor.split("\u00a0"):
                    if part := replace_space_all(part):
                        info.actors.append(part)

        for spec in tree.xpath(
            '//div[@class="product_detail_layout_01"]//dl[@class="spec_layout"]'
        ):
            for position, label in enumerate(_child_texts(spec, ".//dt"), start=1):
                dd = f".//dd[{position}]"
                dda = f".//dd[{position}]/a"
                if label == "収録時間：":
                    info.runtime = parse_runtime(_child_text(spec, dd))
                elif label == "発売日：":
                    info.release_date = parse_date(_child_text(spec, dda))
                elif label == "メーカー名：":
                    info.maker = _child_text(spec, dd)
                elif label == "品番：":
                    info.number = _child_text(spec, dd)
                elif label == "ジャンル：":
                    info.genres = _child_texts(spec, dda)
                elif label == "シリーズ：":
                    info.series = _child_text(spec, dd)
                elif label == "レーベル：":
                    info.label = _child_text(spec, dd)

        # Prefer high resolution pictures when they exist.
        if info.thumb_url:
            big_thumb = info.thumb_url.replace("/pf_p_", "/pf_")
            if self.exists(big_thumb):
                info.big_thumb_url = big_thumb
        if info.cover_url:
            big_cover = info.cover_url.replace("/pb_e_", "/pb_")
            if self.exists(big_cover):
                info.big_cover_url = big_cover

        return info

    def normalize_movie_keyword(self, keyword: str) -> str:
        if is_special_number(keyword):
            return ""
        return keyword.upper()

    def search_movie(self, keyword: str) -> list[MovieSearchResult]:
        search_url = SEARCH_URL.format(quote_plus(keyword))
        tree = self.fetch_tree(search_url)
        base = tree.base_url or search_url
        results: list[MovieSearchResult] = []
        for item in tree.xpath('//*[@id="body_goods"]/ul/li'):
            thumb = _child_attr(item, ".//a/img", "src")
            homepage = urljoin(base, _child_attr(item, ".//a", "href"))
            movie_id = self.parse_movie_id_from_url(homepage)

            # The span holds extra labels; the last text node is the title.
            spans = item.xpath(".//a/span")
            title = _last_direct_text(spans[0]) if spans else ""
            if not title:
                title = trim_title(_child_text(item, ".//a/span"))

            results.append(
                MovieSearchResult(
                    id=movie_id,
                    number=movie_id,
                    provider=self.name,
                    title=title,
                    thumb_url=urljoin(base, image_src(thumb, True)),
                    cover_url=urljoin(base, image_src(thumb, False)),
                    homepage=homepage,
                )
            )
        return results