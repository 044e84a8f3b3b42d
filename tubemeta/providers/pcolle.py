"""Movie metadata from Pcolle."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import parse_qs, quote_plus, urljoin, urlparse

from tubemeta.model import MovieInfo
from tubemeta.scraper import Scraper, parse_date, parse_texts, random_user_agent

NAME = "Pcolle"
PRIORITY = 1000

BASE_URL = "https://www.pcolle.com/"
MOVIE_URL = "https://www.pcolle.com/product/detail/?product_id={}"

_ID_RE = re.compile(r"^(?:PCOLLE[-_])?([a-z\d]{9,})$", re.IGNORECASE)


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


class Pcolle(Scraper):
    """Movie provider backed by pcolle.com."""

    def __init__(self) -> None:
        super().__init__(
            NAME,
            BASE_URL,
            PRIORITY,
            user_agent=random_user_agent(),
            cookies={"AGE_CONF": "1"},
        )

    def normalize_movie_id(self, movie_id: str) -> str:
        if match := _ID_RE.match(movie_id):
            return match.group(1).lower()
        return ""

    def get_movie_info_by_id(self, movie_id: str) -> MovieInfo:
        return self.get_movie_info_by_url(MOVIE_URL.format(quote_plus(movie_id)))

    def parse_movie_id_from_url(self, raw_url: str) -> str:
        query = parse_qs(urlparse(raw_url).query, keep_blank_values=True)
        return self.normalize_movie_id(query.get("product_id", [""])[0])

    def get_movie_info_by_url(self, raw_url: str) -> MovieInfo:
        movie_id = self.parse_movie_id_from_url(raw_url)
        info = MovieInfo(
            id=movie_id,
            number=f"PCOLLE-{movie_id}",
            provider=self.name,
            homepage=raw_url,
        )
        tree = self.fetch_tree(info.homepage)
        base = tree.base_url or info.homepage

        for row in tree.xpath("//table//tr"):
            label = _child_text(row, ".//th")
            if label == "販売会員:":
                info.maker = _child_text(row, ".//td")
            elif label == "カテゴリー:":
                texts = parse_texts(_first(row, ".//td"))
                if texts:
                    info.label = texts[0]
            elif label == "商品名:":
                info.title = _child_text(row, ".//td")
            elif label == "販売開始日:":
                info.release_date = parse_date(_child_text(row, ".//td"))

        for node in tree.xpath('//div[@class="title-04"]'):
            if not info.title:
                info.title = node.text_content().strip()

        for section in tree.xpath('//section[@class="item_description"]'):
            if summary := _child_text(section, './/p[@class="fo-14"]'):
                info.summary = summary
            else:
                info.summary = section.text_content()

        for article in tree.xpath('//div[@class="item-content"]//div[@class="part1"]/article'):
            info.thumb_url = urljoin(base, _child_attr(article, ".//a", "href"))
            info.cover_url = info.thumb_url

        for item in tree.xpath('//section[@class="item_tags"]//ul//li'):
            info.genres.append(item.text_content().strip())

        for item in tree.xpath('//section[@class="item_images"]//ul//li'):
            info.preview_images.append(urljoin(base, _child_attr(item, ".//a", "href")))

        if not info.cover_url and info.preview_images:
            info.cover_url = info.preview_images[0]

        return info