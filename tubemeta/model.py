"""Metadata records and the provider interfaces that produce them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Protocol, runtime_checkable


@dataclass
class MovieSearchResult:
    """A movie as listed in search results."""

    id: str = ""
    number: str = ""
    title: str = ""
    provider: str = ""
    homepage: str = ""
    thumb_url: str = ""
    cover_url: str = ""
    score: float = 0.0
    actors: list[str] = field(default_factory=list)
    release_date: date | None = None

    def valid(self) -> bool:
        """Return True when the identifying fields are all present."""
        return all((self.id, self.number, self.title, self.provider, self.homepage))


@dataclass
class MovieInfo:
    """Full metadata of a movie."""

    id: str = ""
    number: str = ""
    title: str = ""
    summary: str = ""
    provider: str = ""
    homepage: str = ""
    director: str = ""
    actors: list[str] = field(default_factory=list)
    thumb_url: str = ""
    big_thumb_url: str = ""
    cover_url: str = ""
    big_cover_url: str = ""
    preview_video_url: str = ""
    preview_images: list[str] = field(default_factory=list)
    maker: str = ""
    label: str = ""
    series: str = ""
    genres: list[str] = field(default_factory=list)
    score: float = 0.0
    runtime: int = 0
    release_date: date | None = None

    def valid(self) -> bool:
        """Return True when the record carries enough data to be used."""
        return all(
            (self.id, self.number, self.title, self.cover_url, self.provider, self.homepage)
        )

    def to_search_result(self) -> MovieSearchResult:
        """Condense this record into a search result."""
        return MovieSearchResult(
            id=self.id,
            number=self.number,
            title=self.title,
            provider=self.provider,
            homepage=self.homepage,
            thumb_url=self.thumb_url,
            cover_url=self.cover_url,
            score=self.score,
            actors=list(self.actors),
            release_date=self.release_date,
        )


@dataclass
class ActorSearchResult:
    """An actor as listed in search results."""

    id: str = ""
    name: str = ""
    provider: str = ""
    homepage: str = ""
    aliases: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)

    def valid(self) -> bool:
        """Return True when the identifying fields are all present."""
        return all((self.id, self.name, self.provider, self.homepage))


@dataclass
class ActorInfo:
    """Full profile of an actor."""

    id: str = ""
    name: str = ""
    provider: str = ""
    homepage: str = ""
    summary: str = ""
    hobby: str = ""
    skill: str = ""
    blood_type: str = ""
    cup_size: str = ""
    measurements: str = ""
    nationality: str = ""
    height: int = 0
    aliases: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    birthday: date | None = None
    debut_date: date | None = None

    def valid(self) -> bool:
        """Return True when the identifying fields are all present."""
        return all((self.id, self.name, self.provider, self.homepage))

    def to_search_result(self) -> ActorSearchResult:
        """Condense this profile into a search result."""
        return ActorSearchResult(
            id=self.id,
            name=self.name,
            provider=self.provider,
            homepage=self.homepage,
            aliases=list(self.aliases),
            images=list(self.images),
        )


@dataclass
class MovieReviewDetail:
    """A single user review of a movie."""

    title: str = ""
    author: str = ""
    comment: str = ""
    score: float = 0.0
    date: date | None = None

    def valid(self) -> bool:
        """Return True when the review has an author and a comment."""
        return bool(self.author and self.comment)


@runtime_checkable
class Provider(Protocol):
    """A metadata source."""

    @property
    def name(self) -> str: ...

    @property
    def priority(self) -> int: ...

    @property
    def url(self) -> str: ...


@runtime_checkable
class MovieSearcher(Protocol):
    """Searches a provider for movies."""

    def search_movie(self, keyword: str) -> list[MovieSearchResult]: ...

    def normalize_movie_keyword(self, keyword: str) -> str: ...


@runtime_checkable
class MovieReviewer(Protocol):
    """Fetches user reviews of movies."""

    def get_movie_reviews_by_id(self, movie_id: str) -> list[MovieReviewDetail]: ...

    def get_movie_reviews_by_url(self, raw_url: str) -> list[MovieReviewDetail]: ...


@runtime_checkable
class MovieProvider(Provider, Protocol):
    """A provider of movie metadata."""

    def normalize_movie_id(self, movie_id: str) -> str: ...

    def parse_movie_id_from_url(self, raw_url: str) -> str: ...

    def get_movie_info_by_id(self, movie_id: str) -> MovieInfo: ...

    def get_movie_info_by_url(self, raw_url: str) -> MovieInfo: ...


@runtime_checkable
class ActorSearcher(Protocol):
    """Searches a provider for actors."""

    def search_actor(self, keyword: str) -> list[ActorSearchResult]: ...


@runtime_checkable
class ActorProvider(Provider, Protocol):
    """A provider of actor profiles."""

    def normalize_actor_id(self, actor_id: str) -> str: ...

    def parse_actor_id_from_url(self, raw_url: str) -> str: ...

    def get_actor_info_by_id(self, actor_id: str) -> ActorInfo: ...

    def get_actor_info_by_url(self, raw_url: str) -> ActorInfo: ...