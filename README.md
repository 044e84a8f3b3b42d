# tubemeta

`tubemeta` scrapes movie metadata from a number of catalogue sites. It also
has helpers for translating text through the Baidu, DeepL and Google
translation APIs, for checking bearer tokens, and for parsing raw query
strings.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Data model

`tubemeta.model` defines the records that providers return, as dataclasses:

- `MovieInfo` and `MovieSearchResult`
- `ActorInfo` and `ActorSearchResult`
- `MovieReviewDetail`

Each record has a `valid()` method that tells whether its essential fields
are filled in. `MovieInfo.to_search_result()` and
`ActorInfo.to_search_result()` condense a full record into its search form.
Dates are `datetime.date` objects, or `None` when unknown.

The runtime-checkable protocols `Provider`, `MovieProvider`,
`MovieSearcher`, `MovieReviewer`, `ActorProvider` and `ActorSearcher`
describe what a provider can do, so `isinstance(obj, MovieSearcher)` works.

## Movie providers

Providers live in `tubemeta.providers`:

| Module                           | Class      | `search_movie` |
|----------------------------------|------------|----------------|
| `tubemeta.providers.jav321`      | `JAV321`   | yes            |
| `tubemeta.providers.javbus`      | `JavBus`   | yes            |
| `tubemeta.providers.kin8tengoku` | `KIN8`     |                |
| `tubemeta.providers.mywife`      | `MyWife`   |                |
| `tubemeta.providers.pcolle`      | `Pcolle`   |                |
| `tubemeta.providers.prestige`    | `Prestige` | yes            |
| `tubemeta.providers.xxxav`       | `TripleX`  |                |

Every provider has `name`, `priority` and `url`, and the methods
`normalize_movie_id`, `parse_movie_id_from_url`, `get_movie_info_by_id`
and `get_movie_info_by_url`. Those that search also have
`normalize_movie_keyword`, which returns an empty string for keywords the
site does not carry.

```python
from tubemeta.providers.javbus import JavBus

provider = JavBus()
info = provider.get_movie_info_by_id("ABP-331")
print(info.title, info.release_date)

keyword = provider.normalize_movie_keyword("ssis-033")
if keyword:
    for result in provider.search_movie(keyword):
        print(result.number, result.title)
```

## Scraper base

Every provider is built on `tubemeta.scraper.Scraper`, which holds the
provider's name, base URL, priority and a `requests` session.

- `fetch(url, method=..., data=..., headers=...)` sends a request. Error
  statuses raise `requests.HTTPError`, except on a scraper created with
  `follow_redirects=False`, which returns every response as is.
- `fetch_tree(...)` fetches a page and parses it into an `lxml.html` tree.
- `exists(url)` sends a HEAD request and reports whether it succeeded.
- `set_request_timeout(seconds)` sets the request timeout
  (`JAV321` always uses 10 seconds).

`new_default_scraper(name, base_url, priority, **kwargs)` builds a scraper
with a random browser user agent (see `random_user_agent()`).

The module also has the text helpers the providers use: `parse_date`,
`parse_runtime` (minutes), `parse_score`, `parse_int`, `parse_texts`,
`replace_space_all`, `parse_id_to_number` and `is_special_number`.

## Translation

`tubemeta.translate` wraps three translation services. Each call returns the
translated text or raises `TranslateError`; `deepl_translate` raises
`requests.HTTPError` on an error status.

```python
from tubemeta.translate import deepl_translate

text = deepl_translate("Oh yeah! I'm a translator!", "", "ja", "placeholder")
```

`baidu_translate(q, source, target, app_id, app_key)` and
`google_translate(q, source, target, key)` work the same way.

The language helpers turn common language codes into the form each service
expects:

```python
from tubemeta.translate import baidu_language, deepl_language, google_language

baidu_language("ja")      # "jp"
deepl_language("zh-CN")   # "ZH"
google_language("zh-cn")  # "zh-CN"
```

## Authentication

`tubemeta.auth` checks `Authorization: Bearer ...` headers against any
`Validator`, such as a single `Token` or a `TokenStore`:

```python
from tubemeta.auth import TokenStore, UnauthorizedError, authenticate

store = TokenStore("token")
authenticate("Bearer token", store)  # returns "token"

try:
    authenticate("Basic token", store)
except UnauthorizedError as exc:
    print(exc.code)  # 401
```

Passing `None` as the validator turns the check off; `authenticate` then
returns `None`. `TokenStore` also has `add()` and `delete()`.

## Query strings

`tubemeta.query.parse_query("a=1&b=2")` returns `{"a": ["1"], "b": ["2"]}`.
Keys are unescaped, values are kept as sent. A malformed string raises
`QueryError`, whose `values` attribute holds whatever could still be
parsed. `parse_redirect("JavBus:ABP-331")` splits a `provider:id` target
into `("JavBus", "ABP-331")`, unescaping the id.

## What this package does not do

- No provider here implements actor lookup or movie reviews; the
  `ActorProvider`, `ActorSearcher` and `MovieReviewer` protocols and the
  actor and review records are defined, but nothing in the package fills
  them.
- There is no HTTP server, no command-line program and no storage. The
  auth and query helpers are plain functions for use in your own server.
- Images are not downloaded or processed; records carry image URLs only.