"""Text translation through the Baidu, DeepL and Google translation APIs."""

from __future__ import annotations

import hashlib
import random
import re
from typing import Any

import requests

BAIDU_TRANSLATE_API = "https://api.fanyi.baidu.com/api/trans/vip/translate"
DEEPL_TRANSLATE_API = "https://api-free.deepl.com/v2/translate"
GOOGLE_TRANSLATE_API = "https://translation.googleapis.com/language/translate/v2"

_TIMEOUT = 30.0

_BAIDU_LANGUAGES = {
    **dict.fromkeys(("zh", "chs", "zh-cn", "zh_cn", "zh-hans"), "zh"),
    **dict.fromkeys(("cht", "zh-tw", "zh_tw", "zh-hk", "zh_hk", "zh-hant"), "cht"),
    **dict.fromkeys(("jp", "ja"), "jp"),
    **dict.fromkeys(("kor", "ko"), "kor"),
    **dict.fromkeys(("vie", "vi"), "vie"),
    **dict.fromkeys(("spa", "es"), "spa"),
    **dict.fromkeys(("fra", "fr"), "fra"),
    **dict.fromkeys(("ara", "ar"), "ara"),
    **dict.fromkeys(("bul", "bg"), "bul"),
    **dict.fromkeys(("est", "et"), "est"),
    **dict.fromkeys(("dan", "da"), "dan"),
    **dict.fromkeys(("fin", "fi"), "fin"),
    **dict.fromkeys(("rom", "ro"), "rom"),
    **dict.fromkeys(("slo", "sl"), "slo"),
    **dict.fromkeys(("swe", "sv"), "swe"),
}

_DEEPL_CHINESE = frozenset(
    ("ZH", "CHS", "ZH-CN", "ZH-HANS", "CHT", "ZH-TW", "ZH-HK", "ZH-HANT")
)


class TranslateError(Exception):
    """A translation service reported a failure."""

    def __init__(self, message: str, code: int | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


def md5sum(text: str) -> str:
    """Return the hex MD5 digest of the UTF-8 encoded text."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def _decode_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise TranslateError(f"invalid response: {exc}") from exc


def baidu_language(lang: str) -> str:
    """Map a language code to the one Baidu expects."""
    lang = lang.lower()
    if lang in ("", "auto"):
        return "auto"
    return _BAIDU_LANGUAGES.get(lang, lang)


def baidu_translate(q: str, source: str, target: str, app_id: str, app_key: str) -> str:
    """Translate text with the Baidu translation API."""
    salt = str(random.randrange(0x7FFFFFFF))
    sign = md5sum(app_id + q + salt + app_key)
    response = requests.post(
        BAIDU_TRANSLATE_API,
        data={
            "q": q,
            "from": baidu_language(source),
            "to": baidu_language(target),
            "appid": app_id,
            "salt": salt,
            "sign": sign,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=_TIMEOUT,
    )
    data = _decode_json(response)
    results = data.get("trans_result") or []
    if not results:
        code = data.get("error_code", "")
        raise TranslateError(f"{code}: {data.get('error_msg', '')}", code or None)
    return "\n".join(item.get("dst", "") for item in results).strip()


def deepl_language(lang: str) -> str:
    """Map a language code to the one DeepL expects."""
    lang = lang.upper()
    if lang in _DEEPL_CHINESE:
        return "ZH"
    if lang == "AUTO":
        return ""
    return lang


def deepl_translate(q: str, source: str, target: str, key: str) -> str:
    """Translate text with the DeepL API; HTTP errors raise requests.HTTPError."""
    response = requests.post(
        DEEPL_TRANSLATE_API,
        data={
            "text": q,
            "source_lang": deepl_language(source),
            "target_lang": deepl_language(target),
            "split_sentences": "0",
        },
        headers={
            "Authorization": f"DeepL-Auth-Key {key}",
            "Content-Type": "application/x-www-form-urlencoded",
        },
        timeout=_TIMEOUT,
    )
    response.raise_for_status()
    translations = _decode_json(response).get("translations") or []
    if not translations:
        raise TranslateError("no translations returned")
    return translations[0].get("text", "")


_LANGUAGE_RE = re.compile(r"^(?:[a-z]{2,3}|[a-z]{5,8})$")
_SUBTAG_RE = re.compile(r"^[a-z0-9]{1,8}$")


def _canonical_tag(lang: str) -> str | None:
    parts = re.split(r"[-_]", lang.lower())
    if not _LANGUAGE_RE.match(parts[0]):
        return None
    canonical = [parts[0]]
    for position, part in enumerate(parts[1:], start=1):
        if not _SUBTAG_RE.match(part):
            return None
        if position == 1 and len(part) == 4 and part.isalpha():
            canonical.append(part.title())
        elif (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            canonical.append(part.upper())
        else:
            canonical.append(part)
    return "-".join(canonical)


def google_language(lang: str) -> str:
    """Map a language code to a canonical BCP 47 tag for Google."""
    lang = lang.lower()
    if lang in ("", "auto"):
        return ""
    tag = _canonical_tag(lang)
    return lang if tag is None else tag


def google_translate(q: str, source: str, target: str, key: str) -> str:
    """Translate text with the Google Cloud translation API."""
    response = requests.post(
        GOOGLE_TRANSLATE_API,
        json={
            "q": q,
            "source": google_language(source),
            "target": google_language(target),
            "format": "text",
        },
        params={"key": key},
        headers={"Content-Type": "application/json"},
        timeout=_TIMEOUT,
    )
    data = _decode_json(response)
    error = data.get("error")
    if error:
        raise TranslateError(str(error.get("message", "")), error.get("code"))
    translations = (data.get("data") or {}).get("translations") or []
    if not translations:
        raise TranslateError("no translations returned")
    return translations[0].get("translatedText", "")