"""Renderização de tom: (template, tom) -> texto final.

Determinístico e total: qualquer erro interno devolve o template original
com log de fallback.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from alfie_assistant.domain.enums import TonePack
from alfie_assistant.observability.logging import get_logger, log_fallback

logger: logging.Logger = get_logger(__name__)

MAX_SENTENCE_CHARS = 130

EMOJI_PATTERN = re.compile(
    "["
    "\U0001f300-\U0001faff"
    "\U0001f000-\U0001f2ff"
    "\u2600-\u27bf"
    "\ufe0f"
    "\u200d"
    "]+"
)
TRAILING_SPACE_PATTERN = re.compile(r"[ \t]+(?=\n)")
SENTENCE_SPLIT_PATTERN = re.compile(r"(?<=[.!?])\s+")

PHRASE_REWRITES: dict[TonePack, dict[str, str]] = {
    TonePack.APPLE_LIKE: {
        "C'est parti !": "C'est lancé.",
        "Salut !": "Bonjour.",
        "Oups, ": "",
    },
    TonePack.B2B_CRISP: {
        "C'est parti !": "Lancement confirmé.",
        "Salut !": "Bonjour.",
        "Oups, ": "",
        "Parfait, ": "Très bien, ",
        "D'accord, ": "Entendu, ",
    },
    TonePack.PLAYFUL: {
        "C'est parti !": "C'est parti ! 🚀",
        "Salut !": "Hello ! 👋",
        "D'accord, ": "Ça roule, ",
    },
}

# Tons sem emoji e com frases curtas
SHORT_SENTENCE_TONES: frozenset[TonePack] = frozenset({TonePack.APPLE_LIKE, TonePack.B2B_CRISP})


def _split_long_sentence(sentence: str, limit: int = MAX_SENTENCE_CHARS) -> list[str]:
    parts: list[str] = []
    rest = sentence
    while len(rest) > limit:
        cut = rest.rfind(", ", 0, limit)
        if cut <= 0:
            break
        head = rest[:cut].rstrip()
        tail = rest[cut + 2 :].lstrip()
        parts.append(head + ".")
        rest = tail[:1].upper() + tail[1:]
    parts.append(rest)
    return parts


def _shorten(text: str) -> str:
    lines = []
    for line in text.split("\n"):
        sentences = SENTENCE_SPLIT_PATTERN.split(line)
        pieces = [piece for s in sentences for piece in _split_long_sentence(s)]
        lines.append(" ".join(pieces))
    return "\n".join(lines)


def _apply_tone(template: str, tone: TonePack) -> str:
    text = template
    for source, target in PHRASE_REWRITES.get(tone, {}).items():
        text = text.replace(source, target)

    if tone in SHORT_SENTENCE_TONES:
        text = EMOJI_PATTERN.sub("", text)
        text = _shorten(text)

    text = TRAILING_SPACE_PATTERN.sub("", text).strip()
    if text[:1].islower():
        text = text[0].upper() + text[1:]
    return text


def _fill(text: str, values: Mapping[str, str] | None) -> str:
    for key, value in (values or {}).items():
        text = text.replace("{" + key + "}", value)
    return text


def render(
    template: str,
    tone: TonePack | str | None,
    values: Mapping[str, str] | None = None,
) -> str:
    """Aplica o tom ao template; tons desconhecidos passam direto.

    `values` (texto do usuário, ex.: o prompt do recap) entra nos
    placeholders `{chave}` depois do tom e nunca é reescrito.
    """
    try:
        pack = TonePack(tone) if tone else TonePack.BRAND_DEFAULT
    except ValueError:
        return _fill(TRAILING_SPACE_PATTERN.sub("", template), values)

    try:
        return _fill(_apply_tone(template, pack), values)
    except Exception as e:
        log_fallback(logger, "tone_render", reason=type(e).__name__)
        return _fill(template, values)
