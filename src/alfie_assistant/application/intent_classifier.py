"""Classificador de intenção determinístico.

Regras avaliadas numa ordem fixa (a primeira que casa vence):
carrossel > vídeo > imagem > marcadores interrogativos > intenção lembrada > smalltalk.
Não reordenar: "un carrousel vidéo ?" precisa continuar sendo carrossel.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from alfie_assistant.domain.enums import Intent

CAROUSEL_PATTERN = re.compile(r"\b(carrou?sels?|carousels?|slides?)\b", re.IGNORECASE)
VIDEO_PATTERN = re.compile(r"\b(vid[ée]os?|reels?|shorts?|tiktok)\b", re.IGNORECASE)
IMAGE_PATTERN = re.compile(
    r"\b(images?|visuels?|photos?|posts?|affiches?|illustrations?|banni[èe]res?)\b",
    re.IGNORECASE,
)
QUESTION_PATTERN = re.compile(
    r"(\?\s*$)|^\s*(comment|pourquoi|quoi|quel(le)?s?|combien|est-ce|qu['’]est|"
    r"peux-tu|tu peux|c['’]est quoi|what|how|why)\b",
    re.IGNORECASE,
)

Rule = tuple[Callable[[str], bool], Intent]

INTENT_RULES: tuple[Rule, ...] = (
    (lambda text: bool(CAROUSEL_PATTERN.search(text)), Intent.CREATE_CAROUSEL),
    (lambda text: bool(VIDEO_PATTERN.search(text)), Intent.CREATE_VIDEO),
    (lambda text: bool(IMAGE_PATTERN.search(text)), Intent.CREATE_IMAGE),
    (lambda text: bool(QUESTION_PATTERN.search(text)), Intent.QUESTION),
)


def classify_intent(text: str, remembered: Intent | None = None) -> Intent:
    """Classifica a mensagem; nunca lança exceção."""
    normalized = (text or "").strip()
    for predicate, outcome in INTENT_RULES:
        if predicate(normalized):
            return outcome
    return remembered or Intent.SMALLTALK
