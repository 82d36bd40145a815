"""Sondas determinísticas (regex) sobre o texto do usuário.

Cada função é pura e total: devolve o valor reconhecido ou None.
Nada aqui decide se um slot pode ser sobrescrito; isso é do draft_manager.
"""

from __future__ import annotations

import re

from alfie_assistant.application.replies import (
    LAUNCH_LABEL,
    MODIFY_LABEL,
    OBJECTIVE_LABELS,
    OWN_PROMPT_LABEL,
    STYLE_LABELS,
    SUGGEST_PROMPT_LABEL,
)
from alfie_assistant.domain.brief import normalize_slides
from alfie_assistant.domain.enums import ALLOWED_RATIOS, ChoiceId, Objective, Slot, VisualStyle

PROMPT_MIN_CHARS = 20

OBJECTIVE_PATTERNS: tuple[tuple[re.Pattern[str], Objective], ...] = (
    (
        re.compile(r"\b(acquisition|acqu[ée]rir|leads?|prospects?|prospection)\b", re.IGNORECASE),
        Objective.ACQUISITION,
    ),
    (
        re.compile(r"\b(conversions?|convertir|ventes?|vendre|sales?|achats?)\b", re.IGNORECASE),
        Objective.CONVERSION,
    ),
    (
        re.compile(r"\b(notori[ée]t[ée]|awareness|visibilit[ée]|faire conna[iî]tre)\b", re.IGNORECASE),
        Objective.AWARENESS,
    ),
    (
        re.compile(r"\b(engagement|interactions?|communaut[ée])\b", re.IGNORECASE),
        Objective.ENGAGEMENT,
    ),
)

STYLE_PATTERNS: tuple[tuple[re.Pattern[str], VisualStyle], ...] = (
    (re.compile(r"\b(minimal(iste)?|[ée]pur[ée]|sobre|clean)\b", re.IGNORECASE), VisualStyle.MINIMAL),
    (re.compile(r"\b(vibrant|color[ée]|flashy|[ée]clatant)\b", re.IGNORECASE), VisualStyle.VIBRANT),
    (
        re.compile(r"\b(professionnel(le)?|professional|corporate|business)\b", re.IGNORECASE),
        VisualStyle.PROFESSIONAL,
    ),
    (re.compile(r"\b(fun|ludique|playful|d[ée]cal[ée])\b", re.IGNORECASE), VisualStyle.PLAYFUL),
)

RATIO_PATTERN = re.compile(r"\b(1|4|9|16|3|2)\s*[:x/]\s*(1|5|16|9|4|3)\b", re.IGNORECASE)

# Palavras de formato sem proporção explícita
RATIO_WORDS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bcarr[ée]\b", re.IGNORECASE), "1:1"),
    (re.compile(r"\b(story|stories|vertical)\b", re.IGNORECASE), "9:16"),
    (re.compile(r"\b(paysage|horizontal|youtube)\b", re.IGNORECASE), "16:9"),
    (re.compile(r"\bportrait\b", re.IGNORECASE), "4:5"),
)

SLIDES_PATTERN = re.compile(
    r"(\d+(?:[.,]\d+)?)\s*(slides?|diapos?|diapositives?|[ée]crans?|pages?|cartes?)\b",
    re.IGNORECASE,
)
BARE_NUMBER_PATTERN = re.compile(r"^\s*(\d+(?:[.,]\d+)?)\s*$")
TEMPLATE_PATTERN = re.compile(r"\btemplate\s*[:#-]?\s*([a-z0-9_-]+)", re.IGNORECASE)

STATUS_PATTERN = re.compile(
    r"\b(statut|status|o[uù] en est|o[uù] en sont|avancement)\b|c['’]est pr[eê]t",
    re.IGNORECASE,
)
AFFIRMATION_PATTERN = re.compile(
    r"^\s*(oui|yes|ok|okay|go|vas-y|valide|je valide|confirme|lance|lancer|on lance|"
    r"c['’]est parti)\b",
    re.IGNORECASE,
)
MODIFY_PATTERN = re.compile(r"^\s*(modifier|modifie|changer|corriger|non)\b", re.IGNORECASE)
SUGGEST_PROMPT_PATTERN = re.compile(
    r"propose[- ]moi un prompt|propose un prompt|sugg[èe]re[- ]moi|suggest a prompt",
    re.IGNORECASE,
)
OWN_PROMPT_PATTERN = re.compile(
    r"j['’]\s?[ée]cris mon prompt|mon propre prompt|je donne mon prompt|my own prompt",
    re.IGNORECASE,
)

MENU_SHORTCUTS: frozenset[str] = frozenset(
    label.lower()
    for label in (
        *OBJECTIVE_LABELS.values(),
        *(o.value for o in Objective),
        *STYLE_LABELS.values(),
        *(s.value for s in VisualStyle),
        SUGGEST_PROMPT_LABEL,
        OWN_PROMPT_LABEL,
        LAUNCH_LABEL,
        MODIFY_LABEL,
    )
)


def extract_objective(text: str) -> Objective | None:
    for pattern, objective in OBJECTIVE_PATTERNS:
        if pattern.search(text):
            return objective
    return None


def extract_style(text: str) -> VisualStyle | None:
    for pattern, style in STYLE_PATTERNS:
        if pattern.search(text):
            return style
    return None


def extract_format(text: str) -> str | None:
    """Proporção reconhecida e suportada (ex.: "9 / 16" -> "9:16")."""
    for match in RATIO_PATTERN.finditer(text):
        ratio = f"{match.group(1)}:{match.group(2)}"
        if ratio in ALLOWED_RATIOS:
            return ratio
    for pattern, ratio in RATIO_WORDS:
        if pattern.search(text):
            return ratio
    return None


def extract_slides(text: str) -> int | None:
    match = SLIDES_PATTERN.search(text)
    return normalize_slides(match.group(1)) if match else None


def extract_bare_number(text: str) -> int | None:
    match = BARE_NUMBER_PATTERN.match(text)
    return normalize_slides(match.group(1)) if match else None


def extract_template_id(text: str) -> str | None:
    match = TEMPLATE_PATTERN.search(text)
    return match.group(1).lower() if match else None


def is_menu_shortcut(text: str) -> bool:
    """Literais de menu (rótulos de quick reply, números soltos) nunca viram prompt."""
    normalized = text.strip().lower()
    return normalized in MENU_SHORTCUTS or bool(BARE_NUMBER_PATTERN.match(normalized))


def is_prompt_choice(text: str) -> bool:
    """Pedidos de "propose-moi un prompt" ou "j'écris mon prompt" em qualquer variante."""
    return bool(SUGGEST_PROMPT_PATTERN.search(text) or OWN_PROMPT_PATTERN.search(text))


def is_prompt_candidate(text: str) -> bool:
    normalized = text.strip()
    if len(normalized) <= PROMPT_MIN_CHARS or is_menu_shortcut(normalized):
        return False
    return not is_prompt_choice(normalized)


def is_status_query(text: str, choice: str | None = None) -> bool:
    return choice == ChoiceId.STATUS.value or bool(STATUS_PATTERN.search(text))


def resolve_control(text: str, choice: str | None = None) -> ChoiceId | None:
    """Mapeia choice explícito ou texto livre para uma escolha de controle.

    O choice id sempre vence o texto; respostas "<slot>:<valor>" não são controle.
    """
    if choice:
        try:
            return ChoiceId(choice)
        except ValueError:
            return None

    if SUGGEST_PROMPT_PATTERN.search(text):
        return ChoiceId.SUGGEST_PROMPT
    if OWN_PROMPT_PATTERN.search(text):
        return ChoiceId.OWN_PROMPT
    if AFFIRMATION_PATTERN.search(text):
        return ChoiceId.LAUNCH
    if MODIFY_PATTERN.search(text):
        return ChoiceId.MODIFY
    return None


def parse_slot_choice(choice: str | None) -> tuple[Slot, str] | None:
    """Decodifica "<slot>:<valor>" (o valor pode conter ':' como em "9:16")."""
    if not choice or ":" not in choice:
        return None
    slot_name, _, value = choice.partition(":")
    try:
        slot = Slot(slot_name.strip().lower())
    except ValueError:
        return None
    value = value.strip()
    return (slot, value) if value else None
