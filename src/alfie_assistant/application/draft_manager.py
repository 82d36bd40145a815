"""Atualização incremental do BriefDraft a partir de um turno.

Regra de sobrescrita: um slot preenchido só muda quando é a resposta
explícita à própria pergunta (slot em `session.pending_slots`) ou quando
chega um choice "<slot>:<valor>" para ele.
"""

from __future__ import annotations

import logging
from typing import Any

from alfie_assistant.application.session.models import ConversationSession
from alfie_assistant.application.slot_extraction import (
    extract_bare_number,
    extract_format,
    extract_objective,
    extract_slides,
    extract_style,
    extract_template_id,
    is_prompt_candidate,
    parse_slot_choice,
)
from alfie_assistant.domain.brief import BriefDraft, normalize_slides
from alfie_assistant.domain.enums import (
    ALLOWED_RATIOS,
    INTENT_TO_KIND,
    CreationKind,
    Intent,
    Objective,
    Slot,
    VisualStyle,
)
from alfie_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

_PROBES = (
    (Slot.OBJECTIVE, extract_objective),
    (Slot.FORMAT, extract_format),
    (Slot.STYLE, extract_style),
)


def _choice_value(slot: Slot, raw: str) -> Any:
    """Converte o valor de um choice de slot; None se inválido."""
    try:
        if slot == Slot.OBJECTIVE:
            return Objective(raw.lower())
        if slot == Slot.STYLE:
            return VisualStyle(raw.lower())
    except ValueError:
        return None
    if slot == Slot.FORMAT:
        return raw if raw in ALLOWED_RATIOS else None
    if slot == Slot.SLIDES:
        return normalize_slides(raw)
    return raw


def update_draft(
    message: str,
    session: ConversationSession,
    intent: Intent,
    choice: str | None = None,
) -> BriefDraft:
    """Retorna um novo rascunho com o que foi reconhecido neste turno.

    O rascunho da sessão não é alterado; o chamador decide se adota o retorno.
    """
    draft = session.draft
    text = (message or "").strip()
    pending = set(session.pending_slots)

    def can_set(slot: Slot) -> bool:
        return not draft.is_filled(slot) or slot in pending

    changes: dict[str, Any] = {"brand_id": session.brand_id, "tone": session.tone}

    kind = INTENT_TO_KIND.get(intent)
    if kind is not None:
        changes["kind"] = kind
    effective_kind = kind or draft.kind

    for slot, probe in _PROBES:
        if can_set(slot):
            value = probe(text)
            if value is not None:
                changes[slot.value] = value

    if effective_kind == CreationKind.CAROUSEL and can_set(Slot.SLIDES):
        slides = extract_slides(text)
        if slides is None and Slot.SLIDES in pending:
            slides = extract_bare_number(text)
        if slides is not None:
            changes["slides"] = slides

    if not draft.template_id:
        template_id = extract_template_id(text)
        if template_id:
            changes["template_id"] = template_id

    prompt_asked_alone = session.pending_slots == [Slot.PROMPT]
    if (not draft.is_filled(Slot.PROMPT) or prompt_asked_alone) and is_prompt_candidate(text):
        changes["prompt"] = text

    slot_answer = parse_slot_choice(choice)
    if slot_answer is not None:
        slot, raw = slot_answer
        value = _choice_value(slot, raw)
        if value is None:
            logger.debug("slot_choice_ignored", extra={"slot": slot.value})
        else:
            changes[slot.value] = value

    return draft.with_updates(**changes)
