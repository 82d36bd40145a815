"""Catálogo de respostas (fr-FR) e quick replies do assistente.

O texto dos quick replies é só apresentação; o fluxo usa `choice`
(ChoiceId ou "<slot>:<valor>").
"""

from __future__ import annotations

from dataclasses import dataclass

from alfie_assistant.domain.brief import Brief
from alfie_assistant.domain.enums import (
    ChoiceId,
    CreationKind,
    HostVariant,
    Objective,
    Slot,
    VisualStyle,
)


@dataclass(frozen=True, slots=True)
class QuickReply:
    """Resposta sugerida; sem `choice`, o label é reenviado como texto livre."""

    label: str
    choice: str | None = None


def slot_choice(slot: Slot, value: str) -> str:
    return f"{slot.value}:{value}"


# --- Rótulos -----------------------------------------------------------------

KIND_LABELS: dict[CreationKind, str] = {
    CreationKind.IMAGE: "visuel",
    CreationKind.CAROUSEL: "carrousel",
    CreationKind.VIDEO: "vidéo",
}

OBJECTIVE_LABELS: dict[Objective, str] = {
    Objective.ACQUISITION: "Acquisition",
    Objective.CONVERSION: "Conversion",
    Objective.AWARENESS: "Notoriété",
    Objective.ENGAGEMENT: "Engagement",
}

STYLE_LABELS: dict[VisualStyle, str] = {
    VisualStyle.MINIMAL: "Minimal",
    VisualStyle.VIBRANT: "Vibrant",
    VisualStyle.PROFESSIONAL: "Professionnel",
    VisualStyle.PLAYFUL: "Ludique",
}

SLOT_LABELS: dict[Slot, str] = {
    Slot.OBJECTIVE: "objectif",
    Slot.FORMAT: "format",
    Slot.STYLE: "style",
    Slot.PROMPT: "prompt",
    Slot.SLIDES: "nombre de slides",
}

SUGGEST_PROMPT_LABEL = "Propose-moi un prompt"
OWN_PROMPT_LABEL = "J'écris mon prompt"
LAUNCH_LABEL = "Oui, lancer"
MODIFY_LABEL = "Modifier"
STATUS_LABEL = "Statut"

# --- Quick replies -----------------------------------------------------------

FORMAT_OPTIONS: dict[CreationKind, tuple[str, str]] = {
    CreationKind.IMAGE: ("1:1", "4:5"),
    CreationKind.CAROUSEL: ("9:16", "1:1"),
    CreationKind.VIDEO: ("9:16", "16:9"),
}

CONFIRM_QUICK_REPLIES: list[QuickReply] = [
    QuickReply(LAUNCH_LABEL, ChoiceId.LAUNCH.value),
    QuickReply(MODIFY_LABEL, ChoiceId.MODIFY.value),
]

RETRY_QUICK_REPLIES: list[QuickReply] = [QuickReply(LAUNCH_LABEL, ChoiceId.LAUNCH.value)]

STATUS_QUICK_REPLIES: list[QuickReply] = [QuickReply(STATUS_LABEL, ChoiceId.STATUS.value)]

START_QUICK_REPLIES: list[QuickReply] = [
    QuickReply("Créer un carrousel"),
    QuickReply("Créer une image"),
]


def slot_quick_replies(slot: Slot, kind: CreationKind | None) -> list[QuickReply]:
    """Duas opções rápidas por slot (formato depende do tipo de peça)."""
    if slot == Slot.OBJECTIVE:
        return [
            QuickReply(OBJECTIVE_LABELS[o], slot_choice(slot, o.value))
            for o in (Objective.ACQUISITION, Objective.CONVERSION)
        ]
    if slot == Slot.FORMAT:
        options = FORMAT_OPTIONS.get(kind or CreationKind.IMAGE, FORMAT_OPTIONS[CreationKind.IMAGE])
        return [QuickReply(ratio, slot_choice(slot, ratio)) for ratio in options]
    if slot == Slot.STYLE:
        return [
            QuickReply(STYLE_LABELS[s], slot_choice(slot, s.value))
            for s in (VisualStyle.MINIMAL, VisualStyle.VIBRANT)
        ]
    if slot == Slot.PROMPT:
        return [
            QuickReply(SUGGEST_PROMPT_LABEL, ChoiceId.SUGGEST_PROMPT.value),
            QuickReply(OWN_PROMPT_LABEL, ChoiceId.OWN_PROMPT.value),
        ]
    return [QuickReply(f"{n} slides", slot_choice(slot, str(n))) for n in (5, 8)]


# --- Mensagens ---------------------------------------------------------------

INTRO = {
    HostVariant.DESIGNER: (
        "Salut ! Je suis Alfie Designer. Dis-moi quel visuel, carrousel ou vidéo tu veux "
        "que je conçoive et je te prépare ça."
    ),
    HostVariant.EDITORIAL: (
        "Bonjour ! Je suis Alfie Editorial. Je t'aide à cadrer tes contenus et je peux "
        "lancer la création de visuels, carrousels ou vidéos pour ta marque."
    ),
}

CAPABILITIES = {
    HostVariant.DESIGNER: (
        "Je peux créer des images, des carrousels et des vidéos courtes pour ta marque. "
        "Dis-moi ce que tu veux lancer !"
    ),
    HostVariant.EDITORIAL: (
        "Je peux transformer tes idées en visuels, carrousels ou vidéos courtes. "
        "Dis-moi par quoi tu veux commencer !"
    ),
}

SLOT_QUESTIONS: dict[Slot, str] = {
    Slot.OBJECTIVE: "Quel est l'objectif principal de ce {kind} ?",
    Slot.FORMAT: "Quel format veux-tu pour ce {kind} ?",
    Slot.STYLE: "Quel style visuel préfères-tu ?",
    Slot.PROMPT: "Décris-moi ce que tu veux voir, ou laisse-moi te proposer un prompt.",
    Slot.SLIDES: "Combien de slides pour ce carrousel ? (entre 1 et 30)",
}

FEATURE_DISABLED = (
    "La création de {kind} est temporairement indisponible. Réessaie un peu plus tard !"
)
MISSING_DETAILS = (
    "Il me manque encore quelques détails pour lancer la création : {slots}. "
    "Précise-les dans un message et je m'occupe du reste."
)
OWN_PROMPT_ASK = "Parfait, envoie-moi ton prompt dans ton prochain message."
MODIFY_ASK = "D'accord, qu'est-ce que tu veux changer ? (objectif, format, style, prompt…)"
VALIDATION_FAILED = (
    "J'ai besoin d'un peu plus de détails pour finaliser le brief. Tu peux préciser ta demande ?"
)
LAUNCHED = "C'est parti ! Ta création est en cours de génération (commande {order_id})."
QUEUE_NOTE = " Il y a {queue_size} création(s) avant la tienne dans la file."
DISPATCH_FAILED = (
    "Oups, je n'ai pas pu lancer la génération ({diagnostic}). Ton brief est conservé : "
    "renvoie « Oui, lancer » pour réessayer."
)
STATUS_NONE = "Rien en cours pour le moment. Dis-moi ce que tu veux créer !"
STATUS_DONE = "C'est prêt ! 🎉 Voici ta création :\n{urls}"
STATUS_QUEUED = "Ta création est encore en cours de génération. Suis son avancement ici : {link}"
STATUS_FAILED = (
    "Je n'arrive pas à vérifier le statut pour le moment ({diagnostic}). "
    "Réessaie dans un instant."
)
TURN_FAILED = "Oups, un souci technique m'empêche de répondre. Réessaie dans un instant."

DIAGNOSTIC_MAX_CHARS = 80


def short_diagnostic(exc: BaseException) -> str:
    """Diagnóstico curto e seguro para o usuário (sem stack nem payload)."""
    text = str(exc).strip() or type(exc).__name__
    if len(text) > DIAGNOSTIC_MAX_CHARS:
        text = text[: DIAGNOSTIC_MAX_CHARS - 1].rstrip() + "…"
    return text


def missing_details(slots: list[Slot]) -> str:
    return MISSING_DETAILS.format(slots=", ".join(SLOT_LABELS[s] for s in slots))


def slot_question(slot: Slot, kind: CreationKind | None) -> str:
    return SLOT_QUESTIONS[slot].format(kind=KIND_LABELS.get(kind, "contenu") if kind else "contenu")


def recap(brief: Brief) -> str:
    """Resumo do brief finalizado antes da confirmação.

    O prompt fica como placeholder `{prompt}`: é texto do usuário e só entra
    depois do tom (ver `recap_values`).
    """
    lines = [
        "📋 Récapitulatif :",
        f"• Type : {KIND_LABELS[brief.kind]}",
        f"• Objectif : {OBJECTIVE_LABELS[brief.objective]}",
        f"• Format : {brief.format}",
        f"• Style : {STYLE_LABELS[brief.style]}",
    ]
    if brief.slides is not None:
        lines.append(f"• Slides : {brief.slides}")
    if brief.template_id:
        lines.append(f"• Template : {brief.template_id}")
    lines.append("• Prompt : {prompt}")
    lines.append("")
    lines.append("Tout est bon ? Je lance la génération ?")
    return "\n".join(lines)


def recap_values(brief: Brief) -> dict[str, str]:
    return {"prompt": brief.prompt}
