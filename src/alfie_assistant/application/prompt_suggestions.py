"""Tabela de decisão para "Propose-moi un prompt".

Chave (kind, objective, format); None funciona como coringa. A busca vai da
chave mais específica para a mais genérica, então a tabela sempre responde.
"""

from __future__ import annotations

from alfie_assistant.domain.enums import CreationKind, Objective

SuggestionKey = tuple[CreationKind | None, Objective | None, str | None]

PROMPT_TABLE: dict[SuggestionKey, str] = {
    (CreationKind.CAROUSEL, Objective.CONVERSION, "9:16"): (
        "Carrousel vertical qui présente le produit phare slide après slide, "
        "avec un bénéfice clé par écran et un appel à l'action final « Commander maintenant »"
    ),
    (CreationKind.CAROUSEL, Objective.ACQUISITION, None): (
        "Carrousel pédagogique en plusieurs étapes qui répond aux questions fréquentes "
        "des prospects et termine par une invitation à s'inscrire"
    ),
    (CreationKind.CAROUSEL, None, None): (
        "Carrousel qui raconte l'histoire de la marque en quelques slides, "
        "du problème client à la solution proposée"
    ),
    (CreationKind.IMAGE, Objective.CONVERSION, None): (
        "Visuel produit mis en scène sur fond uni, prix ou offre bien visible "
        "et bouton d'appel à l'action contrasté"
    ),
    (CreationKind.IMAGE, Objective.AWARENESS, None): (
        "Visuel de marque lumineux avec le logo en évidence et une accroche courte "
        "qui résume la promesse de la marque"
    ),
    (CreationKind.IMAGE, None, "4:5"): (
        "Visuel portrait pour le fil Instagram avec le produit au centre "
        "et une accroche en haut de l'image"
    ),
    (CreationKind.IMAGE, None, None): (
        "Visuel épuré mettant en avant le produit dans un décor du quotidien, "
        "avec une accroche courte et le logo discret"
    ),
    (CreationKind.VIDEO, None, "9:16"): (
        "Vidéo verticale de quelques secondes : accroche visuelle forte d'entrée, "
        "démonstration rapide du produit puis logo final"
    ),
    (CreationKind.VIDEO, Objective.ENGAGEMENT, None): (
        "Vidéo courte en coulisses de la marque qui invite la communauté à commenter "
        "et partager"
    ),
    (CreationKind.VIDEO, None, None): (
        "Vidéo courte et rythmée qui présente le produit en trois plans "
        "et se termine sur le logo de la marque"
    ),
}

DEFAULT_PROMPT = (
    "Création de marque moderne et lisible qui met en avant le produit "
    "avec une accroche courte et un appel à l'action clair"
)


def suggest_prompt(
    kind: CreationKind | None,
    objective: Objective | None,
    format: str | None,  # noqa: A002
) -> str:
    """Prompt sugerido para a combinação mais específica presente na tabela."""
    candidates: list[SuggestionKey] = [
        (kind, objective, format),
        (kind, objective, None),
        (kind, None, format),
        (kind, None, None),
    ]
    for key in candidates:
        if key in PROMPT_TABLE:
            return PROMPT_TABLE[key]
    return DEFAULT_PROMPT
