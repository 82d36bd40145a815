"""Enums de domínio: estágios do diálogo, intenções, slots e escolhas."""

from __future__ import annotations

from enum import StrEnum


class Stage(StrEnum):
    """Estágios da máquina de estados do diálogo."""

    IDLE = "idle"
    COLLECTING = "collecting"
    CONFIRM = "confirm"


class HostVariant(StrEnum):
    """Variantes de produto servidas pelo mesmo motor."""

    DESIGNER = "designer"
    EDITORIAL = "editorial"


class Intent(StrEnum):
    """Classificação grossa de uma mensagem."""

    CREATE_IMAGE = "create_image"
    CREATE_CAROUSEL = "create_carousel"
    CREATE_VIDEO = "create_video"
    QUESTION = "question"
    SMALLTALK = "smalltalk"


class CreationKind(StrEnum):
    """Tipos de peça que o dispatcher sabe gerar."""

    IMAGE = "image"
    CAROUSEL = "carousel"
    VIDEO = "video"


INTENT_TO_KIND: dict[Intent, CreationKind] = {
    Intent.CREATE_IMAGE: CreationKind.IMAGE,
    Intent.CREATE_CAROUSEL: CreationKind.CAROUSEL,
    Intent.CREATE_VIDEO: CreationKind.VIDEO,
}


class Slot(StrEnum):
    """Campos do brief perguntados ao usuário (na ordem canônica)."""

    OBJECTIVE = "objective"
    FORMAT = "format"
    STYLE = "style"
    PROMPT = "prompt"
    SLIDES = "slides"


class Objective(StrEnum):
    """Objetivos de marketing reconhecidos."""

    ACQUISITION = "acquisition"
    CONVERSION = "conversion"
    AWARENESS = "awareness"
    ENGAGEMENT = "engagement"


class VisualStyle(StrEnum):
    """Estilos visuais reconhecidos."""

    MINIMAL = "minimal"
    VIBRANT = "vibrant"
    PROFESSIONAL = "professional"
    PLAYFUL = "playful"


class TonePack(StrEnum):
    """Perfis de voz aplicados às respostas."""

    BRAND_DEFAULT = "brand_default"
    APPLE_LIKE = "apple_like"
    PLAYFUL = "playful"
    B2B_CRISP = "b2b_crisp"


class ChoiceId(StrEnum):
    """Identificadores de quick replies que dirigem o fluxo.

    Respostas de slot usam o formato "<slot>:<valor>" (ex.: "objective:conversion").
    """

    LAUNCH = "launch"
    MODIFY = "modify"
    SUGGEST_PROMPT = "suggest_prompt"
    OWN_PROMPT = "own_prompt"
    STATUS = "status"


# Proporções aceitas pelo pipeline de geração
ALLOWED_RATIOS: frozenset[str] = frozenset({"1:1", "4:5", "9:16", "16:9", "3:4", "2:3"})
