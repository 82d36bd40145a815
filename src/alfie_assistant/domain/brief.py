"""Brief criativo: rascunho acumulado (BriefDraft) e contrato final (Brief).

Regras:
- BriefDraft aceita apenas os campos conhecidos (extra="forbid")
- slides só tem significado para carrossel; é normalizado para [1, 30]
- Brief é imutável e só nasce de um rascunho completo e válido
- Brief é o único payload que atravessa a fronteira com a fila de geração
"""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from alfie_assistant.domain.enums import (
    ALLOWED_RATIOS,
    CreationKind,
    Objective,
    Slot,
    TonePack,
    VisualStyle,
)

MIN_SLIDES = 1
MAX_SLIDES = 30

BRIEF_CONTRACT_VERSION = "v1"


class BriefValidationError(Exception):
    """Rascunho não pôde ser convertido em Brief."""

    def __init__(self, message: str, missing: list[Slot] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


def normalize_slides(value: Any) -> int | None:
    """Normaliza quantidade de slides para inteiro em [1, 30].

    Arredonda meio para cima (4.6 -> 5, 4.5 -> 5). Valores não numéricos viram None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).replace(",", "."))
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    rounded = math.floor(number + 0.5)
    return max(MIN_SLIDES, min(MAX_SLIDES, rounded))


class BriefDraft(BaseModel):
    """Brief parcialmente preenchido ao longo dos turnos."""

    model_config = ConfigDict(extra="forbid")

    kind: CreationKind | None = None
    objective: Objective | None = None
    format: str | None = None
    style: VisualStyle | None = None
    prompt: str | None = None
    slides: int | None = None
    template_id: str | None = None
    tone: TonePack | None = None
    brand_id: str | None = None

    @field_validator("slides", mode="before")
    @classmethod
    def _normalize_slides(cls, value: Any) -> int | None:
        return normalize_slides(value)

    @model_validator(mode="after")
    def _slides_only_for_carousel(self) -> BriefDraft:
        if self.kind != CreationKind.CAROUSEL:
            self.slides = None
        return self

    def with_updates(self, **changes: Any) -> BriefDraft:
        """Retorna novo rascunho com as alterações aplicadas (copy-on-write, validado)."""
        data = self.model_dump()
        data.update(changes)
        return BriefDraft.model_validate(data)

    def is_filled(self, slot: Slot) -> bool:
        value = getattr(self, slot.value)
        if isinstance(value, str):
            return bool(value.strip())
        return value is not None

    def missing_slots(self) -> list[Slot]:
        """Slots ainda vazios, na ordem canônica de perguntas."""
        order = [Slot.OBJECTIVE, Slot.FORMAT, Slot.STYLE, Slot.PROMPT]
        if self.kind == CreationKind.CAROUSEL:
            order.append(Slot.SLIDES)
        return [slot for slot in order if not self.is_filled(slot)]


class Brief(BaseModel):
    """Especificação criativa final e validada para um job de geração."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: Literal["v1"] = BRIEF_CONTRACT_VERSION
    kind: CreationKind
    objective: Objective
    format: str
    style: VisualStyle
    prompt: str
    slides: int | None = None
    template_id: str | None = None
    tone: TonePack = TonePack.BRAND_DEFAULT
    brand_id: str

    @field_validator("format")
    @classmethod
    def _known_ratio(cls, value: str) -> str:
        if value not in ALLOWED_RATIOS:
            msg = f"format '{value}' não suportado"
            raise ValueError(msg)
        return value

    @field_validator("prompt", "brand_id")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "campo obrigatório vazio"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _slides_rules(self) -> Brief:
        if self.kind == CreationKind.CAROUSEL:
            if self.slides is None or not MIN_SLIDES <= self.slides <= MAX_SLIDES:
                msg = "carrossel requer slides entre 1 e 30"
                raise ValueError(msg)
        elif self.slides is not None:
            msg = "slides só é permitido para carrossel"
            raise ValueError(msg)
        return self

    @classmethod
    def from_draft(cls, draft: BriefDraft) -> Brief:
        """Valida um rascunho completo e devolve o Brief imutável.

        Raises:
            BriefValidationError: se faltar slot ou o schema rejeitar algum campo
        """
        missing = draft.missing_slots()
        if draft.kind is None:
            raise BriefValidationError("kind ausente", missing=missing)
        if missing:
            raise BriefValidationError(
                f"slots ausentes: {', '.join(s.value for s in missing)}", missing=missing
            )

        data = draft.model_dump(exclude_none=True)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise BriefValidationError(f"brief inválido: {', '.join(fields) or 'schema'}") from e

    def to_payload(self) -> dict[str, Any]:
        """Payload JSON enviado ao dispatcher."""
        return self.model_dump(mode="json")
