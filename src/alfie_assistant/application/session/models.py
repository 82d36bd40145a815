"""Models de sessão: ConversationSession.

ConversationSession é o estado mutável de uma conversa:
- Uma sessão = um session_id opaco
- Mutada apenas pelo orquestrador de diálogo
- Persistida com TTL (memória ou Redis); expira de forma preguiçosa na leitura
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from alfie_assistant.domain.brief import Brief, BriefDraft
from alfie_assistant.domain.enums import HostVariant, Intent, Slot, Stage, TonePack


class ConversationSession(BaseModel):
    """Estado completo da conversa com suporte a persistência."""

    session_id: str
    host: HostVariant = HostVariant.DESIGNER
    brand_id: str
    user_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    # Máquina de estados do brief
    stage: str = Stage.IDLE.value
    draft: BriefDraft = Field(default_factory=BriefDraft)
    brief: Brief | None = None
    question_count: int = 0
    pending_slots: list[Slot] = Field(default_factory=list)
    last_intent: Intent | None = None
    tone: TonePack = TonePack.BRAND_DEFAULT

    # Acompanhamento do último pedido enviado
    last_order_id: str | None = None
    last_queue_size: int | None = None

    # Flags de uso único (ex.: apresentação já exibida)
    flags: dict[str, bool] = Field(default_factory=dict)

    def touch(self) -> None:
        self.updated_at = datetime.now(tz=UTC)

    def ensure_flag(self, key: str) -> bool:
        """Marca a flag e retorna se ela já estava marcada antes."""
        if not self.flags.get(key):
            self.flags[key] = True
            return False
        return True
