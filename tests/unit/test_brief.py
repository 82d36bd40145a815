"""Testes do BriefDraft e do contrato Brief."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from alfie_assistant.domain.brief import Brief, BriefDraft, BriefValidationError, normalize_slides
from alfie_assistant.domain.enums import CreationKind, Objective, Slot, TonePack, VisualStyle


def _complete_draft(**overrides) -> BriefDraft:
    data = {
        "kind": CreationKind.CAROUSEL,
        "objective": Objective.CONVERSION,
        "format": "9:16",
        "style": VisualStyle.MINIMAL,
        "prompt": "  Lancement de la gamme printemps  ",
        "slides": 5,
        "brand_id": "brand-1",
        "tone": TonePack.BRAND_DEFAULT,
    }
    data.update(overrides)
    return BriefDraft(**data)


class TestNormalizeSlides:
    """Arredondamento meio para cima e clamp em [1, 30]."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, 1), (42, 30), (4.6, 5), (4.5, 5), (4.4, 4), ("7", 7), ("3,5", 4), (-3, 1)],
    )
    def test_values(self, value, expected) -> None:
        assert normalize_slides(value) == expected

    @pytest.mark.parametrize("value", [None, True, "abc", float("nan")])
    def test_invalid_values(self, value) -> None:
        assert normalize_slides(value) is None


class TestBriefDraft:
    """Builder com um campo opcional por slot."""

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            BriefDraft(color="red")

    def test_slides_forced_none_for_non_carousel(self) -> None:
        assert BriefDraft(kind=CreationKind.VIDEO, slides=8).slides is None

    def test_with_updates_is_copy_on_write(self) -> None:
        draft = BriefDraft(kind=CreationKind.IMAGE)
        updated = draft.with_updates(objective=Objective.ENGAGEMENT)

        assert draft.objective is None
        assert updated.objective == Objective.ENGAGEMENT

    def test_missing_slots_order(self) -> None:
        assert BriefDraft(kind=CreationKind.IMAGE).missing_slots() == [
            Slot.OBJECTIVE,
            Slot.FORMAT,
            Slot.STYLE,
            Slot.PROMPT,
        ]
        assert _complete_draft(slides=None).missing_slots() == [Slot.SLIDES]

    def test_blank_prompt_counts_as_missing(self) -> None:
        assert Slot.PROMPT in _complete_draft(prompt="   ").missing_slots()


class TestBrief:
    """Validação do brief final."""

    def test_from_complete_draft(self) -> None:
        brief = Brief.from_draft(_complete_draft())

        assert brief.version == "v1"
        assert brief.prompt == "Lancement de la gamme printemps"
        assert brief.slides == 5

    def test_is_frozen(self) -> None:
        brief = Brief.from_draft(_complete_draft())
        with pytest.raises(ValidationError):
            brief.prompt = "autre"

    def test_missing_slots_raise(self) -> None:
        with pytest.raises(BriefValidationError) as exc_info:
            Brief.from_draft(_complete_draft(style=None, slides=None))

        assert exc_info.value.missing == [Slot.STYLE, Slot.SLIDES]

    def test_missing_kind_raises(self) -> None:
        with pytest.raises(BriefValidationError, match="kind"):
            Brief.from_draft(BriefDraft(objective=Objective.CONVERSION))

    def test_unsupported_ratio_raises(self) -> None:
        with pytest.raises(BriefValidationError, match="format"):
            Brief.from_draft(_complete_draft(format="5:7"))

    def test_slides_not_allowed_outside_carousel(self) -> None:
        with pytest.raises(ValidationError):
            Brief(
                kind=CreationKind.IMAGE,
                objective=Objective.CONVERSION,
                format="1:1",
                style=VisualStyle.VIBRANT,
                prompt="un visuel",
                slides=3,
                brand_id="b",
            )

    def test_payload_is_json_ready(self) -> None:
        payload = Brief.from_draft(_complete_draft(template_id="promo")).to_payload()

        assert payload == {
            "version": "v1",
            "kind": "carousel",
            "objective": "conversion",
            "format": "9:16",
            "style": "minimal",
            "prompt": "Lancement de la gamme printemps",
            "slides": 5,
            "template_id": "promo",
            "tone": "brand_default",
            "brand_id": "brand-1",
        }
