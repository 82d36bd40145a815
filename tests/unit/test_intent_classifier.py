"""Testes do classificador de intenção determinístico."""

from __future__ import annotations

import pytest

from alfie_assistant.application.intent_classifier import INTENT_RULES, classify_intent
from alfie_assistant.domain.enums import Intent


class TestClassifyIntent:
    """Ordem fixa: carrossel > vídeo > imagem > pergunta > lembrada > smalltalk."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("je veux un carrousel", Intent.CREATE_CAROUSEL),
            ("Un carousel de 5 slides", Intent.CREATE_CAROUSEL),
            ("Fais-moi une vidéo pour TikTok", Intent.CREATE_VIDEO),
            ("un reel rapide", Intent.CREATE_VIDEO),
            ("J'ai besoin d'un visuel", Intent.CREATE_IMAGE),
            ("une affiche pour l'événement", Intent.CREATE_IMAGE),
            ("Comment ça marche ?", Intent.QUESTION),
            ("pourquoi le format compte", Intent.QUESTION),
            ("salut", Intent.SMALLTALK),
        ],
    )
    def test_patterns(self, text: str, expected: Intent) -> None:
        """Cada família de palavras leva à intenção esperada."""
        assert classify_intent(text) == expected

    def test_carousel_wins_over_video_and_question(self) -> None:
        """Carrossel é avaliado antes de vídeo e de marcadores interrogativos."""
        assert classify_intent("un carrousel vidéo ?") == Intent.CREATE_CAROUSEL

    def test_video_wins_over_image(self) -> None:
        """Vídeo é avaliado antes de imagem."""
        assert classify_intent("une vidéo avec des photos") == Intent.CREATE_VIDEO

    def test_creation_wins_over_question(self) -> None:
        assert classify_intent("Tu peux me faire une image ?") == Intent.CREATE_IMAGE

    def test_falls_back_to_remembered_intent(self) -> None:
        """Sem padrão reconhecido, a intenção lembrada é reutilizada."""
        assert classify_intent("conversion", Intent.CREATE_CAROUSEL) == Intent.CREATE_CAROUSEL

    def test_question_is_not_overridden_by_remembered(self) -> None:
        assert classify_intent("c'est quoi un ratio ?", Intent.CREATE_IMAGE) == Intent.QUESTION

    def test_empty_text_is_smalltalk(self) -> None:
        assert classify_intent("") == Intent.SMALLTALK
        assert classify_intent(None) == Intent.SMALLTALK  # type: ignore[arg-type]

    def test_rule_order_is_stable(self) -> None:
        """A tupla de regras mantém a ordem documentada."""
        outcomes = [outcome for _, outcome in INTENT_RULES]
        assert outcomes == [
            Intent.CREATE_CAROUSEL,
            Intent.CREATE_VIDEO,
            Intent.CREATE_IMAGE,
            Intent.QUESTION,
        ]
