"""Workflow canônico de publicação de conteúdo.

Usado pelo quickstart (scripts/publish_workflow_demo.py) e pelos testes
de integração:
- draft → inReview → (changesNeeded ↔ inReview) → approved
- approved → draft | scheduled | published
- published é terminal
"""

from __future__ import annotations

from enum import StrEnum

from evstate.domain.transitions import TransitionTable


class PublishState(StrEnum):
    """6 estados de um post no fluxo editorial."""

    DRAFT = "draft"
    """Rascunho em edição pelo autor."""

    IN_REVIEW = "inReview"
    """Aguardando revisão."""

    CHANGES_NEEDED = "changesNeeded"
    """Revisor pediu ajustes ao autor."""

    APPROVED = "approved"
    """Aprovado, pronto para agendar ou publicar."""

    SCHEDULED = "scheduled"
    """Publicação agendada."""

    PUBLISHED = "published"
    """Publicado (terminal)."""


PUBLISH_TRANSITIONS: TransitionTable = {
    PublishState.DRAFT: [PublishState.IN_REVIEW],
    PublishState.IN_REVIEW: [PublishState.CHANGES_NEEDED, PublishState.APPROVED],
    PublishState.CHANGES_NEEDED: [PublishState.IN_REVIEW, PublishState.APPROVED],
    PublishState.APPROVED: [
        PublishState.DRAFT,
        PublishState.SCHEDULED,
        PublishState.PUBLISHED,
    ],
    PublishState.SCHEDULED: [PublishState.DRAFT, PublishState.PUBLISHED],
    # === Terminal: SEM transições de saída ===
    PublishState.PUBLISHED: None,
}

PUBLISH_INITIAL_STATE: PublishState = PublishState.DRAFT
