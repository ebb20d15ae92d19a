#!/usr/bin/env python
"""Quickstart do fluxo editorial.

Demonstra:
1. Registro de handlers (ANY + por estado) com chaining
2. Transições válidas atualizando o post via handlers
3. Transição inválida tratada pelo error handler (post não muda)

Uso:
    python scripts/publish_workflow_demo.py
"""

import sys
from datetime import UTC, datetime

from evstate import ANY, FSM
from evstate.config import Settings, get_settings
from evstate.domain.workflows import (
    PUBLISH_INITIAL_STATE,
    PUBLISH_TRANSITIONS,
    PublishState,
)
from evstate.observability.logging import configure_logging, get_logger

logger = get_logger("publish_workflow_demo")


def main(settings: Settings | None = None) -> int:
    settings = settings or get_settings()

    errors = settings.validate_all()
    if errors:
        for error in errors:
            print(f"config error: {error}", file=sys.stderr)
        return 1

    configure_logging(
        settings.log_level.upper(), settings.service_name, settings.log_format.lower()
    )

    workflow = FSM(PUBLISH_TRANSITIONS, PUBLISH_INITIAL_STATE)
    notifications: list[str] = []

    workflow.register(
        ANY, lambda post, target: post.update(state=str(target))
    ).register(
        PublishState.IN_REVIEW, lambda post, target: notifications.append("reviewer")
    ).register(
        PublishState.CHANGES_NEEDED, lambda post, target: notifications.append("author")
    ).register(
        PublishState.PUBLISHED,
        lambda post, target: post.update(published_at=datetime.now(tz=UTC).isoformat()),
    ).set_error_handler(
        lambda message: logger.warning(message, extra={"environment": settings.environment})
    )

    post = {"title": "Hello World!", "state": str(workflow.current_state)}

    for target in (
        PublishState.IN_REVIEW,
        PublishState.CHANGES_NEEDED,
        PublishState.IN_REVIEW,
        PublishState.APPROVED,
        PublishState.IN_REVIEW,  # inválido a partir de approved
        PublishState.PUBLISHED,
    ):
        workflow.dispatch(target, post, target)
        logger.info(
            "current state",
            extra={"current_state": str(workflow.current_state), "post_state": post["state"]},
        )

    logger.info("notifications sent", extra={"count": len(notifications)})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
