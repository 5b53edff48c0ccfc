"""Logging configuration helpers."""

import logging

CONTEXT_FIELDS = (
    "user_id",
    "submission_id",
    "section",
    "lot_id",
    "from_step",
    "current_step",
    "to",
)


class ContextFormatter(logging.Formatter):
    """Appends the session context passed through ``extra`` to each line."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        )
        return f"{message} [{context}]" if context else message


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the package logger and apply ``level``."""
    logger = logging.getLogger("restock_validation")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
