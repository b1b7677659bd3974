"""Interactive setup flow that writes the local settings file."""

from __future__ import annotations

import json
import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TextIO

from intent_sdk.cli.settings import save_settings
from intent_sdk.types import ServiceConfig, endpoint_for_region

CONFIRM_PATTERN = re.compile(r"^(y|yes)$", re.IGNORECASE)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Question:
    field: str
    prompt: str


QUESTIONS = (
    Question("authoring_key", "What is your authoring key? "),
    Question("region", "What is your region? [westus, westeurope, australiaeast] "),
    Question("app_id", "What is your application id? "),
    Question("version_id", "What is the version id? "),
)


def _ask(prompt: Callable[[str], str], text: str) -> str | None:
    try:
        return prompt(text)
    except EOFError:
        return None


def run_wizard(
    settings_path: str | Path | None = None,
    *,
    prompt: Callable[[str], str] = input,
    stdout: TextIO | None = None,
) -> Path | None:
    """Collect the four settings, confirm them and write the settings file.

    Returns the written path, or ``None`` when the user did not confirm.
    """
    out = sys.stdout if stdout is None else stdout
    print(
        "This utility will walk you through creating a .intentrc file.\n"
        "Press ^C at any time to quit.",
        file=out,
    )

    answers: dict[str, str] = {}
    for question in QUESTIONS:
        answer = _ask(prompt, question.prompt)
        answers[question.field] = (answer or "").strip()

    config = ServiceConfig(
        authoring_key=answers["authoring_key"],
        endpoint_base=endpoint_for_region(answers["region"]),
        app_id=answers["app_id"],
        version_id=answers["version_id"],
    )
    print(json.dumps(config.as_dict(), indent=2), file=out)

    confirmation = _ask(prompt, "Does this look ok? [y/N] ")
    if confirmation is None or not CONFIRM_PATTERN.match(confirmation.strip()):
        logger.debug("setup cancelled; settings file left untouched")
        print("Setup cancelled; nothing was written.", file=out)
        return None

    path = save_settings(config, settings_path)
    print(f"Successfully wrote {path}", file=out)
    return path
