from __future__ import annotations

import logging
from dataclasses import dataclass

from src.create.context import CreateInputs
from src.create.ports import Prompter

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "App"
DEFAULT_APP_ID = "com.example.app"


@dataclass(frozen=True)
class Question:
    field: str
    message: str
    default: str | None = None


# The directory deliberately has no default: a blank answer stays blank.
DIR_QUESTION = Question(field="dir", message="Directory for new app")
NAME_QUESTION = Question(field="name", message="App name", default=DEFAULT_APP_NAME)
ID_QUESTION = Question(field="id", message="App/Bundle ID", default=DEFAULT_APP_ID)


async def resolve_value(supplied: str, question: Question, prompter: Prompter) -> str:
    if supplied.strip():
        return supplied
    answer = await prompter.ask(question.field, question.message, question.default)
    answer = str(answer or "")
    if not answer.strip():
        if question.default is not None:
            logger.debug("Using default %r for %s", question.default, question.field)
            return question.default
        return answer
    return answer


async def resolve_inputs(inputs: CreateInputs, prompter: Prompter) -> CreateInputs:
    app_dir = await resolve_value(inputs.app_dir, DIR_QUESTION, prompter)
    app_name = await resolve_value(inputs.app_name, NAME_QUESTION, prompter)
    app_id = await resolve_value(inputs.app_id, ID_QUESTION, prompter)
    return CreateInputs(app_dir=app_dir, app_name=app_name, app_id=app_id)
