"""
Example routes counting the names they greet.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.core.logging import get_logger
from app.domain.hello import NameCounter, NameLabel, Person

router = APIRouter(prefix='/hello', tags=['hello'])

logger = get_logger(__name__)


def get_name_counter(request: Request) -> NameCounter:
    return request.app.state.name_counter


def _display_name(name: str, caps: bool | None) -> str:
    return name.upper() if caps else name


@router.get('/{name}', response_class=PlainTextResponse)
async def hello(
    name: str,
    name_counter: Annotated[NameCounter, Depends(get_name_counter)],
    caps: bool | None = None,
) -> str:
    name = _display_name(name, caps)
    name_counter.get_or_create(NameLabel(name=name)).inc()

    return f'Hello, {name}!'


@router.post('/{name}', response_class=PlainTextResponse)
async def hello_post(
    name: str,
    person: Person,
    name_counter: Annotated[NameCounter, Depends(get_name_counter)],
    caps: bool | None = None,
) -> str:
    name = _display_name(name, caps)
    name_counter.get_or_create(NameLabel(name=name)).inc()
    logger.debug(f'greeted {name} aged {person.age}')

    return f'Hello, {person.age} year old named {name}!'
