"""
Inbound event decoding.

A message is one of three things:
- malformed (not JSON, not an object, no eventType, or a known type with an
  invalid payload): ``MalformedMessageError``
- a type this stream does not handle: ``UnknownEvent``
- a validated domain event variant
"""

from typing import Annotated, Any, Generic, TypeVar, get_args, get_origin

import attrs
import orjson
from pydantic import TypeAdapter, ValidationError


_T = TypeVar('_T')

EVENT_TYPE_FIELD = 'eventType'
EVENT_SUFFIX = 'Event'


class MalformedMessageError(ValueError):
    pass


@attrs.frozen
class UnknownEvent:
    event_type: str


def canonical_event_type(event_type: str) -> str:
    """Upstream services send both ``TenantCreated`` and ``TenantCreatedEvent``."""
    return event_type if event_type.endswith(EVENT_SUFFIX) else f'{event_type}{EVENT_SUFFIX}'


def event_type_names(event_union: Any) -> frozenset[str]:
    if get_origin(event_union) is Annotated:
        event_union = get_args(event_union)[0]
    return frozenset(
        variant.model_fields['event_type'].default for variant in get_args(event_union)
    )


class EventDecoder(Generic[_T]):
    def __init__(self, event_union: Any) -> None:
        self._adapter: TypeAdapter[_T] = TypeAdapter(event_union)
        self.known_types = event_type_names(event_union)

    def decode(self, payload: bytes | None) -> _T | UnknownEvent:
        if not payload:
            raise MalformedMessageError('empty message payload')
        try:
            raw = orjson.loads(payload)
        except orjson.JSONDecodeError as e:
            raise MalformedMessageError(f'invalid JSON: {e}') from e
        if not isinstance(raw, dict):
            raise MalformedMessageError('message payload is not a JSON object')

        event_type = raw.get(EVENT_TYPE_FIELD)
        if not isinstance(event_type, str) or not event_type.strip():
            raise MalformedMessageError(f'message has no {EVENT_TYPE_FIELD}')

        canonical = canonical_event_type(event_type.strip())
        if canonical not in self.known_types:
            return UnknownEvent(event_type=event_type)

        raw[EVENT_TYPE_FIELD] = canonical
        try:
            return self._adapter.validate_python(raw)
        except ValidationError as e:
            raise MalformedMessageError(
                f'invalid {canonical} payload: {e.error_count()} validation errors'
            ) from e
