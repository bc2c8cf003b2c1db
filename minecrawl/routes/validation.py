"""Lightweight request payload validation for the room API.

Provides minimal schema-like checking with clear, consistent error responses;
not a general JSON Schema implementation. Returns (ok, value_or_error) tuples
so the route decides how to respond.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int'
Extras:
  min_len, max_len (str)
  choices (str; value is matched case-insensitively and normalized to the listed form)
  min, max (int)

Example:
 ok, data_or_err = validate({'action': 'move', 'dir': 'n'}, ROOM_ACTION)

If invalid: (False, {'field': 'dir', 'error': 'must be one of n, s, e, w', 'code': 'choices'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

from minecrawl.room.config import MIN_ROOM_SIZE
from minecrawl.room.tiles import SIDES
from minecrawl.services.turn_service import DIRECTIONS

PRIMITIVES = {
    'str': str,
    'int': int,
}

MAX_ROOM_SIZE = 64


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def _check_str(name: str, value: str, extras: Dict) -> Tuple[bool, Any]:
    s = value.strip()
    if len(s) == 0:
        return _fail(name, 'must not be empty', 'empty')
    if 'max_len' in extras and len(s) > extras['max_len']:
        return _fail(name, 'too long', 'max_len')
    if 'min_len' in extras and len(s) < extras['min_len']:
        return _fail(name, 'too short', 'min_len')
    if 'choices' in extras:
        lookup = {c.lower(): c for c in extras['choices']}
        if s.lower() not in lookup:
            return _fail(name, f"must be one of {', '.join(extras['choices'])}", 'choices')
        s = lookup[s.lower()]
    return True, s


def _check_int(name: str, value: int, extras: Dict) -> Tuple[bool, Any]:
    if 'min' in extras and value < extras['min']:
        return _fail(name, f"must be >= {extras['min']}", 'min')
    if 'max' in extras and value > extras['max']:
        return _fail(name, f"must be <= {extras['max']}", 'max')
    return True, value


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, entry in schema.items():
        if not isinstance(entry, tuple) or len(entry) < 2:
            return _fail('__schema__', f'invalid schema entry for {name}', 'schema')
        type_name, required = entry[0], entry[1]
        extras = entry[2] if len(entry) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        # bool is an int subclass; JSON true/false is never a valid count
        if not isinstance(value, PRIMITIVES[type_name]) or isinstance(value, bool):
            return _fail(name, f'expected {type_name}', 'type')
        check = _check_str if type_name == 'str' else _check_int
        ok, normalized = check(name, value, extras)
        if not ok:
            return ok, normalized
        out[name] = normalized
    return True, out


# Predefined schemas used by the room blueprint
ROOM_NEW = {
    'width': ('int', False, {'min': MIN_ROOM_SIZE, 'max': MAX_ROOM_SIZE}),
    'height': ('int', False, {'min': MIN_ROOM_SIZE, 'max': MAX_ROOM_SIZE}),
    'entrance_side': ('str', False, {'choices': list(SIDES)}),
    'bombs': ('int', False, {'min': 0, 'max': MAX_ROOM_SIZE * MAX_ROOM_SIZE}),
    'enemies': ('int', False, {'min': 0, 'max': MAX_ROOM_SIZE * MAX_ROOM_SIZE}),
    'coins': ('int', False, {'min': 0, 'max': MAX_ROOM_SIZE * MAX_ROOM_SIZE}),
}
ROOM_ACTION = {
    'action': ('str', True, {'choices': ['move', 'toggle_equip']}),
    'dir': ('str', False, {'choices': list(DIRECTIONS)}),
}

# Share of the interior a request may fill with entities
MAX_ENTITY_FRACTION = 0.25


def check_room_capacity(parsed: Dict[str, Any]) -> Tuple[bool, Dict[str, Any]]:
    """Reject entity counts that cannot fit the requested room."""
    width = parsed.get('width', 15)
    height = parsed.get('height', 15)
    limit = int((width - 2) * (height - 2) * MAX_ENTITY_FRACTION)
    total = sum(parsed.get(k, 0) for k in ('bombs', 'enemies', 'coins'))
    if total > limit:
        return _fail('bombs', f'bombs + enemies + coins must be <= {limit} for a {width}x{height} room', 'capacity')
    return True, parsed
