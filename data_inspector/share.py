"""Shareable links: tool state <-> URL-safe token on a hash-routed URL.

Link shape: ``<origin><base_path>#<tool_path>?state=<token>`` where the
token is the URL-safe base64 of the state's JSON text. Decoding never raises;
anything malformed comes back as ``state=None``.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Dict, NamedTuple, Optional
from urllib.parse import parse_qs, urlsplit

from .config import settings
from .errors import ShareDecodeError

logger = logging.getLogger("data-inspector")

STATE_PARAM = 'state'


class SharedLink(NamedTuple):
    tool_path: str
    state: Optional[Dict[str, Any]]


def encode_state(state: Dict[str, Any]) -> str:
    """Serialise state to compact JSON and base64 it; '' if it is not JSON-serialisable."""
    # ASCII escapes keep lone surrogates representable.
    try:
        text = json.dumps(state, separators=(',', ':'), allow_nan=False)
    except (TypeError, ValueError) as exc:
        logger.warning(f"Failed to encode state: {exc}")
        return ''
    return base64.urlsafe_b64encode(text.encode('utf-8')).decode('ascii')


def _decode_token(token: str) -> Dict[str, Any]:
    # parse_qs turns '+' into ' '; map the standard alphabet onto the URL-safe one.
    token = token.strip().replace(' ', '+').translate(str.maketrans('+/', '-_'))
    token += '=' * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(token.encode('ascii'))
        value = json.loads(raw.decode('utf-8'))
    except (binascii.Error, UnicodeError, ValueError, RecursionError) as exc:
        raise ShareDecodeError(f"Corrupt state token: {exc}") from exc
    if not isinstance(value, dict):
        raise ShareDecodeError(f"State token does not hold an object: {type(value).__name__}")
    return value


def decode_state(token: str) -> Optional[Dict[str, Any]]:
    try:
        return _decode_token(token)
    except ShareDecodeError as exc:
        logger.warning(f"Failed to decode state: {exc}")
        return None


def normalize_tool_path(tool_path: str) -> str:
    tool_path = (tool_path or '').strip()
    if not tool_path.startswith('/'):
        tool_path = '/' + tool_path
    return tool_path


def generate_shareable_url(
    tool_path: str,
    state: Dict[str, Any],
    origin: str = None,
    base_path: str = None,
) -> str:
    origin = (settings.SHARE_ORIGIN if origin is None else origin).rstrip('/')
    base_path = settings.SHARE_BASE_PATH if base_path is None else base_path
    if not base_path.startswith('/'):
        base_path = '/' + base_path

    url = f"{origin}{base_path}#{normalize_tool_path(tool_path)}"
    token = encode_state(state)
    if token:
        url += f"?{STATE_PARAM}={token}"
    return url


def _split_shared_url(url: str):
    if not isinstance(url, str):
        raise ShareDecodeError("Shared link must be a string")
    try:
        parts = urlsplit(url.strip())
    except ValueError as exc:
        raise ShareDecodeError(f"Malformed URL: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        raise ShareDecodeError(f"Not an absolute URL: {url!r}")
    return parts


def parse_shared_url(url: str) -> SharedLink:
    try:
        parts = _split_shared_url(url)
    except ShareDecodeError as exc:
        logger.warning(f"Failed to parse shared URL: {exc}")
        return SharedLink(tool_path='', state=None)

    tool_path, _, fragment_query = parts.fragment.partition('?')
    tokens = parse_qs(fragment_query).get(STATE_PARAM) or parse_qs(parts.query).get(STATE_PARAM)
    if not tokens:
        return SharedLink(tool_path=tool_path, state=None)

    return SharedLink(tool_path=tool_path, state=decode_state(tokens[0]))


def prune_empty_values(state: Dict[str, Any]) -> Dict[str, Any]:
    """Drop '', None, and empty containers so only meaningful state is kept."""
    pruned: Dict[str, Any] = {}
    for key, value in state.items():
        if value is None or value == '':
            continue
        if isinstance(value, (list, tuple, dict)) and len(value) == 0:
            continue
        pruned[key] = value
    return pruned
