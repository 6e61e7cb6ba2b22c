"""Helpers shared by the clients: JSON, cache keys, digests and
request parameter encoding."""

from __future__ import annotations

import dataclasses
import hashlib
import ipaddress
import json
import logging
import math
import re
import socket
import time
from decimal import Decimal
from typing import Any, Mapping
from urllib.parse import urlencode

from nacoskit.model import Service

SHOW_CONTENT_SIZE = 100

_log = logging.getLogger(__name__)

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_DECIMAL_INT_RE = re.compile(r"[+-]?[0-9]+")

_local_ip = ""


def current_millis() -> int:
    """Return the current time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result = {}
        for f in dataclasses.fields(value):
            key = f.metadata.get("json", f.name)
            if key == "-":
                continue
            result[key] = _to_jsonable(getattr(value, f.name))
        return result
    if isinstance(value, Mapping):
        return {str(k): _to_jsonable(v) for k, v in sorted(value.items(), key=lambda kv: str(kv[0]))}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def _dump_json(value: Any) -> str:
    text = json.dumps(
        _to_jsonable(value), ensure_ascii=False, separators=(",", ":"), allow_nan=False
    )
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def json_to_service(result: str) -> Service | None:
    """Decode a service from JSON text; return None when it cannot be decoded."""
    try:
        data = json.loads(result)
        service = Service() if data is None else Service.from_dict(data)
    except (ValueError, TypeError) as err:
        _log.error("failed to unmarshal json string:%s err:%r", result, err)
        return None
    if not service.hosts:
        _log.warning("instance list is empty,json string:%s", result)
    return service


def to_json_string(obj: Any) -> str:
    """Encode an object as compact JSON; return an empty string when it cannot be encoded."""
    try:
        return _dump_json(obj)
    except (TypeError, ValueError):
        return ""


def _discover_local_ip() -> str:
    candidates: list[str] = []
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            # Connecting a datagram socket sends nothing; it only picks a route.
            sock.connect(("10.255.255.255", 1))
            candidates.append(sock.getsockname()[0])
    except OSError:
        pass
    try:
        candidates.extend(socket.gethostbyname_ex(socket.gethostname())[2])
    except OSError as err:
        _log.error("get interface addresses failed,err:%r", err)
    for address in candidates:
        try:
            ip = ipaddress.ip_address(address)
        except ValueError:
            continue
        if ip.version == 4 and not ip.is_loopback and not ip.is_unspecified:
            return address
    return ""


def local_ip() -> str:
    """Return a non-loopback IPv4 address of this host, or an empty string."""
    global _local_ip
    if not _local_ip:
        _local_ip = _discover_local_ip()
        if _local_ip:
            _log.info("Local IP:%s", _local_ip)
    return _local_ip


def get_duration_with_default(metadata: Mapping[str, str], key: str, default: int) -> int:
    """Read a duration in nanoseconds from metadata, falling back to the default."""
    if key not in metadata:
        return default
    data = metadata[key]
    if not _DECIMAL_INT_RE.fullmatch(data) or not _INT64_MIN <= int(data) <= _INT64_MAX:
        _log.error("key:%s is not a number", key)
        return default
    return int(data)


def get_url_formed_map(source: Mapping[str, str]) -> str:
    """Encode a mapping as a URL query string, sorted by key."""
    return urlencode(sorted(source.items()))


def get_status_code(response: Any) -> str:
    """Return the status code of a response as text, or "NA" without a response."""
    if response is None:
        return "NA"
    code = getattr(response, "status_code", None)
    if code is None:
        code = response.status
    return str(int(code))


def deep_copy_map(params: Mapping[str, str]) -> dict[str, str]:
    """Return an independent copy of a string mapping."""
    return dict(params)


def truncate_content(content: str) -> str:
    """Return at most the first SHOW_CONTENT_SIZE bytes of the content."""
    if not content:
        return ""
    raw = content.encode("utf-8")
    if len(raw) <= SHOW_CONTENT_SIZE:
        return content
    return raw[:SHOW_CONTENT_SIZE].decode("utf-8", errors="ignore")


def md5(content: str) -> str:
    """Return the hex MD5 digest of the content, or "" for empty content."""
    if not content:
        return ""
    return hashlib.md5(content.encode("utf-8")).hexdigest()


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def transform_object_to_param(obj: Any) -> dict[str, str]:
    """Turn the fields of a dataclass that carry a "param" name into request parameters."""
    params: dict[str, str] = {}
    if obj is None:
        return params
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"expected a dataclass instance, got {type(obj).__name__}")
    for f in dataclasses.fields(obj):
        tag = f.metadata.get("param", "")
        if not tag or tag == "-":
            continue
        value = getattr(obj, f.name)
        if isinstance(value, bool):
            params[tag] = "true" if value else "false"
        elif isinstance(value, int):
            params[tag] = str(value)
        elif isinstance(value, float):
            params[tag] = _format_float(value)
        elif isinstance(value, str):
            if value:
                params[tag] = value
        elif isinstance(value, Mapping):
            try:
                params[tag] = _dump_json(value)
            except (TypeError, ValueError) as err:
                _log.error("[transform_object_to_param] json encode err:%r", err)
        elif isinstance(value, list) and all(isinstance(item, str) for item in value):
            joined = ",".join(value)
            if joined:
                params[tag] = joined
    return params