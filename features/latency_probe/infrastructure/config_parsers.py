from __future__ import annotations

import json
from typing import Any, List, Optional

import yaml

from features.latency_probe.application.ports import ConfigParserStrategy
from features.latency_probe.domain.errors import ConfigParseError
from features.latency_probe.domain.probing import InboundEntry, RouterConfigDocument


def _field(entry: dict, key: str, expected: type) -> Optional[Any]:
    value = entry.get(key)
    if value is None:
        return None
    if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
        raise ConfigParseError(f"invalid {key!r}: expected integer, got {value!r}")
    if not isinstance(value, expected):
        raise ConfigParseError(f"invalid {key!r}: expected {expected.__name__}, got {value!r}")
    if expected is int and not 0 <= value <= 65535:
        raise ConfigParseError(f"invalid {key!r}: {value} is not a valid port")
    return value


def _entries(data: Any, key: str) -> List[dict]:
    if not isinstance(data, dict) or data.get(key) is None:
        raise ConfigParseError(f"{key} field not found")
    items = data[key]
    if not isinstance(items, list):
        raise ConfigParseError(f"{key} must be a list")
    return [item for item in items if isinstance(item, dict)]


class SingBoxJsonParser(ConfigParserStrategy):
    """Reads the ``inbounds`` section of a sing-box JSON configuration."""

    name = "sing-box-json"

    def supports(self, document: RouterConfigDocument) -> bool:
        content_type = (document.content_type or "").lower()
        if "json" in content_type:
            return True
        if "yaml" in content_type:
            return False
        return document.text.lstrip().startswith("{")

    def parse(self, document: RouterConfigDocument) -> List[InboundEntry]:
        try:
            data = json.loads(document.text)
        except json.JSONDecodeError as exc:
            raise ConfigParseError(f"invalid JSON: {exc}") from exc

        inbounds: List[InboundEntry] = []
        for entry in _entries(data, "inbounds"):
            inbound_type = _field(entry, "type", str)
            tag = _field(entry, "tag", str)
            port = _field(entry, "listen_port", int)
            listen = _field(entry, "listen", str)
            if inbound_type is None or tag is None or port is None:
                continue
            inbounds.append(InboundEntry(type=inbound_type, tag=tag, port=port, listen=listen))
        return inbounds


class ClashYamlParser(ConfigParserStrategy):
    """Reads per-node ``listeners`` from a Clash/mihomo YAML configuration."""

    name = "clash-yaml"

    def supports(self, document: RouterConfigDocument) -> bool:
        content_type = (document.content_type or "").lower()
        if "yaml" in content_type or "yml" in content_type:
            return True
        if "json" in content_type:
            return False
        return not document.text.lstrip().startswith("{")

    def parse(self, document: RouterConfigDocument) -> List[InboundEntry]:
        try:
            data = yaml.safe_load(document.text) or {}
        except yaml.YAMLError as exc:
            raise ConfigParseError(f"invalid YAML: {exc}") from exc

        inbounds: List[InboundEntry] = []
        for entry in _entries(data, "listeners"):
            inbound_type = _field(entry, "type", str)
            name = _field(entry, "name", str)
            port = _field(entry, "port", int)
            listen = _field(entry, "listen", str)
            if inbound_type is None or name is None or port is None:
                continue
            inbounds.append(InboundEntry(type=inbound_type, tag=name, port=port, listen=listen))
        return inbounds


def default_parsers() -> List[ConfigParserStrategy]:
    return [SingBoxJsonParser(), ClashYamlParser()]
