"""
Proxy configuration file loading.

The file is JSON, shaped like the original HCL configuration:

    {
      "proxy_pass": "https://api.example.com/ingest",
      "port": "8888",
      "match": {
        "http": [
          {
            "method": "POST",
            "path": "/v1/users",
            "rule": {
              "body": [{"whitelist": "$.user.id"}],
              "querystring": [{"whitelist": "page"}]
            }
          }
        ]
      }
    }

Clauses are evaluated in file order. Every whitelist pattern is compiled
while loading, so a malformed pattern stops startup instead of failing
requests later.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import SplitResult, urlsplit

from pydantic import BaseModel, Field, ValidationError

from privacy_proxy.domain.errors import ConfigError, TargetURLError
from privacy_proxy.domain.rules import DEFAULT_PORT, MatchClause, ProxyConfig, RuleSet


class _FileModel(BaseModel):
    class Config:
        # # Unknown keys are typos, reject them
        extra = "forbid"


class ConfigRule(_FileModel):
    whitelist: str


class RuleOptions(_FileModel):
    body: List[ConfigRule] = Field(default_factory=list)
    querystring: List[ConfigRule] = Field(default_factory=list)


class HTTPMatch(_FileModel):
    method: Optional[str] = None
    path: Optional[str] = None
    rule: RuleOptions = Field(default_factory=RuleOptions)


class MatchOptions(_FileModel):
    http: List[HTTPMatch] = Field(default_factory=list)


class ConfigFile(_FileModel):
    match: MatchOptions = Field(default_factory=MatchOptions)
    port: Optional[Union[int, str]] = None
    proxy_pass: Optional[str] = None


def parse_target_url(raw: str) -> SplitResult:
    # # proxy_pass must be an absolute http(s) URL
    try:
        target = urlsplit(raw.strip())
        # Accessing port validates it
        target.port
    except ValueError as e:
        raise TargetURLError(f"Cannot parse proxy_pass {raw!r}: {e}") from e
    if target.scheme not in ("http", "https") or not target.netloc:
        raise TargetURLError(f"proxy_pass must be an absolute http(s) URL, got {raw!r}")
    return target


def _build_clause(entry: HTTPMatch) -> MatchClause:
    return MatchClause(
        method=entry.method or None,
        path=entry.path or None,
        rules=RuleSet.build(
            body=[rule.whitelist for rule in entry.rule.body],
            querystring=[rule.whitelist for rule in entry.rule.querystring],
        ),
    )


def build_proxy_config(data: ConfigFile, source: str = "<config>") -> ProxyConfig:
    # # Convert the validated file model into the immutable runtime config
    if not data.proxy_pass:
        raise ConfigError(f"Must specify backend server as `proxy_pass` in {source}")

    port = DEFAULT_PORT if data.port in (None, "") else str(data.port).strip()
    if not (port.isascii() and port.isdigit()) or not 0 < int(port) < 65536:
        raise ConfigError(f"Invalid port {data.port!r} in {source}")

    return ProxyConfig(
        target=parse_target_url(data.proxy_pass),
        clauses=tuple(_build_clause(entry) for entry in data.match.http),
        port=port,
    )


def parse_proxy_config(text: Union[str, bytes], source: str = "<config>") -> ProxyConfig:
    try:
        raw = json.loads(text)
    except ValueError as e:
        raise ConfigError(f"{source} is not valid JSON: {e}") from e

    try:
        data = ConfigFile.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"{source} is not a valid proxy configuration:\n{e}") from e

    return build_proxy_config(data, source)


def load_proxy_config(path: Union[str, Path]) -> ProxyConfig:
    """
    Load and compile the proxy configuration from a JSON file.

    Raises:
        ConfigError: unreadable file, invalid JSON or schema, missing
            proxy_pass, malformed whitelist pattern (PatternError).
        TargetURLError: proxy_pass is not an absolute http(s) URL.
    """
    path = Path(path)
    try:
        text = path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    return parse_proxy_config(text, source=str(path))
