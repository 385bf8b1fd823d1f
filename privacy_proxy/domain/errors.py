# Typed errors raised by the proxy core


class ProxyInitError(Exception):
    # # Base class for fatal conditions detected before serving requests
    pass


class ConfigError(ProxyInitError):
    # # Configuration file unreadable, malformed or incomplete
    pass


class PatternError(ConfigError):
    # # A whitelist location pattern does not parse
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid whitelist pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class TargetURLError(ProxyInitError):
    # # proxy_pass is not an absolute http(s) URL
    pass


class DecodeError(Exception):
    # # Request body could not be decoded with the codec for its content type
    def __init__(self, content_type: str, reason: str) -> None:
        super().__init__(f"Could not decode {content_type} body: {reason}")
        self.content_type = content_type
        self.reason = reason
