class ProxyError(Exception):
    """Base error for request handling; maps onto an HTTP status code."""

    status_code = 500


class InvalidPlatformError(ProxyError):
    status_code = 400


class InvalidOffsetError(ProxyError):
    status_code = 400


class VersionsNotFoundError(ProxyError):
    status_code = 404


class UpstreamError(ProxyError):
    status_code = 500
