from podprobes.infrastructure.http.client_factory import (
    HttpClientFactory,
    DefaultHttpClientFactory,
)

__all__ = [
    "HttpClientFactory",
    "DefaultHttpClientFactory",
]
