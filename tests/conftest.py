import httpx
import pytest

from progimg.config.schema import ImageOptions, ProviderOptions
from progimg.provider.client import MetadataProvider
from progimg.types import ImageMetadata

PLACEHOLDER = "data:image/webp;base64,UklGRiIAAABXRUJQVlA4IBYAAAAwAQCdASoBAAEADsD+JaQAA3AAAAAA"


class FakeImageService:
    """In-process stand-in for the remote image service (``?fmt=info`` / ``?fmt=thumbhash``)."""

    def __init__(self) -> None:
        self.dimensions: dict[str, tuple[int, int]] = {}
        self.placeholders: dict[str, str] = {}
        self.requests: list[httpx.Request] = []
        self.dimension_status = 200
        self.placeholder_status = 200

    def add(self, url: str, width: int, height: int, placeholder: str | None = PLACEHOLDER) -> None:
        self.dimensions[url] = (width, height)
        if placeholder is not None:
            self.placeholders[url] = placeholder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        base = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        fmt = request.url.params.get("fmt")
        if fmt == "info":
            if self.dimension_status != 200:
                return httpx.Response(self.dimension_status)
            if base not in self.dimensions:
                return httpx.Response(404)
            width, height = self.dimensions[base]
            return httpx.Response(200, json={"ImageWidth": width, "ImageHeight": height})
        if fmt == "thumbhash":
            if self.placeholder_status != 200:
                return httpx.Response(self.placeholder_status)
            if base not in self.placeholders:
                return httpx.Response(404)
            return httpx.Response(200, text=self.placeholders[base])
        return httpx.Response(400)


@pytest.fixture
def service():
    return FakeImageService()


@pytest.fixture
async def http_client(service):
    client = httpx.AsyncClient(transport=httpx.MockTransport(service.handler))
    yield client
    await client.aclose()


@pytest.fixture
def provider(http_client):
    return MetadataProvider(ProviderOptions(max_attempts=1), client=http_client)


@pytest.fixture
def options():
    return ImageOptions()


@pytest.fixture
def placeholder():
    return PLACEHOLDER


@pytest.fixture
def metadata():
    return ImageMetadata(width=1200, height=800, placeholder=PLACEHOLDER)
