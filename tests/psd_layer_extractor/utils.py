import io
from typing import Optional

from PIL import Image

from psd_layer_extractor.tree import Layer

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def to_png(image: Image.Image) -> bytes:
    with io.BytesIO() as f:
        image.save(f, format="PNG")
        return f.getvalue()


class FakeHandle:
    """Raster handle returning a blank RGBA surface."""

    def __init__(
        self,
        size: Optional[tuple[int, int]] = (10, 10),
        data: Optional[bytes] = None,
        error: Optional[Exception] = None,
        surface_error: Optional[Exception] = None,
    ):
        self.size = size
        self.data = data
        self.error = error
        self.surface_error = surface_error
        self.encode_calls = 0

    def surface(self) -> Optional[Image.Image]:
        if self.surface_error is not None:
            raise self.surface_error
        if self.size is None:
            return None
        return Image.new("RGBA", self.size, (255, 0, 0, 255))

    def encode(self, surface: Image.Image) -> bytes:
        self.encode_calls += 1
        if self.error is not None:
            raise self.error
        if self.data is not None:
            return self.data
        return to_png(surface)


class FallbackHandle(FakeHandle):
    def __init__(self, fallback_error: Optional[Exception] = None, **kwargs):
        super().__init__(**kwargs)
        self.fallback_error = fallback_error
        self.fallback_calls = 0

    def encode_fallback(self, surface: Image.Image) -> bytes:
        self.fallback_calls += 1
        if self.fallback_error is not None:
            raise self.fallback_error
        return to_png(surface.convert("RGBA"))


def make_layer(name: str, visible: bool = True, handle=None, **kwargs) -> Layer:
    if handle is None:
        handle = FakeHandle(**kwargs)
    size = getattr(handle, "size", None) or (0, 0)
    return Layer(name, visible=visible, bbox=(0, 0) + tuple(size), handle=handle)
