from __future__ import annotations

from PIL import Image, ImageOps

from ...bitmap.types import PixelBuffer, Rgba


class BufferConverter:
    def load(self, path: str) -> PixelBuffer:
        raise NotImplementedError


class RasterConverter(BufferConverter):
    @staticmethod
    def _load_image(path: str) -> Image.Image:
        with Image.open(path) as img:
            img = ImageOps.exif_transpose(img)
            return img.copy()

    @staticmethod
    def _normalize_image(img: Image.Image) -> Image.Image:
        if img.mode != "RGBA":
            return img.convert("RGBA")
        return img


def image_to_buffer(img: Image.Image) -> PixelBuffer:
    img = RasterConverter._normalize_image(img)
    data = img.tobytes()
    samples = [Rgba(*data[i : i + 4]) for i in range(0, len(data), 4)]
    return PixelBuffer(img.width, img.height, samples)


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    buffer.validate()
    data = bytes(
        channel
        for sample in buffer.samples
        for channel in (sample.red, sample.green, sample.blue, sample.alpha)
    )
    return Image.frombytes("RGBA", (buffer.width, buffer.height), data)


def save_preview(buffer: PixelBuffer, path: str) -> None:
    """Export the buffer through Pillow; the format follows the file extension."""
    img = buffer_to_image(buffer)
    if path.lower().endswith((".jpg", ".jpeg")):
        img = img.convert("RGB")
    img.save(path)
