"""Hiding text in the low bits of the busy regions of an image."""

from collections import deque
from itertools import product
from typing import Any, List, Tuple

from PIL import Image

NEIGHBORHOOD_SIZE = 3
THRESHOLD = 15.0


def string_to_binary(text: str) -> str:
    """Return each character's code point as at least eight binary digits."""
    return "".join(f"{ord(ch):08b}" for ch in text)


def _byte(chunk: Tuple[str, ...]) -> int:
    if not set(chunk) <= {"0", "1"}:
        return 0
    return int("".join(chunk), 2)


def binary_to_string(binary: str) -> str:
    """Decode groups of eight binary digits as UTF-8; a trailing partial group is dropped."""
    groups = zip(*[iter(binary)] * 8)
    return bytes(_byte(group) for group in groups).decode("utf-8", errors="replace")


def _rgba(image: Image.Image) -> Image.Image:
    return image if image.mode == "RGBA" else image.convert("RGBA")


def _rgb16(pixel: Tuple[int, int, int, int]) -> Tuple[int, int, int]:
    # 16-bit, alpha-premultiplied channels
    *channels, alpha = pixel
    return tuple(value * 257 * alpha // 255 for value in channels)


def rgb_variance(image: Image.Image, x: int, y: int, neighborhood: int) -> float:
    """Return the summed RGB variance of the square around (x, y), in 16-bit units."""
    rgba = _rgba(image)
    pixels = rgba.load()
    width, height = rgba.size
    half = neighborhood // 2
    xs = range(max(x - half, 0), min(x + half, width - 1) + 1)
    ys = range(max(y - half, 0), min(y + half, height - 1) + 1)
    samples = [_rgb16(pixels[i, j]) for i in xs for j in ys]
    count = len(samples)
    channels = list(zip(*samples))
    means = [sum(channel) / count for channel in channels]
    return sum(
        (value - mean) ** 2 for channel, mean in zip(channels, means) for value in channel
    ) / count


def is_complex(image: Image.Image, x: int, y: int, neighborhood: int, threshold: float) -> bool:
    """Return True if the area around (x, y) varies more than ``threshold``."""
    return rgb_variance(image, x, y, neighborhood) > threshold


def set_lsb(value: int, bit: str) -> int:
    """Set the lowest bit of ``value`` to the digit ``bit``."""
    return (value & ~1) | (ord(bit) - ord("0"))


def extract_lsb(value: int) -> str:
    """Return the lowest bit of ``value`` as a digit character."""
    return chr((value & 1) + ord("0"))


def encode(message: str, input_path: Any, output_path: Any) -> int:
    """Embed ``message`` in the image at ``input_path`` and save it as PNG.

    Returns how many bits were embedded.
    """
    with Image.open(input_path) as source:
        original = source.convert("RGBA")
    output = original.copy()
    src, dst = original.load(), output.load()
    width, height = original.size
    bits = string_to_binary(message)
    pending = deque(bits)
    for y, x in product(range(height), range(width)):
        if not pending:
            break
        if is_complex(original, x, y, NEIGHBORHOOD_SIZE, THRESHOLD):
            *channels, alpha = src[x, y]
            embedded: List[int] = [
                set_lsb(value, pending.popleft()) if pending else value for value in channels
            ]
            dst[x, y] = (*embedded, alpha)
    output.save(output_path, format="PNG")
    return len(bits) - len(pending)


def decode(image_path: Any) -> str:
    """Read the bits hidden in the busy regions of the image at ``image_path``."""
    with Image.open(image_path) as source:
        image = source.convert("RGBA")
    pixels = image.load()
    width, height = image.size
    bits: List[str] = []
    for y, x in product(range(height), range(width)):
        if is_complex(image, x, y, NEIGHBORHOOD_SIZE, THRESHOLD):
            *channels, _ = pixels[x, y]
            bits.extend(extract_lsb(value) for value in channels)
    return binary_to_string("".join(bits))