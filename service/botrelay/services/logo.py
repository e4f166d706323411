"""
Letter logo rendering with Pillow.

Draws one or two letters on a 512x512 diagonal-gradient square with a dot
texture, a drop shadow, a soft glow and a ring frame, and returns PNG bytes.
"""

import io
import random
from typing import Optional

from PIL import Image, ImageChops, ImageDraw, ImageFilter, ImageFont

CANVAS_SIZE = 512
FONT_SIZE = 250
DOT_SPACING = 20
RING_RADIUS = 240
RING_WIDTH = 10

# Gradient color pairs (start at top-left, end at bottom-right)
GRADIENTS = (
    ("#FF6B6B", "#4ECDC4"),
    ("#45B7D1", "#FFA07A"),
    ("#98D8C8", "#F06292"),
    ("#AED581", "#7986CB"),
    ("#4DB6AC", "#FFD54F"),
    ("#FF9A8B", "#FF6A88"),
    ("#FFA8A8", "#FCFF00"),
    ("#FF3CAC", "#784BA0"),
    ("#00C9FF", "#92FE9D"),
    ("#FC466B", "#3F5EFB"),
)


def pick_gradient(rng: Optional[random.Random] = None) -> tuple[str, str]:
    return (rng or random).choice(GRADIENTS)


def load_font(font_path: str, size: int = FONT_SIZE) -> ImageFont.FreeTypeFont:
    """Load a TrueType font, or Pillow's bundled scalable font if missing."""
    try:
        return ImageFont.truetype(font_path, size)
    except OSError:
        return ImageFont.load_default(size=size)


def _diagonal_gradient(size: int, start: str, end: str) -> Image.Image:
    vertical = Image.linear_gradient("L").resize((size, size))
    horizontal = vertical.transpose(Image.Transpose.TRANSPOSE)
    # (x + y) / 2, i.e. 0 at top-left and 255 at bottom-right
    mask = ImageChops.add(horizontal, vertical, scale=2.0)

    first = Image.new("RGBA", (size, size), start)
    second = Image.new("RGBA", (size, size), end)
    return Image.composite(second, first, mask)


def _dot_texture(size: int) -> Image.Image:
    layer = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for x in range(0, size, DOT_SPACING):
        for y in range(0, size, DOT_SPACING):
            draw.ellipse((x - 1, y - 1, x + 1, y + 1), fill=(255, 255, 255, 13))
    return layer


def _text_layer(size: int, text: str, font, fill, offset=(0, 0), blur: float = 0) -> Image.Image:
    layer = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    center = (size / 2 + offset[0], size / 2 + offset[1])
    draw.text(center, text, font=font, fill=fill, anchor="mm")
    if blur:
        layer = layer.filter(ImageFilter.GaussianBlur(blur))
    return layer


def render_logo(
    text: str,
    gradient: Optional[tuple[str, str]] = None,
    font_path: str = "DejaVuSans-Bold.ttf",
) -> bytes:
    """
    Render a logo and return it PNG-encoded.

    Args:
        text: One or two characters; drawn uppercased
        gradient: (start, end) colors; random from GRADIENTS if omitted
        font_path: TrueType font to draw the letters with

    Returns:
        PNG bytes of a CANVAS_SIZE x CANVAS_SIZE image
    """
    size = CANVAS_SIZE
    start, end = gradient or pick_gradient()
    text = text.upper()
    font = load_font(font_path)

    canvas = _diagonal_gradient(size, start, end)
    canvas.alpha_composite(_dot_texture(size))

    # Shadow, letters, then a white glow and the letters again on top
    canvas.alpha_composite(_text_layer(size, text, font, (0, 0, 0, 77), offset=(5, 5), blur=5))
    canvas.alpha_composite(_text_layer(size, text, font, "white"))
    canvas.alpha_composite(_text_layer(size, text, font, (255, 255, 255, 128), blur=10))
    canvas.alpha_composite(_text_layer(size, text, font, "white"))

    ring = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    outer = RING_RADIUS + RING_WIDTH // 2
    center = size // 2
    ImageDraw.Draw(ring).ellipse(
        (center - outer, center - outer, center + outer, center + outer),
        outline=(255, 255, 255, 204),
        width=RING_WIDTH,
    )
    canvas.alpha_composite(ring)

    buffer = io.BytesIO()
    canvas.convert("RGB").save(buffer, format="PNG")
    return buffer.getvalue()
