"""PNG preview of a stitch path drawn on a hooped fabric background."""

from PIL import Image, ImageDraw

from rasterstitch.domain import StitchPath

FABRIC_COLOR = "#f6e9de"
HOOP_OUTER_COLOR = "#6b6766"
HOOP_INNER_COLOR = "#c9c5c2"
THREAD_COLOR = "#cc6666"

HOOP_PAD_RATIO = 0.12


def render_preview(path: StitchPath, width: int, height: int, scale: float = 1.0) -> Image.Image:
    """Draw the stitch path over a hoop-framed fabric canvas.

    The canvas is the source image size enlarged by a margin for the hoop
    frame, then multiplied by scale.

    Args:
        path: Stitch path in source pixel coordinates
        width: Source canvas width in pixels
        height: Source canvas height in pixels
        scale: Output scale factor

    Returns:
        RGB image
    """
    pad = round(min(width, height) * HOOP_PAD_RATIO * scale)
    inner_w = max(1, round(width * scale))
    inner_h = max(1, round(height * scale))
    canvas_w = inner_w + 2 * pad
    canvas_h = inner_h + 2 * pad

    image = Image.new("RGB", (canvas_w, canvas_h), FABRIC_COLOR)
    draw = ImageDraw.Draw(image)

    ring = max(2, pad // 3)
    radius = max(ring, pad)
    if min(canvas_w, canvas_h) > 2 * ring + 2:
        draw.rounded_rectangle(
            (ring // 2, ring // 2, canvas_w - 1 - ring // 2, canvas_h - 1 - ring // 2),
            radius=radius,
            outline=HOOP_OUTER_COLOR,
            width=ring,
        )
    inset = ring + max(1, ring // 2)
    if min(canvas_w, canvas_h) > 2 * inset + 2:
        draw.rounded_rectangle(
            (inset, inset, canvas_w - 1 - inset, canvas_h - 1 - inset),
            radius=max(1, radius - ring),
            outline=HOOP_INNER_COLOR,
            width=max(1, ring // 2),
        )

    if len(path) >= 2:
        coords = [(pad + p.x * scale, pad + p.y * scale) for p in path]
        draw.line(coords, fill=THREAD_COLOR, width=max(1, round(2 * scale)))
    elif len(path) == 1:
        x, y = pad + path[0].x * scale, pad + path[0].y * scale
        draw.point((x, y), fill=THREAD_COLOR)

    return image
