"""SVG rendering of a stitch path."""

from rasterstitch.domain import StitchPath

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def path_data(path: StitchPath) -> str:
    """Build SVG path data ("Mx0,y0 Lx1,y1 ...") for a stitch path."""
    if path.is_empty():
        return ""
    return "M" + " L".join(f"{p.x},{p.y}" for p in path)


def to_svg(
    path: StitchPath,
    width: int,
    height: int,
    stroke: str = "black",
    stroke_width: float = 1,
) -> str:
    """Render a stitch path as a standalone SVG document.

    The root element is sized to the source canvas, so the path overlays the
    original image one to one.

    Args:
        path: Stitch path in pixel coordinates
        width: Canvas width in pixels
        height: Canvas height in pixels
        stroke: Stroke color
        stroke_width: Stroke width in pixels

    Returns:
        SVG document text
    """
    lines = [
        f'<svg xmlns="{SVG_NAMESPACE}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
    ]
    if not path.is_empty():
        lines.append(
            f'  <path d="{path_data(path)}" stroke="{stroke}" fill="none" '
            f'stroke-width="{stroke_width}"/>'
        )
    lines.append("</svg>")
    return "\n".join(lines) + "\n"
