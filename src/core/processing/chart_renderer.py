"""
Rasterizes chart geometry to PNG with Pillow.
"""
import io

from PIL import Image, ImageDraw

from core.models.config_data import chartConfigData
from core.processing.chart_mapper import ChartGeometry


def render_png(geometry: ChartGeometry, style: chartConfigData) -> bytes:
    """Draw the polyline and a dot per point. An empty geometry yields a blank canvas."""
    width = max(int(round(geometry.width)), 1)
    height = max(int(round(geometry.height)), 1)
    image = Image.new("RGBA", (width, height), style.background)
    draw = ImageDraw.Draw(image)

    points = list(geometry.points)
    if len(points) > 1:
        draw.line(points, fill=style.line_color, width=2, joint="curve")
    r = style.dot_radius
    for x, y in points:
        draw.ellipse((x - r, y - r, x + r, y + r), fill=style.line_color)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
