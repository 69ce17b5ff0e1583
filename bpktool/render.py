from io import BytesIO

from PIL import Image, ImageDraw

SHEET_SIZE = 256
BACKGROUND = 0xFF

# stroke colour index -> rgb, used when the letter doesn't say otherwise
DEFAULT_COLORS = (
    (0x00, 0x00, 0x00), # black
    (0xFF, 0xFF, 0xFF), # white
    (0xE0, 0x20, 0x20), # red
    (0xF0, 0x90, 0x10), # orange
    (0xF0, 0xE0, 0x20), # yellow
    (0x30, 0xB0, 0x30), # green
    (0x20, 0x60, 0xE0), # blue
    (0x90, 0x40, 0xC0), # purple
)

def make_palette(colors=DEFAULT_COLORS):
    pal = bytearray(256 * 3)
    for idx, rgb in enumerate(colors):
        pal[idx * 3:idx * 3 + 3] = bytes(rgb)
    # the paper
    pal[BACKGROUND * 3:BACKGROUND * 3 + 3] = b'\xFF\xFF\xFF'
    return bytes(pal)

def render_sheet(sheet, palette=None, scale=1):
    """Rasterise a sheet into a palette image.

    A pen-down stroke draws a line from the previous point to its own;
    a pen-up stroke only moves the pen.
    """
    size = SHEET_SIZE * scale
    img = Image.new("P", (size, size), BACKGROUND)
    img.putpalette(palette if palette is not None else make_palette())
    draw = ImageDraw.Draw(img)

    strokes = sheet.to_array()
    prev = None
    for x, y, draw_line, color, style_3d, style_bold in strokes.tolist():
        point = (x * scale, y * scale)
        if draw_line and prev is not None:
            width = scale * (2 if style_bold else 1)
            draw.line([prev, point], fill=color, width=width)
        prev = point
    return img

def open_thumbnail(data):
    img = Image.open(BytesIO(data))
    img.load()
    return img
