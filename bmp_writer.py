import io
import logging

from bmp_parser import BYTES_PER_PIXEL, BMPImage, default_header

logger = logging.getLogger(__name__)


def _encode_pixels(image: BMPImage) -> bytes:
    out = bytearray()
    # Top-down buffers are flipped so the file is written bottom-up
    if image.top_down:
        rows = range(image.height - 1, -1, -1)
    else:
        rows = range(image.height)

    for y in rows:
        row = bytearray(image.row(y))
        # R,G,B,A -> B,G,R,A
        row[0::4], row[2::4] = row[2::4], row[0::4]
        out += row
    return bytes(out)


def encode(stream, image: BMPImage):
    header = default_header(image.width, image.height)
    logger.debug(f"encoding {image.width}x{image.height} image, "
                 f"{header.file_size} bytes")
    stream.write(header.pack())
    stream.write(_encode_pixels(image))


def encode_bytes(image: BMPImage) -> bytes:
    buf = io.BytesIO()
    encode(buf, image)
    return buf.getvalue()
