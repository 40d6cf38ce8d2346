import logging
import struct
from typing import NamedTuple

logger = logging.getLogger(__name__)

MAGIC = b"BM"
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
PIXEL_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE
BPP = 32
BYTES_PER_PIXEL = BPP // 8

# File header (14 bytes) followed by BITMAPINFOHEADER (40 bytes)
HEADER_FMT = "<2sIHHIIIIHHIIIIII"
READ_CHUNK = 1 << 16


class BMPError(Exception):
    pass


class NotABMPFile(BMPError):
    pass


class TruncatedHeader(BMPError):
    pass


class TruncatedPixelData(BMPError):
    pass


class UnsupportedBitDepth(BMPError):
    def __init__(self, bpp, metadata=None):
        super().__init__(f"bits per pixel must be {BPP}, got {bpp}")
        self.bpp = bpp
        self.metadata = metadata


class BMPHeader(NamedTuple):
    id: bytes
    file_size: int
    reserved1: int
    reserved2: int
    offset: int
    header_size: int
    width: int
    height: int
    planes: int
    bpp: int
    compression: int
    image_size: int
    x_ppm: int
    y_ppm: int
    num_colors: int
    important_colors: int

    def pack(self) -> bytes:
        return struct.pack(HEADER_FMT, *self)


def default_header(width: int, height: int) -> BMPHeader:
    """Header for an uncompressed, single-plane, 32-bpp image without a palette."""
    image_size = width * height * BYTES_PER_PIXEL
    return BMPHeader(
        id=MAGIC,
        file_size=PIXEL_OFFSET + image_size,
        reserved1=0,
        reserved2=0,
        offset=PIXEL_OFFSET,
        header_size=INFO_HEADER_SIZE,
        width=width,
        height=height,
        planes=1,
        bpp=BPP,
        compression=0,
        image_size=image_size,
        x_ppm=0,
        y_ppm=0,
        num_colors=0,
        important_colors=0,
    )


class BMPMetadata(NamedTuple):
    width: int
    height: int
    bpp: int
    top_down: bool


class BMPImage:
    """Decoded bitmap.

    ``pixels`` holds ``height`` rows of ``width`` pixels, 4 bytes each, in
    R, G, B, A order. Rows keep the order they had in the source file;
    ``top_down`` records which way that order runs.
    """

    def __init__(self, pixels, width, height, top_down=False):
        if len(pixels) != width * height * BYTES_PER_PIXEL:
            raise ValueError(
                f"pixel buffer is {len(pixels)} bytes, "
                f"expected {width * height * BYTES_PER_PIXEL} for {width}x{height}")
        self.pixels = bytes(pixels)
        self.width = width
        self.height = height
        self.top_down = top_down

    @property
    def stride(self):
        return self.width * BYTES_PER_PIXEL

    def row(self, y):
        start = y * self.stride
        return self.pixels[start:start + self.stride]

    def __eq__(self, other):
        if not isinstance(other, BMPImage):
            return NotImplemented
        return (self.pixels, self.width, self.height, self.top_down) == \
            (other.pixels, other.width, other.height, other.top_down)

    def __repr__(self):
        return (f"BMPImage(width={self.width}, height={self.height}, "
                f"top_down={self.top_down})")


def _read_exact(stream, size):
    # read() may return less than asked for on pipes and sockets.
    # Sizes come from the header, so never ask for more than one chunk.
    data = bytearray()
    while len(data) < size:
        chunk = stream.read(min(size - len(data), READ_CHUNK))
        if not chunk:
            break
        data += chunk
    return bytes(data)


def read_metadata(stream) -> BMPMetadata:
    # File header plus the DIB header size field
    head = _read_exact(stream, FILE_HEADER_SIZE + 4)
    if len(head) < FILE_HEADER_SIZE + 4:
        raise TruncatedHeader(f"file header is {len(head)} bytes, expected {FILE_HEADER_SIZE + 4}")
    if head[0:2] != MAGIC:
        raise NotABMPFile(f"bad signature {head[0:2]!r}")

    info_len = int.from_bytes(head[14:16], "little")
    # width, height, planes and bpp must all be present
    if info_len < 16:
        raise TruncatedHeader(f"DIB header size {info_len} is too small")

    rest = _read_exact(stream, info_len - 4)
    if len(rest) < info_len - 4:
        raise TruncatedHeader(f"DIB header is {len(rest) + 4} bytes, expected {info_len}")
    head += rest

    raw_width = int.from_bytes(head[18:22], "little", signed=True)
    raw_height = int.from_bytes(head[22:26], "little", signed=True)
    bpp = int.from_bytes(head[28:30], "little")

    # Negative height means rows are stored top to bottom
    metadata = BMPMetadata(abs(raw_width), abs(raw_height), bpp, raw_height < 0)
    if bpp != BPP:
        raise UnsupportedBitDepth(bpp, metadata)
    return metadata


def decode(stream) -> BMPImage:
    width, height, _, top_down = read_metadata(stream)
    logger.debug(f"decoding {width}x{height} image, top_down={top_down}")

    stride = width * BYTES_PER_PIXEL
    # grown row by row so a short file fails before a header-sized allocation
    pixels = bytearray()
    for y in range(height):
        row = _read_exact(stream, stride)
        if len(row) < stride:
            raise TruncatedPixelData(f"pixel data ends in row {y} of {height}")
        row = bytearray(row)
        # B,G,R,A -> R,G,B,A
        row[0::4], row[2::4] = row[2::4], row[0::4]
        pixels += row

    return BMPImage(pixels, width, height, top_down)
