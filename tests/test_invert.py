from bmp_parser import BMPImage
from invert import invert


def test_every_byte_inverted():
    img = BMPImage(bytes(range(16)), 2, 2, True)
    inv = invert(img)
    assert inv.pixels == bytes(255 - b for b in range(16))


def test_alpha_is_inverted():
    inv = invert(BMPImage(bytes([0, 0, 0, 255]), 1, 1))
    assert inv.pixels[3] == 0


def test_keeps_geometry():
    img = BMPImage(bytes(24), 3, 2, True)
    inv = invert(img)
    assert (inv.width, inv.height, inv.top_down) == (3, 2, True)


def test_involution():
    img = BMPImage(bytes(i % 256 for i in range(4 * 300)), 20, 15)
    assert invert(invert(img)) == img


def test_input_untouched():
    img = BMPImage(bytes([1, 2, 3, 4]), 1, 1)
    invert(img)
    assert img.pixels == bytes([1, 2, 3, 4])
