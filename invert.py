from bmp_parser import BMPImage

# Maps every byte b to 255 - b
_INVERT_TABLE = bytes(range(255, -1, -1))


def invert(image: BMPImage) -> BMPImage:
    """
    Return a copy of the image with every sample inverted, new_val = 255 - val.
    Alpha is inverted along with the colour channels.
    """
    return BMPImage(image.pixels.translate(_INVERT_TABLE),
                    image.width, image.height, image.top_down)
