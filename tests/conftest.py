import io

import pytest

from tests.bmp_factory import build_bmp


@pytest.fixture
def bmp_stream():

    def _make(*args, **kwargs):
        return io.BytesIO(build_bmp(*args, **kwargs))

    return _make


@pytest.fixture
def write_bmp(tmp_path):

    def _write(name, *args, **kwargs):
        path = tmp_path / name
        path.write_bytes(build_bmp(*args, **kwargs))
        return path

    return _write
