import os
from pathlib import Path

# directory inverted images are written to
SAVE_DIR = Path(os.getenv(
    'BMPINVERT_SAVEDIR',
    'invbmp',
))
# directory scanned for *.bmp inputs
INPUT_DIR = Path(os.getenv(
    'BMPINVERT_INPDIR',
    'samples',
))
# number of files converted in parallel, parsed by the CLI
JOBS = os.getenv('BMPINVERT_JOBS', '1')
DEBUG = os.getenv('BMPINVERT_DEBUG', '').lower() == 'true'
