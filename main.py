"""Invert the colours of 32-bit BMP images.

Every ``*.bmp`` file in the input directory, plus any files named on the
command line, is decoded, inverted and written under the same name into the
save directory.
"""
import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import config
from bmp_parser import BMPError, decode
from bmp_writer import encode
from invert import invert

logger = logging.getLogger(__name__)


def collect_inputs(files, inpdir) -> list[Path]:
    inputs = [Path(f) for f in files]
    inpdir = Path(inpdir)
    if inpdir.is_dir():
        inputs.extend(sorted(inpdir.glob('*.bmp')))
    return inputs


def convert_file(src: Path, savedir: Path) -> Path:
    dst = Path(savedir) / Path(src).name
    with open(src, 'rb') as infile:
        img = decode(infile)

    inv = invert(img)
    try:
        with open(dst, 'wb') as outfile:
            encode(outfile, inv)
    except OSError:
        # don't leave a half-written bitmap behind
        dst.unlink(missing_ok=True)
        raise
    return dst


def _convert_one(src: Path, savedir: Path) -> bool:
    logger.info(f'Converting file {src}...')
    if src.suffix.lower() != '.bmp':
        logger.warning(f'{src}: file is not in bmp format, skipped')
        return False
    try:
        dst = convert_file(src, savedir)
    except BMPError as e:
        logger.error(f'{src}: {e}')
        return False
    except OSError as e:
        logger.error(f'{src}: could not convert file: {e}')
        return False
    logger.debug(f'{src} -> {dst}')
    return True


def run(inputs, savedir: Path, jobs: int = 1) -> int:
    """Convert every input and return the number of files that failed."""
    savedir = Path(savedir)
    savedir.mkdir(mode=0o700, parents=True, exist_ok=True)

    # one writer per output name; later inputs with the same name are skipped
    unique, seen = [], {}
    for src in inputs:
        name = Path(src).name
        if name in seen:
            logger.warning(f'{src}: output {savedir / name} already taken by {seen[name]}, skipped')
            continue
        seen[name] = src
        unique.append(Path(src))
    skipped = len(inputs) - len(unique)

    if jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            results = list(pool.map(lambda f: _convert_one(f, savedir), unique))
    else:
        results = [_convert_one(f, savedir) for f in unique]
    return skipped + results.count(False)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        'files',
        nargs='*',
        help='BMP files to convert in addition to the input directory',
    )
    parser.add_argument(
        '--savedir',
        default=config.SAVE_DIR,
        type=Path,
        help='inverted BMP save directory',
    )
    parser.add_argument(
        '--inpdir',
        default=config.INPUT_DIR,
        type=Path,
        help='directory of input files',
    )
    parser.add_argument(
        '-j',
        '--jobs',
        default=config.JOBS,
        type=int,
        help='number of files to convert in parallel',
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        default=config.DEBUG,
        help='enable debug logging',
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    inputs = collect_inputs(args.files, args.inpdir)
    if not inputs:
        logger.error('No input files provided')
        return 1

    failed = run(inputs, args.savedir, max(1, args.jobs))
    if failed:
        logger.warning(f'{failed} of {len(inputs)} files were not converted')
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
