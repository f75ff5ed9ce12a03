"""extendbed BED-file extension utility."""

import argparse
import logging
import sys

from extendbed.slop import SlopConfig
from extendbed.slop import extend_bed
from extendbed.utils import ConfigurationError
from extendbed.utils import ExtendBedError
from extendbed.utils import _check_valid_files
from extendbed.utils import fetch_chrom_sizes
from extendbed.utils import get_chrom_sizes

LOGGER = logging.getLogger('extendbed')

# bytes that are not valid UTF-8 pass through unchanged as surrogates
ENCODING = 'utf-8'
ERRORS = 'surrogateescape'


def _parser():
    parser = argparse.ArgumentParser(
        prog='extendbed',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description='extendbed - BED-file extension tool.\n\n'
                    'Extend/truncate intervals in BED files based on the given\n'
                    'arguments, but keep them between the chromosome boundaries.')
    parser.add_argument('inputbeds', type=str, nargs='*', metavar='file',
                        help="Input BED-file(s). Use '-' for stdin. "
                             "Default: stdin.")
    parser.add_argument('-g', dest='chromsizes', type=str, default=None,
                        metavar='species_chromosome_file',
                        help="File with chromosome names and their size.")
    parser.add_argument('--genome', dest='genome', type=str, default=None,
                        help="UCSC assembly name, e.g. hg19. Its chromosome "
                             "sizes are downloaded if -g is not given.")
    parser.add_argument('-l', '--left', dest='left', type=int, default=0,
                        metavar='number',
                        help="Extend(+)/truncate(-) number of bases from start.")
    parser.add_argument('-r', '--right', dest='right', type=int, default=0,
                        metavar='number',
                        help="Extend(+)/truncate(-) number of bases from end.")
    parser.add_argument('--stranded', dest='stranded', action='store_true',
                        default=False,
                        help="Take into account the strand info.")
    parser.add_argument('--fromstart', dest='fromstart', action='store_true',
                        default=False,
                        help="Extend/truncate interval start and end based on "
                             "current start only.")
    parser.add_argument('--fromend', dest='fromend', action='store_true',
                        default=False,
                        help="Extend/truncate interval start and end based on "
                             "current end only.")
    parser.add_argument('-v', '--verbose', dest='verbose', action='store_true',
                        default=False,
                        help="Report progress on stderr.")
    return parser


def _open_inputs(filenames):
    """Yields pairs of input name and handle, opening files one at a time."""
    for filename in filenames:
        if filename == '-':
            yield 'stdin', sys.stdin
        else:
            with open(filename, encoding=ENCODING, errors=ERRORS,
                      newline='') as handle:
                yield filename, handle


def run(args, out_stream):
    """Resolves the settings and extends all inputs."""
    config = SlopConfig(args.left, args.right, args.stranded,
                        args.fromstart, args.fromend)

    if args.chromsizes is not None:
        sizesfile = args.chromsizes
    elif args.genome is not None:
        sizesfile = fetch_chrom_sizes(args.genome)
    else:
        raise ConfigurationError("Specify a species chromosome file.")

    chromsizes = get_chrom_sizes(sizesfile)
    filenames = _check_valid_files(args.inputbeds or ['-'])
    if '-' in filenames:
        sys.stdin.reconfigure(encoding=ENCODING, errors=ERRORS, newline='')

    return extend_bed(_open_inputs(filenames), chromsizes, config, out_stream)


def main(argv=None):
    """extendbed command line tool."""

    args = _parser().parse_args(argv)

    logging.basicConfig(stream=sys.stderr,
                        level=logging.INFO if args.verbose else logging.WARNING,
                        format='%(asctime)s:%(name)s:%(message)s',
                        datefmt='%m/%d/%Y %H:%M:%S')

    sys.stdout.reconfigure(encoding=ENCODING, errors=ERRORS)
    try:
        run(args, sys.stdout)
    except ExtendBedError as exception:
        LOGGER.error('ERROR: %s', exception)
        sys.exit(1)
