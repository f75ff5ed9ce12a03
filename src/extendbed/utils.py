"""Utilities for extendbed """

import logging
import os
from urllib.request import urlcleanup
from urllib.request import urlretrieve

import pandas as pd
from pybedtools import BedTool
from pybedtools import create_interval_from_list

LOGGER = logging.getLogger(__name__)


class ExtendBedError(ValueError):
    """Base class of the errors raised by extendbed."""


class ConfigurationError(ExtendBedError):
    """Invalid settings or an unusable chromosome sizes file.

    Raised before any record is processed.
    """


class MalformedRecordError(ExtendBedError):
    """A BED record that cannot be extended.

    Parameters
    ----------
    filename : str
        Name of the input the record was read from.
    lineno : int
        1-based line number within that input.
    line : str
        Raw line content without the line terminator.
    reason : str
        Human readable description of the problem.
    unit : str
        What lineno counts, 'line' or 'region'. Default: 'line'.
    """
    def __init__(self, filename, lineno, line, reason, unit='line'):
        self.filename = filename
        self.lineno = lineno
        self.line = line
        self.reason = reason
        self.unit = unit
        super(MalformedRecordError, self).__init__(
            '{} {} of "{}": {}\n\n{}'.format(unit, lineno, filename, reason, line))


def _get_output_root_directory():
    """Function returns the directory for downloaded chromosome sizes."""
    if "EXTENDBED_CACHE" not in os.environ:
        return os.path.join(os.path.expanduser("~"), '.extendbed')
    return os.environ['EXTENDBED_CACHE']


def _check_valid_files(list_of_files):
    """Checks that all input files exist.

    '-' stands for stdin and is always accepted.
    """
    for f in list_of_files:
        if f != '-' and not os.path.exists(f):
            raise ConfigurationError("File {} does not exist.".format(f))
    return list_of_files


def get_chrom_sizes(filename):
    """Loads chromosome sizes.

    This function reads a two-column file with chromosome names and their
    lengths, e.g. as produced by UCSC's fetchChromSizes,
    into a dict. If a chromosome name occurs multiple times,
    the last entry wins.

    Parameters
    ----------
    filename : str
        Path to a whitespace separated chromosome sizes file.

    Returns
    -------
    dict()
        Dictionary with chromosome names as keys and their respective lengths
        as values.
    """
    if not os.path.isfile(filename):
        raise ConfigurationError(
            "The species chromosome file '{}' could not be found.".format(filename))

    try:
        content = pd.read_csv(filename, sep=r'\s+', header=None,
                              names=['chrom', 'length'],
                              dtype={'chrom': str, 'length': str})
    except pd.errors.EmptyDataError:
        content = pd.DataFrame(columns=['chrom', 'length'])
    except (OSError, pd.errors.ParserError) as exception:
        raise ConfigurationError(
            "The species chromosome file '{}' could not be read: {}"
            .format(filename, exception))

    gsize = {}
    for chrom, length in zip(content['chrom'], content['length']):
        try:
            gsize[chrom] = int(length)
        except (TypeError, ValueError):
            raise ConfigurationError(
                "Invalid length '{}' for chromosome '{}' in '{}'."
                .format(length, chrom, filename))

    LOGGER.info('Loaded %d chromosome sizes from %s', len(gsize), filename)
    return gsize


def fetch_chrom_sizes(refgenome, outputdir=None):
    """Get the chromosome sizes file of a reference genome.

    The file is obtained from the UCSC genome browser
    and stored in outputdir. A previously downloaded file is
    reused.

    Parameters
    ----------
    refgenome : str
        Reference genome name. E.g. 'hg19'.
    outputdir : str or None
        Directory in which the downloaded *.chrom.sizes file will be stored.
        If None, the directory given by the environment variable
        EXTENDBED_CACHE or ~/.extendbed is used.

    Returns
    -------
    str
        Path to the chromosome sizes file.
    """
    if outputdir is None:
        outputdir = _get_output_root_directory()

    outputfile = os.path.join(outputdir, '{}.chrom.sizes'.format(refgenome))
    if os.path.exists(outputfile):
        LOGGER.debug('Using cached %s', outputfile)
        return outputfile

    # not part of unit tests, because this requires internet connection
    if not os.path.exists(outputdir):
        os.makedirs(outputdir)

    urlpath = 'http://hgdownload.cse.ucsc.edu/goldenPath/{ref1}/bigZips/{ref2}.chrom.sizes'\
        .format(ref1=refgenome, ref2=refgenome)

    LOGGER.debug('Downloading %s', urlpath)
    try:
        urlcleanup()
        urlretrieve(urlpath, outputfile)
    except OSError as exception:
        if os.path.exists(outputfile):
            os.remove(outputfile)
        raise ConfigurationError(
            'Could not download chromosome sizes for {}: {}'
            .format(refgenome, exception))
    return outputfile


def _get_genomic_reader(inputregions):
    """regions from a BedTool
    """
    if isinstance(inputregions, BedTool):
        # already in the desired format
        return inputregions

    if isinstance(inputregions, pd.DataFrame):
        if any(c not in inputregions.columns
               for c in ['chrom', 'start', 'end']):
            raise ValueError("The dataframe must contain the columns"
                             "'chrom', 'start' and 'end'")
        has_strand = 'strand' in inputregions.columns

        # transform the pandas dataframe to a list of BED6 intervals
        inputregions = [
            create_interval_from_list([str(row['chrom']),
                                       str(int(row['start'])),
                                       str(int(row['end'])),
                                       '.', '0',
                                       str(row['strand']) if has_strand else '.'])
            for _, row in inputregions.iterrows()]

    # at this point the inputregions are either a filename pointing to a
    # bedfile or a list of intervals. Both of which are understood by BedTool.
    return BedTool(inputregions)
