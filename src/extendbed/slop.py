"""Extension and truncation of BED intervals.

Intervals are extended or truncated by a left and a right slop,
optionally taking the strand into account, and clamped to the
chromosome boundaries.
"""

import logging
from collections import namedtuple
from enum import Enum

from pybedtools import create_interval_from_list

from extendbed.utils import ConfigurationError
from extendbed.utils import MalformedRecordError
from extendbed.utils import _get_genomic_reader

LOGGER = logging.getLogger(__name__)


class Mode(Enum):
    """Original coordinate(s) from which the new bounds are computed."""
    DEFAULT = 'default'
    FROM_START = 'fromstart'
    FROM_END = 'fromend'


class SlopConfig(namedtuple('SlopConfig', ['left_slop', 'right_slop', 'stranded',
                                           'from_start', 'from_end'])):
    """Settings for extending intervals.

    Parameters
    ----------
    left_slop : int
        Number of bases to extend (positive) or truncate (negative)
        the interval start with. Default: 0.
    right_slop : int
        Number of bases to extend (positive) or truncate (negative)
        the interval end with. Default: 0.
    stranded : boolean
        If True, left_slop and right_slop swap their roles for intervals
        on the minus strand (column 6). Default: False.
    from_start : boolean
        Compute the new start and end from the current start only.
        Default: False.
    from_end : boolean
        Compute the new start and end from the current end only.
        Default: False.
    """
    __slots__ = ()

    def __new__(cls, left_slop=0, right_slop=0, stranded=False,
                from_start=False, from_end=False):
        if from_start and from_end:
            raise ConfigurationError(
                "'--fromstart' and '--fromend' can not be used at the same time.")
        return super(SlopConfig, cls).__new__(cls, int(left_slop), int(right_slop),
                                              bool(stranded), bool(from_start),
                                              bool(from_end))

    @property
    def mode(self):
        """Mode selected by from_start and from_end."""
        if self.from_start:
            return Mode.FROM_START
        if self.from_end:
            return Mode.FROM_END
        return Mode.DEFAULT


def compute_interval(start, end, config, negative=False):
    """Computes the unclamped new interval bounds.

    Parameters
    ----------
    start : int
        Original interval start.
    end : int
        Original interval end.
    config : SlopConfig
        Extension settings.
    negative : boolean
        Whether the interval is treated as lying on the minus strand.
        Only honored if config.stranded is set.

    Returns
    -------
    tuple(int, int)
        New start and end.
    """
    negative = config.stranded and negative
    mode = config.mode

    if mode is Mode.DEFAULT:
        first, second = start, end
    else:
        # on the minus strand the biological start is the BED end
        anchor = start if (mode is Mode.FROM_START) != negative else end
        first, second = anchor, anchor

    if negative:
        return first - config.right_slop, second + config.left_slop
    return first - config.left_slop, second + config.right_slop


def clamp_interval(start, end, chromlen):
    """Clamps start and end to the chromosome boundaries.

    Start and end are clamped independently, therefore
    start >= end may hold afterwards.
    """
    if start < 0:
        start = 0
    elif start >= chromlen:
        start = chromlen - 1

    if end <= 0:
        end = 1
    if end > chromlen:
        end = chromlen
    return start, end


def _parse_coordinate(value):
    if '_' in value:
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        fvalue = float(value)
    except ValueError:
        return None
    if fvalue.is_integer():
        return int(fvalue)
    return None


def _extend_fields(fields, chromsizes, config, filename, lineno, line,
                   unit='line'):
    """Extends a record given as list of fields.

    Returns the list of output fields.
    """
    if len(fields) < 3:
        raise MalformedRecordError(filename, lineno, line,
                                   'does not have 3 or more columns.',
                                   unit)

    chrom, start, end = fields[:3]
    if not chrom or not start or not end:
        raise MalformedRecordError(filename, lineno, line,
                                   'does not contain values in one of the '
                                   'first 3 columns.',
                                   unit)

    if chrom not in chromsizes:
        raise MalformedRecordError(filename, lineno, line,
                                   'chromosome "{}" does not appear in the '
                                   'species chromosome file.'.format(chrom),
                                   unit)

    start_ = _parse_coordinate(start)
    if start_ is None:
        raise MalformedRecordError(filename, lineno, line,
                                   'start coordinate is not a number.',
                                   unit)
    end_ = _parse_coordinate(end)
    if end_ is None:
        raise MalformedRecordError(filename, lineno, line,
                                   'end coordinate is not a number.',
                                   unit)

    negative = len(fields) > 5 and fields[5] == '-'
    start_, end_ = compute_interval(start_, end_, config, negative)
    start_, end_ = clamp_interval(start_, end_, chromsizes[chrom])

    return [chrom, str(start_), str(end_)] + fields[3:]


def extend_line(line, chromsizes, config, filename='-', lineno=1):
    """Extends a single BED line.

    Parameters
    ----------
    line : str
        Input line. A trailing line terminator is removed. Comment lines
        keep a carriage return, BED records lose it.
    chromsizes : dict
        Chromosome names and lengths.
    config : SlopConfig
        Extension settings.
    filename : str
        Input name used in error messages.
    lineno : int
        Line number used in error messages.

    Returns
    -------
    str or None
        The output line without newline. Comment lines
        are returned unchanged and None is returned for empty lines.
    """
    if line.startswith('#'):
        return line.rstrip('\n')
    line = line.rstrip('\r\n')
    if not line:
        return None

    fields = _extend_fields(line.split('\t'), chromsizes, config,
                            filename, lineno, line)
    return '\t'.join(fields)


def extend_stream(lines, chromsizes, config, filename='-'):
    """Extends the BED records of a stream of lines.

    This is a generator which yields one output line per non-empty
    input line. The first malformed record raises MalformedRecordError,
    so no line following it is yielded.

    Parameters
    ----------
    lines : iterable(str)
        Input lines, e.g. an open file.
    chromsizes : dict
        Chromosome names and lengths.
    config : SlopConfig
        Extension settings.
    filename : str
        Input name used in error messages.
    """
    for lineno, line in enumerate(lines, 1):
        result = extend_line(line, chromsizes, config, filename, lineno)
        if result is not None:
            yield result


def extend_bed(inputs, chromsizes, config, out_stream):
    """Extends all records of several inputs.

    The inputs are processed in the given order and each output
    line is written before the next input line is read.

    Parameters
    ----------
    inputs : list(tuple(str, file))
        Pairs of input name and open file handle.
    chromsizes : dict
        Chromosome names and lengths.
    config : SlopConfig
        Extension settings.
    out_stream : file
        Output handle.

    Returns
    -------
    int
        Number of lines written.
    """
    nlines = 0
    for filename, handle in inputs:
        LOGGER.info('Processing %s', filename)
        for result in extend_stream(handle, chromsizes, config, filename):
            out_stream.write(result + '\n')
            nlines += 1
    LOGGER.info('Wrote %d lines', nlines)
    return nlines


def extend_regions(regions, chromsizes, config):
    """Extends genomic regions.

    Parameters
    ----------
    regions : str, BedTool, list(Interval) or pandas.DataFrame
        Either a path to a BED file, a BedTool, a list of intervals or
        a DataFrame with the columns 'chrom', 'start', 'end'
        and optionally 'strand'.
    chromsizes : dict
        Chromosome names and lengths.
    config : SlopConfig
        Extension settings.

    Returns
    -------
    list(Interval)
        Extended intervals. Intervals with start >= end after clamping
        are kept.
    """
    filename = regions if isinstance(regions, str) else '<regions>'

    extended = []
    for idx, region in enumerate(_get_genomic_reader(regions)):
        fields = list(region.fields)
        fields = _extend_fields(fields, chromsizes, config, filename,
                                idx + 1, '\t'.join(fields), unit='region')
        start, end = int(fields[1]), int(fields[2])

        # create_interval_from_list rejects start > end, the setters do not
        interval = create_interval_from_list(
            fields[:1] + [str(min(start, end)), str(max(start, end))] + fields[3:])
        interval.start = start
        interval.end = end
        extended.append(interval)
    return extended
