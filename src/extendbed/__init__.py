"""Extend or truncate BED intervals within chromosome boundaries."""

from extendbed.slop import Mode  # noqa
from extendbed.slop import SlopConfig  # noqa
from extendbed.slop import clamp_interval  # noqa
from extendbed.slop import compute_interval  # noqa
from extendbed.slop import extend_bed  # noqa
from extendbed.slop import extend_line  # noqa
from extendbed.slop import extend_regions  # noqa
from extendbed.slop import extend_stream  # noqa
from extendbed.utils import ConfigurationError  # noqa
from extendbed.utils import ExtendBedError  # noqa
from extendbed.utils import MalformedRecordError  # noqa
from extendbed.utils import fetch_chrom_sizes  # noqa
from extendbed.utils import get_chrom_sizes  # noqa
from extendbed.version import version as __version__  # noqa
