#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Processing script for Open Wave Height Logger deployments: joins the raw csv
files, converts pressure to sea surface height and calculates wave statistics
for each sampling burst.

    owhl-process 15020100_00.CSV 15020100_01.CSV --latitude 33.72 --out waves.csv
"""

import argparse
import json
import logging
import sys
import numpy as np
import pandas as pd

from . import burstfuncs
from . import mylib
from . import readOWHL
from . import seawater
from .errors import OWHLError

logger = logging.getLogger(__name__)

#Processing parameters (input). Overridden by a json config file, then by
#command line flags
FS = 4              #Sampling frequency [Hz]
BURST_LENGTH = 20   #Burst length [minutes]
METHOD = 'spectral'
TZONE = 'UTC'
MAX_GAP = 2.0       #Longest dropout to interpolate across [s]
ZPT = None          #Pressure sensor height above bed [m], None skips the correction

DEFAULTS = {
    'fs': FS,
    'burst_length': BURST_LENGTH,
    'method': METHOD,
    'tzone': TZONE,
    'max_gap': MAX_GAP,
    'zpt': ZPT,
    'latitude': None,
}


def setup_logging(log_level = 'INFO'):

    """Console logging for the processing script"""

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt = '%(asctime)s - %(levelname)s - %(message)s',
        datefmt = '%Y-%m-%d %H:%M:%S'))

    root = logging.getLogger('owhl')
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    return root


def load_config(config_file):

    """Read processing parameters from a json file. Only keys in DEFAULTS
    are accepted."""

    with open(config_file, 'r', encoding = 'utf-8') as f:
        config = json.load(f)

    unknown = sorted(set(config) - set(DEFAULTS))
    if unknown:
        raise ValueError('Unknown configuration keys in %s: %s'
                         % (config_file, ', '.join(unknown)))

    return config


def correct_sessions(depth, times, fs, zpt):

    """Apply the surface correction separately to each continuous piece
    of the record"""

    gaps = mylib.gap_indices(times, fs)
    starts = np.concatenate(([0], gaps + 1))
    stops = np.concatenate((gaps + 1, [np.size(depth)]))

    return np.concatenate([seawater.surface_correction(depth[a:b], fs, zpt)
                           for a, b in zip(starts, stops)])


def plot_wave_stats(results, plotfile):

    """Plot wave height against burst end time and save to plotfile"""

    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.dates as mdates
    import matplotlib.pyplot as plt

    column = 'Hm0' if 'Hm0' in results.columns else 'Hsig'

    fig, ax = plt.subplots(figsize = (10, 4))
    ax.plot(results['DateTime'], results[column], '.-')
    ax.xaxis.set_major_formatter(mdates.DateFormatter('%m/%d/%Y %H:%M'))
    fig.autofmt_xdate()
    ax.set_xlabel('Time')
    ax.set_ylabel(column + ' [m]')
    fig.savefig(plotfile, dpi = 150, bbox_inches = 'tight')
    plt.close(fig)

    logger.info('Saved plot to %s', plotfile)


def process_owhl(filenames, latitude, fs = FS, burst_length = BURST_LENGTH,
                 method = METHOD, tzone = TZONE, zpt = ZPT, max_gap = MAX_GAP,
                 outfile = None, plotfile = None):

    """Run the full chain from raw OWHL files to a table of wave statistics.
    Returns the DataFrame from burstfuncs.process_bursts."""

    data = readOWHL.join_owhl_files(filenames, tz = tzone)
    data = readOWHL.clean_owhl(data, fs, max_gap = max_gap)

    depth = seawater.millibar_to_seawater(data['Pressure.mbar'].values, latitude)
    logger.info('Mean depth %.2f m over %d samples', np.mean(depth), np.size(depth))

    if zpt is not None:
        depth = correct_sessions(depth, data.index, fs, zpt)

    bounds = burstfuncs.burst_bounds(data.index, fs, burst_length)
    results = burstfuncs.process_bursts(depth, data.index, bounds, burst_length,
                                        fs, method = method, tzone = tzone)

    if outfile is not None:
        results.to_csv(outfile, index = False)
        logger.info('Wrote %d bursts to %s', len(results), outfile)

    if plotfile is not None and len(results) > 0:
        plot_wave_stats(results, plotfile)

    return results


def main(argv = None):

    parser = argparse.ArgumentParser(
        description = 'Wave statistics from Open Wave Height Logger csv files')
    parser.add_argument('files', nargs = '+', help = 'OWHL csv files')
    parser.add_argument('--config', help = 'json file of processing parameters')
    parser.add_argument('--latitude', type = float, help = 'deployment latitude [deg]')
    parser.add_argument('--fs', type = float, help = 'sampling frequency [Hz]')
    parser.add_argument('--burst-length', type = float, dest = 'burst_length',
                        help = 'burst length [minutes]')
    parser.add_argument('--method', choices = ['spectral', 'zero-crossing', 'sp', 'zc'])
    parser.add_argument('--tzone', help = 'time zone of the output time stamps')
    parser.add_argument('--zpt', type = float,
                        help = 'sensor height above bed [m], enables surface correction')
    parser.add_argument('--max-gap', type = float, dest = 'max_gap',
                        help = 'longest dropout to interpolate across [s]')
    parser.add_argument('--out', help = 'output csv file')
    parser.add_argument('--plot', help = 'output plot file')
    parser.add_argument('-v', '--verbose', action = 'store_true')
    args = parser.parse_args(argv)

    setup_logging('DEBUG' if args.verbose else 'INFO')

    try:
        params = dict(DEFAULTS)
        if args.config:
            params.update(load_config(args.config))
        for key in DEFAULTS:
            if getattr(args, key) is not None:
                params[key] = getattr(args, key)

        results = process_owhl(args.files, params['latitude'], fs = params['fs'],
                               burst_length = params['burst_length'],
                               method = params['method'], tzone = params['tzone'],
                               zpt = params['zpt'], max_gap = params['max_gap'],
                               outfile = args.out, plotfile = args.plot)
    except (OWHLError, ValueError, TypeError, OSError) as e:
        logger.error('Processing failed: %s', e)
        return 1

    if args.out is None:
        with pd.option_context('display.width', 120):
            print(results.to_string(index = False))

    return 0


if __name__ == '__main__':
    sys.exit(main())
