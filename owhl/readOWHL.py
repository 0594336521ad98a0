#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reads, joins and cleans the CSV files written by the Open Wave Height Logger.

Each file has the columns POSIXt (whole unix seconds), DateTime,
frac.seconds (hundredths of a second), Pressure.mbar and TempC.
"""

import logging
import numpy as np
import pandas as pd

from .mylib import time_diffs

logger = logging.getLogger(__name__)

OWHL_COLUMNS = ['POSIXt', 'DateTime', 'frac.seconds', 'Pressure.mbar', 'TempC']


def read_owhl_file(filename, tz = 'UTC'):

    """Read one OWHL csv file into a DataFrame of Pressure.mbar and TempC
    indexed by a DateTime index in time zone tz"""

    data = pd.read_csv(filename)

    missing = [c for c in OWHL_COLUMNS if c not in data.columns]
    if missing:
        raise ValueError('%s is missing OWHL columns: %s'
                         % (filename, ', '.join(missing)))

    #Integer arithmetic so 4 Hz steps come out exact
    t = (pd.to_datetime(data['POSIXt'].astype('int64'), unit = 's', utc = True)
         + pd.to_timedelta(data['frac.seconds'].astype('int64')*10, unit = 'ms'))

    out = pd.DataFrame({'Pressure.mbar': data['Pressure.mbar'].astype(float).values,
                        'TempC': data['TempC'].astype(float).values},
                       index = pd.DatetimeIndex(t).tz_convert(tz))
    out.index.name = 'DateTime'

    logger.debug('Read %d rows from %s', len(out), filename)

    return out


def join_owhl_files(filenames, tz = 'UTC'):

    """Read a set of OWHL csv files and join them into one time-ordered
    DataFrame. Duplicated time stamps keep their first occurrence."""

    filenames = list(filenames)
    if len(filenames) == 0:
        raise ValueError('No OWHL files to join')

    data = pd.concat([read_owhl_file(f, tz = tz) for f in sorted(filenames)])
    data = data.sort_index(kind = 'mergesort')

    dups = data.index.duplicated(keep = 'first')
    if np.any(dups):
        logger.info('Dropping %d duplicated time stamps', np.sum(dups))
        data = data[~dups]

    logger.info('Joined %d files, %d rows from %s to %s', len(filenames),
                len(data), data.index[0], data.index[-1])

    return data


def clean_owhl(data, fs, max_gap = 2.0, pmin = 0.):

    """Clean a joined OWHL record.
    Rows with pressure <= pmin (or missing) are dropped. The record is then
    split wherever consecutive samples are more than max_gap seconds apart, and
    each piece is put on a regular 1/fs grid by linear interpolation in time.
    Gaps longer than max_gap are left in place as natural burst gaps.
    """

    bad = ~(data['Pressure.mbar'] > pmin)
    if np.any(bad):
        logger.info('Dropping %d samples with pressure <= %g mbar', np.sum(bad), pmin)
    data = data[~bad]

    if len(data) == 0:
        raise ValueError('No valid pressure samples left after cleaning')

    step = pd.Timedelta(seconds = 1./fs)
    breaks = np.where(time_diffs(data.index) > max_gap)[0] + 1
    starts = np.concatenate(([0], breaks))
    stops = np.concatenate((breaks, [len(data)]))

    pieces = []
    for start, stop in zip(starts, stops):
        piece = data.iloc[start:stop]
        grid = pd.date_range(piece.index[0], piece.index[-1], freq = step)
        filled = (piece.reindex(piece.index.union(grid))
                  .interpolate(method = 'time', limit_area = 'inside')
                  .reindex(grid))
        pieces.append(filled)

    out = pd.concat(pieces)
    out.index.name = 'DateTime'

    logger.info('Cleaned record has %d samples in %d continuous pieces',
                len(out), len(pieces))

    return out
