#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Splits a time series of sea surface heights into sampling bursts and
calculates wave statistics for each burst.
"""

from dataclasses import fields
import logging
import numpy as np
import pandas as pd

from . import mylib
from . import wavefuncs
from .errors import BurstLengthError, TimeSeriesTooShortError

logger = logging.getLogger(__name__)

#Allowed difference between a burst's duration and the target length [minutes]
BURST_TOLERANCE = 0.01

#Slack for float rounding of durations, so exactly +/- BURST_TOLERANCE passes
ROUNDING = 1e-9


def burst_bounds(times, fs, burst_length = None):

    """Find or define the boundaries of sampling bursts in a time series.

    Natural breaks (steps longer than 1/fs) are used when present: each
    break adds the indices of the samples on either side of it. A continuous
    series is instead cut every burst_length*60*fs samples, in which case
    burst_length (minutes) is required.

    Inputs:
       times: DatetimeIndex, or datetime64 Series/array
       fs: sampling frequency in Hz
       burst_length: desired burst length in minutes

    Returns:
       Integer array of row indices, starting at 0 and ending at the last row.
       Each consecutive pair bounds one candidate burst.
    """

    t = mylib.to_times(times)

    if len(t) == 0:
        raise ValueError('Input times must not be empty')
    if len(t) < 2:
        raise ValueError('Input times must contain at least two samples')
    if fs <= 0:
        raise ValueError('Sampling frequency fs must be greater than zero')
    if burst_length is not None and burst_length <= 0:
        raise BurstLengthError('burst_length must be greater than zero')

    last = len(t) - 1
    gaps = mylib.gap_indices(t, fs)

    if np.size(gaps) > 0:
        logger.debug('Found %d natural breaks in %d samples', np.size(gaps), len(t))
        bounds = np.concatenate(([0], np.column_stack((gaps, gaps + 1)).ravel(), [last]))
        return np.unique(bounds)

    if burst_length is None:
        raise BurstLengthError('Please enter a burst_length value (in minutes) '
                               'for desired sampling burst length')

    stepsize = int(burst_length*60*fs) #minutes x 60 seconds x sample rate
    if stepsize < 1:
        raise BurstLengthError('burst_length of %g minutes is shorter than one '
                               'sample at %g Hz' % (burst_length, fs))

    bounds = np.arange(0, last + 1, stepsize)
    if bounds[-1] != last:
        bounds = np.append(bounds, last)

    logger.debug('Continuous series, %d bursts of %d samples', len(bounds) - 1, stepsize)

    return bounds


class WaveStatsTable:

    """Accumulates per-burst wave statistics into columns.

    The column set is fixed by the statistics type (SpectralStats or
    ZeroCrossStats) and every appended row must be of that type. The burst
    end times form the final DateTime column, expressed in tzone.
    """

    def __init__(self, stattype, tzone = 'UTC'):
        self.stattype = stattype
        self.tzone = tzone
        self.columns = [f.name for f in fields(stattype)]
        self.data = {name: [] for name in self.columns}
        self.endtimes = []

    def __len__(self):
        return len(self.endtimes)

    def append(self, stats, endtime):
        if not isinstance(stats, self.stattype):
            raise TypeError('Expected %s, got %s'
                            % (self.stattype.__name__, type(stats).__name__))
        for name in self.columns:
            self.data[name].append(getattr(stats, name))
        #Naive end times are taken to be in tzone
        endtime = pd.Timestamp(endtime)
        if endtime.tz is None:
            endtime = endtime.tz_localize(self.tzone)
        else:
            endtime = endtime.tz_convert(self.tzone)
        self.endtimes.append(endtime)

    def to_frame(self):
        results = pd.DataFrame({name: np.asarray(self.data[name], dtype = float)
                                for name in self.columns})

        if self.endtimes:
            endtimes = pd.DatetimeIndex(self.endtimes)
        else:
            endtimes = pd.DatetimeIndex([]).tz_localize(self.tzone)

        results['DateTime'] = endtimes

        return results


def process_bursts(heights, times, bounds, minutes, fs, method = 'spectral',
                   tzone = 'UTC'):

    """Generate wave statistics for multiple sampling bursts.

    Inputs:
       heights: vector of sea surface heights
       times: time stamps matching heights
       bounds: burst boundaries from burst_bounds, or None to compute them
       minutes: desired burst length in minutes
       fs: sampling frequency in Hz
       method: 'spectral' ('sp') or 'zero-crossing' ('zc')
       tzone: time zone of the returned DateTime column. Naive times are
          taken to be in this zone.

    Returns:
       DataFrame with one row of statistics per burst, in burst order. The
       DateTime column is the time stamp at the end of each burst. A burst is
       used when its duration is within BURST_TOLERANCE minutes of minutes;
       other bursts are skipped. With a single burst, a series shorter than
       minutes raises TimeSeriesTooShortError. No usable bursts gives a
       DataFrame with no rows.
    """

    statfunc, stattype = wavefuncs.get_method(method)

    t = mylib.to_times(times, tzone)
    Ht = np.asarray(heights, dtype = float)

    if np.size(Ht) != len(t):
        raise ValueError('heights and times must be the same length (%d != %d)'
                         % (np.size(Ht), len(t)))
    if minutes <= 0:
        raise BurstLengthError('minutes must be greater than zero')

    if bounds is None:
        bounds = burst_bounds(t, fs, minutes)
    bounds = np.asarray(bounds, dtype = int)

    if np.size(bounds) < 2:
        raise ValueError('bounds must contain at least two indices')

    table = WaveStatsTable(stattype, tzone)
    single = np.size(bounds) == 2

    for ii in range(np.size(bounds) - 1):
        if single:
            #Only one chunk, use all of it
            tempHt = Ht
            tempTimes = t
        else:
            tempHt = Ht[bounds[ii]:bounds[ii+1] + 1]
            tempTimes = t[bounds[ii]:bounds[ii+1] + 1]

        chunklength = (tempTimes[-1] - tempTimes[0]).total_seconds()/60.

        if single:
            if chunklength < minutes - BURST_TOLERANCE - ROUNDING:
                raise TimeSeriesTooShortError(
                    'Time series is too short: %.3f minutes, %g requested'
                    % (chunklength, minutes))
        elif abs(chunklength - minutes) > BURST_TOLERANCE + ROUNDING:
            logger.debug('Skipping burst %d (%d to %d), %.3f minutes long',
                         ii, bounds[ii], bounds[ii+1], chunklength)
            continue
        elif np.size(mylib.gap_indices(tempTimes, fs)) > 0:
            logger.debug('Skipping burst %d (%d to %d), spans a break in sampling',
                         ii, bounds[ii], bounds[ii+1])
            continue

        table.append(statfunc(tempHt, fs), tempTimes[-1])

    results = table.to_frame()

    if len(results) == 0:
        logger.warning('No bursts of %g minutes found in %d candidates',
                       minutes, np.size(bounds) - 1)
    else:
        logger.info('Calculated %s wave statistics for %d bursts',
                    stattype.__name__, len(results))

    return results
