#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Small helpers shared by the OWHL processing modules
"""

import numpy as np
import pandas as pd
import scipy.interpolate


def naninterp(x):

    """Linear interpolation over NaN values in an array. NaNs at either end
    are filled with the nearest valid value. Returns a float copy of x."""

    x = np.array(x, dtype = float)
    good = ~np.isnan(x)

    if np.sum(good) >= 2 and not np.all(good):
        idx = np.arange(np.size(x))

        f = scipy.interpolate.interp1d(idx[good], x[good], kind = 'linear',
                                       bounds_error = False)
        x[~good] = f(idx[~good])

        #Leading and trailing NaNs are still there
        good = ~np.isnan(x)
        if not np.all(good):
            f = scipy.interpolate.interp1d(idx[good], x[good], kind = 'nearest',
                                           fill_value = 'extrapolate')
            x[~good] = f(idx[~good])

    return x


def to_times(times, tzone = None):

    """Returns times as a pandas DatetimeIndex, raising TypeError for anything
    that is not a point-in-time type. If tzone is given the index is
    localized (naive input) or converted (aware input) to that zone."""

    if isinstance(times, pd.DatetimeIndex):
        t = times
    elif isinstance(times, pd.Series) and pd.api.types.is_datetime64_any_dtype(times):
        t = pd.DatetimeIndex(times)
    elif isinstance(times, np.ndarray) and np.issubdtype(times.dtype, np.datetime64):
        t = pd.DatetimeIndex(times)
    else:
        raise TypeError('Input times must be datetime64 time values, got %s'
                        % type(times).__name__)

    if tzone is not None:
        t = set_tzone(t, tzone)

    return t


def set_tzone(t, tzone):

    """Stamp a DatetimeIndex with tzone"""

    if t.tz is None:
        return t.tz_localize(tzone)
    return t.tz_convert(tzone)


def time_diffs(t):

    """Seconds between successive entries of a DatetimeIndex"""

    return np.diff(t.values)/np.timedelta64(1, 's')


def gap_indices(t, fs):

    """Indices of samples followed by a step longer than the nominal sample
    interval 1/fs"""

    return np.where(time_diffs(t) > 1./fs)[0]
