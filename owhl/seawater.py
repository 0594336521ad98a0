#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pressure to seawater depth conversion and the linear-theory correction for
pressure attenuation with depth
"""

import logging
import gsw
import numpy as np
import scipy.signal as sig

from .errors import LatitudeError
from .mylib import naninterp
from .wavefuncs import get_wavenumber

logger = logging.getLogger(__name__)


def millibar_to_seawater(press, latitude = None):

    """Convert pressure in millibar to the depth of seawater above the sensor
    in meters, using the TEOS-10 height from pressure at the given latitude.
    e.g. 2039.604 mbar at 33.72 degrees gives 20.25 m"""

    if latitude is None:
        raise LatitudeError('Please provide a numeric latitude for the data, '
                            'such as 33.72')

    #mbar to dbar
    dbar = np.asarray(press, dtype = float)/100.

    return -gsw.z_from_p(dbar, latitude)


def surface_correction(depth, fs, zpt, flow = 0.05, fhigh = 0.33):

    """Corrects a depth record for the attenuation of wave pressure with depth.
    Inputs:
       depth: vector of seawater depths above the sensor in meters
       fs: sampling frequency in Hz
       zpt: pressure sensor height above bed in meters
       flow, fhigh: band in Hz over which the correction is applied.
          Components above fhigh are removed, below flow are left alone.

    Returns:
       Corrected depth vector, same length as depth
    """

    D = naninterp(depth)
    n = np.size(D)

    dbar = np.mean(D) + zpt #Average water depth

    if dbar <= 0:
        raise ValueError('Average water depth must be positive, got %.3f' % dbar)

    trend = D - sig.detrend(D)

    X = np.fft.rfft(D - trend)
    f = np.fft.rfftfreq(n, d = 1./fs)

    correction = np.ones(np.size(f))
    ii = (f >= flow) & (f <= fhigh)

    if np.any(ii):
        k = get_wavenumber(2*np.pi*f[ii], dbar)
        correction[ii] = np.cosh(k*dbar)/np.cosh(k*zpt)
    else:
        logger.debug('No frequencies between %.3f and %.3f Hz for %d samples',
                     flow, fhigh, n)

    correction[f > fhigh] = 0.

    return np.fft.irfft(X*correction, n = n) + trend
