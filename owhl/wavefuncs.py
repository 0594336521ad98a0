#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Functions for calculating wave statistics from a burst of sea surface
heights. Two methods are available, spectral (frequency domain) and
zero-crossing (wave-by-wave); each returns its own fixed set of statistics.
"""

from dataclasses import dataclass
import numpy as np
import scipy.signal as sig

from .mylib import naninterp


@dataclass(frozen = True)
class SpectralStats:

    """Spectral wave statistics for one burst"""

    h: float        #Mean water depth [m]
    Hm0: float      #Significant wave height, 4*sqrt(m0) [m]
    Tp: float       #Peak period [s]
    m0: float       #Zeroth spectral moment [m^2]
    T_0_1: float    #Mean period m0/m1 [s]
    T_0_2: float    #Mean zero-crossing period sqrt(m0/m2) [s]
    EPS2: float     #Spectral narrowness
    EPS4: float     #Spectral bandwidth


@dataclass(frozen = True)
class ZeroCrossStats:

    """Zero-crossing wave statistics for one burst"""

    Hsig: float     #Mean height of the highest 1/3 of waves [m]
    Hmean: float    #Mean wave height [m]
    H10: float      #Mean height of the highest 1/10 of waves [m]
    Hmax: float     #Maximum wave height [m]
    Tmean: float    #Mean wave period [s]
    Tsig: float     #Mean period of the highest 1/3 of waves [s]


def get_wavenumber(omega,h):

    """Returns wavenumber from the surface gravity wave dispersion relation
    using Newton's method"""

    g = 9.81
    k = omega/np.sqrt(g*h)

    f = g*k*np.tanh(k*h) - omega**2

    while np.max(np.abs(f)) > 1e-10:
        dfdk = g*k*h*((1/np.cosh(k*h))**2) + g*np.tanh(k*h)
        k = k - f/dfdk
        f = g*k*np.tanh(k*h) - omega**2

    return k


def wave_stats_spectral(eta, fs, nfft = None, flow = 1./25, fhigh = 0.45):

    """Calculates spectral wave statistics.
    Inputs:
       eta: vector of sea surface heights (or depths) in meters
       fs: sampling frequency in Hz
       nfft: segment length for sig.welch, defaults to min(512, len(eta))
       flow, fhigh: frequency band in Hz over which the moments are integrated

    Returns:
       SpectralStats
    """

    P = naninterp(eta)
    n = np.size(P)

    if n < 2:
        raise ValueError('At least two samples are needed for a spectrum')

    h = np.nanmean(P)

    if nfft is None:
        nfft = min(512, n)

    fm, Spp = sig.welch(P, fs = fs, window = 'hamming', nperseg = int(nfft),
                        detrend = 'linear')

    df = fm[1] - fm[0]
    ii = (fm >= flow) & (fm <= fhigh)

    with np.errstate(divide = 'ignore', invalid = 'ignore'):
        m0 = np.sum(Spp[ii]*df)
        m1 = np.sum(fm[ii]*Spp[ii]*df)
        m2 = np.sum((fm[ii]**2)*Spp[ii]*df)
        m4 = np.sum((fm[ii]**4)*Spp[ii]*df)

        if np.any(ii):
            Tp = 1./fm[ii][np.argmax(Spp[ii])]
        else:
            Tp = np.nan

        Hm0 = 4*np.sqrt(m0)
        T_0_1 = m0/m1
        T_0_2 = np.sqrt(m0/m2)
        EPS2 = np.sqrt(m0*m2/m1**2 - 1)
        EPS4 = np.sqrt(1 - m2**2/(m0*m4))

    return SpectralStats(h = float(h), Hm0 = float(Hm0), Tp = float(Tp),
                         m0 = float(m0), T_0_1 = float(T_0_1),
                         T_0_2 = float(T_0_2), EPS2 = float(EPS2),
                         EPS4 = float(EPS4))


def wave_stats_zerocross(eta, fs, threshold = None):

    """Calculates wave-by-wave statistics from the up-crossings of the
    detrended series. Waves whose crest or trough is below threshold [m]
    (default 1% of the largest wave height) are merged into their neighbours.
    Fewer than two up-crossings gives all NaN.

    Returns:
       ZeroCrossStats
    """

    X = naninterp(eta)

    if np.size(X) < 2:
        return ZeroCrossStats(*[np.nan]*6)

    X = sig.detrend(X)

    up = np.where((X[:-1] < 0) & (X[1:] >= 0))[0]

    if np.size(up) < 2:
        return ZeroCrossStats(*[np.nan]*6)

    if threshold is None:
        threshold = 0.01*max(np.ptp(X[up[jj]:up[jj+1]+1]) for jj in range(len(up)-1))
    elif threshold < 0:
        raise ValueError('Wave threshold must not be negative')

    #Remove small waves: a small crest joins the previous wave, a small trough
    #joins the next one
    cross = list(up)
    ii = 0
    while ii < len(cross) - 1:
        seg = X[cross[ii]:cross[ii+1]+1]
        if np.max(seg) < threshold:
            del cross[ii]
            ii = max(ii - 1, 0)
        elif -np.min(seg) < threshold:
            del cross[ii+1]
        else:
            ii += 1

    up = np.array(cross, dtype = int)

    if np.size(up) < 2:
        return ZeroCrossStats(*[np.nan]*6)

    #Crossing times interpolated between samples
    tcross = (up + X[up]/(X[up] - X[up+1]))/fs

    H = np.array([np.ptp(X[up[jj]:up[jj+1]+1]) for jj in range(len(up)-1)])
    T = np.diff(tcross)

    order = np.argsort(H)[::-1]
    Hsort = H[order]
    Tsort = T[order]

    nwaves = np.size(H)
    n3 = max(1, int(round(nwaves/3.)))
    n10 = max(1, int(round(nwaves/10.)))

    return ZeroCrossStats(Hsig = float(np.mean(Hsort[:n3])),
                          Hmean = float(np.mean(H)),
                          H10 = float(np.mean(Hsort[:n10])),
                          Hmax = float(np.max(H)),
                          Tmean = float(np.mean(T)),
                          Tsig = float(np.mean(Tsort[:n3])))


#Method name -> (statistics function, result type)
METHODS = {
    'spectral': (wave_stats_spectral, SpectralStats),
    'zero-crossing': (wave_stats_zerocross, ZeroCrossStats),
}

ALIASES = {'sp': 'spectral', 'zc': 'zero-crossing'}


def get_method(method):

    """Resolve a method name (or its short alias) to its statistics function
    and result type"""

    name = ALIASES.get(method, method)
    if name not in METHODS:
        raise ValueError("method must be one of %s, got %r"
                         % (', '.join(sorted(METHODS)), method))
    return METHODS[name]
