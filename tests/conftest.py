"""
Pytest configuration and shared fixtures for all tests.
"""

import matplotlib
import numpy as np
import pandas as pd
import pytest

matplotlib.use("Agg")


def regular_times(n, fs=4, start="2015-02-01 00:00:00", tz=None):
    """n evenly spaced time stamps at fs Hz."""
    return pd.date_range(start, periods=n, freq=pd.Timedelta(seconds=1.0 / fs), tz=tz)


def sine(n, fs=4, amplitude=0.5, period=10.0, mean=0.0):
    t = np.arange(n) / fs
    return mean + amplitude * np.sin(2 * np.pi * t / period)


def write_owhl_csv(path, times, pressure, temp=15.0):
    """Write a csv file in the layout produced by the OWHL logger."""
    times = pd.DatetimeIndex(times).tz_convert("UTC")
    epoch = pd.Timestamp("1970-01-01", tz="UTC")
    ns = np.asarray((times - epoch) // pd.Timedelta(nanoseconds=1), dtype="int64")
    posix = ns // 10**9
    frac = (ns % 10**9) // 10**7
    data = pd.DataFrame(
        {
            "POSIXt": posix,
            "DateTime": times.strftime("%Y/%m/%d %H:%M:%S"),
            "frac.seconds": frac,
            "Pressure.mbar": pressure,
            "TempC": temp,
        }
    )
    data.to_csv(path, index=False)
    return path


@pytest.fixture
def make_times():
    return regular_times


@pytest.fixture
def make_sine():
    return sine


@pytest.fixture
def owhl_csv():
    return write_owhl_csv


@pytest.fixture
def two_sessions():
    """Two 1200-sample 4 Hz recording sessions starting 15 minutes apart."""
    first = regular_times(1200, tz="UTC")
    second = regular_times(1200, start="2015-02-01 00:15:00", tz="UTC")
    times = first.append(second)
    heights = np.concatenate((sine(1200), sine(1200)))
    return times, heights
