"""Post-processing for Open Wave Height Logger (OWHL) pressure data.

Raw logger CSV files are joined and cleaned (readOWHL), converted to seawater
depth (seawater), split into sampling bursts and reduced to one row of wave
statistics per burst (burstfuncs, wavefuncs).
"""

__version__ = "0.1.0"

from .burstfuncs import WaveStatsTable, burst_bounds, process_bursts
from .errors import (BurstLengthError, LatitudeError, OWHLError,
                     TimeSeriesTooShortError)
from .readOWHL import clean_owhl, join_owhl_files, read_owhl_file
from .seawater import millibar_to_seawater, surface_correction
from .wavefuncs import (SpectralStats, ZeroCrossStats, wave_stats_spectral,
                        wave_stats_zerocross)

__all__ = [
    "BurstLengthError",
    "LatitudeError",
    "OWHLError",
    "SpectralStats",
    "TimeSeriesTooShortError",
    "WaveStatsTable",
    "ZeroCrossStats",
    "burst_bounds",
    "clean_owhl",
    "join_owhl_files",
    "millibar_to_seawater",
    "process_bursts",
    "read_owhl_file",
    "surface_correction",
    "wave_stats_spectral",
    "wave_stats_zerocross",
]
