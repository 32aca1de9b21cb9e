from leapwave.version import leapwave_version as __version__
