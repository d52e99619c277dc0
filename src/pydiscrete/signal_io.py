#!/usr/bin/env python3
"""
Saving and loading signals as text and ``.npz`` archives.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from .discrete_signal import DiscreteSignal

log = logging.getLogger(__name__)


def save_signal(
    signal: DiscreteSignal,
    basename: Union[str, Path],
    metadata: Optional[Dict[str, Any]] = None
) -> Tuple[Path, Path]:
    """
    Write ``<basename>.txt`` (two columns) and ``<basename>.npz``.

    Returns
    -------
    (Path, Path)
        The text and archive paths
    """
    data = signal.as_array()
    txt = Path(f"{basename}.txt")
    npz = Path(f"{basename}.npz")

    np.savetxt(txt, data, fmt="%.18e")

    save_metadata = dict(metadata or {})
    save_metadata['command_line'] = ' '.join(sys.argv)
    save_metadata['numpy_version'] = np.__version__
    np.savez(npz, x=data[:, 0], y=data[:, 1], metadata=save_metadata)

    log.info("Saved %d samples to %s and %s", len(signal), txt, npz)
    return txt, npz


def load_signal(path: Union[str, Path]) -> DiscreteSignal:
    """
    Read a signal written by :func:`save_signal` (either file).

    Raises
    ------
    NonMonotonicTimestampsError
        If the stored timestamps are not strictly increasing.
    """
    path = Path(path)
    if path.suffix == ".npz":
        with np.load(path, allow_pickle=False) as data:
            signal = DiscreteSignal.from_arrays(data['x'], data['y'])
    elif path.suffix == ".txt":
        data = np.loadtxt(path, dtype=np.float64, ndmin=2)
        if data.size and data.shape[1] != 2:
            raise ValueError(f"{path}: expected two columns, found {data.shape[1]}")
        data = data.reshape(-1, 2)
        signal = DiscreteSignal.from_arrays(data[:, 0], data[:, 1])
    else:
        raise ValueError(f"Unsupported signal file: {path}")

    signal.validate()
    log.info("Loaded %d samples from %s", len(signal), path)
    return signal


def load_metadata(path: Union[str, Path]) -> Dict[str, Any]:
    with np.load(path, allow_pickle=True) as data:
        return data['metadata'].item()
