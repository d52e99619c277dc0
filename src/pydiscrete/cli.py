#!/usr/bin/env python3
"""
Command-line driver: synthesise signals, inspect spectra, apply FIR filters.

Examples
--------
# 5 Hz sine with a 12 Hz harmonic sampled on its own 480 Hz grid:
pydiscrete synth --frequency 5 --periods 4 --sampling-rate 200 \
    --harmonic 12:0.5:480 --plot

# One-sided magnitude spectrum of the result:
pydiscrete spectrum synth_sine_5Hz.npz --plot

# Legacy low-pass taps, 16 of them, checked with freqz:
pydiscrete filter synth_sine_5Hz.npz --kind lowpass --size 16 --verify
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .fir_filter import FilterDesign, WINDOWS, fir_filter, LEGACY_REFERENCE_FREQUENCY
from .generators import Shape, WaveformSpec, synthesize
from .plotter import plot_signal
from .signal_io import load_signal, save_signal
from .spectrum import fft
from .verification import verify_filter_response


def _parse_harmonic(text: str, base: WaveformSpec) -> WaveformSpec:
    """``FREQ:AMP[:RATE]`` → sine spanning the same duration as *base*."""
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"harmonic must be FREQ:AMP[:RATE], got '{text}'")
    frequency, amplitude = float(parts[0]), float(parts[1])
    rate = float(parts[2]) if len(parts) == 3 else base.sampling_rate
    return WaveformSpec(
        shape=Shape.SINE,
        amplitude=amplitude,
        frequency=frequency,
        periods=base.periods * frequency / base.frequency,
        sampling_rate=rate,
    )


def _output_stem(args, default: str) -> Path:
    stem = Path(args.basename or default)
    stem.parent.mkdir(parents=True, exist_ok=True)
    return stem


# ───────────────────────── sub-commands ────────────────────────── #

def _cmd_synth(args, log: logging.Logger) -> None:
    base = WaveformSpec(
        shape=Shape(args.shape),
        amplitude=args.amplitude,
        frequency=args.frequency,
        periods=args.periods,
        sampling_rate=args.sampling_rate,
        phase_shift=args.phase_shift,
        duty_cycle=args.duty_cycle,
    )
    specs = [base] + [_parse_harmonic(h, base) for h in args.harmonic]
    log.info("Synthesising %d waveform(s)", len(specs))
    signal = synthesize(specs)

    stem = _output_stem(args, f"synth_{base.shape.value}_{base.frequency:g}Hz")
    save_signal(signal, stem, {'waveforms': [s.to_dict() for s in specs]})
    if args.plot:
        plot_signal(signal, stem.name.replace("_", " "), ("Time [s]", "Value"), stem.parent)


def _cmd_spectrum(args, log: logging.Logger) -> None:
    signal = load_signal(args.input)
    spectrum = fft(signal, args.sampling_rate, args.force, log)

    stem = _output_stem(args, str(Path(args.input).with_suffix("")) + "_spectrum")
    save_signal(spectrum, stem, {'source': str(args.input), 'bins': len(spectrum)})
    if args.plot:
        plot_signal(spectrum, stem.name.replace("_", " "), ("Frequency [Hz]", "Magnitude"),
                    stem.parent)


def _cmd_filter(args, log: logging.Logger) -> None:
    design = FilterDesign(
        kind=args.kind,
        size=args.size,
        capacity=args.capacity,
        reference_frequency=args.reference_frequency,
        window=args.window,
        beta=args.beta,
    )
    taps = design.coefficients()
    signal = load_signal(args.input)
    filtered = fir_filter(signal, taps)
    log.info("Filtered %d samples with %d %s taps", len(signal), len(taps), design.kind)

    stem = _output_stem(args, str(Path(args.input).with_suffix("")) + f"_{design.kind}")
    metadata = {'source': str(args.input), 'design': design.to_dict(), 'taps': taps.tolist()}
    if args.verify:
        metadata['verification'] = verify_filter_response(
            taps, args.verify_rate, plot=args.plot, output_dir=stem.parent, log=log)
    save_signal(filtered, stem, metadata)
    if args.plot:
        plot_signal(filtered, stem.name.replace("_", " "), ("Time [s]", "Value"), stem.parent)


# ───────────────────────── parser ────────────────────────── #

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pydiscrete",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="Irregularly sampled signal algebra, DFT spectra and FIR filtering.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--debug", action="store_true",
                   help="Enable DEBUG-level logging for extra detail.")
    p.add_argument("--log-file", type=str,
                   help="Write all output to specified log file in addition to console.")

    sub = p.add_subparsers(dest="command")

    # ─── synth ───
    s = sub.add_parser("synth", formatter_class=argparse.ArgumentDefaultsHelpFormatter,
                       help="Generate a waveform, optionally with harmonics")
    s.add_argument("--shape", choices=[shape.value for shape in Shape], default="sine")
    s.add_argument("--amplitude", type=float, default=1.0)
    s.add_argument("--frequency", type=float, default=1.0, help="Frequency (Hz)")
    s.add_argument("--periods", type=float, default=1.0, help="Number of cycles")
    s.add_argument("--sampling-rate", type=float, default=100.0, help="Sampling rate (Hz)")
    s.add_argument("--phase-shift", type=float, default=0.0, help="Phase shift (radians)")
    s.add_argument("--duty-cycle", type=float, default=0.5, help="Rectangle duty cycle")
    s.add_argument("--harmonic", action="append", default=[], metavar="FREQ:AMP[:RATE]",
                   help="Add a sine term sampled on its own grid (repeatable). "
                        "Terms are combined by interpolating merge-add.")
    s.add_argument("--basename", help="Output filename stem")
    s.add_argument("--plot", action="store_true", help="Save a PNG chart")
    s.set_defaults(func=_cmd_synth)

    # ─── spectrum ───
    s = sub.add_parser("spectrum", formatter_class=argparse.ArgumentDefaultsHelpFormatter,
                       help="One-sided magnitude spectrum of a saved signal")
    s.add_argument("input", help="Signal file (.npz or .txt)")
    s.add_argument("--sampling-rate", type=float,
                   help="Sampling rate (Hz); derived from timestamps if omitted")
    s.add_argument("--force", action="store_true",
                   help="Build the O(N²) product table even if it exceeds free RAM.")
    s.add_argument("--basename", help="Output filename stem")
    s.add_argument("--plot", action="store_true", help="Save a PNG chart")
    s.set_defaults(func=_cmd_spectrum)

    # ─── filter ───
    s = sub.add_parser("filter", formatter_class=argparse.ArgumentDefaultsHelpFormatter,
                       help="Convolve a saved signal with generated FIR taps")
    s.add_argument("input", help="Signal file (.npz or .txt)")
    g = s.add_argument_group("Design")
    g.add_argument("--kind", choices=["averaging", "lowpass"], default="lowpass")
    g.add_argument("--size", type=int, default=32, help="Requested number of taps")
    g.add_argument("--capacity", type=int,
                   help="Coefficient buffer capacity (averaging uses the larger, "
                        "lowpass the smaller of size and capacity)")
    g.add_argument("--reference-frequency", type=float, default=LEGACY_REFERENCE_FREQUENCY,
                   help="Design constant F of the low-pass kernel")
    g.add_argument("--window", choices=WINDOWS, default="rectangular")
    g.add_argument("--beta", type=float, default=8.6, help="Kaiser window beta")
    g = s.add_argument_group("Verification")
    g.add_argument("--verify", action="store_true",
                   help="Measure the taps' frequency response with freqz")
    g.add_argument("--verify-rate", type=float, default=1.0,
                   help="Sample rate (Hz) used for the response report")
    s.add_argument("--basename", help="Output filename stem")
    s.add_argument("--plot", action="store_true", help="Save PNG charts")
    s.set_defaults(func=_cmd_filter)

    return p


def _setup_logging(args) -> logging.Logger:
    log_handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if args.log_file:
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
        log_handlers.append(logging.FileHandler(args.log_file, mode='w'))
    else:
        log_format = "%(levelname)s %(message)s"

    logging.basicConfig(
        handlers=log_handlers,
        level=logging.DEBUG if args.debug else logging.INFO,
        format=log_format
    )
    return logging.getLogger("pydiscrete")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    log = _setup_logging(args)
    try:
        args.func(args, log)
    except Exception as e:
        log.error("Fatal: %s", e)
        log.debug("Traceback:", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
