import argparse
import math
import os

from src.container.riff import configure, check_payload_size
from src.synth.sine import generate_sine, generate_sweep, pcm_to_samples
from src.utils.constants import SR, MIDDLE_C, DURATION, HEADER_SIZE, SAMPLE_WIDTH


def make_tone(path, sr=SR, freq=MIDDLE_C, seconds=DURATION, end_freq=None, continuous_phase=True):
    """Generate a sine (or a sweep when end_freq is given), wrap it in a WAVE
    container and write it to `path`. Returns the bytes written."""
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"duration must be a finite, non-negative number of seconds, got {seconds}")

    wave = configure(sr)
    n = round(sr * seconds) # number of samples, 44100 * 0.35 is 15434.999...
    # size limit is checked before any samples are generated
    check_payload_size(n * SAMPLE_WIDTH)
    if end_freq is None:
        pcm = generate_sine(freq, n, sample_rate=sr)
    else:
        pcm = generate_sweep(freq, end_freq, n, sample_rate=sr, continuous_phase=continuous_phase)
    wave.set_payload(pcm)
    out = wave.serialize()

    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    # single write of the complete file, OSError goes to the caller
    with open(path, "wb") as f:
        f.write(out)
    return out


def build_parser():
    parser = argparse.ArgumentParser(description="Write a 16-bit mono sine (or sweep) WAVE file.")
    parser.add_argument("--out", type=str, default="sound.wav")
    parser.add_argument("--sr", type=int, default=SR)
    parser.add_argument("--freq", type=float, default=MIDDLE_C, help="frequency, or sweep start, in Hz")
    parser.add_argument("--end_freq", type=float, default=None, help="sweep to this frequency in Hz")
    parser.add_argument("--seconds", type=float, default=DURATION)
    parser.add_argument("--step_phase", action="store_true", help="recompute sweep phase per sample instead of accumulating it")
    parser.add_argument("--plot", action="store_true")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        out = make_tone(
            args.out,
            sr=args.sr,
            freq=args.freq,
            seconds=args.seconds,
            end_freq=args.end_freq,
            continuous_phase=not args.step_phase,
        )
    except ValueError as e:
        parser.error(str(e))

    print(f"Saved sound file to {args.out}")

    if args.plot:
        from src.utils.audio_check import plot_waveform
        plot_waveform(pcm_to_samples(out[HEADER_SIZE:]), args.sr, title=os.path.basename(args.out), show=True)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
